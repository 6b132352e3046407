"""
Command Line Interface Package

Command Structure:
- budgetbook: Main entry point with utility commands (version, config)
- budgetbook year: Create, list and delete years
- budgetbook template: Manage fixed-cost templates with an effective month
- budgetbook month: Show and edit one month
- budgetbook backup: Export and import the full ledger
- budgetbook report: Month and year summaries
"""
