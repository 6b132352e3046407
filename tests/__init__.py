"""
Test Suite for Budget Book

Test Structure:
- unit/: Unit tests mirroring src/ package structure
- integration/: BudgetBook service workflows against a real JSON store
- e2e/: CLI workflows through click's CliRunner

Test Data:
All amounts and names are synthetic.
"""
