#!/usr/bin/env python3
"""Tests for the aggregation engine."""

import random

import pytest

from budgetbook.ledger.factory import create_year
from budgetbook.ledger.models import ExpenseEntry, VariableBudgetPosition
from budgetbook.ledger.summary import (
    BudgetStatus,
    CostClass,
    CostSummary,
    budget_status,
    classify,
    month_budget_overview,
    summarize_income_flow,
    summarize_month,
    summarize_year,
    summarize_year_by_month,
)


def _expense(amount: int, entry_id: str = "e") -> ExpenseEntry:
    return ExpenseEntry(id=entry_id, description="x", amount_cents=amount, created_at="")


@pytest.fixture
def populated_year(rent_template):
    year = create_year(2026, [rent_template], "v1")
    rng = random.Random(42)
    for month in year.months:
        for day in month.days:
            day.food_cents = rng.randint(0, 2500)
            day.going_out_cents = rng.randint(0, 4000)
        month.fixed_costs[0].actual_cents = rng.randint(85000, 95000)
        month.variable_costs = [_expense(rng.randint(3000, 9000))]
        month.variable_positions = [VariableBudgetPosition("p", "Urlaub", 20000, rng.randint(0, 30000))]
        month.misc_costs = [_expense(rng.randint(1, 2999)), _expense(rng.randint(1, 2999))]
        month.incomes = [_expense(300000)]
    return year


class TestSummarizeMonth:
    """Test per-month totals."""

    def test_all_categories(self, year_2026):
        month = year_2026.get_month(1)
        month.days[0].food_cents = 1250
        month.days[1].food_cents = 750
        month.days[1].going_out_cents = 4000
        month.fixed_costs[1].actual_cents = 0
        month.variable_costs = [_expense(5000)]
        month.variable_positions = [VariableBudgetPosition("p1", "Urlaub", 20000, 12000)]
        month.misc_costs = [_expense(499)]
        month.incomes = [_expense(250000)]

        summary = summarize_month(month)

        assert summary == CostSummary(
            food_cents=2000,
            going_out_cents=4000,
            fixed_actual_cents=90000,
            variable_cents=17000,
            misc_cents=499,
            total_cents=2000 + 4000 + 90000 + 17000 + 499,
        )

    def test_income_not_in_total(self, year_2026):
        month = year_2026.get_month(2)
        before = summarize_month(month).total_cents
        month.incomes = [_expense(100000)]
        assert summarize_month(month).total_cents == before


class TestSummarizeYear:
    """Test year folds."""

    def test_year_equals_sum_of_months(self, populated_year):
        expected = CostSummary()
        for month in populated_year.months:
            expected = expected + summarize_month(month)
        assert summarize_year(populated_year) == expected

    def test_by_month_is_sorted(self, populated_year):
        populated_year.months.reverse()
        rows = summarize_year_by_month(populated_year)
        assert [row.month for row in rows] == list(range(1, 13))
        assert rows[0].summary == summarize_month(populated_year.get_month(1))


class TestBudgetStatus:
    """Test budget vs. actual status."""

    @pytest.mark.parametrize(
        "actual,budget,expected",
        [
            (100, 0, BudgetStatus.ON_TARGET),
            (100, -5, BudgetStatus.ON_TARGET),
            (101, 100, BudgetStatus.OVER),
            (99, 100, BudgetStatus.UNDER),
            (100, 100, BudgetStatus.ON_TARGET),
        ],
    )
    def test_status(self, actual, budget, expected):
        assert budget_status(actual, budget) is expected

    def test_month_overview(self, year_2026):
        month = year_2026.get_month(3)
        month.food_budget_cents = 10000
        month.days[0].food_cents = 12000
        month.variable_positions = [VariableBudgetPosition("p1", "Urlaub", 20000, 5000)]

        overview = {status.category: status for status in month_budget_overview(month)}

        assert overview["food"].status is BudgetStatus.OVER
        assert overview["food"].difference_cents == -2000
        assert overview["fixed"].status is BudgetStatus.ON_TARGET
        assert overview["variable"].budget_cents == 20000
        assert overview["variable"].status is BudgetStatus.UNDER
        assert overview["misc"].status is BudgetStatus.ON_TARGET


class TestClassify:
    """Test the fixed-threshold expense classification."""

    def test_boundary(self):
        assert classify(3000) is CostClass.VARIABLE
        assert classify(2999) is CostClass.MISC

    def test_custom_threshold(self):
        assert classify(4999, threshold_cents=5000) is CostClass.MISC


class TestIncomeFlow:
    """Test chronological carry-over."""

    def test_net_carries_into_next_month_and_year(self):
        years = [create_year(2026, [], "v1"), create_year(2025, [], "v1")]
        years[1].get_month(12).incomes = [_expense(1000)]
        years[0].get_month(1).misc_costs = [_expense(300)]

        flows = summarize_income_flow(years)

        first = flows[202501]
        assert first.has_previous_month is False
        assert first.carried_from_previous_cents == 0

        december = flows[202512]
        assert december.net_cents == 1000

        january = flows[202601]
        assert january.has_previous_month is True
        assert january.carried_from_previous_cents == 1000
        assert january.effective_income_cents == 1000
        assert january.expense_cents == 300
        assert january.net_cents == 700
        assert flows[202602].carried_from_previous_cents == 700

    def test_override_replaces_carried_amount(self):
        year = create_year(2026, [], "v1")
        year.get_month(1).incomes = [_expense(5000)]
        year.get_month(1).carryover_override_cents = -200

        flows = summarize_income_flow([year])

        assert flows[202601].has_previous_month is True
        assert flows[202601].carried_from_previous_cents == -200
        assert flows[202601].net_cents == 4800
        assert flows[202602].carried_from_previous_cents == 4800
