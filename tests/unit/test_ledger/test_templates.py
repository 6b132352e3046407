#!/usr/bin/env python3
"""Tests for forward-only template propagation."""

import copy

import pytest

from budgetbook.core.dates import MonthKey
from budgetbook.ledger.factory import create_year
from budgetbook.ledger.models import FixedCostTemplate
from budgetbook.ledger.templates import (
    apply_template_to_future_months,
    find_template,
    remove_template_from_future_months,
    update_template_in_future_months,
)


def _entries_for(month, template_id):
    return [entry for entry in month.fixed_costs if entry.template_id == template_id]


def _fixed_snapshot(years):
    return [
        (year.year, month.month, [entry.to_dict() for entry in month.fixed_costs], month.fixed_budget_cents)
        for year in years
        for month in year.months
    ]


@pytest.fixture
def years(rent_template):
    return [create_year(2025, [rent_template], "v1"), create_year(2026, [rent_template], "v1")]


@pytest.fixture
def gym_template():
    return FixedCostTemplate(id="tpl-gym", name="Fitness", planned_cents=2990)


class TestApplyTemplate:
    """Test create propagation."""

    @pytest.mark.propagation
    def test_applies_from_effective_month_only(self, years, gym_template):
        touched = apply_template_to_future_months(years, gym_template, MonthKey(2025, 11))

        assert touched == 2 + 12
        assert _entries_for(years[0].get_month(10), "tpl-gym") == []
        november = years[0].get_month(11)
        assert len(_entries_for(november, "tpl-gym")) == 1
        assert november.fixed_budget_cents == 90000 + 2990
        assert _entries_for(years[1].get_month(6), "tpl-gym")[0].actual_cents == 2990

    @pytest.mark.propagation
    def test_idempotent(self, years, gym_template):
        apply_template_to_future_months(years, gym_template, MonthKey(2026, 3))
        once = _fixed_snapshot(years)

        touched = apply_template_to_future_months(years, gym_template, MonthKey(2026, 3))

        assert touched == 0
        assert _fixed_snapshot(years) == once

    @pytest.mark.propagation
    def test_existing_entry_is_not_duplicated(self, years, rent_template):
        touched = apply_template_to_future_months(years, rent_template, MonthKey(2025, 1))
        assert touched == 0
        assert all(len(_entries_for(m, rent_template.id)) == 1 for y in years for m in y.months)


class TestUpdateTemplate:
    """Test update propagation."""

    @pytest.mark.propagation
    def test_forward_only(self, years, rent_template):
        before = copy.deepcopy(years)
        updated = FixedCostTemplate(id=rent_template.id, name="Miete neu", planned_cents=95000)

        update_template_in_future_months(years, rent_template, updated, MonthKey(2026, 6))

        for old_year, new_year in zip(before, years):
            for old_month, new_month in zip(old_year.months, new_year.months):
                if (new_year.year, new_month.month) < (2026, 6):
                    assert [e.to_dict() for e in new_month.fixed_costs] == [
                        e.to_dict() for e in old_month.fixed_costs
                    ]
                else:
                    entry = _entries_for(new_month, rent_template.id)[0]
                    assert entry.name == "Miete neu"
                    assert entry.planned_cents == 95000
                    assert entry.actual_cents == 95000
                    assert new_month.fixed_budget_cents == 95000

    @pytest.mark.propagation
    def test_user_entered_actual_is_preserved(self, years, rent_template):
        july = years[1].get_month(7)
        _entries_for(july, rent_template.id)[0].actual_cents = 91234
        updated = FixedCostTemplate(id=rent_template.id, name="Miete", planned_cents=95000)

        update_template_in_future_months(years, rent_template, updated, MonthKey(2026, 1))

        entry = _entries_for(july, rent_template.id)[0]
        assert entry.actual_cents == 91234
        assert entry.planned_cents == 95000

    @pytest.mark.propagation
    def test_months_without_entry_keep_fixed_budget_override(self, years, rent_template):
        remove_template_from_future_months(years, rent_template.id, MonthKey(2026, 12))
        december = years[1].get_month(12)
        december.fixed_budget_cents = 5000
        updated = FixedCostTemplate(id=rent_template.id, name="Miete", planned_cents=95000)

        update_template_in_future_months(years, rent_template, updated, MonthKey(2026, 1))

        assert december.fixed_budget_cents == 5000

    @pytest.mark.propagation
    def test_rerun_converges(self, years, rent_template):
        updated = FixedCostTemplate(id=rent_template.id, name="Miete", planned_cents=95000)
        update_template_in_future_months(years, rent_template, updated, MonthKey(2026, 1))
        once = _fixed_snapshot(years)

        update_template_in_future_months(years, rent_template, updated, MonthKey(2026, 1))

        assert _fixed_snapshot(years) == once


class TestRemoveTemplate:
    """Test delete propagation."""

    @pytest.mark.propagation
    def test_history_keeps_snapshot(self, years, rent_template):
        touched = remove_template_from_future_months(years, rent_template.id, MonthKey(2026, 4))

        assert touched == 9
        march = years[1].get_month(3)
        assert len(_entries_for(march, rent_template.id)) == 1
        assert march.fixed_budget_cents == 90000
        april = years[1].get_month(4)
        assert april.fixed_costs == []
        assert april.fixed_budget_cents == 0

    @pytest.mark.propagation
    def test_idempotent(self, years, rent_template):
        remove_template_from_future_months(years, rent_template.id, MonthKey(2025, 6))
        once = _fixed_snapshot(years)
        assert remove_template_from_future_months(years, rent_template.id, MonthKey(2025, 6)) == 0
        assert _fixed_snapshot(years) == once


def test_find_template(rent_template, internet_template):
    templates = [rent_template, internet_template]
    assert find_template(templates, "tpl-net") is internet_template
    assert find_template(templates, "missing") is None
