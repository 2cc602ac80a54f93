"""Tests for income aggregation and AGI."""

import pytest

from smarttax.engines.aggregator import IncomeAggregator
from smarttax.engines.agi import AGICalculator
from smarttax.exceptions import InvalidTaxpayer
from smarttax.models.enums import FilingStatus


@pytest.fixture
def taxpayer(optimizer) -> int:
    optimizer.register_taxpayer(5, "High Deduction", FilingStatus.SINGLE, 25, 0, 2024).unwrap()
    return 5


class TestIncomeAggregator:
    def test_no_records(self, optimizer, taxpayer):
        totals = IncomeAggregator(optimizer.repo).aggregate(taxpayer)
        assert totals.total_income == 0
        assert totals.above_line_deductions == 0
        assert totals.income_sources == 0

    def test_only_taxable_income_counts(self, optimizer, taxpayer):
        optimizer.add_income_source(taxpayer, 1, 1, 60000, 9000, True).unwrap()
        optimizer.add_income_source(taxpayer, 2, 2, 4000, 0, True).unwrap()
        optimizer.add_income_source(taxpayer, 3, 3, 2500, 0, False).unwrap()
        totals = IncomeAggregator(optimizer.repo).aggregate(taxpayer)
        assert totals.total_income == 64000
        assert totals.income_sources == 3

    def test_only_above_line_deductions_count(self, optimizer, taxpayer):
        optimizer.add_deduction(taxpayer, 1, 1, 3000, True, False).unwrap()
        optimizer.add_deduction(taxpayer, 2, 2, 8000, False, True).unwrap()
        totals = IncomeAggregator(optimizer.repo).aggregate(taxpayer)
        assert totals.above_line_deductions == 3000
        assert totals.deductions == 2

    def test_rewriting_an_entry_replaces_it(self, optimizer, taxpayer):
        optimizer.add_income_source(taxpayer, 1, 1, 60000).unwrap()
        optimizer.add_income_source(taxpayer, 1, 1, 45000).unwrap()
        totals = IncomeAggregator(optimizer.repo).aggregate(taxpayer)
        assert totals.total_income == 45000


class TestAGICalculator:
    def test_john_doe(self, optimizer, john_doe):
        assert AGICalculator(optimizer.repo).calculate(john_doe).value == 70000

    def test_no_income(self, optimizer, taxpayer):
        assert AGICalculator(optimizer.repo).calculate(taxpayer).value == 0

    def test_floored_at_zero_when_deductions_exceed_income(self, optimizer, taxpayer):
        optimizer.add_income_source(taxpayer, 1, 1, 1000).unwrap()
        optimizer.add_deduction(taxpayer, 1, 1, 5000, True).unwrap()
        result = AGICalculator(optimizer.repo).calculate(taxpayer)
        assert result.is_ok
        assert result.value == 0

    @pytest.mark.parametrize(
        ("income", "deduction", "expected"),
        [(50000, 1, 49999), (1, 50000, 0), (20000, 20000, 0)],
    )
    def test_never_negative(self, optimizer, taxpayer, income, deduction, expected):
        optimizer.add_income_source(taxpayer, 1, 1, income).unwrap()
        optimizer.add_deduction(taxpayer, 1, 1, deduction, True).unwrap()
        assert AGICalculator(optimizer.repo).calculate(taxpayer).value == expected

    def test_itemized_deductions_do_not_reduce_agi(self, optimizer, taxpayer):
        optimizer.add_income_source(taxpayer, 1, 1, 40000).unwrap()
        optimizer.add_deduction(taxpayer, 1, 1, 10000, False, True).unwrap()
        assert AGICalculator(optimizer.repo).calculate(taxpayer).value == 40000

    def test_unregistered_taxpayer(self, optimizer):
        result = AGICalculator(optimizer.repo).calculate(999)
        assert result.is_err
        assert isinstance(result.error, InvalidTaxpayer)
        assert result.code == 101
