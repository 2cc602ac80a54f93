"""Tests for the TaxRepository data access layer."""

from datetime import datetime

import pytest

from smarttax.models.brackets import StandardDeductionEntry, TaxBracket
from smarttax.models.enums import AgeBand, FilingStatus
from smarttax.models.reports import AuditEntry, StrategyResult
from smarttax.models.taxpayer import Deduction, IncomeSource, Taxpayer


@pytest.fixture
def taxpayer(repo):
    tp = Taxpayer(id=7, name="Jane Roe", filing_status=FilingStatus.MARRIED_JOINT,
                  age=44, dependents=1, tax_year=2024)
    repo.save_taxpayer(tp)
    return tp


class TestBrackets:
    def test_save_and_get(self, repo):
        bracket = TaxBracket(filing_status=FilingStatus.SINGLE, level=1,
                             min_income=0, max_income=11000, rate_bps=1000)
        repo.save_bracket(bracket)
        row = repo.get_bracket(FilingStatus.SINGLE, 1)
        assert TaxBracket(**row) == bracket

    def test_missing(self, repo):
        assert repo.get_bracket(FilingStatus.SINGLE, 1) is None

    def test_upsert_by_status_and_level(self, repo):
        repo.save_bracket(TaxBracket(filing_status=1, level=1, min_income=0, max_income=100, rate_bps=1000))
        repo.save_bracket(TaxBracket(filing_status=1, level=1, min_income=0, max_income=200, rate_bps=1500))
        rows = repo.get_brackets(FilingStatus.SINGLE)
        assert len(rows) == 1
        assert rows[0]["max_income"] == 200

    def test_level_order(self, repo):
        for level, low in ((2, 100), (1, 0), (3, 200)):
            repo.save_bracket(TaxBracket(filing_status=2, level=level, min_income=low,
                                         max_income=low + 100, rate_bps=1000))
        assert [r["level"] for r in repo.get_brackets(FilingStatus.MARRIED_JOINT)] == [1, 2, 3]


class TestStandardDeductions:
    def test_save_and_list(self, repo):
        repo.save_standard_deduction(StandardDeductionEntry(
            filing_status=FilingStatus.SINGLE, age_band=AgeBand.UNDER_65, amount=13850))
        rows = repo.get_standard_deductions()
        assert rows == [{"filing_status": 1, "age_band": "UNDER_65", "amount": 13850}]


class TestTaxpayers:
    def test_save_and_get(self, repo, taxpayer):
        row = repo.get_taxpayer(7)
        assert Taxpayer(**row) == taxpayer
        assert repo.taxpayer_exists(7)
        assert not repo.taxpayer_exists(8)

    def test_overwrite_keeps_single_row(self, repo, taxpayer):
        repo.save_taxpayer(taxpayer.model_copy(update={"age": 45}))
        assert repo.get_taxpayer(7)["age"] == 45
        count = repo.conn.execute("SELECT COUNT(*) FROM taxpayers").fetchone()[0]
        assert count == 1


class TestIncomeAndDeductions:
    def test_income_round_trip(self, repo, taxpayer):
        income = IncomeSource(taxpayer_id=7, income_id=1, income_type=2,
                              amount=1200, tax_withheld=0, is_taxable=False)
        repo.save_income_source(income)
        rows = repo.get_income_sources(7)
        assert rows[0]["is_taxable"] is False
        assert IncomeSource(**rows[0]) == income

    def test_income_upsert_by_id(self, repo, taxpayer):
        repo.save_income_source(IncomeSource(taxpayer_id=7, income_id=1, income_type=1, amount=100))
        repo.save_income_source(IncomeSource(taxpayer_id=7, income_id=1, income_type=1, amount=300))
        rows = repo.get_income_sources(7)
        assert [r["amount"] for r in rows] == [300]

    def test_deduction_flags(self, repo, taxpayer):
        repo.save_deduction(Deduction(taxpayer_id=7, deduction_id=1, deduction_type=1,
                                      amount=500, is_above_line=True, is_itemized=False))
        row = repo.get_deductions(7)[0]
        assert row["is_above_line"] is True
        assert row["is_itemized"] is False

    def test_scoped_to_taxpayer(self, repo, taxpayer):
        repo.save_income_source(IncomeSource(taxpayer_id=7, income_id=1, income_type=1, amount=100))
        assert repo.get_income_sources(8) == []


class TestStrategies:
    def _strategy(self, taxpayer_id, savings):
        return StrategyResult(id=1, taxpayer_id=taxpayer_id, name="Maximize 401k Contributions",
                              description="d", potential_savings=savings, complexity_level=1)

    def test_save_and_get(self, repo, taxpayer):
        repo.save_strategy(self._strategy(7, 100))
        row = repo.get_strategy(1)
        assert row["is_legal"] is True
        assert StrategyResult(**row) == self._strategy(7, 100)

    def test_missing(self, repo):
        assert repo.get_strategy(1) is None

    def test_filter_by_taxpayer(self, repo, taxpayer):
        repo.save_strategy(self._strategy(7, 100))
        assert len(repo.get_strategies(7)) == 1
        assert repo.get_strategies(8) == []
        assert len(repo.get_strategies()) == 1


class TestAuditLog:
    def test_json_fields_decoded(self, repo):
        repo.log_audit(AuditEntry(timestamp=datetime(2024, 4, 15, 9, 30), engine="strategy",
                                  operation="generate", inputs={"taxpayer_id": 1},
                                  output={"1": 4009}, notes=None))
        repo.log_audit(AuditEntry(timestamp=datetime(2024, 4, 15, 9, 31), engine="brackets",
                                  operation="seed", inputs={}, output={}))
        entries = repo.get_audit_log()
        assert len(entries) == 2
        assert entries[0]["inputs"] == {"taxpayer_id": 1}
        assert entries[0]["timestamp"] == "2024-04-15T09:30:00"
        assert [e["operation"] for e in repo.get_audit_log("brackets")] == ["seed"]
