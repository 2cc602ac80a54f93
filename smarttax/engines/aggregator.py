"""Income and above-line deduction aggregation."""

from pydantic import BaseModel

from smarttax.db.repository import TaxRepository


class IncomeTotals(BaseModel):
    total_income: int
    above_line_deductions: int
    income_sources: int
    deductions: int


class IncomeAggregator:
    """Sums a taxpayer's recorded income and deductions.

    Only income marked taxable and deductions marked above-the-line count.
    Itemized deductions are kept in the store but play no part in AGI.
    """

    def __init__(self, repo: TaxRepository):
        self.repo = repo

    def aggregate(self, taxpayer_id: int) -> IncomeTotals:
        incomes = self.repo.get_income_sources(taxpayer_id)
        deductions = self.repo.get_deductions(taxpayer_id)
        return IncomeTotals(
            total_income=sum(i["amount"] for i in incomes if i["is_taxable"]),
            above_line_deductions=sum(
                d["amount"] for d in deductions if d["is_above_line"]
            ),
            income_sources=len(incomes),
            deductions=len(deductions),
        )
