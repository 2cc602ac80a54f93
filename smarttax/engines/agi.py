"""Adjusted gross income."""

import logging

from smarttax.db.repository import TaxRepository
from smarttax.engines.aggregator import IncomeAggregator
from smarttax.exceptions import InvalidTaxpayer
from smarttax.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class AGICalculator:
    """AGI = max(total taxable income - above-the-line deductions, 0)."""

    def __init__(self, repo: TaxRepository, aggregator: IncomeAggregator | None = None):
        self.repo = repo
        self.aggregator = aggregator or IncomeAggregator(repo)

    def calculate(self, taxpayer_id: int) -> Result:
        if not self.repo.taxpayer_exists(taxpayer_id):
            return Err(InvalidTaxpayer(taxpayer_id))

        totals = self.aggregator.aggregate(taxpayer_id)
        agi = max(totals.total_income - totals.above_line_deductions, 0)
        logger.debug(
            "AGI for taxpayer %d: income=%d above_line=%d agi=%d",
            taxpayer_id, totals.total_income, totals.above_line_deductions, agi,
        )
        return Ok(agi)
