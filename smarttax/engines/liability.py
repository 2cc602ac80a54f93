"""Tax liability via the progressive bracket algorithm.

For each level i with band [min_i, max_i] and rate r_i (basis points):

    portion_i = max(min(taxable, max_i) - min_i, 0)
    tax      += portion_i * r_i // 10000

Income exactly equal to max_i is taxed entirely within band i. Each band's
contribution is floored to whole dollars before summing.

Income above the last level's max_income is untaxed under
TopBracketPolicy.BOUNDED and taxed at the last level's rate under OPEN.
"""

import logging

from smarttax.config import EngineConfig
from smarttax.db.repository import TaxRepository
from smarttax.engines.agi import AGICalculator
from smarttax.engines.brackets import BracketTable, StandardDeductionTable
from smarttax.exceptions import CalculationError, InvalidTaxpayer
from smarttax.models.brackets import BASIS_POINTS, TaxBracket
from smarttax.models.enums import FilingStatus, TopBracketPolicy
from smarttax.models.taxpayer import Taxpayer
from smarttax.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def apply_brackets(
    income: int,
    brackets: list[TaxBracket],
    policy: TopBracketPolicy = TopBracketPolicy.BOUNDED,
) -> int:
    """Apply a level-ordered schedule to ``income``."""
    tax = 0
    for bracket in brackets:
        portion = max(min(income, bracket.max_income) - bracket.min_income, 0)
        tax += portion * bracket.rate_bps // BASIS_POINTS
        if income <= bracket.max_income:
            return tax

    if policy == TopBracketPolicy.OPEN and brackets:
        top = brackets[-1]
        tax += (income - top.max_income) * top.rate_bps // BASIS_POINTS
    return tax


class TaxLiabilityCalculator:
    """Computes tax from brackets and a taxpayer's full liability."""

    def __init__(
        self,
        repo: TaxRepository,
        config: EngineConfig | None = None,
        agi_calculator: AGICalculator | None = None,
    ):
        self.repo = repo
        self.config = config or EngineConfig()
        self.agi_calculator = agi_calculator or AGICalculator(repo)
        self.brackets = BracketTable(repo)

    @property
    def standard_deductions(self) -> StandardDeductionTable:
        return StandardDeductionTable.from_repository(self.repo)

    def standard_deduction(self, filing_status: FilingStatus, age: int) -> int:
        return self.standard_deductions.lookup(filing_status, age)

    def tax_from_brackets(self, taxable_income: int, filing_status: FilingStatus) -> Result:
        """Tax on ``taxable_income``. Err(BracketNotFound) if the schedule is missing."""
        schedule = self.brackets.schedule(filing_status)
        fallback = self.config.bracket_fallback_status
        if schedule.is_err and fallback is not None and fallback != filing_status:
            logger.info(
                "No brackets for %s; using the %s schedule",
                filing_status.name, fallback.name,
            )
            schedule = self.brackets.schedule(fallback)
        if schedule.is_err:
            return schedule

        income = max(taxable_income, 0)
        return Ok(apply_brackets(income, schedule.value, self.config.top_bracket_policy))

    def calculate(self, taxpayer_id: int) -> Result:
        """Liability for a registered taxpayer.

        InvalidTaxpayer passes through; a missing schedule is reported as
        CalculationError wrapping BracketNotFound.
        """
        agi = self.agi_calculator.calculate(taxpayer_id)
        if agi.is_err:
            return agi

        taxpayer = self.taxpayer(taxpayer_id)
        if taxpayer is None:
            return Err(InvalidTaxpayer(taxpayer_id))

        deduction = self.standard_deduction(taxpayer.filing_status, taxpayer.age)
        taxable = max(agi.value - deduction, 0)
        tax = self.tax_from_brackets(taxable, taxpayer.filing_status)
        if tax.is_err:
            logger.warning("Liability for taxpayer %d failed: %s", taxpayer_id, tax.error)
            return Err(CalculationError("calculate_tax_liability", tax.error))

        logger.debug(
            "Liability for taxpayer %d: agi=%d deduction=%d taxable=%d tax=%d",
            taxpayer_id, agi.value, deduction, taxable, tax.value,
        )
        return tax

    def taxpayer(self, taxpayer_id: int) -> Taxpayer | None:
        row = self.repo.get_taxpayer(taxpayer_id)
        return Taxpayer(**row) if row else None
