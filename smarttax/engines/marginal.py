"""Marginal value of extra income.

    marginal = tax_from_brackets(AGI + bump, status) - liability

The bump (EngineConfig.marginal_bump, 1000 by default) is added to AGI
before the standard deduction, while the liability is computed after it, so
the figure includes the tax on the deducted band. The result is dollars per
$1000, not a rate; StrategyEngine reads it as basis points.
"""

import logging

from smarttax.engines.liability import TaxLiabilityCalculator
from smarttax.exceptions import CalculationError, InvalidTaxpayer
from smarttax.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class MarginalRateCalculator:
    def __init__(self, liability_calculator: TaxLiabilityCalculator):
        self.liability_calculator = liability_calculator

    def calculate(self, taxpayer_id: int) -> Result:
        calc = self.liability_calculator
        liability = calc.calculate(taxpayer_id)
        if liability.is_err:
            return liability

        agi = calc.agi_calculator.calculate(taxpayer_id)
        if agi.is_err:
            return agi
        taxpayer = calc.taxpayer(taxpayer_id)
        if taxpayer is None:
            return Err(InvalidTaxpayer(taxpayer_id))

        bumped = calc.tax_from_brackets(
            agi.value + calc.config.marginal_bump, taxpayer.filing_status
        )
        if bumped.is_err:
            return Err(CalculationError("calculate_marginal_rate", bumped.error))

        marginal = bumped.value - liability.value
        logger.debug("Marginal value for taxpayer %d: %d", taxpayer_id, marginal)
        return Ok(marginal)
