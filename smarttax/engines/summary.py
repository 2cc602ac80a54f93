"""Combined read view of AGI, liability and marginal value."""

from smarttax.engines.agi import AGICalculator
from smarttax.engines.liability import TaxLiabilityCalculator
from smarttax.engines.marginal import MarginalRateCalculator
from smarttax.exceptions import CalculationError
from smarttax.models.reports import TaxSummary
from smarttax.result import Err, Ok, Result


class SummaryFacade:
    def __init__(
        self,
        agi_calculator: AGICalculator,
        liability_calculator: TaxLiabilityCalculator,
        marginal_calculator: MarginalRateCalculator,
    ):
        self.agi_calculator = agi_calculator
        self.liability_calculator = liability_calculator
        self.marginal_calculator = marginal_calculator

    def get_tax_summary(self, taxpayer_id: int) -> Result:
        """Err(CalculationError) wrapping the first failure: AGI, then liability, then marginal."""
        steps = [
            self.agi_calculator.calculate,
            self.liability_calculator.calculate,
            self.marginal_calculator.calculate,
        ]
        values = []
        for step in steps:
            result = step(taxpayer_id)
            if result.is_err:
                return Err(CalculationError("get_tax_summary", result.error))
            values.append(result.value)

        agi, liability, marginal = values
        return Ok(TaxSummary(agi=agi, tax_liability=liability, marginal_rate=marginal))
