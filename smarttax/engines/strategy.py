"""Tax optimization strategy engine.

Produces a fixed catalog of three strategies for a taxpayer. Each strategy's
savings is

    savings = base_amount * marginal_value // 10000

where marginal_value comes from MarginalRateCalculator (dollars per $1000,
read here as basis points).

Unlike the other calculators, a marginal-value failure does not propagate:
that strategy's savings become 0 and generation carries on. Results are
upserted by strategy id, so every run replaces the previous one.
"""

import logging
import sqlite3
from datetime import datetime

from pydantic import BaseModel, Field

from smarttax.db.repository import TaxRepository
from smarttax.engines.marginal import MarginalRateCalculator
from smarttax.exceptions import CalculationError, InvalidTaxpayer
from smarttax.models.brackets import BASIS_POINTS
from smarttax.models.reports import AuditEntry, StrategyResult
from smarttax.result import Err, Ok, Result

logger = logging.getLogger(__name__)


class StrategyDefinition(BaseModel):
    id: int
    name: str
    description: str
    base_amount: int
    complexity_level: int = Field(ge=1, le=3)
    is_legal: bool = True


RETIREMENT_CONTRIBUTIONS = StrategyDefinition(
    id=1,
    name="Maximize 401k Contributions",
    description=(
        "Contribute up to the $22,500 employee deferral limit to a traditional "
        "401(k). Pre-tax contributions reduce taxable income at your marginal rate."
    ),
    base_amount=22500,
    complexity_level=1,
)

TAX_LOSS_HARVESTING = StrategyDefinition(
    id=2,
    name="Tax Loss Harvesting",
    description=(
        "Realize investment losses to offset gains and up to $3,000 of ordinary "
        "income. Wait 31 days before repurchasing to avoid a wash sale."
    ),
    base_amount=5000,
    complexity_level=2,
)

CHARITABLE_GIVING = StrategyDefinition(
    id=3,
    name="Charitable Giving Optimization",
    description=(
        "Bunch charitable gifts into one year or give through a donor-advised "
        "fund so the deduction counts against income taxed at your marginal rate."
    ),
    base_amount=2000,
    complexity_level=2,
)

STRATEGY_CATALOG: list[StrategyDefinition] = [
    RETIREMENT_CONTRIBUTIONS,
    TAX_LOSS_HARVESTING,
    CHARITABLE_GIVING,
]


class StrategyEngine:
    """Generates and stores the strategy catalog for a taxpayer."""

    def __init__(self, repo: TaxRepository, marginal_calculator: MarginalRateCalculator):
        self.repo = repo
        self.marginal_calculator = marginal_calculator
        self.warnings: list[str] = []

    # ------------------------------------------------------------------
    # Savings
    # ------------------------------------------------------------------

    def _marginal_value(self, taxpayer_id: int) -> int:
        """Marginal value, or 0 if it cannot be computed."""
        result = self.marginal_calculator.calculate(taxpayer_id)
        if result.is_err:
            message = f"Marginal value unavailable for taxpayer {taxpayer_id}: {result.error}"
            logger.warning("%s", message)
            self.warnings.append(message)
            return 0
        return result.value

    @staticmethod
    def _savings(strategy: StrategyDefinition, marginal: int) -> int:
        # StrategyResult requires non-negative savings.
        return max(strategy.base_amount * marginal // BASIS_POINTS, 0)

    def savings_for(self, strategy: StrategyDefinition, taxpayer_id: int) -> int:
        """Savings for one strategy. ``warnings`` holds only this call's problems."""
        self.warnings = []
        return self._savings(strategy, self._marginal_value(taxpayer_id))

    def retirement_contribution_savings(self, taxpayer_id: int) -> int:
        return self.savings_for(RETIREMENT_CONTRIBUTIONS, taxpayer_id)

    def tax_loss_harvesting_savings(self, taxpayer_id: int) -> int:
        return self.savings_for(TAX_LOSS_HARVESTING, taxpayer_id)

    def charitable_giving_savings(self, taxpayer_id: int) -> int:
        return self.savings_for(CHARITABLE_GIVING, taxpayer_id)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def build(self, taxpayer_id: int) -> list[StrategyResult]:
        """Compute the catalog for a taxpayer without storing it."""
        marginal = self._marginal_value(taxpayer_id)
        return [
            StrategyResult(
                id=strategy.id,
                taxpayer_id=taxpayer_id,
                name=strategy.name,
                description=strategy.description,
                potential_savings=self._savings(strategy, marginal),
                complexity_level=strategy.complexity_level,
                is_legal=strategy.is_legal,
            )
            for strategy in STRATEGY_CATALOG
        ]

    def generate(self, taxpayer_id: int) -> Result:
        """Compute and upsert every strategy. Ok(True) on success."""
        self.warnings = []
        if not self.repo.taxpayer_exists(taxpayer_id):
            return Err(InvalidTaxpayer(taxpayer_id))

        results = self.build(taxpayer_id)
        try:
            for result in results:
                self.repo.save_strategy(result)
            self.repo.log_audit(AuditEntry(
                timestamp=datetime.now(),
                engine="strategy",
                operation="generate_optimization_strategies",
                inputs={"taxpayer_id": taxpayer_id},
                output={str(r.id): r.potential_savings for r in results},
                notes="; ".join(self.warnings) or None,
            ))
        except sqlite3.Error as exc:
            logger.error("Storing strategies for taxpayer %d failed: %s", taxpayer_id, exc)
            return Err(CalculationError(f"generate_optimization_strategies ({exc})"))

        logger.info(
            "Generated %d strategies for taxpayer %d (total savings %d)",
            len(results), taxpayer_id, sum(r.potential_savings for r in results),
        )
        return Ok(True)
