"""Operation surface of the tax calculation and optimization engine.

TaxOptimizer wires one record store and one EngineConfig into every
calculator and exposes the operations callers use. Each operation returns an
Ok/Err result; the only exceptions that escape are programming errors.
"""

import logging
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from smarttax.config import EngineConfig
from smarttax.db.migrations import migrate
from smarttax.db.repository import TaxRepository
from smarttax.db.schema import create_schema
from smarttax.engines.agi import AGICalculator
from smarttax.engines.aggregator import IncomeAggregator
from smarttax.engines.brackets import (
    DEFAULT_STANDARD_DEDUCTION,
    BracketTable,
    seed_brackets,
    seed_standard_deductions,
    validate_schedule,
)
from smarttax.engines.liability import TaxLiabilityCalculator
from smarttax.engines.marginal import MarginalRateCalculator
from smarttax.engines.strategy import StrategyEngine
from smarttax.engines.summary import SummaryFacade
from smarttax.exceptions import (
    BracketNotFound,
    InvalidDeduction,
    InvalidIncome,
    InvalidTaxpayer,
    Unauthorized,
)
from smarttax.models.enums import FilingStatus
from smarttax.models.reports import AuditEntry, StrategyResult
from smarttax.models.taxpayer import Deduction, IncomeSource, Taxpayer
from smarttax.result import Err, Ok, Result

logger = logging.getLogger(__name__)


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "record"
    return f"{field}: {error['msg']}"


def _known_status(value: FilingStatus | int) -> FilingStatus | None:
    try:
        return FilingStatus(value)
    except ValueError:
        return None


class TaxOptimizer:
    """Taxpayer records, tax calculations and strategy generation over one store."""

    def __init__(self, repo: TaxRepository, config: EngineConfig | None = None):
        self.repo = repo
        self.config = config or EngineConfig()
        self.aggregator = IncomeAggregator(repo)
        self.agi_calculator = AGICalculator(repo, self.aggregator)
        self.liability_calculator = TaxLiabilityCalculator(
            repo, self.config, self.agi_calculator
        )
        self.marginal_calculator = MarginalRateCalculator(self.liability_calculator)
        self.strategy_engine = StrategyEngine(repo, self.marginal_calculator)
        self.summary = SummaryFacade(
            self.agi_calculator, self.liability_calculator, self.marginal_calculator
        )

    @classmethod
    def open(cls, db_path: Path | str | None = None, config: EngineConfig | None = None) -> "TaxOptimizer":
        """Open (creating if needed) the store at ``db_path`` or ``config.db_path``."""
        config = config or EngineConfig()
        path = Path(db_path) if db_path is not None else config.db_path
        if str(path) != ":memory:":
            path.parent.mkdir(parents=True, exist_ok=True)
        conn = create_schema(path)
        migrate(conn)
        return cls(TaxRepository(conn), config)

    def close(self) -> None:
        self.repo.conn.close()

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def seed_brackets(self, caller: str) -> Result:
        """Write the seed bracket and standard deduction tables. Owner only."""
        if caller != self.config.owner:
            logger.warning("Rejected bracket seeding by '%s'", caller)
            return Err(Unauthorized(caller))

        brackets = seed_brackets()
        for status in {b.filing_status for b in brackets}:
            problems = validate_schedule([b for b in brackets if b.filing_status == status])
            if problems:
                raise ValueError(f"Seed schedule is inconsistent: {'; '.join(problems)}")

        for bracket in brackets:
            self.repo.save_bracket(bracket)
        deductions = seed_standard_deductions()
        for entry in deductions:
            self.repo.save_standard_deduction(entry)

        self.repo.log_audit(AuditEntry(
            timestamp=datetime.now(),
            engine="brackets",
            operation="seed_brackets",
            inputs={"caller": caller},
            output={"brackets": len(brackets), "standard_deductions": len(deductions)},
        ))
        logger.info("Seeded %d brackets and %d standard deductions", len(brackets), len(deductions))
        return Ok(True)

    @property
    def bracket_table(self) -> BracketTable:
        return self.liability_calculator.brackets

    # ------------------------------------------------------------------
    # Records
    # ------------------------------------------------------------------

    def register_taxpayer(
        self,
        taxpayer_id: int,
        name: str,
        filing_status: int,
        age: int,
        dependents: int,
        tax_year: int,
    ) -> Result:
        try:
            taxpayer = Taxpayer(
                id=taxpayer_id,
                name=name,
                filing_status=filing_status,
                age=age,
                dependents=dependents,
                tax_year=tax_year,
            )
        except ValidationError as exc:
            return Err(InvalidTaxpayer(taxpayer_id, _first_error(exc)))

        self.repo.save_taxpayer(taxpayer)
        logger.info("Registered taxpayer %d (%s)", taxpayer_id, taxpayer.filing_status.name)
        return Ok(taxpayer_id)

    def add_income_source(
        self,
        taxpayer_id: int,
        income_id: int,
        income_type: int,
        amount: int,
        tax_withheld: int = 0,
        is_taxable: bool = True,
    ) -> Result:
        if not self.repo.taxpayer_exists(taxpayer_id):
            return Err(InvalidTaxpayer(taxpayer_id))
        try:
            income = IncomeSource(
                taxpayer_id=taxpayer_id,
                income_id=income_id,
                income_type=income_type,
                amount=amount,
                tax_withheld=tax_withheld,
                is_taxable=is_taxable,
            )
        except ValidationError as exc:
            return Err(InvalidIncome(income_id, _first_error(exc)))

        self.repo.save_income_source(income)
        return Ok(True)

    def add_deduction(
        self,
        taxpayer_id: int,
        deduction_id: int,
        deduction_type: int,
        amount: int,
        is_above_line: bool = False,
        is_itemized: bool = False,
    ) -> Result:
        if not self.repo.taxpayer_exists(taxpayer_id):
            return Err(InvalidTaxpayer(taxpayer_id))
        try:
            deduction = Deduction(
                taxpayer_id=taxpayer_id,
                deduction_id=deduction_id,
                deduction_type=deduction_type,
                amount=amount,
                is_above_line=is_above_line,
                is_itemized=is_itemized,
            )
        except ValidationError as exc:
            return Err(InvalidDeduction(deduction_id, _first_error(exc)))

        self.repo.save_deduction(deduction)
        return Ok(True)

    def get_taxpayer_info(self, taxpayer_id: int) -> Taxpayer | None:
        return self.liability_calculator.taxpayer(taxpayer_id)

    def get_optimization_strategy(self, strategy_id: int) -> StrategyResult | None:
        row = self.repo.get_strategy(strategy_id)
        return StrategyResult(**row) if row else None

    def get_optimization_strategies(self, taxpayer_id: int) -> list[StrategyResult]:
        return [StrategyResult(**row) for row in self.repo.get_strategies(taxpayer_id)]

    # ------------------------------------------------------------------
    # Calculations
    # ------------------------------------------------------------------

    def get_standard_deduction(self, filing_status: FilingStatus | int, age: int) -> int:
        status = _known_status(filing_status)
        if status is None:
            return DEFAULT_STANDARD_DEDUCTION
        return self.liability_calculator.standard_deduction(status, age)

    def calculate_agi(self, taxpayer_id: int) -> Result:
        return self.agi_calculator.calculate(taxpayer_id)

    def calculate_tax_from_brackets(
        self, taxable_income: int, filing_status: FilingStatus | int
    ) -> Result:
        status = _known_status(filing_status)
        if status is None:
            return Err(BracketNotFound(filing_status, 1))
        return self.liability_calculator.tax_from_brackets(taxable_income, status)

    def calculate_tax_liability(self, taxpayer_id: int) -> Result:
        return self.liability_calculator.calculate(taxpayer_id)

    def calculate_marginal_rate(self, taxpayer_id: int) -> Result:
        return self.marginal_calculator.calculate(taxpayer_id)

    def calculate_retirement_contribution_savings(self, taxpayer_id: int) -> int:
        return self.strategy_engine.retirement_contribution_savings(taxpayer_id)

    def calculate_tax_loss_harvesting_savings(self, taxpayer_id: int) -> int:
        return self.strategy_engine.tax_loss_harvesting_savings(taxpayer_id)

    def calculate_charitable_giving_savings(self, taxpayer_id: int) -> int:
        return self.strategy_engine.charitable_giving_savings(taxpayer_id)

    def generate_optimization_strategies(self, taxpayer_id: int) -> Result:
        return self.strategy_engine.generate(taxpayer_id)

    def get_tax_summary(self, taxpayer_id: int) -> Result:
        return self.summary.get_tax_summary(taxpayer_id)
