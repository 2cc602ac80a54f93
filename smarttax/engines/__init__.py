"""Tax calculation and optimization engines."""

from smarttax.engines.agi import AGICalculator
from smarttax.engines.aggregator import IncomeAggregator, IncomeTotals
from smarttax.engines.brackets import BracketTable, StandardDeductionTable
from smarttax.engines.liability import TaxLiabilityCalculator, apply_brackets
from smarttax.engines.marginal import MarginalRateCalculator
from smarttax.engines.strategy import STRATEGY_CATALOG, StrategyEngine
from smarttax.engines.summary import SummaryFacade

__all__ = [
    "AGICalculator",
    "BracketTable",
    "IncomeAggregator",
    "IncomeTotals",
    "MarginalRateCalculator",
    "STRATEGY_CATALOG",
    "StandardDeductionTable",
    "StrategyEngine",
    "SummaryFacade",
    "TaxLiabilityCalculator",
    "apply_brackets",
]
