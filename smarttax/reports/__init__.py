"""Report generation for SmartTax Optimizer."""

from smarttax.reports.strategy_report import StrategyReportGenerator
from smarttax.reports.tax_summary import TaxSummaryGenerator

__all__ = [
    "StrategyReportGenerator",
    "TaxSummaryGenerator",
]
