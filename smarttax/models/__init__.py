"""Data models for SmartTax Optimizer."""

from smarttax.models.brackets import BASIS_POINTS, StandardDeductionEntry, TaxBracket
from smarttax.models.enums import AgeBand, FilingStatus, TopBracketPolicy
from smarttax.models.reports import AuditEntry, StrategyResult, TaxSummary
from smarttax.models.taxpayer import MIN_TAX_YEAR, Deduction, IncomeSource, Taxpayer

__all__ = [
    "AgeBand",
    "AuditEntry",
    "BASIS_POINTS",
    "Deduction",
    "FilingStatus",
    "IncomeSource",
    "MIN_TAX_YEAR",
    "StandardDeductionEntry",
    "StrategyResult",
    "TaxBracket",
    "TaxSummary",
    "Taxpayer",
    "TopBracketPolicy",
]
