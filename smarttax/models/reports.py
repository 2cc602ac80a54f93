"""Engine output models."""

from datetime import datetime

from pydantic import BaseModel, Field


class StrategyResult(BaseModel):
    id: int
    taxpayer_id: int
    name: str
    description: str
    potential_savings: int = Field(ge=0)
    complexity_level: int = Field(ge=1, le=3)
    is_legal: bool = True


class TaxSummary(BaseModel):
    agi: int
    tax_liability: int
    # Dollars of extra tax per $1000 of extra income, not a percentage.
    marginal_rate: int


class AuditEntry(BaseModel):
    timestamp: datetime
    engine: str
    operation: str
    inputs: dict
    output: dict
    notes: str | None = None
