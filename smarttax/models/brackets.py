"""Bracket and standard deduction rows."""

from pydantic import BaseModel, Field, model_validator

from smarttax.models.enums import AgeBand, FilingStatus

BASIS_POINTS = 10000


class TaxBracket(BaseModel):
    """One band of a progressive schedule. ``rate_bps`` is in basis points."""

    filing_status: FilingStatus
    level: int = Field(ge=1)
    min_income: int = Field(ge=0)
    max_income: int = Field(ge=0)
    rate_bps: int = Field(ge=0, le=BASIS_POINTS)

    @model_validator(mode="after")
    def _check_bounds(self) -> "TaxBracket":
        if self.max_income < self.min_income:
            raise ValueError(
                f"max_income {self.max_income} below min_income {self.min_income}"
            )
        return self


class StandardDeductionEntry(BaseModel):
    filing_status: FilingStatus
    age_band: AgeBand
    amount: int = Field(ge=0)
