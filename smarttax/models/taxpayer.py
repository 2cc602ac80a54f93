"""Taxpayer, income and deduction records.

Registration rules live in the field constraints: a record that fails
validation is reported as InvalidTaxpayer / InvalidIncome / InvalidDeduction
by the operation that tried to store it.
"""

from pydantic import BaseModel, Field

from smarttax.models.enums import FilingStatus

MIN_TAX_YEAR = 2020


class Taxpayer(BaseModel):
    id: int
    name: str
    filing_status: FilingStatus
    age: int = Field(gt=0)
    dependents: int = Field(default=0, ge=0)
    tax_year: int = Field(ge=MIN_TAX_YEAR)


class IncomeSource(BaseModel):
    taxpayer_id: int
    income_id: int
    income_type: int = Field(ge=1)
    amount: int = Field(gt=0)
    tax_withheld: int = Field(default=0, ge=0)
    is_taxable: bool = True


class Deduction(BaseModel):
    taxpayer_id: int
    deduction_id: int
    deduction_type: int = Field(ge=1)
    amount: int = Field(gt=0)
    is_above_line: bool = False
    is_itemized: bool = False
