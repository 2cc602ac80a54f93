"""Error kinds for SmartTax Optimizer.

Each error carries the numeric code the operation surface reports. Operations
return these inside ``Err`` results rather than raising them; ``Result.unwrap``
raises the carried error for callers that prefer exceptions.
"""


class TaxEngineError(Exception):
    """Base class for every error the engine reports."""

    code: int = 0


class Unauthorized(TaxEngineError):
    """Raised when a privileged operation is invoked by someone other than the owner."""

    code = 100

    def __init__(self, caller: str):
        self.caller = caller
        super().__init__(f"Caller '{caller}' is not the store owner")


class InvalidTaxpayer(TaxEngineError):
    """Raised for a missing taxpayer reference or bad registration fields."""

    code = 101

    def __init__(self, taxpayer_id: int, message: str = "taxpayer not registered"):
        self.taxpayer_id = taxpayer_id
        super().__init__(f"Invalid taxpayer {taxpayer_id}: {message}")


class InvalidIncome(TaxEngineError):
    """Raised when an income source has a non-positive amount."""

    code = 102

    def __init__(self, income_id: int, message: str):
        self.income_id = income_id
        super().__init__(f"Invalid income source {income_id}: {message}")


class InvalidDeduction(TaxEngineError):
    """Raised when a deduction has a non-positive amount."""

    code = 103

    def __init__(self, deduction_id: int, message: str):
        self.deduction_id = deduction_id
        super().__init__(f"Invalid deduction {deduction_id}: {message}")


class CalculationError(TaxEngineError):
    """Wraps the failure of a composed calculation."""

    code = 104

    def __init__(self, operation: str, cause: TaxEngineError | None = None):
        self.operation = operation
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"Calculation failed in {operation}{detail}")


class BracketNotFound(TaxEngineError):
    """Raised when a filing status has no bracket row for a required level."""

    code = 105

    def __init__(self, filing_status: object, level: int | None = None):
        self.filing_status = filing_status
        self.level = level
        where = f" level {level}" if level is not None else ""
        super().__init__(f"No tax bracket for {filing_status}{where}")
