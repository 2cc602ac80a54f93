"""Tax bracket and standard deduction tables.

Seed schedules are written to the store once by the owner-only seeding
operation; the calculators only ever read them back through BracketTable and
StandardDeductionTable. Rates are basis points (1000 = 10%).

Only SINGLE and MARRIED_JOINT are seeded. MARRIED_SEPARATE and
HEAD_OF_HOUSEHOLD have no brackets and fall back to the SINGLE/under-65
standard deduction. See EngineConfig.bracket_fallback_status for the bracket
side of that gap.
"""

from smarttax.db.repository import TaxRepository
from smarttax.exceptions import BracketNotFound
from smarttax.models.brackets import StandardDeductionEntry, TaxBracket
from smarttax.models.enums import AgeBand, FilingStatus
from smarttax.result import Err, Ok, Result

# ---------------------------------------------------------------------------
# Seed brackets: {filing_status: [(min_income, max_income, rate_bps), ...]}
# Listed in level order starting at level 1.
# ---------------------------------------------------------------------------
SEED_BRACKETS: dict[FilingStatus, list[tuple[int, int, int]]] = {
    FilingStatus.SINGLE: [
        (0, 11000, 1000),
        (11000, 95375, 1200),
        (95375, 182100, 2200),
        (182100, 231250, 2400),
    ],
    FilingStatus.MARRIED_JOINT: [
        (0, 22000, 1000),
        (22000, 190750, 1200),
        (190750, 364200, 2200),
    ],
}

# ---------------------------------------------------------------------------
# Seed standard deductions
# ---------------------------------------------------------------------------
SEED_STANDARD_DEDUCTIONS: dict[FilingStatus, dict[AgeBand, int]] = {
    FilingStatus.SINGLE: {
        AgeBand.UNDER_65: 13850,
        AgeBand.SIXTY_FIVE_PLUS: 14700,
    },
    FilingStatus.MARRIED_JOINT: {
        AgeBand.UNDER_65: 27700,
        AgeBand.SIXTY_FIVE_PLUS: 28700,
    },
}

# Used when a status/age band has no row of its own.
DEFAULT_STANDARD_DEDUCTION = SEED_STANDARD_DEDUCTIONS[FilingStatus.SINGLE][AgeBand.UNDER_65]


def seed_brackets() -> list[TaxBracket]:
    """Expand SEED_BRACKETS into bracket rows."""
    return [
        TaxBracket(
            filing_status=status,
            level=level,
            min_income=low,
            max_income=high,
            rate_bps=rate,
        )
        for status, bands in SEED_BRACKETS.items()
        for level, (low, high, rate) in enumerate(bands, start=1)
    ]


def seed_standard_deductions() -> list[StandardDeductionEntry]:
    return [
        StandardDeductionEntry(filing_status=status, age_band=band, amount=amount)
        for status, by_band in SEED_STANDARD_DEDUCTIONS.items()
        for band, amount in by_band.items()
    ]


def validate_schedule(brackets: list[TaxBracket]) -> list[str]:
    """Check one filing status's schedule. Returns a list of problems.

    Levels must run 1..n without gaps, each band must start where the previous
    one ends, and rates must not decrease.
    """
    errors: list[str] = []
    ordered = sorted(brackets, key=lambda b: b.level)
    for expected, bracket in enumerate(ordered, start=1):
        if bracket.level != expected:
            errors.append(f"{bracket.filing_status.name}: expected level {expected}, got {bracket.level}")
            break
    for prev, cur in zip(ordered, ordered[1:]):
        if prev.max_income != cur.min_income:
            errors.append(
                f"{cur.filing_status.name}: level {prev.level} ends at {prev.max_income} "
                f"but level {cur.level} starts at {cur.min_income}"
            )
        if cur.rate_bps < prev.rate_bps:
            errors.append(
                f"{cur.filing_status.name}: rate drops from {prev.rate_bps} "
                f"to {cur.rate_bps} at level {cur.level}"
            )
    if ordered and ordered[0].min_income != 0:
        errors.append(f"{ordered[0].filing_status.name}: level 1 must start at 0")
    return errors


class BracketTable:
    """Read-only view over the stored bracket rows."""

    def __init__(self, repo: TaxRepository):
        self.repo = repo

    def get(self, filing_status: FilingStatus, level: int) -> Result:
        """Look up one bracket. Err(BracketNotFound) if the row is absent."""
        row = self.repo.get_bracket(filing_status, level)
        if row is None:
            return Err(BracketNotFound(filing_status, level))
        return Ok(TaxBracket(**row))

    def schedule(self, filing_status: FilingStatus) -> Result:
        """Return every bracket for a status in level order.

        Levels must be contiguous from 1; the first missing level is reported
        as BracketNotFound, as is a status with no rows at all.
        """
        rows = self.repo.get_brackets(filing_status)
        if not rows:
            return Err(BracketNotFound(filing_status, 1))
        brackets = [TaxBracket(**row) for row in rows]
        for expected, bracket in enumerate(brackets, start=1):
            if bracket.level != expected:
                return Err(BracketNotFound(filing_status, expected))
        return Ok(brackets)

    def statuses(self) -> set[FilingStatus]:
        return {FilingStatus(row["filing_status"]) for row in self.repo.get_brackets()}


class StandardDeductionTable:
    """Filing status / age lookup for the standard deduction.

    Never fails: absent rows fall back to the SINGLE/under-65 amount, and an
    empty store falls back to the seed values.
    """

    def __init__(self, entries: list[StandardDeductionEntry] | None = None):
        if not entries:
            entries = seed_standard_deductions()
        self._amounts = {(e.filing_status, e.age_band): e.amount for e in entries}

    @classmethod
    def from_repository(cls, repo: TaxRepository) -> "StandardDeductionTable":
        entries = [
            StandardDeductionEntry(
                filing_status=row["filing_status"],
                age_band=row["age_band"],
                amount=row["amount"],
            )
            for row in repo.get_standard_deductions()
        ]
        return cls(entries)

    def lookup(self, filing_status: FilingStatus, age: int) -> int:
        band = AgeBand.for_age(age)
        amount = self._amounts.get((filing_status, band))
        if amount is not None:
            return amount
        return self._amounts.get(
            (FilingStatus.SINGLE, AgeBand.UNDER_65), DEFAULT_STANDARD_DEDUCTION
        )
