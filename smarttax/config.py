"""Engine configuration.

Defaults keep the seeded schedules as stored: a bounded top bracket and
no fallback schedule for filing statuses that have no brackets. Both are
overridable here or through the environment.
"""

import os
from pathlib import Path

from pydantic import BaseModel, Field

from smarttax.models.enums import FilingStatus, TopBracketPolicy

DEFAULT_DB_PATH = Path.home() / ".smarttax" / "smarttax.db"
DEFAULT_OWNER = "admin"


class EngineConfig(BaseModel):
    db_path: Path = DEFAULT_DB_PATH
    # Only this caller may seed the bracket and standard deduction tables.
    owner: str = DEFAULT_OWNER
    top_bracket_policy: TopBracketPolicy = TopBracketPolicy.BOUNDED
    # Schedule used for a filing status that has no brackets of its own.
    # None means such statuses fail with BracketNotFound.
    bracket_fallback_status: FilingStatus | None = None
    # Extra income used to measure the marginal value.
    marginal_bump: int = Field(default=1000, gt=0)

    @classmethod
    def from_env(cls, **overrides: object) -> "EngineConfig":
        """Build a config from SMARTTAX_* environment variables.

        Keyword arguments that are not None take precedence over the environment.
        An unrecognised variable value raises ValueError naming the variable.
        """
        values: dict[str, object] = {}
        if db := os.environ.get("SMARTTAX_DB"):
            values["db_path"] = Path(db)
        if owner := os.environ.get("SMARTTAX_OWNER"):
            values["owner"] = owner
        if policy := os.environ.get("SMARTTAX_TOP_BRACKET"):
            try:
                values["top_bracket_policy"] = TopBracketPolicy(policy.upper())
            except ValueError:
                valid = ", ".join(TopBracketPolicy)
                raise ValueError(
                    f"SMARTTAX_TOP_BRACKET must be one of {valid}, got '{policy}'"
                ) from None
        if fallback := os.environ.get("SMARTTAX_BRACKET_FALLBACK"):
            try:
                values["bracket_fallback_status"] = FilingStatus[fallback.upper()]
            except KeyError:
                valid = ", ".join(s.name for s in FilingStatus)
                raise ValueError(
                    f"SMARTTAX_BRACKET_FALLBACK must be one of {valid}, got '{fallback}'"
                ) from None
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)
