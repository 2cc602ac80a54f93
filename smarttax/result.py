"""Success/failure results returned by every engine operation."""

from dataclasses import dataclass
from typing import Any, Callable

from smarttax.exceptions import TaxEngineError


@dataclass(frozen=True)
class Ok:
    """A successful result holding ``value``."""

    value: Any

    @property
    def is_ok(self) -> bool:
        return True

    @property
    def is_err(self) -> bool:
        return False

    def unwrap(self) -> Any:
        return self.value

    def unwrap_or(self, default: Any) -> Any:
        return self.value

    def map(self, fn: Callable[[Any], Any]) -> "Ok":
        return Ok(fn(self.value))


@dataclass(frozen=True)
class Err:
    """A failed result holding the error that stopped the operation."""

    error: TaxEngineError

    @property
    def is_ok(self) -> bool:
        return False

    @property
    def is_err(self) -> bool:
        return True

    @property
    def code(self) -> int:
        return self.error.code

    def unwrap(self) -> Any:
        raise self.error

    def unwrap_or(self, default: Any) -> Any:
        return default

    def map(self, fn: Callable[[Any], Any]) -> "Err":
        return self


Result = Ok | Err
