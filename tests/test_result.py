"""Tests for the Ok/Err result types."""

import pytest

from smarttax.exceptions import CalculationError, InvalidTaxpayer
from smarttax.result import Err, Ok


class TestOk:
    def test_flags(self):
        r = Ok(5)
        assert r.is_ok
        assert not r.is_err

    def test_unwrap(self):
        assert Ok(5).unwrap() == 5
        assert Ok(5).unwrap_or(0) == 5

    def test_map(self):
        assert Ok(2).map(lambda v: v * 3) == Ok(6)


class TestErr:
    def test_flags_and_code(self):
        r = Err(InvalidTaxpayer(7))
        assert r.is_err
        assert not r.is_ok
        assert r.code == 101

    def test_unwrap_raises_carried_error(self):
        with pytest.raises(InvalidTaxpayer) as exc_info:
            Err(InvalidTaxpayer(7)).unwrap()
        assert exc_info.value.taxpayer_id == 7

    def test_unwrap_or(self):
        assert Err(InvalidTaxpayer(7)).unwrap_or(0) == 0

    def test_map_is_noop(self):
        err = Err(InvalidTaxpayer(7))
        assert err.map(lambda v: v * 3) is err


class TestErrorCodes:
    def test_calculation_error_keeps_cause(self):
        cause = InvalidTaxpayer(3)
        err = CalculationError("get_tax_summary", cause)
        assert err.code == 104
        assert err.cause is cause
        assert "taxpayer 3" in str(err).lower()
