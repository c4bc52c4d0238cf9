from __future__ import annotations

import pytest

from aex402.core.result import FailureReason, MathResult, error_code_for, failure, success
from aex402.errors import ErrorCode, MathError


def test_success_zero_is_not_failure() -> None:
    res = success(0)
    assert res.ok
    assert res.value == 0
    assert res.reason is None


def test_failure_carries_reason() -> None:
    res = failure(FailureReason.NO_CONVERGENCE)
    assert not res.ok
    assert res.value is None
    assert res.reason is FailureReason.NO_CONVERGENCE


def test_inconsistent_construction_rejected() -> None:
    with pytest.raises(ValueError):
        MathResult(ok=True, value=1, reason=FailureReason.OVERFLOW)
    with pytest.raises(ValueError):
        MathResult(ok=False)


def test_unwrap_raises_math_error_with_program_code() -> None:
    with pytest.raises(MathError) as excinfo:
        failure(FailureReason.OVERFLOW).unwrap()
    assert excinfo.value.code is ErrorCode.MATH_OVERFLOW
    assert "overflow" in str(excinfo.value)


def test_value_or_and_map() -> None:
    assert failure(FailureReason.ZERO_SUPPLY).value_or(7) == 7
    assert success(3).value_or(7) == 3
    assert success(3).map(lambda v: v * 2) == success(6)
    assert failure(FailureReason.ZERO_SUPPLY).map(lambda v: v * 2).reason is FailureReason.ZERO_SUPPLY


@pytest.mark.parametrize("reason", list(FailureReason))
def test_every_reason_maps_to_error_code(reason) -> None:
    assert isinstance(error_code_for(reason), ErrorCode)
