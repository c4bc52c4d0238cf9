from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, unique
from typing import Callable, Generic, Optional, TypeVar

from ..errors import ErrorCode, MathError

T = TypeVar("T")
U = TypeVar("U")


@unique
class FailureReason(Enum):
    NO_CONVERGENCE = "no_convergence"
    ZERO_DENOMINATOR = "zero_denominator"
    ZERO_BALANCE = "zero_balance"
    ZERO_SUPPLY = "zero_supply"
    ZERO_INVARIANT = "zero_invariant"
    INVARIANT_DECREASED = "invariant_decreased"
    OVERFLOW = "overflow"
    INVALID_AMP = "invalid_amp"
    INVALID_INPUT = "invalid_input"
    POOL_PAUSED = "pool_paused"


_REASON_CODES: dict[FailureReason, ErrorCode] = {
    FailureReason.NO_CONVERGENCE: ErrorCode.INVALID_INVARIANT,
    FailureReason.ZERO_DENOMINATOR: ErrorCode.INVALID_INVARIANT,
    FailureReason.ZERO_BALANCE: ErrorCode.INSUFFICIENT_LIQUIDITY,
    FailureReason.ZERO_SUPPLY: ErrorCode.INSUFFICIENT_LIQUIDITY,
    FailureReason.ZERO_INVARIANT: ErrorCode.INVALID_INVARIANT,
    FailureReason.INVARIANT_DECREASED: ErrorCode.INVALID_INVARIANT,
    FailureReason.OVERFLOW: ErrorCode.MATH_OVERFLOW,
    FailureReason.INVALID_AMP: ErrorCode.INVALID_AMP,
    FailureReason.INVALID_INPUT: ErrorCode.DATA,
    FailureReason.POOL_PAUSED: ErrorCode.PAUSED,
}


def error_code_for(reason: FailureReason) -> ErrorCode:
    return _REASON_CODES[reason]


@dataclass(frozen=True)
class MathResult(Generic[T]):
    """
    Two-variant outcome of a fallible computation.

    `ok=True` carries `value`; `ok=False` carries a `reason`. A successful
    zero is distinct from a failure.
    """

    ok: bool
    value: Optional[T] = None
    reason: Optional[FailureReason] = None

    def __post_init__(self) -> None:
        if self.ok and self.reason is not None:
            raise ValueError("successful result cannot carry a failure reason")
        if not self.ok and self.reason is None:
            raise ValueError("failed result requires a reason")

    def unwrap(self) -> T:
        if not self.ok:
            assert self.reason is not None
            raise MathError(error_code_for(self.reason), self.reason.value)
        return self.value  # type: ignore[return-value]

    def value_or(self, default: T) -> T:
        return self.value if self.ok else default  # type: ignore[return-value]

    def map(self, fn: Callable[[T], U]) -> "MathResult[U]":
        if not self.ok:
            return MathResult(ok=False, reason=self.reason)
        return MathResult(ok=True, value=fn(self.value))  # type: ignore[arg-type]


def success(value: T) -> MathResult[T]:
    return MathResult(ok=True, value=value)


def failure(reason: FailureReason) -> MathResult:
    return MathResult(ok=False, reason=reason)
