"""
LP-token issuance and redemption.

Bootstrap (supply == 0):
    2-token: LP = isqrt(amount0 * amount1)
    N-token: LP = D(amounts)
Subsequent deposits:
    LP = lp_supply * (D1 - D0) / D0
Withdrawal (proportional, truncating):
    amount_i = balance_i * lp_amount / lp_supply
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Tuple

from ..constants import U64_MAX, VIRTUAL_PRICE_PRECISION
from .fixed_point import is_u64, isqrt_wide
from .result import FailureReason, MathResult, failure, success
from .stableswap import calc_d, calc_d_n

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WithdrawResult:
    amount0: int
    amount1: int


def calc_initial_lp(amount0: int, amount1: int) -> int:
    """Geometric-mean LP mint for the first deposit."""
    if not is_u64(amount0) or not is_u64(amount1):
        raise ValueError(f"amounts must be u64: ({amount0!r}, {amount1!r})")
    return isqrt_wide(amount0 * amount1)


def _lp_from_invariants(lp_supply: int, d0: int, d1: int) -> MathResult[int]:
    if d0 == 0:
        return failure(FailureReason.ZERO_INVARIANT)
    if d1 < d0:
        logger.debug("deposit decreased the invariant: d0=%d d1=%d", d0, d1)
        return failure(FailureReason.INVARIANT_DECREASED)
    lp = lp_supply * (d1 - d0) // d0
    if lp > U64_MAX:
        return failure(FailureReason.OVERFLOW)
    return success(lp)


def calc_lp_tokens(
    amt0: int,
    amt1: int,
    bal0: int,
    bal1: int,
    lp_supply: int,
    amp: int,
) -> MathResult[int]:
    """LP tokens minted for a 2-token deposit."""
    if not all(is_u64(v) for v in (amt0, amt1, bal0, bal1, lp_supply)):
        return failure(FailureReason.INVALID_INPUT)
    if lp_supply == 0:
        return success(calc_initial_lp(amt0, amt1))

    new0, new1 = bal0 + amt0, bal1 + amt1
    if new0 > U64_MAX or new1 > U64_MAX:
        return failure(FailureReason.OVERFLOW)

    d0 = calc_d(bal0, bal1, amp)
    if not d0.ok:
        return d0
    d1 = calc_d(new0, new1, amp)
    if not d1.ok:
        return d1
    return _lp_from_invariants(lp_supply, d0.value, d1.value)  # type: ignore[arg-type]


def calc_lp_tokens_n(
    amounts: Sequence[int],
    balances: Sequence[int],
    lp_supply: int,
    amp: int,
) -> MathResult[int]:
    """LP tokens minted for an N-token deposit; the first deposit mints D(amounts)."""
    if len(amounts) != len(balances):
        return failure(FailureReason.INVALID_INPUT)
    if not is_u64(lp_supply) or not all(is_u64(v) for v in amounts):
        return failure(FailureReason.INVALID_INPUT)

    if lp_supply == 0:
        return calc_d_n(amounts, amp)

    new_balances = [b + a for b, a in zip(balances, amounts)]
    if any(v > U64_MAX for v in new_balances):
        return failure(FailureReason.OVERFLOW)

    d0 = calc_d_n(balances, amp)
    if not d0.ok:
        return d0
    d1 = calc_d_n(new_balances, amp)
    if not d1.ok:
        return d1
    return _lp_from_invariants(lp_supply, d0.value, d1.value)  # type: ignore[arg-type]


def calc_withdraw(lp_amount: int, bal0: int, bal1: int, lp_supply: int) -> MathResult[WithdrawResult]:
    """Proportional 2-token redemption of `lp_amount`."""
    if not all(is_u64(v) for v in (lp_amount, bal0, bal1, lp_supply)):
        return failure(FailureReason.INVALID_INPUT)
    if lp_supply == 0:
        return failure(FailureReason.ZERO_SUPPLY)
    amount0 = (bal0 * lp_amount // lp_supply) & U64_MAX
    amount1 = (bal1 * lp_amount // lp_supply) & U64_MAX
    return success(WithdrawResult(amount0=amount0, amount1=amount1))


def calc_withdraw_n(lp_amount: int, balances: Sequence[int], lp_supply: int) -> MathResult[Tuple[int, ...]]:
    if not is_u64(lp_amount) or not is_u64(lp_supply) or not all(is_u64(b) for b in balances):
        return failure(FailureReason.INVALID_INPUT)
    if lp_supply == 0:
        return failure(FailureReason.ZERO_SUPPLY)
    return success(tuple((b * lp_amount // lp_supply) & U64_MAX for b in balances))


def calc_virtual_price(bal0: int, bal1: int, lp_supply: int, amp: int) -> MathResult[int]:
    """Virtual price D * 1e18 / lp_supply (128-bit result)."""
    if not is_u64(lp_supply):
        return failure(FailureReason.INVALID_INPUT)
    if lp_supply == 0:
        return failure(FailureReason.ZERO_SUPPLY)
    d = calc_d(bal0, bal1, amp)
    return d.map(lambda v: v * VIRTUAL_PRICE_PRECISION // lp_supply)
