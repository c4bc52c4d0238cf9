"""
Swap simulation over the StableSwap solvers.

The fee is charged on the gross output:
    fee = floor(amount_out * fee_bps / 10_000)
    amount_out_net = amount_out - fee
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..constants import FEE_DENOMINATOR, MIN_SWAP, U64_MAX
from .fixed_point import is_u64
from .result import FailureReason, MathResult, failure, success
from .stableswap import calc_d, calc_y, calc_y_n

logger = logging.getLogger(__name__)


def _apply_fee(amount_out: int, fee_bps: int) -> int:
    fee = amount_out * fee_bps // FEE_DENOMINATOR
    return amount_out - fee


def _valid_fee(fee_bps: object) -> bool:
    return is_u64(fee_bps) and fee_bps <= FEE_DENOMINATOR  # type: ignore[operator]


def simulate_swap(bal_in: int, bal_out: int, amount_in: int, amp: int, fee_bps: int) -> MathResult[int]:
    """
    Post-fee output of swapping `amount_in` into a 2-token pool.

    If the solved output balance does not drop below `bal_out` the result is a
    successful 0, not a failure.
    """
    if not is_u64(amount_in) or not _valid_fee(fee_bps):
        logger.debug("simulate_swap rejected amount_in=%r fee_bps=%r", amount_in, fee_bps)
        return failure(FailureReason.INVALID_INPUT)

    d = calc_d(bal_in, bal_out, amp)
    if not d.ok:
        return d

    new_bal_in = bal_in + amount_in
    if new_bal_in > U64_MAX:
        return failure(FailureReason.OVERFLOW)
    new_bal_out = calc_y(new_bal_in, d.value, amp)  # type: ignore[arg-type]
    if not new_bal_out.ok:
        return new_bal_out

    if new_bal_out.value >= bal_out:  # type: ignore[operator]
        logger.debug("simulate_swap: output balance did not decrease (bal_out=%d)", bal_out)
        return success(0)
    amount_out = bal_out - new_bal_out.value  # type: ignore[operator]
    return success(_apply_fee(amount_out, fee_bps))


def simulate_swap_n(
    balances: Sequence[int],
    from_idx: int,
    to_idx: int,
    amount_in: int,
    amp: int,
    fee_bps: int,
) -> MathResult[int]:
    """N-token counterpart of `simulate_swap`, indexed by `from_idx` / `to_idx`."""
    if not _valid_fee(fee_bps):
        logger.debug("simulate_swap_n rejected fee_bps=%r", fee_bps)
        return failure(FailureReason.INVALID_INPUT)

    new_y = calc_y_n(balances, from_idx, to_idx, amount_in, amp)
    if not new_y.ok:
        return new_y

    bal_out = balances[to_idx]
    if new_y.value >= bal_out:  # type: ignore[operator]
        logger.debug("simulate_swap_n: output balance did not decrease (bal_out=%d)", bal_out)
        return success(0)
    return success(_apply_fee(bal_out - new_y.value, fee_bps))  # type: ignore[operator]


def calc_price_impact(bal_in: int, bal_out: int, amount_in: int, amp: int, fee_bps: int) -> MathResult[float]:
    """
    Price impact against a 1:1 peg, as a fraction (0.01 == 1%).

    impact = 1 - amount_out / amount_in
    """
    if amount_in == 0:
        return failure(FailureReason.INVALID_INPUT)
    out = simulate_swap(bal_in, bal_out, amount_in, amp, fee_bps)
    return out.map(lambda v: 1.0 - float(v) / float(amount_in))


def calc_min_output(expected_output: int, slippage_bps: int) -> int:
    """Minimum acceptable output for a slippage tolerance in basis points."""
    if not is_u64(expected_output):
        raise ValueError(f"expected_output must be a u64: {expected_output!r}")
    if not is_u64(slippage_bps) or slippage_bps > FEE_DENOMINATOR:
        raise ValueError(f"slippage_bps must be in [0, 10000]: {slippage_bps!r}")
    return expected_output * (FEE_DENOMINATOR - slippage_bps) // FEE_DENOMINATOR


def check_imbalance(bal0: int, bal1: int, max_ratio: int = 10) -> bool:
    """False when either side is empty or one side exceeds `max_ratio` times the other."""
    if bal0 == 0 or bal1 == 0:
        return False
    if bal0 > bal1:
        return bal0 <= bal1 * max_ratio
    return bal1 <= bal0 * max_ratio


def check_min_amount(amount: int, minimum: int = MIN_SWAP) -> bool:
    return amount >= minimum
