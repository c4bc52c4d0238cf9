"""
Quotes over decoded account snapshots.

Thin compositions of the pure math with the fields of a `Pool`, `NPool`,
`Farm` or `UserFarm` snapshot. Paused pools quote as POOL_PAUSED.
"""

from __future__ import annotations

import logging
from typing import Sequence, Tuple

from ..state.accounts import Farm, NPool, Pool, UserFarm
from .liquidity import WithdrawResult, calc_lp_tokens, calc_lp_tokens_n, calc_withdraw, calc_withdraw_n
from .result import FailureReason, MathResult, failure
from .rewards import calc_pending_reward, project_acc_reward
from .swap import simulate_swap, simulate_swap_n

logger = logging.getLogger(__name__)


def quote_swap(pool: Pool, amount_in: int, *, zero_for_one: bool, now: int) -> MathResult[int]:
    """Post-fee output for a swap against `pool` at time `now` (amp follows the ramp)."""
    if pool.is_paused():
        logger.debug("quote_swap: pool paused")
        return failure(FailureReason.POOL_PAUSED)
    amp = pool.get_amp(now)
    if zero_for_one:
        return simulate_swap(pool.bal0, pool.bal1, amount_in, amp, pool.fee_bps)
    return simulate_swap(pool.bal1, pool.bal0, amount_in, amp, pool.fee_bps)


def quote_swap_n(npool: NPool, from_idx: int, to_idx: int, amount_in: int) -> MathResult[int]:
    if npool.is_paused():
        logger.debug("quote_swap_n: pool paused")
        return failure(FailureReason.POOL_PAUSED)
    return simulate_swap_n(npool.balances.to_tuple(), from_idx, to_idx, amount_in, npool.amp, npool.fee_bps)


def quote_deposit(pool: Pool, amount0: int, amount1: int, *, now: int) -> MathResult[int]:
    """LP tokens minted for depositing (amount0, amount1) into `pool`."""
    if pool.is_paused():
        return failure(FailureReason.POOL_PAUSED)
    return calc_lp_tokens(amount0, amount1, pool.bal0, pool.bal1, pool.lp_supply, pool.get_amp(now))


def quote_deposit_n(npool: NPool, amounts: Sequence[int]) -> MathResult[int]:
    if npool.is_paused():
        return failure(FailureReason.POOL_PAUSED)
    return calc_lp_tokens_n(amounts, npool.balances.to_tuple(), npool.lp_supply, npool.amp)


def quote_withdraw(pool: Pool, lp_amount: int) -> MathResult[WithdrawResult]:
    if pool.is_paused():
        return failure(FailureReason.POOL_PAUSED)
    return calc_withdraw(lp_amount, pool.bal0, pool.bal1, pool.lp_supply)


def quote_withdraw_n(npool: NPool, lp_amount: int) -> MathResult[Tuple[int, ...]]:
    if npool.is_paused():
        return failure(FailureReason.POOL_PAUSED)
    return calc_withdraw_n(lp_amount, npool.balances.to_tuple(), npool.lp_supply)


def quote_pending_reward(farm: Farm, user: UserFarm, now: int) -> int:
    """Rewards `user` could claim at `now`, including emissions since the farm's last update."""
    acc = project_acc_reward(farm, now)
    return calc_pending_reward(user.staked, acc, user.reward_debt)
