"""
Accumulator-per-share farming rewards (scale 1e12).

    pending = max(0, staked * acc_reward / 1e12 - reward_debt)
    acc'    = acc + reward * 1e12 / total_staked      (unchanged if nothing staked)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import REWARD_PRECISION, U64_MAX

if TYPE_CHECKING:  # pragma: no cover
    from ..state.accounts import Farm


def _require_u64(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > U64_MAX:
        raise ValueError(f"{name} out of u64 range: {value}")
    return value


def calc_pending_reward(staked: int, acc_reward: int, reward_debt: int) -> int:
    _require_u64("staked", staked)
    _require_u64("acc_reward", acc_reward)
    _require_u64("reward_debt", reward_debt)
    earned = staked * acc_reward // REWARD_PRECISION
    if earned <= reward_debt:
        return 0
    return (earned - reward_debt) & U64_MAX


def calc_new_acc_reward(current_acc: int, reward: int, total_staked: int) -> int:
    _require_u64("current_acc", current_acc)
    _require_u64("reward", reward)
    _require_u64("total_staked", total_staked)
    if total_staked == 0:
        return current_acc
    increase = reward * REWARD_PRECISION // total_staked
    return (current_acc + (increase & U64_MAX)) & U64_MAX


def farm_accrued_reward(farm: "Farm", now: int) -> int:
    """
    Rewards emitted since `farm.last_update`, clipped to the farm window.

    reward = reward_rate * |[last_update, now] ∩ [start_time, end_time]|
    """
    lo = max(farm.last_update, farm.start_time)
    hi = min(now, farm.end_time)
    if hi <= lo:
        return 0
    return min(farm.reward_rate * (hi - lo), U64_MAX)


def project_acc_reward(farm: "Farm", now: int) -> int:
    """Accumulator value the program would hold after an update at `now`."""
    return calc_new_acc_reward(farm.acc_reward, farm_accrued_reward(farm, now), farm.total_staked)
