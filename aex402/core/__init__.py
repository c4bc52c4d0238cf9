"""
StableSwap math core.

Snapshot-level quotes live in `aex402.core.quotes` (they depend on the
account codec and are not re-exported here).
"""

from .result import FailureReason, MathResult, failure, success
from .fixed_point import div_wide, isqrt, isqrt_wide, mul_wide
from .stableswap import calc_d, calc_d_n, calc_y, calc_y_n
from .swap import (
    calc_min_output,
    calc_price_impact,
    check_imbalance,
    check_min_amount,
    simulate_swap,
    simulate_swap_n,
)
from .liquidity import (
    WithdrawResult,
    calc_initial_lp,
    calc_lp_tokens,
    calc_lp_tokens_n,
    calc_virtual_price,
    calc_withdraw,
    calc_withdraw_n,
)
from .amp import check_amp, check_ramp, commit_delay_elapsed, get_current_amp
from .rewards import calc_new_acc_reward, calc_pending_reward, farm_accrued_reward, project_acc_reward
from .governance import ProposalStatus, ProposalType

__all__ = [
    "FailureReason",
    "MathResult",
    "failure",
    "success",
    "div_wide",
    "isqrt",
    "isqrt_wide",
    "mul_wide",
    "calc_d",
    "calc_d_n",
    "calc_y",
    "calc_y_n",
    "calc_min_output",
    "calc_price_impact",
    "check_imbalance",
    "check_min_amount",
    "simulate_swap",
    "simulate_swap_n",
    "WithdrawResult",
    "calc_initial_lp",
    "calc_lp_tokens",
    "calc_lp_tokens_n",
    "calc_virtual_price",
    "calc_withdraw",
    "calc_withdraw_n",
    "check_amp",
    "check_ramp",
    "commit_delay_elapsed",
    "get_current_amp",
    "calc_new_acc_reward",
    "calc_pending_reward",
    "farm_accrued_reward",
    "project_acc_reward",
    "ProposalStatus",
    "ProposalType",
]
