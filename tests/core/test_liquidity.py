from __future__ import annotations

import pytest

from aex402.constants import U64_MAX
from aex402.core.liquidity import (
    WithdrawResult,
    calc_initial_lp,
    calc_lp_tokens,
    calc_lp_tokens_n,
    calc_virtual_price,
    calc_withdraw,
    calc_withdraw_n,
)
from aex402.core.result import FailureReason
from aex402.core.stableswap import calc_d_n


# ---------------------------------------------------------------------------
# Deposits
# ---------------------------------------------------------------------------


class TestLpTokens:
    def test_bootstrap_is_geometric_mean(self) -> None:
        assert calc_lp_tokens(100, 400, 0, 0, 0, 100).unwrap() == 200
        assert calc_initial_lp(100, 400) == 200

    def test_bootstrap_skips_amp_check(self) -> None:
        assert calc_lp_tokens(9, 16, 0, 0, 0, 0).unwrap() == 12

    def test_proportional_deposit(self) -> None:
        bal = 1_000_000_000
        res = calc_lp_tokens(100_000_000, 100_000_000, bal, bal, 2 * bal, 100)
        assert res.unwrap() == 200_000_000

    def test_one_sided_deposit_mints_less_than_balanced(self) -> None:
        bal = 1_000_000_000
        balanced = calc_lp_tokens(50_000_000, 50_000_000, bal, bal, 2 * bal, 100).unwrap()
        one_sided = calc_lp_tokens(100_000_000, 0, bal, bal, 2 * bal, 100).unwrap()
        assert 0 < one_sided <= balanced

    def test_zero_invariant(self) -> None:
        res = calc_lp_tokens(10, 10, 0, 0, 1_000, 100)
        assert res.reason is FailureReason.ZERO_INVARIANT

    def test_deposit_overflow(self) -> None:
        res = calc_lp_tokens(U64_MAX, 1, 1, 1, 1_000, 100)
        assert res.reason is FailureReason.OVERFLOW

    def test_rejects_negative(self) -> None:
        assert calc_lp_tokens(-1, 1, 1, 1, 1, 100).reason is FailureReason.INVALID_INPUT

    def test_initial_lp_rejects_non_u64(self) -> None:
        with pytest.raises(ValueError):
            calc_initial_lp(U64_MAX + 1, 1)


class TestLpTokensN:
    def test_bootstrap_mints_invariant(self) -> None:
        amounts = [1_000_000, 2_000_000, 3_000_000]
        assert calc_lp_tokens_n(amounts, [0, 0, 0], 0, 100) == calc_d_n(amounts, 100)

    def test_proportional_deposit(self) -> None:
        balances = [1_000_000_000] * 4
        res = calc_lp_tokens_n([100_000_000] * 4, balances, 4_000_000_000, 100)
        assert res.unwrap() == 400_000_000

    def test_length_mismatch(self) -> None:
        res = calc_lp_tokens_n([1, 2], [1, 2, 3], 10, 100)
        assert res.reason is FailureReason.INVALID_INPUT


# ---------------------------------------------------------------------------
# Withdrawals
# ---------------------------------------------------------------------------


class TestWithdraw:
    def test_proportional(self) -> None:
        assert calc_withdraw(50, 1_000, 3_000, 200).unwrap() == WithdrawResult(amount0=250, amount1=750)

    def test_truncates(self) -> None:
        assert calc_withdraw(1, 10, 20, 3).unwrap() == WithdrawResult(amount0=3, amount1=6)

    def test_zero_supply(self) -> None:
        assert calc_withdraw(1, 10, 20, 0).reason is FailureReason.ZERO_SUPPLY

    def test_n_tokens(self) -> None:
        assert calc_withdraw_n(1, [10, 20, 30], 3).unwrap() == (3, 6, 10)

    def test_n_tokens_zero_supply(self) -> None:
        assert calc_withdraw_n(1, [10, 20], 0).reason is FailureReason.ZERO_SUPPLY


class TestVirtualPrice:
    def test_balanced_pool_at_par(self) -> None:
        bal = 1_000_000_000
        assert calc_virtual_price(bal, bal, 2 * bal, 100).unwrap() == 10**18

    def test_zero_supply(self) -> None:
        assert calc_virtual_price(1, 1, 0, 100).reason is FailureReason.ZERO_SUPPLY

    def test_invariant_failure_propagates(self) -> None:
        assert calc_virtual_price(1, 1, 1, 0).reason is FailureReason.INVALID_AMP
