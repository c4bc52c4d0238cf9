from __future__ import annotations

import pytest

from aex402.constants import MIN_SWAP, U64_MAX
from aex402.core.result import FailureReason
from aex402.core.stableswap import calc_d, calc_y
from aex402.core.swap import (
    calc_min_output,
    calc_price_impact,
    check_imbalance,
    check_min_amount,
    simulate_swap,
    simulate_swap_n,
)

POOL = 1_000_000_000_000


class TestSimulateSwap:
    def test_balanced_pool_near_one_to_one(self) -> None:
        out = simulate_swap(POOL, POOL, 1_000_000, 100, 0).unwrap()
        assert 999_000 <= out <= 1_000_001

    def test_fee_taken_from_gross_output(self) -> None:
        gross = simulate_swap(POOL, POOL, 1_000_000, 100, 0).unwrap()
        net = simulate_swap(POOL, POOL, 1_000_000, 100, 30).unwrap()
        assert net == gross - gross * 30 // 10_000

    def test_matches_solver_composition(self) -> None:
        bal_in, bal_out, amount_in, amp = 5_000_000_000, 4_000_000_000, 250_000_000, 200
        d = calc_d(bal_in, bal_out, amp).unwrap()
        new_out = calc_y(bal_in + amount_in, d, amp).unwrap()
        expected = bal_out - new_out
        expected -= expected * 4 // 10_000
        assert simulate_swap(bal_in, bal_out, amount_in, amp, 4).unwrap() == expected

    def test_zero_input_yields_successful_zero(self) -> None:
        res = simulate_swap(POOL, POOL, 0, 100, 30)
        assert res.ok
        assert res.value == 0

    def test_full_fee_yields_zero(self) -> None:
        assert simulate_swap(POOL, POOL, 1_000_000, 100, 10_000).unwrap() == 0

    def test_rejects_fee_above_denominator(self) -> None:
        assert simulate_swap(POOL, POOL, 1_000, 100, 10_001).reason is FailureReason.INVALID_INPUT

    def test_empty_pool_yields_zero(self) -> None:
        res = simulate_swap(0, 0, 1_000, 100, 30)
        assert res.ok
        assert res.value == 0

    def test_input_overflow(self) -> None:
        bal = 1_000_000_000
        res = simulate_swap(bal, bal, U64_MAX - bal + 1, 100, 0)
        assert res.reason is FailureReason.OVERFLOW

    def test_invalid_amp_propagates(self) -> None:
        assert simulate_swap(POOL, POOL, 1_000, 0, 30).reason is FailureReason.INVALID_AMP


class TestSimulateSwapN:
    def test_two_tokens_match_simulate_swap(self) -> None:
        balances = [3_000_000_000, 2_000_000_000]
        assert simulate_swap_n(balances, 0, 1, 40_000_000, 150, 25) == simulate_swap(
            balances[0], balances[1], 40_000_000, 150, 25
        )

    def test_three_tokens(self) -> None:
        out = simulate_swap_n([POOL, POOL, POOL], 2, 0, 1_000_000, 100, 0).unwrap()
        assert 999_000 <= out <= 1_000_001

    def test_rejects_bad_fee(self) -> None:
        res = simulate_swap_n([POOL, POOL], 0, 1, 1_000, 100, 20_000)
        assert res.reason is FailureReason.INVALID_INPUT


class TestPriceImpact:
    def test_fee_dominates_small_trade(self) -> None:
        impact = calc_price_impact(POOL, POOL, 1_000_000, 100, 30).unwrap()
        assert 0.0029 <= impact <= 0.0031

    def test_larger_trade_larger_impact(self) -> None:
        small = calc_price_impact(1_000_000_000, 1_000_000_000, 1_000_000, 10, 0).unwrap()
        large = calc_price_impact(1_000_000_000, 1_000_000_000, 500_000_000, 10, 0).unwrap()
        assert large > small

    def test_zero_amount_rejected(self) -> None:
        assert calc_price_impact(POOL, POOL, 0, 100, 30).reason is FailureReason.INVALID_INPUT


class TestHelpers:
    def test_min_output(self) -> None:
        assert calc_min_output(1_000_000, 50) == 995_000
        assert calc_min_output(1_000_000, 0) == 1_000_000
        assert calc_min_output(1_000_000, 10_000) == 0

    @pytest.mark.parametrize("expected,slippage", [(-1, 50), (1_000, 10_001), (1_000, True)])
    def test_min_output_rejects(self, expected, slippage) -> None:
        with pytest.raises(ValueError):
            calc_min_output(expected, slippage)

    def test_imbalance(self) -> None:
        assert check_imbalance(100, 1_000)
        assert check_imbalance(1_000, 100)
        assert not check_imbalance(100, 1_001)
        assert not check_imbalance(0, 1_000)
        assert check_imbalance(100, 2_000, max_ratio=20)

    def test_min_amount(self) -> None:
        assert check_min_amount(MIN_SWAP)
        assert not check_min_amount(MIN_SWAP - 1)
        assert check_min_amount(5, minimum=5)
