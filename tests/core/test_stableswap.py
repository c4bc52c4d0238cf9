from __future__ import annotations

import pytest

from aex402.constants import MAX_AMP, U64_MAX
from aex402.core.fixed_point import isqrt_wide
from aex402.core.result import FailureReason
from aex402.core.stableswap import calc_d, calc_d_n, calc_y, calc_y_n


# ---------------------------------------------------------------------------
# calc_d
# ---------------------------------------------------------------------------


class TestCalcD:
    @pytest.mark.parametrize("v", [1, 1_000, 1_000_000_000, 10**15])
    @pytest.mark.parametrize("amp", [1, 100, MAX_AMP])
    def test_balanced_pool_is_sum(self, v, amp) -> None:
        res = calc_d(v, v, amp)
        assert res.ok
        assert res.value == 2 * v

    def test_empty_pool_is_zero(self) -> None:
        res = calc_d(0, 0, 100)
        assert res.ok
        assert res.value == 0

    def test_one_sided_pool_fails(self) -> None:
        res = calc_d(0, 1_000, 100)
        assert not res.ok
        assert res.reason is FailureReason.ZERO_BALANCE

    def test_imbalanced_between_product_and_sum(self) -> None:
        x, y = 1_000_000_000, 3_000_000_000
        d = calc_d(x, y, 100).unwrap()
        assert d <= x + y
        assert d >= 2 * isqrt_wide(x * y)

    def test_higher_amp_moves_toward_sum(self) -> None:
        x, y = 1_000_000_000, 3_000_000_000
        lo = calc_d(x, y, 1).unwrap()
        hi = calc_d(x, y, 1_000).unwrap()
        assert lo < hi <= x + y

    @pytest.mark.parametrize("amp", [0, MAX_AMP + 1])
    def test_amp_out_of_range(self, amp) -> None:
        res = calc_d(100, 100, amp)
        assert res.reason is FailureReason.INVALID_AMP

    def test_rejects_non_u64_inputs(self) -> None:
        assert calc_d(True, 1, 1).reason is FailureReason.INVALID_INPUT
        assert calc_d(-1, 1, 1).reason is FailureReason.INVALID_INPUT
        assert calc_d(U64_MAX + 1, 1, 1).reason is FailureReason.INVALID_INPUT

    def test_sum_overflow_is_reported(self) -> None:
        assert calc_d(U64_MAX, 1, 1).reason is FailureReason.OVERFLOW


# ---------------------------------------------------------------------------
# calc_y
# ---------------------------------------------------------------------------


class TestCalcY:
    def test_recovers_other_balance(self) -> None:
        x, y = 1_000_000_000, 1_000_000_000
        d = calc_d(x, y, 100).unwrap()
        y_solved = calc_y(x, d, 100).unwrap()
        assert abs(y_solved - y) <= 2

    def test_recovers_other_balance_imbalanced(self) -> None:
        x, y = 2_000_000_000, 500_000_000
        d = calc_d(x, y, 50).unwrap()
        y_solved = calc_y(x, d, 50).unwrap()
        assert abs(y_solved - y) <= 10

    def test_more_input_means_less_output_balance(self) -> None:
        x, y = 1_000_000_000, 1_000_000_000
        d = calc_d(x, y, 100).unwrap()
        y1 = calc_y(x + 1_000_000, d, 100).unwrap()
        y2 = calc_y(x + 10_000_000, d, 100).unwrap()
        assert y2 < y1 < y

    def test_zero_input_balance_fails(self) -> None:
        res = calc_y(0, 2_000, 100)
        assert not res.ok
        assert res.reason is FailureReason.ZERO_BALANCE

    def test_invalid_amp(self) -> None:
        assert calc_y(1_000, 2_000, 0).reason is FailureReason.INVALID_AMP


# ---------------------------------------------------------------------------
# N-token
# ---------------------------------------------------------------------------


class TestCalcDN:
    @pytest.mark.parametrize("n", [2, 3, 4, 8])
    @pytest.mark.parametrize("v", [1_000_000, 1_000_000_000])
    def test_balanced_pool_is_n_times_balance(self, n, v) -> None:
        res = calc_d_n([v] * n, 100)
        assert res.ok
        assert res.value == n * v

    def test_two_tokens_agree_with_calc_d(self) -> None:
        for x, y in [(1_000, 1_000), (1_000_000, 3_000_000), (7, 900_000_000)]:
            assert calc_d_n([x, y], 85) == calc_d(x, y, 85)

    def test_all_zero_is_zero(self) -> None:
        assert calc_d_n([0, 0, 0], 100).unwrap() == 0

    def test_zero_balance_fails(self) -> None:
        res = calc_d_n([1_000, 0, 1_000], 100)
        assert res.reason is FailureReason.ZERO_BALANCE

    @pytest.mark.parametrize("n", [0, 1, 9])
    def test_token_count_bounds(self, n) -> None:
        assert calc_d_n([1_000] * n, 100).reason is FailureReason.INVALID_INPUT


class TestCalcYN:
    def test_two_tokens_agree_with_calc_y(self) -> None:
        balances = [1_000_000_000, 1_200_000_000]
        amount_in = 5_000_000
        d = calc_d(balances[0], balances[1], 100).unwrap()
        expected = calc_y(balances[0] + amount_in, d, 100)
        assert calc_y_n(balances, 0, 1, amount_in, 100) == expected

    def test_three_token_output_balance_decreases(self) -> None:
        balances = [1_000_000_000] * 3
        new_y = calc_y_n(balances, 0, 2, 10_000_000, 100).unwrap()
        assert new_y < balances[2]
        # near the peg the output drop is close to the input
        assert 9_900_000 <= balances[2] - new_y <= 10_000_001

    def test_same_index_rejected(self) -> None:
        assert calc_y_n([1_000, 1_000], 1, 1, 10, 100).reason is FailureReason.INVALID_INPUT

    def test_index_out_of_range(self) -> None:
        assert calc_y_n([1_000, 1_000], 0, 2, 10, 100).reason is FailureReason.INVALID_INPUT

    def test_zero_balance_fails(self) -> None:
        res = calc_y_n([1_000, 0, 1_000], 0, 2, 10, 100)
        assert not res.ok
        assert res.reason is FailureReason.ZERO_BALANCE
