from __future__ import annotations

import pytest

from aex402.constants import U64_MAX, U128_MAX
from aex402.core.fixed_point import div_wide, isqrt, isqrt_wide, mul_wide


class TestIsqrt:
    def test_small_values(self) -> None:
        assert isqrt(0) == 0
        assert isqrt(1) == 1
        assert isqrt(2) == 1
        assert isqrt(3) == 1
        assert isqrt(4) == 2

    def test_floor_between_squares(self) -> None:
        assert isqrt(15) == 3
        assert isqrt(16) == 4
        assert isqrt(17) == 4

    def test_u64_max(self) -> None:
        assert isqrt(U64_MAX) == (1 << 32) - 1

    def test_wide_max(self) -> None:
        assert isqrt_wide(U128_MAX) == U64_MAX

    def test_wide_exact_square(self) -> None:
        n = (10**15 + 7) ** 2
        assert isqrt_wide(n) == 10**15 + 7
        assert isqrt_wide(n - 1) == 10**15 + 6

    def test_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            isqrt(U64_MAX + 1)
        with pytest.raises(ValueError):
            isqrt_wide(-1)
        with pytest.raises(TypeError):
            isqrt(True)


class TestWideArithmetic:
    def test_mul_wide_full_product(self) -> None:
        assert mul_wide(U64_MAX, U64_MAX) == U64_MAX * U64_MAX

    def test_div_wide_zero_divisor_is_zero(self) -> None:
        assert div_wide(12345, 0) == 0

    def test_div_wide_truncates(self) -> None:
        assert div_wide(7, 2) == 3

    def test_div_wide_narrows_to_u64(self) -> None:
        assert div_wide(U128_MAX, 1) == U64_MAX
        assert div_wide(1 << 64, 1) == 0

    def test_mul_then_div_round_trip(self) -> None:
        assert div_wide(mul_wide(10**18, 3_000), 3_000) == 10**18
