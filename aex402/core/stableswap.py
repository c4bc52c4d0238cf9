"""
StableSwap invariant and output solvers.

Algorithm Design:
- Type: Newton's method over fixed-point integers (truncating division)
- Iteration cap: NEWTON_ITERATIONS (255); converged when |x_k - x_{k-1}| <= 1
- Invariant: A*n^n*sum(x) + D = A*D*n^n + D^(n+1) / (n^n * prod(x))

Every step reproduces the program's integer semantics: each division
truncates, products are formed at 128-bit width, and iterates are narrowed to
64 bits. Where the program would silently wrap, these solvers report
`FailureReason.OVERFLOW` instead.
"""

from __future__ import annotations

import logging
from typing import Sequence

from ..constants import MAX_AMP, MAX_TOKENS, MIN_AMP, MIN_TOKENS, NEWTON_ITERATIONS, U64_MAX, U128_MAX
from .fixed_point import is_u64
from .result import FailureReason, MathResult, failure, success

logger = logging.getLogger(__name__)


def _fail(op: str, reason: FailureReason, **ctx: object) -> MathResult[int]:
    logger.debug("%s failed: %s %s", op, reason.value, ctx)
    return failure(reason)


def _converged(cur: int, prev: int) -> bool:
    return abs(cur - prev) <= 1


def _check_amp(op: str, amp: object) -> MathResult[int] | None:
    if not is_u64(amp):
        return _fail(op, FailureReason.INVALID_INPUT, amp=amp)
    if not (MIN_AMP <= amp <= MAX_AMP):  # type: ignore[operator]
        return _fail(op, FailureReason.INVALID_AMP, amp=amp)
    return None


def _check_balances(op: str, balances: Sequence[int]) -> MathResult[int] | None:
    n = len(balances)
    if not (MIN_TOKENS <= n <= MAX_TOKENS):
        return _fail(op, FailureReason.INVALID_INPUT, n_tokens=n)
    for b in balances:
        if not is_u64(b):
            return _fail(op, FailureReason.INVALID_INPUT, balance=b)
    return None


def calc_d(x: int, y: int, amp: int) -> MathResult[int]:
    """
    Invariant D of a 2-token pool.

    Returns a successful 0 for an empty pool. Fails with ZERO_BALANCE when
    exactly one side is empty, NO_CONVERGENCE when the iteration cap is hit.
    """
    bad = _check_amp("calc_d", amp)
    if bad is not None:
        return bad
    if not is_u64(x) or not is_u64(y):
        return _fail("calc_d", FailureReason.INVALID_INPUT, x=x, y=y)

    s = x + y
    if s == 0:
        return success(0)
    if s > U64_MAX:
        return _fail("calc_d", FailureReason.OVERFLOW, x=x, y=y)
    if x == 0 or y == 0:
        return _fail("calc_d", FailureReason.ZERO_BALANCE, x=x, y=y)

    d = s
    ann = amp * 4
    for _ in range(NEWTON_ITERATIONS):
        # d_p = D^3 / (4xy), in two truncating steps
        d_p = d * d // (2 * x)
        if d_p * d > U128_MAX:
            return _fail("calc_d", FailureReason.OVERFLOW, x=x, y=y, amp=amp)
        d_p = d_p * d // (2 * y)
        d_prev = d

        num = (ann * s + d_p * 2) * d
        denom = (ann - 1) * d + d_p * 3
        if num > U128_MAX or denom > U128_MAX:
            return _fail("calc_d", FailureReason.OVERFLOW, x=x, y=y, amp=amp)
        if denom == 0:
            return _fail("calc_d", FailureReason.ZERO_DENOMINATOR, x=x, y=y, amp=amp)

        d = num // denom
        if d > U64_MAX:
            return _fail("calc_d", FailureReason.OVERFLOW, x=x, y=y, amp=amp)
        if _converged(d, d_prev):
            return success(d)

    return _fail("calc_d", FailureReason.NO_CONVERGENCE, x=x, y=y, amp=amp)


def _solve_y(op: str, c: int, b: int, d: int) -> MathResult[int]:
    # y = (y^2 + c) / (2y + b - D), seeded with y = D
    y = d
    for _ in range(NEWTON_ITERATIONS):
        y_prev = y
        num = y * y + c
        denom = 2 * y + b - d
        if denom <= 0:
            return _fail(op, FailureReason.ZERO_DENOMINATOR, d=d, b=b)
        if num > U128_MAX or denom > U64_MAX:
            return _fail(op, FailureReason.OVERFLOW, d=d, b=b)
        y = num // denom
        if y > U64_MAX:
            return _fail(op, FailureReason.OVERFLOW, d=d, b=b)
        if _converged(y, y_prev):
            return success(y)
    return _fail(op, FailureReason.NO_CONVERGENCE, d=d, b=b)


def calc_y(x_new: int, d: int, amp: int) -> MathResult[int]:
    """
    New output-token balance given the new input balance `x_new` and invariant `d`.

    c = D^3 / (4 * x_new * Ann), b = x_new + D / Ann
    """
    bad = _check_amp("calc_y", amp)
    if bad is not None:
        return bad
    if not is_u64(x_new) or not is_u64(d):
        return _fail("calc_y", FailureReason.INVALID_INPUT, x_new=x_new, d=d)
    if x_new == 0:
        return _fail("calc_y", FailureReason.ZERO_BALANCE, x_new=x_new)

    ann = amp * 4
    c = d * d // (2 * x_new)
    if c * d > U128_MAX:
        return _fail("calc_y", FailureReason.OVERFLOW, x_new=x_new, d=d)
    c = c * d // (2 * ann)
    if c > U128_MAX:
        return _fail("calc_y", FailureReason.OVERFLOW, x_new=x_new, d=d)
    b = x_new + d // ann
    if b > U64_MAX:
        return _fail("calc_y", FailureReason.OVERFLOW, x_new=x_new, d=d)
    return _solve_y("calc_y", c, b, d)


def calc_d_n(balances: Sequence[int], amp: int) -> MathResult[int]:
    """Invariant D of an N-token pool (2 <= N <= 8)."""
    bad = _check_amp("calc_d_n", amp) or _check_balances("calc_d_n", balances)
    if bad is not None:
        return bad

    n = len(balances)
    s = sum(balances)
    if s == 0:
        return success(0)
    if s > U64_MAX:
        return _fail("calc_d_n", FailureReason.OVERFLOW, n_tokens=n)

    ann = amp * n**n
    if ann > U64_MAX:
        return _fail("calc_d_n", FailureReason.OVERFLOW, n_tokens=n, amp=amp)

    d = s
    for _ in range(NEWTON_ITERATIONS):
        d_p = d
        for b in balances:
            if b == 0:
                return _fail("calc_d_n", FailureReason.ZERO_BALANCE, n_tokens=n)
            if d_p * d > U128_MAX:
                return _fail("calc_d_n", FailureReason.OVERFLOW, n_tokens=n)
            d_p = d_p * d // (n * b)
            if d_p > U128_MAX:
                return _fail("calc_d_n", FailureReason.OVERFLOW, n_tokens=n)
        d_prev = d

        num = (ann * s + d_p * n) * d
        denom = (ann - 1) * d + d_p * (n + 1)
        if num > U128_MAX or denom > U128_MAX:
            return _fail("calc_d_n", FailureReason.OVERFLOW, n_tokens=n, amp=amp)
        if denom == 0:
            return _fail("calc_d_n", FailureReason.ZERO_DENOMINATOR, n_tokens=n, amp=amp)

        d = num // denom
        if d > U64_MAX:
            return _fail("calc_d_n", FailureReason.OVERFLOW, n_tokens=n, amp=amp)
        if _converged(d, d_prev):
            return success(d)

    return _fail("calc_d_n", FailureReason.NO_CONVERGENCE, n_tokens=n, amp=amp)


def calc_y_n(
    balances: Sequence[int],
    from_idx: int,
    to_idx: int,
    amount_in: int,
    amp: int,
) -> MathResult[int]:
    """
    New balance of token `to_idx` after depositing `amount_in` of `from_idx`.

    D is taken from the pre-swap balances; S' and c range over every index
    except `to_idx`, using the post-deposit balance at `from_idx`.
    For two tokens this agrees with `calc_y(balances[from] + amount_in, D, amp)`.
    """
    bad = _check_amp("calc_y_n", amp) or _check_balances("calc_y_n", balances)
    if bad is not None:
        return bad
    n = len(balances)
    for idx in (from_idx, to_idx):
        if isinstance(idx, bool) or not isinstance(idx, int) or not (0 <= idx < n):
            return _fail("calc_y_n", FailureReason.INVALID_INPUT, index=idx, n_tokens=n)
    if from_idx == to_idx:
        return _fail("calc_y_n", FailureReason.INVALID_INPUT, from_idx=from_idx, to_idx=to_idx)
    if not is_u64(amount_in):
        return _fail("calc_y_n", FailureReason.INVALID_INPUT, amount_in=amount_in)

    new_in = balances[from_idx] + amount_in
    if new_in > U64_MAX:
        return _fail("calc_y_n", FailureReason.OVERFLOW, amount_in=amount_in)

    dr = calc_d_n(balances, amp)
    if not dr.ok:
        return dr
    d = dr.value
    assert d is not None

    ann = amp * n**n
    s_prime = 0
    c = d
    for i, bal in enumerate(balances):
        if i == to_idx:
            continue
        x = new_in if i == from_idx else bal
        s_prime += x
        if x == 0:
            return _fail("calc_y_n", FailureReason.ZERO_BALANCE, index=i)
        if c * d > U128_MAX:
            return _fail("calc_y_n", FailureReason.OVERFLOW, n_tokens=n)
        c = c * d // (n * x)

    if c * d > U128_MAX:
        return _fail("calc_y_n", FailureReason.OVERFLOW, n_tokens=n)
    c = c * d // (ann * n)
    if c > U128_MAX:
        return _fail("calc_y_n", FailureReason.OVERFLOW, n_tokens=n)
    b = s_prime + d // ann
    if b > U64_MAX:
        return _fail("calc_y_n", FailureReason.OVERFLOW, n_tokens=n)
    return _solve_y("calc_y_n", c, b, d)
