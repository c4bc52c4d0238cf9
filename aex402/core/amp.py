"""Amplification coefficient: ramp interpolation and admin-change guards."""

from __future__ import annotations

from ..constants import COMMIT_DELAY, MAX_AMP, MIN_AMP, RAMP_MIN_DURATION


def _require_int(name: str, value: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    return value


def get_current_amp(amp: int, target_amp: int, ramp_start: int, ramp_end: int, now: int) -> int:
    """
    Effective amp at `now` during a linear ramp from `amp` to `target_amp`.

    - now >= ramp_end, or an empty window: target_amp
    - now <= ramp_start: amp
    - otherwise: amp +/- |target_amp - amp| * elapsed / duration (truncating)
    """
    for name, v in (("amp", amp), ("target_amp", target_amp), ("ramp_start", ramp_start), ("ramp_end", ramp_end), ("now", now)):
        _require_int(name, v)
    if amp < 0 or target_amp < 0:
        raise ValueError("amp values must be non-negative")

    if now >= ramp_end or ramp_end == ramp_start:
        return target_amp
    if now <= ramp_start:
        return amp

    elapsed = now - ramp_start
    duration = ramp_end - ramp_start
    if target_amp > amp:
        return amp + (target_amp - amp) * elapsed // duration
    return amp - (amp - target_amp) * elapsed // duration


def check_amp(amp: int) -> bool:
    return MIN_AMP <= amp <= MAX_AMP


def check_ramp(current_amp: int, target_amp: int, duration: int) -> bool:
    """True when a ramp to `target_amp` over `duration` seconds would be accepted."""
    if not check_amp(current_amp) or not check_amp(target_amp):
        return False
    return duration >= RAMP_MIN_DURATION


def commit_delay_elapsed(amp_time: int, now: int) -> bool:
    """True once the commit timelock on a pending amp change has passed."""
    _require_int("amp_time", amp_time)
    _require_int("now", now)
    if amp_time == 0:
        return False
    return now >= amp_time + COMMIT_DELAY
