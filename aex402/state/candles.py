"""
OHLCV candle and TWAP codecs.

Candle (12 bytes, delta-encoded against `open`):
    high   = open + high_d
    low    = open - low_d        (clamped to 0)
    close  = open + close_d      (close_d is signed)
    volume = volume_field * 1e9

TWAP result (packed u64):
    bits  0..31  price (scaled 1e6)
    bits 32..47  samples
    bits 48..63  confidence (0..10000 == 0..100%)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum, unique
from typing import Optional

from construct import ConstructError

from ..constants import PRICE_SCALE, U64_MAX, VOLUME_UNIT
from .layouts import CANDLE_LAYOUT, CANDLE_SIZE

logger = logging.getLogger(__name__)


@unique
class TwapWindow(IntEnum):
    HOUR_1 = 0
    HOUR_4 = 1
    HOUR_24 = 2
    DAY_7 = 3


@dataclass(frozen=True)
class CandleDecoded:
    open: int
    high: int
    low: int
    close: int
    volume: int

    def open_f64(self) -> float:
        return self.open / PRICE_SCALE

    def high_f64(self) -> float:
        return self.high / PRICE_SCALE

    def low_f64(self) -> float:
        return self.low / PRICE_SCALE

    def close_f64(self) -> float:
        return self.close / PRICE_SCALE


@dataclass(frozen=True)
class Candle:
    open: int = 0
    high_d: int = 0
    low_d: int = 0
    close_d: int = 0
    volume: int = 0

    @property
    def high(self) -> int:
        return self.open + self.high_d

    @property
    def low(self) -> int:
        return self.open - self.low_d if self.open > self.low_d else 0

    @property
    def close(self) -> int:
        return self.open + self.close_d

    @property
    def actual_volume(self) -> int:
        return self.volume * VOLUME_UNIT

    def decode(self) -> CandleDecoded:
        return CandleDecoded(
            open=self.open,
            high=self.high,
            low=self.low,
            close=self.close,
            volume=self.actual_volume,
        )

    def to_bytes(self) -> bytes:
        return CANDLE_LAYOUT.build(
            dict(open=self.open, high_d=self.high_d, low_d=self.low_d, close_d=self.close_d, volume=self.volume)
        )


def parse_candle(data: bytes) -> Optional[Candle]:
    """Decode one 12-byte candle record; None when the buffer is too short."""
    if len(data) < CANDLE_SIZE:
        return None
    try:
        c = CANDLE_LAYOUT.parse(bytes(data[:CANDLE_SIZE]))
    except ConstructError as exc:  # pragma: no cover - fixed-size layout
        logger.debug("candle decode failed: %s", exc)
        return None
    return Candle(open=c.open, high_d=c.high_d, low_d=c.low_d, close_d=c.close_d, volume=c.volume)


def decode_candle(candle: Candle) -> CandleDecoded:
    return candle.decode()


@dataclass(frozen=True)
class TwapResult:
    price: int
    samples: int
    confidence: int

    def price_f64(self) -> float:
        return self.price / PRICE_SCALE

    def confidence_pct(self) -> float:
        return self.confidence / 100.0

    @staticmethod
    def decode(encoded: int) -> "TwapResult":
        if isinstance(encoded, bool) or not isinstance(encoded, int):
            raise TypeError("encoded TWAP must be an int")
        if encoded < 0 or encoded > U64_MAX:
            raise ValueError(f"encoded TWAP out of u64 range: {encoded}")
        return TwapResult(
            price=encoded & 0xFFFFFFFF,
            samples=(encoded >> 32) & 0xFFFF,
            confidence=(encoded >> 48) & 0xFFFF,
        )

    def encode(self) -> int:
        if not (0 <= self.price <= 0xFFFFFFFF):
            raise ValueError(f"price out of u32 range: {self.price}")
        if not (0 <= self.samples <= 0xFFFF) or not (0 <= self.confidence <= 0xFFFF):
            raise ValueError("samples and confidence must fit in u16")
        return self.price | (self.samples << 32) | (self.confidence << 48)
