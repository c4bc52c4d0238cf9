from __future__ import annotations

import pytest

from aex402.config import AccountKind, ProgramConfig, default_config


@pytest.fixture
def cfg() -> ProgramConfig:
    return default_config()


@pytest.fixture
def tagged(cfg: ProgramConfig):
    """Zeroed buffer of `size` bytes carrying the discriminator of `kind`."""

    def make(kind: AccountKind, size: int) -> bytearray:
        buf = bytearray(size)
        buf[0:8] = cfg.account_tag(kind).to_bytes(8, "little")
        return buf

    return make
