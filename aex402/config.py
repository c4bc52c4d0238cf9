"""
Program profile: program identifier plus account and instruction discriminators.

The profile ships as `aex402/data/program.yaml`. Codec entry points take a
`ProgramConfig` explicitly; when omitted they fall back to `default_config()`,
which honours the `AEX402_PROGRAM_CONFIG` environment variable (path to an
alternative YAML profile, e.g. a fork deployed under another program id).
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum, unique
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

import yaml

from .constants import U64_MAX

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "AEX402_PROGRAM_CONFIG"


@unique
class AccountKind(Enum):
    POOL = "pool"
    NPOOL = "npool"
    FARM = "farm"
    USER_FARM = "user_farm"
    LOTTERY = "lottery"
    LOTTERY_ENTRY = "lottery_entry"
    REGISTRY = "registry"
    ML_BRAIN = "ml_brain"
    CL_POOL = "cl_pool"
    CL_POSITION = "cl_position"
    ORDERBOOK = "orderbook"
    GOV_PROPOSAL = "gov_proposal"
    GOV_VOTE = "gov_vote"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class ProgramConfig:
    program_id: bytes
    account_discriminators: Mapping[AccountKind, int] = field(default_factory=dict)
    instruction_discriminators: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.program_id, (bytes, bytearray)) or len(self.program_id) != 32:
            raise ValueError("program_id must be 32 bytes")
        object.__setattr__(self, "program_id", bytes(self.program_id))
        if AccountKind.UNKNOWN in self.account_discriminators:
            raise ValueError("UNKNOWN has no discriminator")
        for table in (self.account_discriminators, self.instruction_discriminators):
            for k, v in table.items():
                _require_u64(v, f"discriminator {k}")
        tags = list(self.account_discriminators.values())
        if len(set(tags)) != len(tags):
            raise ValueError("account discriminators must be distinct")
        ix = list(self.instruction_discriminators.values())
        if len(set(ix)) != len(ix):
            raise ValueError("instruction discriminators must be distinct")
        object.__setattr__(self, "account_discriminators", MappingProxyType(dict(self.account_discriminators)))
        object.__setattr__(self, "instruction_discriminators", MappingProxyType(dict(self.instruction_discriminators)))

    def account_tag(self, kind: AccountKind) -> int:
        try:
            return self.account_discriminators[kind]
        except KeyError:
            raise KeyError(f"no discriminator configured for {kind.value}") from None

    def kind_for_tag(self, tag: int) -> AccountKind:
        for kind, value in self.account_discriminators.items():
            if value == tag:
                return kind
        return AccountKind.UNKNOWN

    def instruction_tag(self, name: str) -> int:
        try:
            return self.instruction_discriminators[name]
        except KeyError:
            raise KeyError(f"unknown instruction: {name}") from None

    def instruction_for_tag(self, tag: int) -> Optional[str]:
        for name, value in self.instruction_discriminators.items():
            if value == tag:
                return name
        return None


def _require_u64(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int")
    if value < 0 or value > U64_MAX:
        raise ValueError(f"{name} out of u64 range")
    return value


def _parse_disc(raw: Any, name: str) -> int:
    if isinstance(raw, str):
        s = raw.strip().lower()
        if s.startswith("0x"):
            s = s[2:]
        if not s or len(s) > 16:
            raise ValueError(f"{name}: invalid discriminator {raw!r}")
        try:
            return int(s, 16)
        except ValueError:
            raise ValueError(f"{name}: invalid discriminator {raw!r}") from None
    if isinstance(raw, int) and not isinstance(raw, bool):
        return _require_u64(raw, name)
    raise ValueError(f"{name}: discriminator must be a hex string or int")


def config_from_mapping(doc: Mapping[str, Any]) -> ProgramConfig:
    if not isinstance(doc, Mapping):
        raise ValueError("program profile must be a mapping")

    pid_hex = doc.get("program_id_bytes")
    if not isinstance(pid_hex, str):
        raise ValueError("program_id_bytes must be a hex string")
    try:
        program_id = bytes.fromhex(pid_hex)
    except ValueError:
        raise ValueError("program_id_bytes is not valid hex") from None

    accounts_raw = doc.get("accounts") or {}
    if not isinstance(accounts_raw, Mapping):
        raise ValueError("accounts must be a mapping")
    accounts: dict[AccountKind, int] = {}
    for key, raw in accounts_raw.items():
        try:
            kind = AccountKind(str(key))
        except ValueError:
            raise ValueError(f"unknown account kind: {key!r}") from None
        accounts[kind] = _parse_disc(raw, f"accounts.{key}")

    instructions_raw = doc.get("instructions") or {}
    if not isinstance(instructions_raw, Mapping):
        raise ValueError("instructions must be a mapping")
    instructions = {str(k): _parse_disc(v, f"instructions.{k}") for k, v in instructions_raw.items()}

    return ProgramConfig(
        program_id=program_id,
        account_discriminators=accounts,
        instruction_discriminators=instructions,
    )


def load_config(path: Path | str) -> ProgramConfig:
    """Load a program profile from a YAML document."""
    p = Path(path)
    doc = yaml.safe_load(p.read_text(encoding="utf-8"))
    if not isinstance(doc, dict):
        raise ValueError(f"{p}: expected a YAML mapping")
    cfg = config_from_mapping(doc)
    logger.debug(
        "loaded program profile %s (%d account kinds, %d instructions)",
        p,
        len(cfg.account_discriminators),
        len(cfg.instruction_discriminators),
    )
    return cfg


def default_config_path() -> Path:
    raw = os.environ.get(CONFIG_ENV_VAR)
    if raw is not None and raw.strip():
        return Path(raw.strip())
    # aex402/config.py -> aex402/data/program.yaml
    return Path(__file__).resolve().parent / "data" / "program.yaml"


@lru_cache(maxsize=1)
def default_config() -> ProgramConfig:
    return load_config(default_config_path())


def resolve_config(config: Optional[ProgramConfig]) -> ProgramConfig:
    return default_config() if config is None else config
