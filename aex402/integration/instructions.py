"""
Instruction data codec.

Wire format: 8-byte little-endian discriminator followed by the argument
fields in declared order (fixed-width little-endian integers). N-token
argument arrays carry no length prefix; their length is the pool's token
count, which the caller supplies on decode. Multi-hop direction lists are
prefixed with a u8 count.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Type

from construct import (
    Array,
    Bytes,
    ConstructError,
    Flag,
    Int8ul,
    Int16sl,
    Int16ul,
    Int32ul,
    Int64sl,
    Int64ul,
    PrefixedArray,
    Struct,
    this,
)

from ..config import ProgramConfig, resolve_config
from ..constants import MAX_TOKENS, MIN_TOKENS
from ..core.governance import ProposalType
from ..errors import LayoutError
from ..state.accounts import MLAction, OrderType
from ..state.candles import TwapWindow

logger = logging.getLogger(__name__)

DESCRIPTION_LEN = 64

_NO_ARGS = Struct()

_SWAP_PAIR = Struct("amount_in" / Int64ul, "min_out" / Int64ul)

SCHEMAS: Dict[str, Struct] = {
    # Pool creation
    "createpool": Struct("amp" / Int64ul, "bump" / Int8ul),
    "createpn": Struct("amp" / Int64ul, "n_tokens" / Int8ul, "bump" / Int8ul),
    "initt0v": _NO_ARGS,
    "initt1v": _NO_ARGS,
    "initlpm": _NO_ARGS,
    # Swaps
    "swap": Struct(
        "from_idx" / Int8ul,
        "to_idx" / Int8ul,
        "amount_in" / Int64ul,
        "min_out" / Int64ul,
        "deadline" / Int64sl,
    ),
    "swapt0t1": _SWAP_PAIR,
    "swapt1t0": _SWAP_PAIR,
    "swapn": Struct("from_idx" / Int8ul, "to_idx" / Int8ul, "amount_in" / Int64ul, "min_out" / Int64ul),
    "migt0t1": _SWAP_PAIR,
    "migt1t0": _SWAP_PAIR,
    # Liquidity
    "addliq": Struct("amount0" / Int64ul, "amount1" / Int64ul, "min_lp" / Int64ul),
    "addliq1": Struct("amount_in" / Int64ul, "min_lp" / Int64ul),
    "addliqn": Struct("amounts" / Array(this._params.n_tokens, Int64ul), "min_lp" / Int64ul),
    "remliq": Struct("lp_amount" / Int64ul, "min0" / Int64ul, "min1" / Int64ul),
    "remliqn": Struct("lp_amount" / Int64ul, "mins" / Array(this._params.n_tokens, Int64ul)),
    # Admin
    "setpause": Struct("paused" / Flag),
    "updfee": Struct("fee_bps" / Int64ul),
    "wdrawfee": _NO_ARGS,
    "commitamp": Struct("target_amp" / Int64ul),
    "rampamp": Struct("target_amp" / Int64ul, "duration" / Int64sl),
    "stopramp": _NO_ARGS,
    "initauth": _NO_ARGS,
    "complauth": _NO_ARGS,
    "cancelauth": _NO_ARGS,
    # Farming
    "createfarm": Struct("reward_rate" / Int64ul, "start_time" / Int64sl, "end_time" / Int64sl),
    "stakelp": Struct("amount" / Int64ul),
    "unstakelp": Struct("amount" / Int64ul),
    "claimfarm": _NO_ARGS,
    "locklp": Struct("amount" / Int64ul, "duration" / Int64sl),
    "claimulp": _NO_ARGS,
    # Lottery
    "createlot": Struct("ticket_price" / Int64ul, "end_time" / Int64sl),
    "enterlot": Struct("ticket_count" / Int64ul),
    "drawlot": Struct("random_seed" / Int64ul),
    "claimlot": _NO_ARGS,
    # Registry
    "initreg": _NO_ARGS,
    "regpool": _NO_ARGS,
    "unregpool": _NO_ARGS,
    "initrega": _NO_ARGS,
    "complrega": _NO_ARGS,
    "cancelrega": _NO_ARGS,
    # Oracle
    "gettwap": Struct("window" / Int8ul),
    # Circuit breaker / rate limiting
    "setcb": Struct(
        "price_dev_bps" / Int64ul,
        "volume_mult" / Int64ul,
        "cooldown_slots" / Int64ul,
        "auto_resume_slots" / Int64ul,
    ),
    "resetcb": _NO_ARGS,
    "setrl": Struct("max_volume" / Int64ul, "max_swaps" / Int32ul),
    # Governance
    "govprop": Struct("prop_type" / Int8ul, "value" / Int64ul, "description" / Bytes(DESCRIPTION_LEN)),
    "govvote": Struct("vote_for" / Flag),
    "govexec": _NO_ARGS,
    "govcncl": _NO_ARGS,
    # Orderbook
    "initbook": _NO_ARGS,
    "placeord": Struct("order_type" / Int8ul, "price" / Int64ul, "amount" / Int64ul, "expiry" / Int64sl),
    "cancelord": Struct("order_index" / Int8ul),
    "fillord": Struct("order_index" / Int8ul),
    # Concentrated liquidity
    "initclpl": _NO_ARGS,
    "clmint": Struct("tick_lower" / Int16sl, "tick_upper" / Int16sl, "amount0" / Int64ul, "amount1" / Int64ul),
    "clburn": Struct("liquidity" / Int64ul),
    "clcollect": _NO_ARGS,
    "clswap": Struct("amount_in" / Int64ul, "min_out" / Int64ul, "zero_for_one" / Flag),
    # Flash loans
    "flashloan": Struct("amount0" / Int64ul, "amount1" / Int64ul),
    "flashrepy": _NO_ARGS,
    # Multi-hop
    "multihop": Struct(
        "amount_in" / Int64ul,
        "min_out" / Int64ul,
        "deadline" / Int64sl,
        "directions" / PrefixedArray(Int8ul, Int8ul),
    ),
    # ML brain
    "initml": Struct(
        "is_stable" / Flag,
        "min_fee" / Int16ul,
        "max_fee" / Int16ul,
        "min_amp" / Int16ul,
        "max_amp" / Int16ul,
        "fee_step" / Int16ul,
        "amp_step" / Int16ul,
    ),
    "cfgml": Struct("enabled" / Flag, "auto_apply" / Flag),
    "trainml": _NO_ARGS,
    "applyml": Struct("action" / Int8ul),
    "logml": _NO_ARGS,
    # Transfer hook
    "th_exec": _NO_ARGS,
    "th_init": _NO_ARGS,
}

# Instructions whose argument arrays are sized by the pool's token count.
TOKEN_ARRAY_ARGS: Dict[str, str] = {"addliqn": "amounts", "remliqn": "mins"}

_ENUM_ARGS: Dict[str, Dict[str, Type[Enum]]] = {
    "gettwap": {"window": TwapWindow},
    "govprop": {"prop_type": ProposalType},
    "placeord": {"order_type": OrderType},
    "applyml": {"action": MLAction},
}


@dataclass(frozen=True)
class DecodedInstruction:
    name: str
    discriminator: int
    args: Dict[str, Any] = field(default_factory=dict)


def _pad_description(value: Any) -> bytes:
    raw = value.encode("utf-8") if isinstance(value, str) else bytes(value)
    return raw[:DESCRIPTION_LEN].ljust(DESCRIPTION_LEN, b"\x00")


def _arg_names(schema: Struct) -> list:
    return [sc.name for sc in schema.subcons if sc.name]


def encode_instruction(
    name: str,
    args: Optional[Mapping[str, Any]] = None,
    config: Optional[ProgramConfig] = None,
) -> bytes:
    """
    Encode instruction data for `name`.

    Raises LayoutError for an unknown instruction, missing or unexpected
    arguments, or values that do not fit their field width.
    """
    schema = SCHEMAS.get(name)
    if schema is None:
        raise LayoutError(f"unknown instruction: {name}")
    cfg = resolve_config(config)
    try:
        disc = cfg.instruction_tag(name)
    except KeyError as exc:
        raise LayoutError(str(exc)) from None

    values: Dict[str, Any] = dict(args or {})
    expected = _arg_names(schema)
    missing = [k for k in expected if k not in values]
    extra = [k for k in values if k not in expected]
    if missing or extra:
        raise LayoutError(f"{name}: missing={missing} unexpected={extra}")

    for key in _ENUM_ARGS.get(name, {}):
        if isinstance(values[key], Enum):
            values[key] = int(values[key].value)
    if name == "govprop":
        values["description"] = _pad_description(values["description"])

    params: Dict[str, Any] = {}
    array_arg = TOKEN_ARRAY_ARGS.get(name)
    if array_arg is not None:
        n = len(values[array_arg])
        if not (MIN_TOKENS <= n <= MAX_TOKENS):
            raise LayoutError(f"{name}: {array_arg} must hold {MIN_TOKENS}..{MAX_TOKENS} entries, got {n}")
        values[array_arg] = list(values[array_arg])
        params["n_tokens"] = n

    try:
        body = schema.build(values, **params)
    except (ConstructError, TypeError, ValueError) as exc:
        raise LayoutError(f"{name}: {exc}") from exc
    return disc.to_bytes(8, "little") + body


def decode_instruction(
    data: bytes,
    config: Optional[ProgramConfig] = None,
    n_tokens: Optional[int] = None,
) -> Optional[DecodedInstruction]:
    """
    Decode instruction data; None for an unknown discriminator or malformed
    arguments (short, trailing bytes, out-of-range enum).

    `n_tokens` is required for N-token liquidity instructions.
    """
    if len(data) < 8:
        return None
    cfg = resolve_config(config)
    disc = int.from_bytes(bytes(data[:8]), "little")
    name = cfg.instruction_for_tag(disc)
    if name is None or name not in SCHEMAS:
        logger.debug("unknown instruction discriminator %#018x", disc)
        return None
    schema = SCHEMAS[name]

    params: Dict[str, Any] = {}
    if name in TOKEN_ARRAY_ARGS:
        if n_tokens is None:
            raise ValueError(f"{name}: n_tokens is required to decode token arrays")
        if not (MIN_TOKENS <= n_tokens <= MAX_TOKENS):
            raise ValueError(f"n_tokens must be in [{MIN_TOKENS}, {MAX_TOKENS}]: {n_tokens}")
        params["n_tokens"] = n_tokens

    body = bytes(data[8:])
    try:
        parsed = schema.parse(body, **params)
        consumed = len(schema.build(parsed, **params))
    except ConstructError as exc:
        logger.debug("malformed %s data: %s", name, exc)
        return None
    if consumed != len(body):
        logger.debug("malformed %s data: %d trailing bytes", name, len(body) - consumed)
        return None

    args: Dict[str, Any] = {}
    for key in _arg_names(schema):
        value = parsed[key]
        if isinstance(value, list):
            value = list(value)
        args[key] = value
    for key, enum_cls in _ENUM_ARGS.get(name, {}).items():
        try:
            args[key] = enum_cls(args[key])
        except ValueError:
            logger.debug("malformed %s data: %s=%r", name, key, args[key])
            return None
    if name == "govprop":
        args["description"] = args["description"].rstrip(b"\x00").decode("utf-8", errors="replace")
    return DecodedInstruction(name=name, discriminator=disc, args=args)
