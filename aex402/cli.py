from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Sequence

from .config import ProgramConfig, default_config, load_config
from .core.swap import simulate_swap
from .integration.instructions import decode_instruction
from .state.accounts import TokenArray, account_type_name, detect_account_type, parse_account
from .state.candles import TwapResult

logger = logging.getLogger(__name__)


def _jsonable(obj: Any) -> Any:
    if isinstance(obj, TokenArray):
        return [_jsonable(v) for v in obj]
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _jsonable(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, Enum):
        return obj.name
    if isinstance(obj, (bytes, bytearray)):
        return bytes(obj).hex()
    if isinstance(obj, (list, tuple)):
        return [_jsonable(v) for v in obj]
    if isinstance(obj, dict):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    return obj


def _read_input(path: str, *, hex_input: bool) -> bytes:
    raw = sys.stdin.buffer.read() if path == "-" else Path(path).read_bytes()
    if hex_input:
        text = raw.decode("ascii").strip()
        if text.startswith("0x"):
            text = text[2:]
        return bytes.fromhex(text)
    return raw


def _int_arg(text: str) -> int:
    return int(text, 0)


def _emit(payload: Any) -> None:
    print(json.dumps(_jsonable(payload), indent=2, sort_keys=True))


def _cmd_decode(args: argparse.Namespace, cfg: ProgramConfig) -> int:
    try:
        data = _read_input(args.path, hex_input=args.hex)
    except ValueError as exc:
        # UnicodeDecodeError is a ValueError too
        logger.error("bad hex input: %s", exc)
        return 2
    kind = detect_account_type(data, cfg)
    snapshot = parse_account(data, cfg)
    if snapshot is None:
        logger.warning("could not decode account (%d bytes, detected %s)", len(data), account_type_name(kind))
        _emit({"kind": account_type_name(kind), "ok": False})
        return 1
    _emit({"kind": account_type_name(kind), "ok": True, "account": snapshot})
    return 0


def _cmd_twap(args: argparse.Namespace, cfg: ProgramConfig) -> int:
    res = TwapResult.decode(args.value)
    _emit(
        {
            "price": res.price,
            "price_f64": res.price_f64(),
            "samples": res.samples,
            "confidence": res.confidence,
            "confidence_pct": res.confidence_pct(),
        }
    )
    return 0


def _cmd_swap(args: argparse.Namespace, cfg: ProgramConfig) -> int:
    res = simulate_swap(args.bal_in, args.bal_out, args.amount_in, args.amp, args.fee_bps)
    if not res.ok:
        _emit({"ok": False, "reason": res.reason})
        return 1
    _emit({"ok": True, "amount_out": res.value})
    return 0


def _cmd_ix(args: argparse.Namespace, cfg: ProgramConfig) -> int:
    text = args.data[2:] if args.data.startswith("0x") else args.data
    try:
        decoded = decode_instruction(bytes.fromhex(text), cfg, n_tokens=args.n_tokens)
    except ValueError as exc:
        logger.error("%s", exc)
        return 2
    if decoded is None:
        _emit({"ok": False})
        return 1
    _emit({"ok": True, "name": decoded.name, "discriminator": f"{decoded.discriminator:#018x}", "args": decoded.args})
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="aex402", description="AeX402 account decoder and StableSwap calculator")
    ap.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    ap.add_argument("--config", type=str, default="", help="program profile YAML (default: packaged profile)")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("decode", help="decode an account dump")
    p.add_argument("path", help="file with raw account bytes, or - for stdin")
    p.add_argument("--hex", action="store_true", help="input is hex text")
    p.set_defaults(func=_cmd_decode)

    p = sub.add_parser("twap", help="decode a packed TWAP result")
    p.add_argument("value", type=_int_arg)
    p.set_defaults(func=_cmd_twap)

    p = sub.add_parser("swap", help="simulate a 2-token swap")
    p.add_argument("--bal-in", type=_int_arg, required=True)
    p.add_argument("--bal-out", type=_int_arg, required=True)
    p.add_argument("--amount-in", type=_int_arg, required=True)
    p.add_argument("--amp", type=_int_arg, required=True)
    p.add_argument("--fee-bps", type=_int_arg, default=30)
    p.set_defaults(func=_cmd_swap)

    p = sub.add_parser("ix", help="decode instruction data (hex)")
    p.add_argument("data")
    p.add_argument("--n-tokens", type=int, default=None)
    p.set_defaults(func=_cmd_ix)
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    cfg = load_config(args.config) if args.config else default_config()
    return int(args.func(args, cfg))


if __name__ == "__main__":
    raise SystemExit(main())
