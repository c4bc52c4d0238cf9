"""Program error taxonomy and SDK exception types.

`ErrorCode` mirrors the codes the on-chain program reports in its execution
log. This package never raises them from ledger execution itself; they exist
so callers can match `custom program error: 0x...` log lines, and so that
`MathResult.unwrap()` can report failures in the program's vocabulary.
"""

from __future__ import annotations

import re
from enum import IntEnum, unique


@unique
class ErrorCode(IntEnum):
    # System errors
    KEYS = 3
    SIGNATURE = 4
    DATA = 5
    IMMUTABLE = 6

    # Custom errors
    PAUSED = 6000
    INVALID_AMP = 6001
    MATH_OVERFLOW = 6002
    ZERO_AMOUNT = 6003
    SLIPPAGE_EXCEEDED = 6004
    INVALID_INVARIANT = 6005
    INSUFFICIENT_LIQUIDITY = 6006
    VAULT_MISMATCH = 6007
    EXPIRED = 6008
    ALREADY_INITIALIZED = 6009
    UNAUTHORIZED = 6010
    RAMP_CONSTRAINT = 6011
    LOCKED = 6012
    FARMING_ERROR = 6013
    INVALID_OWNER = 6014
    INVALID_DISCRIMINATOR = 6015
    CPI_FAILED = 6016
    FULL = 6017
    CIRCUIT_BREAKER = 6018
    ORACLE_ERROR = 6019
    RATE_LIMIT = 6020
    GOVERNANCE_ERROR = 6021
    ORDER_ERROR = 6022
    TICK_ERROR = 6023
    RANGE_ERROR = 6024
    FLASH_ERROR = 6025
    COOLDOWN = 6026
    MEV_PROTECTION = 6027
    STALE_DATA = 6028
    BIAS_ERROR = 6029
    DURATION_ERROR = 6030


_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.KEYS: "Wrong number of accounts",
    ErrorCode.SIGNATURE: "Missing required signature",
    ErrorCode.DATA: "Invalid instruction data",
    ErrorCode.IMMUTABLE: "Account not writable",
    ErrorCode.PAUSED: "Pool is paused",
    ErrorCode.INVALID_AMP: "Invalid amplification coefficient",
    ErrorCode.MATH_OVERFLOW: "Math overflow",
    ErrorCode.ZERO_AMOUNT: "Zero amount",
    ErrorCode.SLIPPAGE_EXCEEDED: "Slippage exceeded",
    ErrorCode.INVALID_INVARIANT: "Invalid invariant or PDA mismatch",
    ErrorCode.INSUFFICIENT_LIQUIDITY: "Insufficient liquidity",
    ErrorCode.VAULT_MISMATCH: "Vault mismatch",
    ErrorCode.EXPIRED: "Expired or ended",
    ErrorCode.ALREADY_INITIALIZED: "Already initialized",
    ErrorCode.UNAUTHORIZED: "Unauthorized",
    ErrorCode.RAMP_CONSTRAINT: "Ramp constraint violated",
    ErrorCode.LOCKED: "Tokens are locked",
    ErrorCode.FARMING_ERROR: "Farming error",
    ErrorCode.INVALID_OWNER: "Invalid account owner",
    ErrorCode.INVALID_DISCRIMINATOR: "Invalid account discriminator",
    ErrorCode.CPI_FAILED: "CPI call failed",
    ErrorCode.FULL: "Orderbook/registry is full",
    ErrorCode.CIRCUIT_BREAKER: "Circuit breaker triggered",
    ErrorCode.ORACLE_ERROR: "Oracle price validation failed",
    ErrorCode.RATE_LIMIT: "Rate limit exceeded",
    ErrorCode.GOVERNANCE_ERROR: "Governance error",
    ErrorCode.ORDER_ERROR: "Orderbook error",
    ErrorCode.TICK_ERROR: "Invalid tick",
    ErrorCode.RANGE_ERROR: "Invalid price range",
    ErrorCode.FLASH_ERROR: "Flash loan error",
    ErrorCode.COOLDOWN: "Cooldown period not elapsed",
    ErrorCode.MEV_PROTECTION: "MEV protection triggered",
    ErrorCode.STALE_DATA: "Stale data",
    ErrorCode.BIAS_ERROR: "ML bias error",
    ErrorCode.DURATION_ERROR: "Invalid duration",
}

_CUSTOM_ERROR_RE = re.compile(r"custom program error:\s*0x([0-9a-fA-F]+)")


def error_message(code: int) -> str:
    """Human-readable message for a program error code ("Unknown error" if unmapped)."""
    try:
        return _MESSAGES[ErrorCode(code)]
    except ValueError:
        return "Unknown error"


def error_from_code(code: int) -> ErrorCode | None:
    try:
        return ErrorCode(code)
    except ValueError:
        return None


def parse_program_error(log_line: str) -> ErrorCode | None:
    """
    Extract the program error from an execution log line.

    Recognizes the runtime's `custom program error: 0x1770` form. Returns None
    when the line carries no custom error or the code is outside the taxonomy.
    """
    if not isinstance(log_line, str):
        raise TypeError("log_line must be a string")
    m = _CUSTOM_ERROR_RE.search(log_line)
    if m is None:
        return None
    return error_from_code(int(m.group(1), 16))


class Aex402Error(Exception):
    """Base class for SDK errors raised on programmer misuse."""


class MathError(Aex402Error):
    """Raised by `MathResult.unwrap()` when the computation failed."""

    def __init__(self, code: ErrorCode, reason: str) -> None:
        self.code = code
        self.reason = reason
        super().__init__(f"{int(code)} {error_message(code)}: {reason}")


class LayoutError(Aex402Error, ValueError):
    """Raised when a snapshot or instruction argument set cannot be encoded."""
