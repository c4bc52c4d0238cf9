"""
AeX402 StableSwap SDK: invariant math plus the program's account and
instruction codecs.
"""

from .config import AccountKind, ProgramConfig, default_config, load_config
from .errors import Aex402Error, ErrorCode, LayoutError, MathError, error_message, parse_program_error

__version__ = "1.0.0"

__all__ = [
    "AccountKind",
    "ProgramConfig",
    "default_config",
    "load_config",
    "Aex402Error",
    "ErrorCode",
    "LayoutError",
    "MathError",
    "error_message",
    "parse_program_error",
]
