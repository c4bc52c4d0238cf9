"""Program error extraction from transaction execution logs."""

from __future__ import annotations

from typing import Iterable, List, Optional

from ..errors import ErrorCode, parse_program_error


def program_errors(log_lines: Iterable[str]) -> List[ErrorCode]:
    """Every recognized program error in `log_lines`, in log order."""
    out: List[ErrorCode] = []
    for line in log_lines:
        code = parse_program_error(line)
        if code is not None:
            out.append(code)
    return out


def first_program_error(log_lines: Iterable[str]) -> Optional[ErrorCode]:
    for line in log_lines:
        code = parse_program_error(line)
        if code is not None:
            return code
    return None
