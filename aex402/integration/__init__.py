"""
Boundary helpers: instruction data codec and execution-log error extraction
"""

from .instructions import SCHEMAS, DecodedInstruction, decode_instruction, encode_instruction
from .logs import first_program_error, program_errors

__all__ = [
    "SCHEMAS",
    "DecodedInstruction",
    "decode_instruction",
    "encode_instruction",
    "first_program_error",
    "program_errors",
]
