"""Named constants: eliminates magic strings across the codebase."""

from __future__ import annotations

FUNC_NAME_PREFIX = "@"
ENTRY_BLOCK_NAME = "%entry"
VALUE_NAME_PREFIX = "%"

TEXT_DIRECTIVE = ".text"
GLOBL_DIRECTIVE = ".globl"

DEFAULT_ENTRY_SYMBOL = "main"

ZERO_REGISTER = "x0"
RETURN_REGISTER = "a0"

ALLOCATABLE_REGISTERS: tuple[str, ...] = (
    "t0",
    "t1",
    "t2",
    "t3",
    "t4",
    "t5",
    "t6",
    "a1",
    "a2",
    "a3",
    "a4",
    "a5",
    "a6",
    "a7",
)

IDENTIFIER_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1
