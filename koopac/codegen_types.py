"""Code generation data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass

from . import constants


@dataclass(frozen=True)
class CodegenConfig:
    """Groups assembly generation configuration."""

    entry_symbol: str = constants.DEFAULT_ENTRY_SYMBOL
    return_register: str = constants.RETURN_REGISTER
    zero_register: str = constants.ZERO_REGISTER
    allocatable_registers: tuple[str, ...] = constants.ALLOCATABLE_REGISTERS
