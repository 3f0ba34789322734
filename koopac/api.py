"""Composable API functions for the koopac pipelines.

Each function corresponds to a CLI mode (--koopa, --riscv) but is callable
programmatically without argparse.
"""

from __future__ import annotations

import logging
from functools import wraps
from typing import Callable, TypeVar

from .ast import CompUnit
from .codegen import generate_asm
from .codegen_types import CodegenConfig
from .errors import NestingTooDeepError
from .ir import Program
from .ir_builder import build_program
from .ir_stats import count_instructions
from .ir_text import program_to_text

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _bounded_recursion(fn: Callable[..., T]) -> Callable[..., T]:
    """Report runaway recursion on deeply nested expressions as a compile error."""

    @wraps(fn)
    def wrapper(*args, **kwargs) -> T:
        try:
            return fn(*args, **kwargs)
        except RecursionError as exc:
            raise NestingTooDeepError(
                "Expression nesting exceeds the interpreter recursion limit"
            ) from exc

    return wrapper


def load_comp_unit(json_text: str) -> CompUnit:
    """Validate a JSON document into an AST.

    Raises:
        pydantic.ValidationError: If the document is not a well-formed tree.
    """
    return CompUnit.model_validate_json(json_text)


@_bounded_recursion
def build_ir(comp_unit: CompUnit) -> Program:
    """Lower an AST to an IR program.

    Args:
        comp_unit: The root of the parsed AST.

    Returns:
        A Program with one function per function definition.
    """
    logger.info("Lowering function %s", comp_unit.func_def.ident)
    return build_program(comp_unit)


def dump_ir(comp_unit: CompUnit) -> str:
    """Lower an AST and return its Koopa IR text."""
    return program_to_text(build_ir(comp_unit))


@_bounded_recursion
def emit_asm(program: Program, config: CodegenConfig = CodegenConfig()) -> str:
    """Generate assembly text for an already-built program."""
    return generate_asm(program, config)


def compile_unit(comp_unit: CompUnit, config: CodegenConfig = CodegenConfig()) -> str:
    """Lower an AST all the way to assembly text.

    Either the whole text is returned or a ``CompileError`` is raised; no
    partial output is ever produced.

    Args:
        comp_unit: The root of the parsed AST.
        config: Code generation settings.

    Returns:
        The assembly text, newline-joined, ending with a blank line.
    """
    return emit_asm(build_ir(comp_unit), config)


def ir_stats(comp_unit: CompUnit) -> dict[str, int]:
    """Lower an AST and return instruction mnemonic frequency counts."""
    return count_instructions(build_ir(comp_unit))
