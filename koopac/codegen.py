"""Assembly generation: Koopa-style IR → RISC-V text."""

from __future__ import annotations

import logging
import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Callable

from . import constants
from .codegen_types import CodegenConfig
from .errors import MalformedInputError, UnsupportedConstructError
from .ir import (
    Binary,
    BinaryOp,
    DataFlowGraph,
    FunctionData,
    Integer,
    Program,
    Return,
    Value,
)
from .registers import RegisterAllocator, zero_register_for

logger = logging.getLogger(__name__)


@dataclass
class _FunctionContext:
    dfg: DataFlowGraph
    regs: RegisterAllocator
    asm: list[str] = field(default_factory=list)
    uses: Counter[Value] = field(default_factory=Counter)

    def consume(self, value: Value) -> bool:
        """Record one use of *value*; True if it was the last one."""
        self.uses[value] -= 1
        return self.uses[value] <= 0


class AsmGenerator:
    """Walks functions and blocks in layout order and emits one line per instruction.

    Operands are generated on demand: an instruction first resolves the
    register of each operand, generating the operand itself if it has no
    register yet.  A value is therefore emitted at most once.
    """

    def __init__(self, config: CodegenConfig = CodegenConfig()):
        self._config = config
        self._VALUE_DISPATCH: dict[type, Callable[..., str | None]] = {
            Integer: self._generate_integer,
            Binary: self._generate_binary,
            Return: self._generate_return,
        }
        self._BINARY_DISPATCH: dict[BinaryOp, Callable[[str, str, str], list[str]]] = {
            BinaryOp.EQ: _emit_eq,
            BinaryOp.SUB: _emit_sub,
        }

    # ── entry point ──────────────────────────────────────────────

    def generate(self, program: Program) -> list[str]:
        asm = [
            constants.TEXT_DIRECTIVE,
            f"{constants.GLOBL_DIRECTIVE} {self._config.entry_symbol}",
        ]
        for func in program.func_layout():
            asm.extend(self._generate_function(program.func(func)))
        return asm

    # ── functions ────────────────────────────────────────────────

    def _generate_function(self, func_data: FunctionData) -> list[str]:
        name = external_name(func_data.name)
        _check_terminated(func_data)

        ctx = _FunctionContext(
            dfg=func_data.dfg,
            regs=RegisterAllocator(
                self._config.allocatable_registers, self._config.zero_register
            ),
            asm=[f"{name}:"],
            uses=_count_uses(func_data.dfg),
        )
        for insts in func_data.layout.bbs.values():
            for inst in insts:
                self._generate_value(inst, ctx)

        logger.debug(
            "Generated %s: %d lines, %d registers assigned",
            name,
            len(ctx.asm) - 1,
            len(ctx.regs),
        )
        return ctx.asm

    # ── values ───────────────────────────────────────────────────

    def _generate_value(self, value: Value, ctx: _FunctionContext) -> str | None:
        """Generate *value* and return the register holding it (None for statements)."""
        reg = ctx.regs.lookup(value)
        if reg is not None:
            return reg

        kind = ctx.dfg.value(value).kind
        handler = self._VALUE_DISPATCH.get(type(kind))
        if handler is None:
            raise UnsupportedConstructError(
                f"No code generation for value kind {type(kind).__name__}"
            )
        return handler(value, kind, ctx)

    def _operand_register(self, value: Value, ctx: _FunctionContext) -> str:
        reg = self._generate_value(value, ctx)
        if reg is None:
            raise MalformedInputError(f"Value {value} is used as an operand but yields nothing")
        return reg

    def _generate_integer(
        self, value: Value, kind: Integer, ctx: _FunctionContext
    ) -> str:
        zero = zero_register_for(kind, self._config.zero_register)
        if zero is not None:
            return zero

        reg = ctx.regs.allocate(value)
        ctx.asm.append(f"li {reg}, {kind.value}")
        return reg

    def _generate_binary(
        self, value: Value, kind: Binary, ctx: _FunctionContext
    ) -> str:
        lhs = self._operand_register(kind.lhs, ctx)
        rhs = self._operand_register(kind.rhs, ctx)

        emit = self._BINARY_DISPATCH.get(kind.op)
        if emit is None:
            raise UnsupportedConstructError(
                f"No code generation for binary operator '{kind.op.value}'"
            )

        lhs_done = ctx.consume(kind.lhs)
        rhs_done = ctx.consume(kind.rhs)
        dest = ctx.regs.allocate(value, hint=rhs if rhs_done else None)
        ctx.asm.extend(emit(dest, lhs, rhs))

        if lhs_done and lhs != dest:
            ctx.regs.release(kind.lhs)
        return dest

    def _generate_return(
        self, value: Value, kind: Return, ctx: _FunctionContext
    ) -> None:
        ret_reg = self._config.return_register
        if kind.value is None:
            ctx.asm.append(f"li {ret_reg}, 0")
        else:
            reg = self._operand_register(kind.value, ctx)
            ctx.consume(kind.value)
            if reg == self._config.zero_register:
                ctx.asm.append(f"li {ret_reg}, 0")
            else:
                ctx.asm.append(f"mv {ret_reg}, {reg}")
        ctx.asm.append("ret")
        return None


def _emit_eq(dest: str, lhs: str, rhs: str) -> list[str]:
    return [f"xor {dest}, {lhs}, {rhs}", f"seqz {dest}, {dest}"]


def _emit_sub(dest: str, lhs: str, rhs: str) -> list[str]:
    return [f"sub {dest}, {lhs}, {rhs}"]


def external_name(name: str) -> str:
    """Strip the IR sigil from a function name: ``@main`` → ``main``.

    Raises:
        MalformedInputError: If what remains is not a valid symbol.
    """
    stripped = name[len(constants.FUNC_NAME_PREFIX) :]
    if not name.startswith(constants.FUNC_NAME_PREFIX) or not re.match(
        constants.IDENTIFIER_PATTERN, stripped
    ):
        raise MalformedInputError(f"An invalid function name {name!r}")
    return stripped


def _count_uses(dfg: DataFlowGraph) -> Counter[Value]:
    """Count operand references to every value, reachable or not."""
    uses: Counter[Value] = Counter()
    for _, data in dfg.items():
        kind = data.kind
        if isinstance(kind, Binary):
            uses[kind.lhs] += 1
            uses[kind.rhs] += 1
        elif isinstance(kind, Return) and kind.value is not None:
            uses[kind.value] += 1
    return uses


def _check_terminated(func_data: FunctionData) -> None:
    insts = func_data.layout.all_insts()
    if not insts or not isinstance(func_data.dfg.value(insts[-1]).kind, Return):
        raise MalformedInputError(f"Function {func_data.name} does not end with ret")


def generate_asm(program: Program, config: CodegenConfig = CodegenConfig()) -> str:
    """Generate the full assembly text for *program*.

    Register assignment starts afresh on every call, so generating the
    same program twice yields identical text.
    """
    lines = AsmGenerator(config).generate(program)
    logger.info("Generated %d lines of assembly", len(lines))
    return "\n".join(lines) + "\n\n"
