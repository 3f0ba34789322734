"""IRBuilder: AST → Koopa-style IR lowering.

Every expression lowers to a pair: the value holding its result and the
ordered list of instructions that must run to produce it.  Composing
sub-expressions concatenates their lists in evaluation order.
"""

from __future__ import annotations

import logging
from typing import Callable

from . import ast, constants
from .ir import (
    BasicBlock,
    DataFlowGraph,
    Function,
    FunctionData,
    Program,
    Type,
    Value,
)
from .operators import binary_to_ir, unary_to_ir

logger = logging.getLogger(__name__)

Lowered = tuple[Value, list[Value]]

_FUNC_TYPES: dict[ast.FuncType, Type] = {
    ast.FuncType.INT: Type.I32,
}


class IRBuilder:
    """Lowers a ``CompUnit`` into a ``Program``.

    The builder keeps no state between calls: the data-flow graph of the
    function being built is threaded through every lowering method, and
    instruction lists are returned rather than appended to a shared buffer.
    """

    def __init__(self):
        self._EXPR_DISPATCH: dict[type, Callable[..., Lowered]] = {
            ast.Number: self._lower_number,
            ast.UnaryExp: self._lower_unary,
            ast.BinaryExp: self._lower_binary,
        }

    # ── entry point ──────────────────────────────────────────────

    def build(self, comp_unit: ast.CompUnit) -> Program:
        program = Program()
        self._lower_comp_unit(program, comp_unit)
        return program

    # ── program structure ────────────────────────────────────────

    def _lower_comp_unit(self, program: Program, comp_unit: ast.CompUnit) -> None:
        self._lower_func_def(program, comp_unit.func_def)

    def _lower_func_def(self, program: Program, func_def: ast.FuncDef) -> Function:
        func = program.new_func(
            FunctionData(
                name=constants.FUNC_NAME_PREFIX + func_def.ident,
                ret_ty=_FUNC_TYPES[func_def.func_type],
            )
        )
        func_data = program.func(func)

        entry, values = self._lower_block(func_data.dfg, func_def.block)
        func_data.layout.append_bb(entry).extend(values)
        logger.debug(
            "Lowered function %s: %d instructions", func_data.name, len(values)
        )
        return func

    def _lower_block(
        self, dfg: DataFlowGraph, block: ast.Block
    ) -> tuple[BasicBlock, list[Value]]:
        entry = dfg.new_bb(constants.ENTRY_BLOCK_NAME)
        return entry, self._lower_stmt(dfg, block.stmt)

    def _lower_stmt(self, dfg: DataFlowGraph, stmt: ast.Stmt) -> list[Value]:
        result, values = self._lower_exp(dfg, stmt.exp)
        values.append(dfg.new_return(result))
        return values

    # ── expressions ──────────────────────────────────────────────

    def _lower_exp(self, dfg: DataFlowGraph, exp: ast.Exp) -> Lowered:
        return self._EXPR_DISPATCH[type(exp)](dfg, exp)

    def _lower_number(self, dfg: DataFlowGraph, exp: ast.Number) -> Lowered:
        return dfg.new_integer(exp.value), []

    def _lower_unary(self, dfg: DataFlowGraph, exp: ast.UnaryExp) -> Lowered:
        ir_op = unary_to_ir(exp.op)
        if ir_op is None:
            return self._lower_exp(dfg, exp.operand)

        operand, values = self._lower_exp(dfg, exp.operand)
        zero = dfg.new_integer(0)
        result = dfg.new_binary(ir_op, zero, operand)
        values.append(result)
        return result, values

    def _lower_binary(self, dfg: DataFlowGraph, exp: ast.BinaryExp) -> Lowered:
        lhs, lhs_values = self._lower_exp(dfg, exp.lhs)
        rhs, rhs_values = self._lower_exp(dfg, exp.rhs)
        ir_op = binary_to_ir(exp.op)

        result = dfg.new_binary(ir_op, lhs, rhs)
        return result, lhs_values + rhs_values + [result]


def build_program(comp_unit: ast.CompUnit) -> Program:
    """Lower *comp_unit* into a fresh IR program."""
    return IRBuilder().build(comp_unit)
