"""Operator mapping: source operator tags to IR binary operators."""

from __future__ import annotations

from . import ast
from .errors import UnsupportedConstructError
from .ir import BinaryOp

# Unary operators become ``0 <op> operand``; Plus maps to nothing.
_UNARY_TO_IR: dict[ast.UnaryOp, BinaryOp | None] = {
    ast.UnaryOp.PLUS: None,
    ast.UnaryOp.MINUS: BinaryOp.SUB,
    ast.UnaryOp.NOT: BinaryOp.EQ,
}

_BINARY_TO_IR: dict[ast.BinaryOp, BinaryOp] = {
    ast.BinaryOp.ADD: BinaryOp.ADD,
    ast.BinaryOp.SUB: BinaryOp.SUB,
    ast.BinaryOp.MUL: BinaryOp.MUL,
    ast.BinaryOp.DIV: BinaryOp.DIV,
    ast.BinaryOp.MOD: BinaryOp.MOD,
    ast.BinaryOp.LESS: BinaryOp.LT,
    ast.BinaryOp.GREATER: BinaryOp.GT,
    ast.BinaryOp.LESS_EQUAL: BinaryOp.LE,
    ast.BinaryOp.GREATER_EQUAL: BinaryOp.GE,
    ast.BinaryOp.EQUAL: BinaryOp.EQ,
    ast.BinaryOp.NOT_EQUAL: BinaryOp.NOT_EQ,
    ast.BinaryOp.AND: BinaryOp.AND,
    ast.BinaryOp.OR: BinaryOp.OR,
}


def unary_to_ir(op: ast.UnaryOp) -> BinaryOp | None:
    """Return the IR operator applied as ``0 <op> operand``, or None for identity."""
    return _UNARY_TO_IR[op]


def binary_to_ir(op: ast.BinaryOp) -> BinaryOp:
    """Map a source binary operator onto the IR.

    Raises:
        UnsupportedConstructError: If the IR has no equivalent operator.
    """
    ir_op = _BINARY_TO_IR.get(op)
    if ir_op is None:
        raise UnsupportedConstructError(
            f"Binary operator '{op.value}' has no IR equivalent"
        )
    return ir_op
