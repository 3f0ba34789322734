"""Shared AST builders for the backend test suite."""

from koopac.ast import (
    BinaryExp,
    BinaryOp,
    Block,
    CompUnit,
    FuncDef,
    Number,
    Stmt,
    UnaryExp,
    UnaryOp,
)


def num(value: int) -> Number:
    return Number(value=value)


def unary(op: UnaryOp, operand) -> UnaryExp:
    return UnaryExp(op=op, operand=operand)


def binary(op: BinaryOp, lhs, rhs) -> BinaryExp:
    return BinaryExp(op=op, lhs=lhs, rhs=rhs)


def returning(exp, name: str = "main") -> CompUnit:
    """Wrap *exp* as ``int <name>() { return <exp>; }``."""
    return CompUnit(func_def=FuncDef(ident=name, block=Block(stmt=Stmt(exp=exp))))
