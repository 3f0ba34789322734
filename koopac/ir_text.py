"""Koopa IR text rendering."""

from __future__ import annotations

from . import constants
from .errors import MalformedInputError
from .ir import Binary, FunctionData, Integer, Program, Return, Value


def _instruction_names(func_data: FunctionData) -> dict[Value, str]:
    """Number every laid-out instruction that yields a value: ``%0``, ``%1``, ..."""
    names: dict[Value, str] = {}
    for inst in func_data.layout.all_insts():
        if isinstance(func_data.dfg.value(inst).kind, Binary):
            names[inst] = f"{constants.VALUE_NAME_PREFIX}{len(names)}"
    return names


def _operand(func_data: FunctionData, names: dict[Value, str], value: Value) -> str:
    kind = func_data.dfg.value(value).kind
    if isinstance(kind, Integer):
        return str(kind.value)
    if value not in names:
        raise MalformedInputError(f"Operand {value} is not a laid-out instruction result")
    return names[value]


def _instruction_text(
    func_data: FunctionData, names: dict[Value, str], inst: Value
) -> str:
    kind = func_data.dfg.value(inst).kind
    if isinstance(kind, Binary):
        lhs = _operand(func_data, names, kind.lhs)
        rhs = _operand(func_data, names, kind.rhs)
        return f"{names[inst]} = {kind.op.value} {lhs}, {rhs}"
    if isinstance(kind, Return):
        if kind.value is None:
            return "ret"
        return f"ret {_operand(func_data, names, kind.value)}"
    raise MalformedInputError(f"Not an instruction: {type(kind).__name__}")


def function_to_text(func_data: FunctionData) -> str:
    names = _instruction_names(func_data)
    lines = [f"fun {func_data.name}(): {func_data.ret_ty.value} {{"]
    for bb, insts in func_data.layout.bbs.items():
        lines.append(f"{func_data.dfg.bb(bb).name}:")
        for inst in insts:
            lines.append(f"  {_instruction_text(func_data, names, inst)}")
    lines.append("}")
    return "\n".join(lines)


def program_to_text(program: Program) -> str:
    """Render *program* as Koopa IR, one blank line between functions."""
    return (
        "\n\n".join(
            function_to_text(program.func(func)) for func in program.func_layout()
        )
        + "\n"
    )
