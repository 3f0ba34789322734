"""Tests for Koopa IR text rendering."""

import pytest

from koopac import ast
from koopac.errors import MalformedInputError
from koopac.ir import BinaryOp, FunctionData, Program
from koopac.ir_builder import build_program
from koopac.ir_text import program_to_text
from tests.unit.conftest import binary, num, returning, unary


class TestProgramToText:
    def test_return_constant(self):
        text = program_to_text(build_program(returning(num(0))))
        assert text == "fun @main(): i32 {\n%entry:\n  ret 0\n}\n"

    def test_constants_are_inlined(self):
        text = program_to_text(build_program(returning(unary(ast.UnaryOp.MINUS, num(5)))))
        assert text.splitlines() == [
            "fun @main(): i32 {",
            "%entry:",
            "  %0 = sub 0, 5",
            "  ret %0",
            "}",
        ]

    def test_results_are_numbered_in_layout_order(self):
        exp = binary(
            ast.BinaryOp.EQUAL,
            unary(ast.UnaryOp.MINUS, num(1)),
            unary(ast.UnaryOp.NOT, num(2)),
        )
        lines = program_to_text(build_program(returning(exp))).splitlines()
        assert lines[2:6] == [
            "  %0 = sub 0, 1",
            "  %1 = eq 0, 2",
            "  %2 = eq %0, %1",
            "  ret %2",
        ]

    def test_return_without_operand(self):
        program = Program()
        func_data = program.func(program.new_func(FunctionData(name="@main")))
        bb = func_data.dfg.new_bb("%entry")
        func_data.layout.append_bb(bb).append(func_data.dfg.new_return())
        assert "  ret\n" in program_to_text(program)

    def test_functions_are_separated_by_blank_line(self):
        program = Program()
        for name in ("@f", "@g"):
            func_data = program.func(program.new_func(FunctionData(name=name)))
            bb = func_data.dfg.new_bb("%entry")
            func_data.layout.append_bb(bb).append(func_data.dfg.new_return())
        assert "}\n\nfun @g(): i32 {" in program_to_text(program)

    def test_operand_outside_layout_is_rejected(self):
        program = Program()
        func_data = program.func(program.new_func(FunctionData(name="@main")))
        dfg = func_data.dfg
        hidden = dfg.new_binary(BinaryOp.SUB, dfg.new_integer(1), dfg.new_integer(2))
        bb = dfg.new_bb("%entry")
        func_data.layout.append_bb(bb).append(dfg.new_return(hidden))
        with pytest.raises(MalformedInputError):
            program_to_text(program)
