"""Tests for the composable API functions in koopac.api."""

import sys

import pytest

from koopac import ast
from koopac.api import build_ir, compile_unit, dump_ir, emit_asm, load_comp_unit
from koopac.errors import NestingTooDeepError, UnsupportedConstructError
from koopac.ir import Program
from tests.unit.conftest import binary, num, returning, unary

RETURN_ZERO = (
    '{"func_def": {"ident": "main", "func_type": "int",'
    ' "block": {"stmt": {"exp": {"kind": "number", "value": 0}}}}}'
)


class TestBuildIr:
    def test_returns_program(self):
        assert isinstance(build_ir(returning(num(0))), Program)

    def test_unmapped_operator_aborts(self):
        with pytest.raises(UnsupportedConstructError):
            build_ir(returning(binary(ast.BinaryOp.COMMA, num(1), num(2))))


class TestDumpIr:
    def test_contains_function_header(self):
        assert dump_ir(returning(num(1))).startswith("fun @main(): i32 {")


class TestCompileUnit:
    def test_return_zero_round_trip(self):
        text = compile_unit(load_comp_unit(RETURN_ZERO))
        assert text.splitlines() == [".text", ".globl main", "main:", "li a0, 0", "ret", ""]

    def test_equality_scenario(self):
        text = compile_unit(returning(binary(ast.BinaryOp.EQUAL, num(1), num(2))))
        mnemonics = [line.split()[0] for line in text.splitlines()[3:] if line]
        assert mnemonics == ["li", "li", "xor", "seqz", "mv", "ret"]

    def test_unmapped_operator_returns_no_text(self):
        result = None
        with pytest.raises(UnsupportedConstructError):
            result = compile_unit(returning(binary(ast.BinaryOp.COMMA, num(1), num(2))))
        assert result is None

    def test_emit_asm_is_idempotent(self):
        program = build_ir(returning(unary(ast.UnaryOp.MINUS, num(5))))
        assert emit_asm(program) == emit_asm(program)


class TestNestingBound:
    def test_deep_nesting_is_reported(self):
        exp = num(1)
        for _ in range(sys.getrecursionlimit() + 100):
            exp = unary(ast.UnaryOp.PLUS, exp)
        with pytest.raises(NestingTooDeepError):
            build_ir(returning(exp))
