"""Tests for AST models and their JSON boundary."""

import pytest
from pydantic import ValidationError

from koopac.api import load_comp_unit
from koopac.ast import BinaryExp, BinaryOp, FuncType, Number, UnaryExp, UnaryOp

DOCUMENT = """\
{
  "func_def": {
    "ident": "main",
    "func_type": "int",
    "block": {"stmt": {"exp": {
      "kind": "binary", "op": "==",
      "lhs": {"kind": "number", "value": 1},
      "rhs": {"kind": "unary", "op": "-", "operand": {"kind": "number", "value": 2}}
    }}}
  }
}
"""


class TestLoadCompUnit:
    def test_nodes_are_discriminated_by_kind(self):
        unit = load_comp_unit(DOCUMENT)
        exp = unit.func_def.block.stmt.exp
        assert isinstance(exp, BinaryExp)
        assert exp.op == BinaryOp.EQUAL
        assert exp.lhs == Number(value=1)
        assert isinstance(exp.rhs, UnaryExp)
        assert exp.rhs.op == UnaryOp.MINUS

    def test_func_type(self):
        assert load_comp_unit(DOCUMENT).func_def.func_type == FuncType.INT

    def test_unknown_kind_is_rejected(self):
        bad = DOCUMENT.replace('"kind": "number", "value": 1', '"kind": "string", "value": 1')
        with pytest.raises(ValidationError):
            load_comp_unit(bad)

    def test_unknown_operator_is_rejected(self):
        with pytest.raises(ValidationError):
            load_comp_unit(DOCUMENT.replace('"op": "=="', '"op": "**"'))


class TestNumber:
    def test_i32_bounds_accepted(self):
        assert Number(value=2147483647).value == 2147483647
        assert Number(value=-2147483648).value == -2147483648

    def test_out_of_range_is_rejected(self):
        with pytest.raises(ValidationError):
            Number(value=2147483648)

    def test_nodes_are_frozen(self):
        n = Number(value=1)
        with pytest.raises(ValidationError):
            n.value = 2
