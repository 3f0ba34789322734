"""AST node types handed over by the parser.

Every expression node carries a ``kind`` tag so that a JSON document can be
validated straight into the right class.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from . import constants


class FuncType(str, Enum):
    INT = "int"


class UnaryOp(str, Enum):
    PLUS = "+"
    MINUS = "-"
    NOT = "!"


class BinaryOp(str, Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    MOD = "%"
    LESS = "<"
    GREATER = ">"
    LESS_EQUAL = "<="
    GREATER_EQUAL = ">="
    EQUAL = "=="
    NOT_EQUAL = "!="
    AND = "&&"
    OR = "||"
    COMMA = ","


class _Node(BaseModel):
    model_config = ConfigDict(frozen=True)


class Number(_Node):
    kind: Literal["number"] = "number"
    value: int = Field(ge=constants.I32_MIN, le=constants.I32_MAX)


class UnaryExp(_Node):
    kind: Literal["unary"] = "unary"
    op: UnaryOp
    operand: Exp


class BinaryExp(_Node):
    kind: Literal["binary"] = "binary"
    op: BinaryOp
    lhs: Exp
    rhs: Exp


Exp = Annotated[Union[Number, UnaryExp, BinaryExp], Field(discriminator="kind")]


class Stmt(_Node):
    """``return exp;``"""

    exp: Exp


class Block(_Node):
    stmt: Stmt


class FuncDef(_Node):
    ident: str
    func_type: FuncType = FuncType.INT
    block: Block


class CompUnit(_Node):
    func_def: FuncDef


UnaryExp.model_rebuild()
BinaryExp.model_rebuild()
Stmt.model_rebuild()
Block.model_rebuild()
FuncDef.model_rebuild()
CompUnit.model_rebuild()
