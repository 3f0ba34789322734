"""IR Design: Koopa-style functions, basic blocks and data-flow graphs.

A ``Value`` is an index into the data-flow graph of the function that owns
it.  Constants and instruction results are both values; only instructions
are ever placed in a basic block.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict

from .errors import MalformedInputError


class Type(str, Enum):
    I32 = "i32"
    UNIT = "unit"


class BinaryOp(str, Enum):
    NOT_EQ = "ne"
    EQ = "eq"
    GT = "gt"
    LT = "lt"
    GE = "ge"
    LE = "le"
    ADD = "add"
    SUB = "sub"
    MUL = "mul"
    DIV = "div"
    MOD = "mod"
    AND = "and"
    OR = "or"
    XOR = "xor"
    SHL = "shl"
    SHR = "shr"
    SAR = "sar"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# ── handles ──────────────────────────────────────────────────────


class Value(_Frozen):
    index: int

    def __str__(self) -> str:
        return f"v{self.index}"


class BasicBlock(_Frozen):
    index: int


class Function(_Frozen):
    index: int


# ── value kinds ──────────────────────────────────────────────────


class Integer(_Frozen):
    value: int


class Binary(_Frozen):
    op: BinaryOp
    lhs: Value
    rhs: Value


class Return(_Frozen):
    value: Value | None = None


ValueKind = Union[Integer, Binary, Return]


class ValueData(_Frozen):
    ty: Type
    kind: ValueKind


@dataclass
class BasicBlockData:
    name: str


# ── containers ───────────────────────────────────────────────────


@dataclass
class DataFlowGraph:
    """Arena owning every value and basic block of one function."""

    _values: list[ValueData] = field(default_factory=list)
    _bbs: list[BasicBlockData] = field(default_factory=list)

    def _insert(self, data: ValueData) -> Value:
        self._values.append(data)
        return Value(index=len(self._values) - 1)

    def new_integer(self, value: int) -> Value:
        return self._insert(ValueData(ty=Type.I32, kind=Integer(value=value)))

    def new_binary(self, op: BinaryOp, lhs: Value, rhs: Value) -> Value:
        self.value(lhs)
        self.value(rhs)
        return self._insert(
            ValueData(ty=Type.I32, kind=Binary(op=op, lhs=lhs, rhs=rhs))
        )

    def new_return(self, value: Value | None = None) -> Value:
        if value is not None:
            self.value(value)
        return self._insert(ValueData(ty=Type.UNIT, kind=Return(value=value)))

    def new_bb(self, name: str) -> BasicBlock:
        self._bbs.append(BasicBlockData(name=name))
        return BasicBlock(index=len(self._bbs) - 1)

    def value(self, handle: Value) -> ValueData:
        if not 0 <= handle.index < len(self._values):
            raise MalformedInputError(f"Value {handle} does not belong to this function")
        return self._values[handle.index]

    def bb(self, handle: BasicBlock) -> BasicBlockData:
        if not 0 <= handle.index < len(self._bbs):
            raise MalformedInputError(
                f"Basic block {handle.index} does not belong to this function"
            )
        return self._bbs[handle.index]

    def items(self) -> list[tuple[Value, ValueData]]:
        return [(Value(index=i), data) for i, data in enumerate(self._values)]

    def __len__(self) -> int:
        return len(self._values)


@dataclass
class Layout:
    """Basic blocks in layout order, each with its instructions in execution order."""

    bbs: dict[BasicBlock, list[Value]] = field(default_factory=dict)

    def append_bb(self, bb: BasicBlock) -> list[Value]:
        if bb in self.bbs:
            raise MalformedInputError(f"Basic block {bb.index} is already laid out")
        self.bbs[bb] = []
        return self.bbs[bb]

    def all_insts(self) -> list[Value]:
        return [inst for insts in self.bbs.values() for inst in insts]


@dataclass
class FunctionData:
    name: str
    ret_ty: Type = Type.I32
    dfg: DataFlowGraph = field(default_factory=DataFlowGraph)
    layout: Layout = field(default_factory=Layout)


@dataclass
class Program:
    _funcs: list[FunctionData] = field(default_factory=list)

    def new_func(self, data: FunctionData) -> Function:
        self._funcs.append(data)
        return Function(index=len(self._funcs) - 1)

    def func(self, handle: Function) -> FunctionData:
        return self._funcs[handle.index]

    def func_layout(self) -> list[Function]:
        return [Function(index=i) for i in range(len(self._funcs))]
