"""Register backend: greedy, non-spilling assignment of values to registers."""

from __future__ import annotations

import logging

from . import constants
from .errors import RegisterExhaustedError
from .ir import Integer, Value, ValueKind

logger = logging.getLogger(__name__)


def zero_register_for(
    kind: ValueKind, zero_register: str = constants.ZERO_REGISTER
) -> str | None:
    """Return the hardware zero register if *kind* is the literal 0, else None."""
    if isinstance(kind, Integer) and kind.value == 0:
        return zero_register
    return None


class RegisterAllocator:
    """Maps IR values to physical registers for one code generation pass.

    A hinted allocation hands the hint register to the new value; the
    operand that lived there loses its assignment.  Callers only pass a
    hint, or release a value, once that value has no uses left.
    """

    def __init__(
        self,
        registers: tuple[str, ...] = constants.ALLOCATABLE_REGISTERS,
        zero_register: str = constants.ZERO_REGISTER,
    ):
        self._free: list[str] = list(registers)
        self._zero_register = zero_register
        self._assigned: dict[Value, str] = {}

    def lookup(self, value: Value) -> str | None:
        return self._assigned.get(value)

    def allocate(self, value: Value, hint: str | None = None) -> str:
        existing = self._assigned.get(value)
        if existing is not None:
            return existing

        if hint is not None and hint != self._zero_register:
            reg = hint
            if reg in self._free:
                self._free.remove(reg)
            self._assigned = {v: r for v, r in self._assigned.items() if r != reg}
        elif self._free:
            reg = self._free.pop(0)
        else:
            raise RegisterExhaustedError(
                f"No register left for value {value}; spilling is not supported"
            )

        self._assigned[value] = reg
        logger.debug("Assigned %s -> %s", value, reg)
        return reg

    def release(self, value: Value) -> None:
        """Return the register of *value* to the front of the pool."""
        reg = self._assigned.pop(value, None)
        if reg is None or reg == self._zero_register:
            return
        if reg not in self._free and reg not in self._assigned.values():
            self._free.insert(0, reg)
            logger.debug("Released %s from %s", reg, value)

    def __len__(self) -> int:
        return len(self._assigned)
