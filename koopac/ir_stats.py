"""Pure functions for computing statistics over IR programs."""

from __future__ import annotations

from collections import Counter

from koopac.ir import Binary, Program, Return

_RETURN_MNEMONIC = "ret"


def count_instructions(program: Program) -> dict[str, int]:
    """Return a frequency map of instruction mnemonics in *program*.

    Args:
        program: A built IR program.

    Returns:
        A dict mapping mnemonics (``"sub"``, ``"eq"``, ``"ret"``, ...) to
        their occurrence counts across every function.  Constants are not
        instructions and are not counted.
    """
    counts: Counter[str] = Counter()
    for func in program.func_layout():
        func_data = program.func(func)
        for inst in func_data.layout.all_insts():
            kind = func_data.dfg.value(inst).kind
            if isinstance(kind, Binary):
                counts[kind.op.value] += 1
            elif isinstance(kind, Return):
                counts[_RETURN_MNEMONIC] += 1
    return dict(counts)
