"""Koopa IR / RISC-V backend for a small C-like language."""

from .api import (  # noqa: F401
    load_comp_unit,
    build_ir,
    dump_ir,
    emit_asm,
    compile_unit,
    ir_stats,
)
from .errors import (  # noqa: F401
    CompileError,
    UnsupportedConstructError,
    MalformedInputError,
    RegisterExhaustedError,
    NestingTooDeepError,
)
