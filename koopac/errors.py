"""Compile errors. Every one of them aborts the compilation."""

from __future__ import annotations


class CompileError(Exception):
    """Base class for fatal errors raised while lowering or generating code."""

    pass


class UnsupportedConstructError(CompileError):
    """Raised when an operator or value kind has no lowering."""

    pass


class MalformedInputError(CompileError):
    """Raised when the AST or IR handed to the backend is structurally invalid."""

    pass


class RegisterExhaustedError(CompileError):
    """Raised when the allocator has no register left to hand out."""

    pass


class NestingTooDeepError(CompileError):
    """Raised when an expression is nested deeper than the recursion limit allows."""

    pass
