"""Command-line entry point: JSON AST in, Koopa IR or RISC-V assembly out."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from . import constants
from .api import compile_unit, dump_ir, load_comp_unit
from .codegen_types import CodegenConfig
from .errors import CompileError

logger = logging.getLogger(__name__)


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="koopac", description="Koopa IR / RISC-V backend for a SysY AST"
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument("--koopa", action="store_true",
                      help="Emit Koopa IR text")
    mode.add_argument("--riscv", action="store_true",
                      help="Emit RISC-V assembly")
    parser.add_argument("input",
                        help="AST as a JSON document")
    parser.add_argument("--output", "-o", required=True,
                        help="Output file")
    parser.add_argument("--entry", "-e", default=constants.DEFAULT_ENTRY_SYMBOL,
                        help="Symbol exported with .globl (default: main)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log each lowering and generation step")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        comp_unit = load_comp_unit(Path(args.input).read_text())
        if args.koopa:
            text = dump_ir(comp_unit)
        else:
            text = compile_unit(comp_unit, CodegenConfig(entry_symbol=args.entry))
    except (CompileError, ValidationError, OSError) as exc:
        print(f"koopac: error: {exc}", file=sys.stderr)
        return 1

    Path(args.output).write_text(text)
    logger.info("Wrote %s", args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
