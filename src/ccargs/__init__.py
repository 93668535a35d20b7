import argparse
import json
import os
import shlex
import sys
from collections.abc import Sequence
from typing import cast

from ccargs.diag import (
    Diagnostic,
    EmptyValueError,
    FormatError,
    MalformedOptionError,
    MissingArgumentError,
    OptionError,
    UnknownOptionError,
)
from ccargs.formatter import format_args
from ccargs.options import Action, DebugOptions, DependencyInfo, OptimizationOptions, Options
from ccargs.parser import parse

format = format_args

__all__ = [
    "Action",
    "DebugOptions",
    "DependencyInfo",
    "Diagnostic",
    "EmptyValueError",
    "FormatError",
    "MalformedOptionError",
    "MissingArgumentError",
    "OptimizationOptions",
    "OptionError",
    "Options",
    "UnknownOptionError",
    "format",
    "format_args",
    "main",
    "parse",
]

_DIAG_FORMATS = ("human", "json")


def _default_diag_format() -> str:
    raw = os.environ.get("CCARGS_DIAG_FORMAT", "").strip().lower()
    return raw if raw in _DIAG_FORMATS else "human"


def _build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ccargs",
        description="Normalize a C compiler argument list.",
        usage="%(prog)s [options] -- <compiler args...>",
    )
    parser.add_argument(
        "--dump-options",
        action="store_true",
        help="print the parsed options record as JSON",
    )
    parser.add_argument(
        "--diag-format",
        choices=_DIAG_FORMATS,
        default=_default_diag_format(),
        help="diagnostic output format",
    )
    return parser


def _split_argv(argv: list[str]) -> tuple[list[str], list[str]]:
    if "--" not in argv:
        return [], argv
    index = argv.index("--")
    return argv[:index], argv[index + 1 :]


def _report(error: OptionError, diag_format: str) -> None:
    diagnostic = error.diagnostic
    if diag_format == "json":
        print(json.dumps(diagnostic.as_dict(), separators=(",", ":")), file=sys.stderr)
    else:
        print(diagnostic, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_arg_parser()
    effective_argv = list(argv) if argv is not None else sys.argv[1:]
    tool_argv, compiler_argv = _split_argv(effective_argv)
    try:
        args = parser.parse_args(tool_argv)
    except SystemExit as error:
        return cast(int, error.code)
    try:
        options = parse(compiler_argv)
        normalized = format_args(options)
    except OptionError as error:
        _report(error, args.diag_format)
        return 1
    if args.dump_options:
        print(json.dumps(options.as_dict(), indent=2))
    else:
        print(shlex.join(normalized))
    return 0
