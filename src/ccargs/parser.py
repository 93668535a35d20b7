from collections.abc import Sequence
from dataclasses import replace

from ccargs.diag import (
    EmptyValueError,
    MalformedOptionError,
    MissingArgumentError,
    UnknownOptionError,
)
from ccargs.grammar import (
    DEPENDENCY_FLAGS,
    SIMPLE_FLAGS,
    VALUE_FLAGS,
    DependencyFlag,
    ValueKind,
    split_assignment,
)
from ccargs.options import Action, Options

_PREFIX_HANDLERS: tuple[tuple[str, str], ...] = (
    ("--target=", "_parse_target"),
    ("-fno-", "_parse_negated_code_generation"),
    ("-f", "_parse_code_generation"),
    ("-std=", "_parse_std"),
    ("-I", "_parse_include_directory"),
    ("-L", "_parse_library_directory"),
    ("-g", "_parse_debug"),
    ("-O", "_parse_optimization"),
    ("-Q", "_parse_ignored"),
    ("-D", "_parse_define"),
    ("-W", "_parse_warning"),
    ("-l", "_parse_library"),
)

_NON_EMPTY_VALUES = frozenset(
    {
        ValueKind.OUTPUT_FILE,
        ValueKind.INCLUDE_DIRECTORY,
        ValueKind.LIBRARY_DIRECTORY,
        ValueKind.INCLUDE_FILE,
    }
)


def _require_name(value: str, token: str, what: str) -> str:
    if not value:
        raise EmptyValueError(f"{what} must be given: {token!r}", token=token)
    return value


class Parser:
    def __init__(self, args: Sequence[str]) -> None:
        self._args = list(args)
        self._index = 0
        self._options = Options()
        self._pending: tuple[ValueKind, str] | None = None
        self._negated_code_generation: set[str] = set()

    def parse(self) -> Options:
        while self._index < len(self._args):
            token = self._args[self._index]
            self._index += 1
            if self._pending is not None:
                kind, flag = self._pending
                self._pending = None
                self._consume_value(kind, flag, token)
                continue
            self._parse_token(token)
        if self._pending is not None:
            _, flag = self._pending
            raise MissingArgumentError(f"missing argument to {flag!r}", token=flag)
        return self._options

    def _parse_token(self, token: str) -> None:
        simple = SIMPLE_FLAGS.get(token)
        if simple is not None:
            self._options = replace(self._options, **simple)
            return
        kind = VALUE_FLAGS.get(token)
        if kind is not None:
            self._pending = (kind, token)
            return
        dependency = DEPENDENCY_FLAGS.get(token)
        if dependency is not None:
            self._apply_dependency_flag(dependency)
            return
        if token == "-" or not token.startswith("-"):
            self._options = self._options.with_input_file(token)
            return
        for prefix, handler in _PREFIX_HANDLERS:
            if token.startswith(prefix):
                getattr(self, handler)(token, token[len(prefix) :])
                return
        raise UnknownOptionError(f"unknown option {token}", token=token)

    def _consume_value(self, kind: ValueKind, flag: str, value: str) -> None:
        if kind in _NON_EMPTY_VALUES and not value:
            raise EmptyValueError(f"empty argument to {flag!r}", token=flag)
        options = self._options
        if kind is ValueKind.OUTPUT_FILE:
            options = options.with_output_file(value)
        elif kind is ValueKind.INCLUDE_DIRECTORY:
            options = options.with_include_directory(value)
        elif kind is ValueKind.LIBRARY_DIRECTORY:
            options = options.with_library_directory(value)
        elif kind is ValueKind.DEFINE:
            options = options.with_define(*split_assignment(value, what="define", token=value))
        elif kind is ValueKind.INCLUDE_FILE:
            options = options.with_include_file(value)
        elif kind is ValueKind.DEPENDENCY_TARGET:
            options = options.with_dependency_info(replace(options.dependency_info, target=value))
        else:
            dependency_info = replace(options.dependency_info, file=True, filename=value)
            options = options.with_dependency_info(dependency_info)
        self._options = options

    def _apply_dependency_flag(self, flag: DependencyFlag) -> None:
        options = self._options.with_dependency_info(
            replace(self._options.dependency_info, **flag.updates)
        )
        if flag.forces_preprocess:
            options = options.with_action(Action.PREPROCESS)
        self._options = options

    def _parse_target(self, token: str, value: str) -> None:
        self._options = self._options.with_target(_require_name(value, token, "target"))

    def _parse_negated_code_generation(self, token: str, value: str) -> None:
        name = _require_name(value, token, "code generation option name")
        if "=" in name:
            raise MalformedOptionError(
                f"negated -f option does not take a value: {token!r}", token=token
            )
        self._negated_code_generation.add(name)
        self._options = self._options.with_code_generation(name, False)

    def _parse_code_generation(self, token: str, value: str) -> None:
        name, setting = split_assignment(value, what="-f option", token=token)
        if name in self._negated_code_generation:
            return
        self._options = self._options.with_code_generation(name, setting)

    def _parse_std(self, token: str, value: str) -> None:
        self._options = self._options.with_std(_require_name(value, token, "std"))

    def _parse_include_directory(self, token: str, value: str) -> None:
        self._options = self._options.with_include_directory(
            _require_name(value, token, "include directory")
        )

    def _parse_library_directory(self, token: str, value: str) -> None:
        self._options = self._options.with_library_directory(
            _require_name(value, token, "library directory")
        )

    def _parse_debug(self, token: str, value: str) -> None:
        debug = self._options.debug
        if not value:
            debug = replace(debug, enable=True)
        elif value.startswith("no-"):
            debug = debug.with_flag(_require_name(value[3:], token, "debug option name"), False)
        elif value.isdecimal():
            debug = replace(debug, level=int(value))
        else:
            debug = debug.with_flag(value, True)
        self._options = self._options.with_debug(debug)

    def _parse_optimization(self, token: str, value: str) -> None:
        optimization = self._options.optimization
        if not value:
            optimization = replace(optimization, enable=True)
        elif value.isdecimal():
            optimization = replace(optimization, level=int(value))
        elif value == "s":
            optimization = replace(optimization, size=True)
        else:
            optimization = optimization.with_flag(value, True)
        self._options = self._options.with_optimization(optimization)

    def _parse_ignored(self, token: str, value: str) -> None:
        pass

    def _parse_define(self, token: str, value: str) -> None:
        self._options = self._options.with_define(
            *split_assignment(value, what="define", token=token)
        )

    def _parse_warning(self, token: str, value: str) -> None:
        if not value:
            raise UnknownOptionError("-W with arg not supported yet", token=token)
        if value.startswith("no-"):
            name = _require_name(value[3:], token, "warning name")
            self._options = self._options.with_warning(name, False)
        else:
            self._options = self._options.with_warning(value, True)

    def _parse_library(self, token: str, value: str) -> None:
        self._options = self._options.with_library(_require_name(value, token, "library name"))


def parse(args: Sequence[str]) -> Options:
    return Parser(args).parse()
