from collections.abc import Mapping

from ccargs.diag import FormatError
from ccargs.grammar import ACTION_FLAGS, TOGGLE_FLAGS
from ccargs.options import (
    Action,
    DebugOptions,
    DependencyInfo,
    OptimizationOptions,
    Options,
)


def _format_optimization(optimization: OptimizationOptions) -> list[str]:
    args: list[str] = []
    if optimization.enable:
        args.append("-O")
    if optimization.level is not None:
        args.append(f"-O{optimization.level}")
    if optimization.size:
        args.append("-Os")
    for name, enabled in optimization.flags.items():
        if enabled is not True:
            raise FormatError(f"unsupported value {enabled!r} for optimization option {name!r}")
        args.append(f"-O{name}")
    return args


def _format_debug(debug: DebugOptions) -> list[str]:
    args: list[str] = []
    if debug.enable:
        args.append("-g")
    if debug.level is not None:
        args.append(f"-g{debug.level}")
    for name, enabled in debug.flags.items():
        args.append(f"-g{name}" if enabled else f"-gno-{name}")
    return args


def _format_defines(defines: Mapping[str, str | bool]) -> list[str]:
    return [
        f"-D{name}" if value is True else f"-D{name}={value}" for name, value in defines.items()
    ]


def _format_code_generation(code_generation: Mapping[str, str | bool]) -> list[str]:
    args: list[str] = []
    for name, value in code_generation.items():
        if value is True:
            args.append(f"-f{name}")
        elif value is False:
            args.append(f"-fno-{name}")
        else:
            args.append(f"-f{name}={value}")
    return args


def _format_warnings(warn: Mapping[str, bool]) -> list[str]:
    args: list[str] = []
    for name, value in warn.items():
        if value is True:
            args.append(f"-W{name}")
        elif value is False:
            args.append(f"-Wno-{name}")
        else:
            raise FormatError(f"unsupported value {value!r} for warning {name!r}")
    return args


def _format_dependency_info(dependency_info: DependencyInfo, action: Action) -> list[str]:
    args: list[str] = []
    if dependency_info.generate:
        system = dependency_info.include_system_header_files
        if dependency_info.file:
            args.append("-MD" if system else "-MMD")
        else:
            if action is not Action.PREPROCESS:
                raise FormatError(
                    f"dependency generation without a file requires preprocess, not {action.value}"
                )
            args.append("-M" if system else "-MM")
    if dependency_info.target is not None:
        args.extend(("-MT", dependency_info.target))
    if dependency_info.filename is not None:
        if not dependency_info.file:
            raise FormatError("dependency filename given without file output")
        args.extend(("-MF", dependency_info.filename))
    if dependency_info.include_missing:
        args.append("-MP")
    return args


def format_args(options: Options) -> list[str]:
    args: list[str] = list(ACTION_FLAGS[options.action])
    if options.target is not None:
        args.append(f"--target={options.target}")
    args.extend(options.input_files)
    args.extend(flag for name, flag in TOGGLE_FLAGS if getattr(options, name))
    if options.std is not None:
        args.append(f"-std={options.std}")
    args.extend(_format_optimization(options.optimization))
    args.extend(_format_debug(options.debug))
    args.extend(f"-I{path}" for path in options.include_directories)
    for path in options.include_files:
        args.extend(("-include", path))
    args.extend(f"-L{path}" for path in options.library_directories)
    args.extend(_format_defines(options.defines))
    args.extend(_format_code_generation(options.code_generation))
    args.extend(_format_warnings(options.warn))
    args.extend(f"-l{name}" for name in options.libraries)
    args.extend(_format_dependency_info(options.dependency_info, options.action))
    if options.output_file is not None:
        args.extend(("-o", options.output_file))
    return args
