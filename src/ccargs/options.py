from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from types import MappingProxyType

DefineValue = str | bool
CodeGenerationValue = str | bool


def _freeze(record: object, *names: str) -> None:
    for name in names:
        object.__setattr__(record, name, MappingProxyType(dict(getattr(record, name))))


class Action(str, Enum):
    LINK = "link"
    COMPILE = "compile"
    PREPROCESS = "preprocess"


@dataclass(frozen=True)
class DebugOptions:
    enable: bool | None = None
    level: int | None = None
    flags: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "flags")

    def with_flag(self, name: str, value: bool) -> "DebugOptions":
        return replace(self, flags={**self.flags, name: value})

    def as_dict(self) -> dict[str, object]:
        data: dict[str, object] = dict(self.flags)
        if self.enable is not None:
            data["enable"] = self.enable
        if self.level is not None:
            data["level"] = self.level
        return data


@dataclass(frozen=True)
class OptimizationOptions:
    enable: bool | None = None
    level: int | None = None
    size: bool | None = None
    flags: Mapping[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        _freeze(self, "flags")

    def with_flag(self, name: str, value: bool) -> "OptimizationOptions":
        return replace(self, flags={**self.flags, name: value})

    def as_dict(self) -> dict[str, object]:
        data: dict[str, object] = dict(self.flags)
        if self.enable is not None:
            data["enable"] = self.enable
        if self.level is not None:
            data["level"] = self.level
        if self.size is not None:
            data["size"] = self.size
        return data


@dataclass(frozen=True)
class DependencyInfo:
    generate: bool = False
    include_system_header_files: bool = False
    file: bool = False
    filename: str | None = None
    target: str | None = None
    include_missing: bool = False

    def as_dict(self) -> dict[str, object]:
        data: dict[str, object] = {}
        if self.generate:
            data["generate"] = True
            data["include_system_header_files"] = self.include_system_header_files
        if self.file:
            data["file"] = True
        if self.filename is not None:
            data["filename"] = self.filename
        if self.target is not None:
            data["target"] = self.target
        if self.include_missing:
            data["include_missing"] = True
        return data


def _dedupe_in_order(items: tuple[str, ...], item: str) -> tuple[str, ...]:
    if item in items:
        return items
    return (*items, item)


@dataclass(frozen=True)
class Options:
    action: Action = Action.LINK
    target: str | None = None
    input_files: tuple[str, ...] = ()
    output_file: str | None = None
    include_directories: tuple[str, ...] = ()
    include_files: tuple[str, ...] = ()
    library_directories: tuple[str, ...] = ()
    libraries: tuple[str, ...] = ()
    defines: Mapping[str, DefineValue] = field(default_factory=dict)
    code_generation: Mapping[str, CodeGenerationValue] = field(default_factory=dict)
    warn: Mapping[str, bool] = field(default_factory=dict)
    debug: DebugOptions = field(default_factory=DebugOptions)
    optimization: OptimizationOptions = field(default_factory=OptimizationOptions)
    dependency_info: DependencyInfo = field(default_factory=DependencyInfo)
    std: str | None = None
    nostdinc: bool = False
    nostartfiles: bool = False
    nodefaultlibs: bool = False
    nolibc: bool = False
    static: bool = False
    pthread: bool = False
    rdynamic: bool = False

    def __post_init__(self) -> None:
        try:
            object.__setattr__(self, "action", Action(self.action))
        except ValueError:
            raise ValueError(f"Unsupported action: {self.action}") from None
        for name in ("include_directories", "library_directories"):
            entries = getattr(self, name)
            if len(set(entries)) != len(entries):
                raise ValueError(f"Duplicate entries in {name}: {entries}")
        _freeze(self, "defines", "code_generation", "warn")

    def with_action(self, action: Action) -> "Options":
        return replace(self, action=action)

    def with_target(self, target: str) -> "Options":
        return replace(self, target=target)

    def with_input_file(self, path: str) -> "Options":
        return replace(self, input_files=(*self.input_files, path))

    def with_output_file(self, path: str) -> "Options":
        return replace(self, output_file=path)

    def with_include_directory(self, path: str) -> "Options":
        return replace(
            self,
            include_directories=_dedupe_in_order(self.include_directories, path),
        )

    def with_include_file(self, path: str) -> "Options":
        return replace(self, include_files=(*self.include_files, path))

    def with_library_directory(self, path: str) -> "Options":
        return replace(
            self,
            library_directories=_dedupe_in_order(self.library_directories, path),
        )

    def with_library(self, name: str) -> "Options":
        return replace(self, libraries=(*self.libraries, name))

    def with_define(self, name: str, value: DefineValue = True) -> "Options":
        return replace(self, defines={**self.defines, name: value})

    def with_code_generation(self, name: str, value: CodeGenerationValue) -> "Options":
        return replace(self, code_generation={**self.code_generation, name: value})

    def with_warning(self, name: str, enabled: bool) -> "Options":
        return replace(self, warn={**self.warn, name: enabled})

    def with_debug(self, debug: DebugOptions) -> "Options":
        return replace(self, debug=debug)

    def with_optimization(self, optimization: OptimizationOptions) -> "Options":
        return replace(self, optimization=optimization)

    def with_dependency_info(self, dependency_info: DependencyInfo) -> "Options":
        return replace(self, dependency_info=dependency_info)

    def with_std(self, std: str) -> "Options":
        return replace(self, std=std)

    def as_dict(self) -> dict[str, object]:
        data: dict[str, object] = {"action": self.action.value}
        for name in ("target", "output_file", "std"):
            value = getattr(self, name)
            if value is not None:
                data[name] = value
        for name in (
            "input_files",
            "include_directories",
            "include_files",
            "library_directories",
            "libraries",
        ):
            entries = getattr(self, name)
            if entries:
                data[name] = list(entries)
        for name in ("defines", "code_generation", "warn"):
            mapping = getattr(self, name)
            if mapping:
                data[name] = dict(mapping)
        for name in ("debug", "optimization", "dependency_info"):
            sub = getattr(self, name).as_dict()
            if sub:
                data[name] = sub
        for name in (
            "nostdinc",
            "nostartfiles",
            "nodefaultlibs",
            "nolibc",
            "static",
            "pthread",
            "rdynamic",
        ):
            if getattr(self, name):
                data[name] = True
        return data
