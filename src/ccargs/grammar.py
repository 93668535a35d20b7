from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto

from ccargs.diag import EmptyValueError, MalformedOptionError
from ccargs.options import Action


class ValueKind(Enum):
    OUTPUT_FILE = auto()
    INCLUDE_DIRECTORY = auto()
    LIBRARY_DIRECTORY = auto()
    DEFINE = auto()
    INCLUDE_FILE = auto()
    DEPENDENCY_TARGET = auto()
    DEPENDENCY_FILENAME = auto()


@dataclass(frozen=True)
class DependencyFlag:
    updates: Mapping[str, bool]
    forces_preprocess: bool = False


SIMPLE_FLAGS: Mapping[str, Mapping[str, object]] = {
    "-nostdinc": {"nostdinc": True},
    "-nostartfiles": {"nostartfiles": True},
    "-nodefaultlibs": {"nodefaultlibs": True},
    "-nolibc": {"nolibc": True},
    "-static": {"static": True},
    "-pthread": {"pthread": True},
    "-c": {"action": Action.COMPILE},
    "-E": {"action": Action.PREPROCESS},
    "-rdynamic": {"rdynamic": True},
}

VALUE_FLAGS: Mapping[str, ValueKind] = {
    "-o": ValueKind.OUTPUT_FILE,
    "-I": ValueKind.INCLUDE_DIRECTORY,
    "-L": ValueKind.LIBRARY_DIRECTORY,
    "-D": ValueKind.DEFINE,
    "-include": ValueKind.INCLUDE_FILE,
    "-MT": ValueKind.DEPENDENCY_TARGET,
    "-MF": ValueKind.DEPENDENCY_FILENAME,
}

DEPENDENCY_FLAGS: Mapping[str, DependencyFlag] = {
    "-M": DependencyFlag(
        {"generate": True, "include_system_header_files": True},
        forces_preprocess=True,
    ),
    "-MM": DependencyFlag(
        {"generate": True, "include_system_header_files": False},
        forces_preprocess=True,
    ),
    "-MD": DependencyFlag({"generate": True, "file": True, "include_system_header_files": True}),
    "-MMD": DependencyFlag({"generate": True, "file": True, "include_system_header_files": False}),
    "-MP": DependencyFlag({"include_missing": True}),
}

ACTION_FLAGS: Mapping[Action, tuple[str, ...]] = {
    Action.LINK: (),
    Action.COMPILE: ("-c",),
    Action.PREPROCESS: ("-E",),
}

# Emission order of the toggle group.
TOGGLE_FLAGS: tuple[tuple[str, str], ...] = (
    ("pthread", "-pthread"),
    ("nodefaultlibs", "-nodefaultlibs"),
    ("nostartfiles", "-nostartfiles"),
    ("nostdinc", "-nostdinc"),
    ("nolibc", "-nolibc"),
    ("rdynamic", "-rdynamic"),
    ("static", "-static"),
)


def split_assignment(text: str, *, what: str, token: str) -> tuple[str, str | bool]:
    parts = text.split("=")
    if len(parts) > 2:
        raise MalformedOptionError(f"invalid {what} with multiple equals: {token!r}", token=token)
    if not parts[0]:
        raise EmptyValueError(f"{what} name must be given: {token!r}", token=token)
    if len(parts) == 1:
        return parts[0], True
    return parts[0], parts[1]
