"""Flat, handle-style API over :class:`Builder` returning explicit results.

Every call returns a :class:`Result` instead of raising, which suits callers
that drive the builder through a foreign interface. A ``None`` handle is
reported as :attr:`Status.OBJECT_REQUIRED` and nothing is done.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .builder import Builder
from .errors import BuildError, Status, status_message
from .filesystem import PathArg, file_exists as _file_exists

WRITABLE_ATTRIBUTES = frozenset(
    {
        "dry_run",
        "print_command_to_stdout",
        "cc_command",
        "c_language_standard",
        "cxx_command",
        "cxx_language_standard",
        "ar_command",
        "ld_command",
        "move_command",
        "copy_command",
        "remove_command",
    }
)
READABLE_ATTRIBUTES = WRITABLE_ATTRIBUTES | {"last_exec_command", "os_family"}


@dataclass(frozen=True, slots=True)
class Result:
    status: Status
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    @property
    def message(self) -> str:
        return status_message(self.status)


def _guard(call: Callable[[], Any]) -> Result:
    try:
        return Result(Status.OK, call())
    except BuildError as exc:
        return Result(exc.status)


def status_code_message(code: int) -> str:
    return status_message(code)


def init_build_config(**options: Any) -> Result:
    """Create a builder; ``options`` are passed to :class:`Builder`."""
    return _guard(lambda: Builder(**options))


def deinit_build_config(handle: Builder | None) -> Result:
    # Nothing to release; the handle is only validated.
    if handle is None:
        return Result(Status.OBJECT_REQUIRED)
    return Result(Status.OK)


def get_attribute(handle: Builder | None, name: str) -> Result:
    if name not in READABLE_ATTRIBUTES:
        raise AttributeError(f"Builder has no readable attribute '{name}'")
    if handle is None:
        return Result(Status.OBJECT_REQUIRED)
    return Result(Status.OK, getattr(handle, name))


def set_attribute(handle: Builder | None, name: str, value: Any) -> Result:
    if name not in WRITABLE_ATTRIBUTES:
        raise AttributeError(f"Builder has no writable attribute '{name}'")
    if handle is None:
        return Result(Status.OBJECT_REQUIRED)
    setattr(handle, name, value)
    return Result(Status.OK)


def _invoke(handle: Builder | None, method: str, *args: Any) -> Result:
    if handle is None:
        return Result(Status.OBJECT_REQUIRED)
    bound = getattr(handle, method)
    return _guard(lambda: bound(*args))


def cc(handle: Builder | None, fmt: str, *args: Any) -> Result:
    return _invoke(handle, "cc", fmt, *args)


def cxx(handle: Builder | None, fmt: str, *args: Any) -> Result:
    return _invoke(handle, "cxx", fmt, *args)


def ar(handle: Builder | None, fmt: str, *args: Any) -> Result:
    return _invoke(handle, "ar", fmt, *args)


def ld(handle: Builder | None, fmt: str, *args: Any) -> Result:
    return _invoke(handle, "ld", fmt, *args)


def exec_command(handle: Builder | None, fmt: str, *args: Any) -> Result:
    return _invoke(handle, "exec", fmt, *args)


def move(handle: Builder | None, src: PathArg, dest: PathArg) -> Result:
    return _invoke(handle, "move", src, dest)


def copy(handle: Builder | None, src: PathArg, dest: PathArg) -> Result:
    return _invoke(handle, "copy", src, dest)


def remove(handle: Builder | None, path: PathArg) -> Result:
    return _invoke(handle, "remove", path)


def file_exists(path: PathArg) -> Result:
    return _guard(lambda: _file_exists(path))


__all__ = [
    "READABLE_ATTRIBUTES",
    "WRITABLE_ATTRIBUTES",
    "Result",
    "ar",
    "cc",
    "copy",
    "cxx",
    "deinit_build_config",
    "exec_command",
    "file_exists",
    "get_attribute",
    "init_build_config",
    "ld",
    "move",
    "remove",
    "set_attribute",
    "status_code_message",
]
