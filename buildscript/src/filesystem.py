"""Filesystem and console helpers used by build scripts."""
from __future__ import annotations

from typing import Sequence
import locale
import os
import stat
import sys

from .errors import (
    ChangeDirectoryError,
    CurrentWorkingDirectoryError,
    DirectoryNameResolutionError,
    MissingExecutablePathError,
    StatFailedError,
    UnknownConsoleCodePageError,
    UnknownOSError,
)
from .platform import OSFamily, host_os_family

PathArg = str | os.PathLike[str]

_UTF8_NAMES = ("utf-8", "utf8")
_UTF8_LOCALES = ("C.UTF-8", "UTF-8", "en_US.UTF-8")
_WINDOWS_UTF8_CODE_PAGE = 65001


def dir_name(path: PathArg) -> str:
    """Return the directory part of ``path`` the way POSIX ``dirname`` does.

    A path without a directory component resolves to ``"."`` and trailing
    separators are ignored, so ``"lib/"`` yields ``"."``.
    """

    try:
        text = os.fspath(path)
    except TypeError as exc:
        raise DirectoryNameResolutionError(f"unable to get directory of {path!r}") from exc
    if "\x00" in text:
        raise DirectoryNameResolutionError(f"unable to get directory of {text!r}")

    drive, rest = os.path.splitdrive(text)
    stripped = rest.rstrip(os.sep + (os.altsep or ""))
    if not stripped:
        # Either empty or nothing but separators.
        return drive + (rest[:1] if rest else ".")
    parent = os.path.dirname(stripped)
    if not parent:
        return drive or "."
    return drive + parent


def change_directory(path: PathArg) -> None:
    try:
        os.chdir(path)
    except (OSError, ValueError) as exc:
        raise ChangeDirectoryError(f"unable to change directory to {os.fspath(path)}") from exc


def change_directory_to_program_dir(argv: Sequence[str]) -> None:
    """Change into the directory holding ``argv[0]``."""

    if not argv:
        raise MissingExecutablePathError("missing executable file path")
    change_directory(dir_name(argv[0]))


def current_working_directory() -> str:
    try:
        return os.getcwd()
    except OSError as exc:
        raise CurrentWorkingDirectoryError("unable to get current working directory") from exc


def set_console_code_page(name: str) -> None:
    """Switch the console to the ``name`` encoding; only UTF-8 is known."""

    if name.strip().lower() not in _UTF8_NAMES:
        raise UnknownConsoleCodePageError(f"unknown console code page: {name}")

    family = host_os_family()
    if family is None:
        raise UnknownOSError("unknown OS")
    if family is OSFamily.WINDOWS:
        _set_windows_code_page(name)
    else:
        _set_utf8_locale(name)

    for stream in (sys.stdout, sys.stderr):
        reconfigure = getattr(stream, "reconfigure", None)
        if reconfigure is not None:
            reconfigure(encoding="utf-8")


def _set_windows_code_page(name: str) -> None:
    import ctypes

    if not ctypes.windll.kernel32.SetConsoleOutputCP(_WINDOWS_UTF8_CODE_PAGE):
        raise UnknownConsoleCodePageError(f"unknown console code page: {name}")


def _set_utf8_locale(name: str) -> None:
    for candidate in _UTF8_LOCALES:
        try:
            locale.setlocale(locale.LC_ALL, candidate)
            return
        except locale.Error:
            continue
    raise UnknownConsoleCodePageError(f"unknown console code page: {name}")


def executable_file_name(name: str, os_family: OSFamily | None = None) -> str:
    """Append the platform executable suffix to ``name``."""

    family = os_family or host_os_family()
    if family is OSFamily.WINDOWS:
        return f"{name}.exe"
    return name


def file_exists(path: PathArg) -> bool:
    """Report whether ``path`` exists and is a regular file.

    A missing path is ``False``, as is a directory or any other non-regular
    file. Any other stat failure raises :class:`StatFailedError`.
    """

    try:
        info = os.stat(path)
    except FileNotFoundError:
        return False
    except (OSError, ValueError) as exc:
        raise StatFailedError(f"unable to stat file: {os.fspath(path)}") from exc
    return stat.S_ISREG(info.st_mode)


__all__ = [
    "change_directory",
    "change_directory_to_program_dir",
    "current_working_directory",
    "dir_name",
    "executable_file_name",
    "file_exists",
    "set_console_code_page",
]
