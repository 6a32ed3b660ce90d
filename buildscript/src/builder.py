"""Command-line construction and invocation for build scripts.

A :class:`Builder` holds the tool commands of one build session and turns
printf-style format strings into full command lines::

    b = Builder()
    b.c_language_standard = "c17"
    b.cc("-c %s", "foo.c")          # [DRYRUN] gcc -std=c17 -c foo.c
    b.dry_run = False
    b.ar("cr %s %s", "libfoo.a", "foo.o")

Every assembled command is remembered in ``last_exec_command`` before it is
printed or run, whether or not it is actually executed.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
import os
import re

from core.console import Console

from .command_runner import CommandResult, CommandRunner, ShellCommandRunner
from .errors import CommandFormatError, OutOfMemoryError, UnknownOSError
from .filesystem import PathArg, executable_file_name, file_exists
from .platform import OSFamily, host_os_family

DRYRUN_MARKER = "[DRYRUN]"
INVOKE_MARKER = "[INVOKE]"

_FILE_COMMANDS: dict[OSFamily, tuple[str, str, str]] = {
    OSFamily.WINDOWS: ("move", "copy", "del"),
    OSFamily.MACOS: ("mv", "cp", "rm -f"),
    OSFamily.LINUX: ("mv", "cp", "rm -f"),
    OSFamily.UNIX: ("mv", "cp", "rm -f"),
}

# One printf conversion: optional mapping key, flags, width, precision, length, type.
_CONVERSION = re.compile(
    r"%(?:\((?P<name>[^)]*)\))?[#0 +-]*(?:\*|\d+)?(?:\.(?:\*|\d+))?[hlL]?(?P<type>.?)",
    re.DOTALL,
)


def _check_keyword_format(fmt: str, kwargs: dict[str, Any]) -> None:
    used: set[str] = set()
    for match in _CONVERSION.finditer(fmt):
        name = match.group("name")
        if name is None:
            if match.group("type") == "%":
                continue
            raise CommandFormatError(f"unable to format command {fmt!r}: conversion without a key")
        used.add(name)
    unused = sorted(set(kwargs) - used)
    if unused:
        joined = ", ".join(unused)
        raise CommandFormatError(f"unable to format command {fmt!r}: unused arguments {joined}")


def format_parameters(fmt: str, args: tuple[Any, ...], kwargs: dict[str, Any]) -> str:
    """Expand ``fmt`` with printf-style substitution.

    Positional arguments fill ``%s``/``%d`` conversions in order, keyword
    arguments fill ``%(name)s`` conversions. The format is always expanded so
    ``%%`` collapses to ``%`` even without arguments.
    """

    if args and kwargs:
        raise TypeError("pass either positional or keyword format arguments, not both")
    if kwargs:
        _check_keyword_format(fmt, kwargs)
    values: Any = kwargs if kwargs else args
    try:
        return fmt % values
    except MemoryError as exc:
        raise OutOfMemoryError("unable to allocate memory") from exc
    except (TypeError, ValueError, KeyError) as exc:
        raise CommandFormatError(f"unable to format command {fmt!r}: {exc}") from exc


def assemble_command(base: str, parameters: str) -> str:
    if not base:
        return parameters
    return f"{base} {parameters}"


def _quote(path: PathArg) -> str:
    return f'"{os.fspath(path)}"'


@dataclass
class Builder:
    """Build configuration plus the operations that run build commands.

    All fields may be reassigned between operations; changes apply to the
    next command assembled. Move, copy and remove commands default by OS
    family, and construction fails with :class:`UnknownOSError` when the
    family cannot be recognised.
    """

    dry_run: bool = True
    print_command_to_stdout: bool = True
    cc_command: str = "gcc"
    c_language_standard: str = ""
    cxx_command: str = "g++"
    cxx_language_standard: str = ""
    ar_command: str = "ar"
    ld_command: str = "ld"
    move_command: str | None = None
    copy_command: str | None = None
    remove_command: str | None = None
    os_family: OSFamily | None = None
    runner: CommandRunner = field(default_factory=ShellCommandRunner, repr=False, compare=False)
    console: Console = field(default_factory=Console, repr=False, compare=False)
    last_exec_command: str = field(default="", init=False)

    def __post_init__(self) -> None:
        if self.os_family is None:
            self.os_family = host_os_family()
        defaults = _FILE_COMMANDS.get(self.os_family) if self.os_family else None
        if defaults is None:
            raise UnknownOSError("unknown OS")
        move, copy, remove = defaults
        if self.move_command is None:
            self.move_command = move
        if self.copy_command is None:
            self.copy_command = copy
        if self.remove_command is None:
            self.remove_command = remove

    # -- OS family -----------------------------------------------------------------

    def is_windows(self) -> bool:
        return self.os_family is OSFamily.WINDOWS

    def is_macos(self) -> bool:
        return self.os_family is OSFamily.MACOS

    def is_linux(self) -> bool:
        return self.os_family is OSFamily.LINUX

    def is_unix(self) -> bool:
        return self.os_family is OSFamily.UNIX

    # -- Invocation ----------------------------------------------------------------

    def exec_raw(self, command: str) -> CommandResult | None:
        """Echo and, unless dry-running, execute ``command`` through the shell.

        Returns the :class:`CommandResult` of a live invocation and ``None``
        for a dry run. The invoked tool's exit status is never raised; only a
        failure to start the shell or to have it run the command is.
        """

        self.last_exec_command = command
        if self.print_command_to_stdout:
            marker = DRYRUN_MARKER if self.dry_run else INVOKE_MARKER
            print(f"{marker} {command}", flush=True)
        if self.dry_run:
            return None

        result = self.runner.run(command)
        if result.returncode != 0:
            self.console.debug(f"exit status {result.returncode}: {command}")
        return result

    def exec_command(self, base: str, fmt: str, *args: Any, **kwargs: Any) -> CommandResult | None:
        """Append the expanded ``fmt`` to ``base`` and run the result."""

        parameters = format_parameters(fmt, args, kwargs)
        return self.exec_raw(assemble_command(base, parameters))

    # -- Tools ---------------------------------------------------------------------

    @property
    def c_compiler(self) -> str:
        """C compiler base command including the standard flag, if any."""
        if self.c_language_standard:
            return f"{self.cc_command} -std={self.c_language_standard}"
        return self.cc_command

    @property
    def cxx_compiler(self) -> str:
        if self.cxx_language_standard:
            return f"{self.cxx_command} -std={self.cxx_language_standard}"
        return self.cxx_command

    def cc(self, fmt: str, *args: Any, **kwargs: Any) -> CommandResult | None:
        return self.exec_command(self.c_compiler, fmt, *args, **kwargs)

    def cxx(self, fmt: str, *args: Any, **kwargs: Any) -> CommandResult | None:
        return self.exec_command(self.cxx_compiler, fmt, *args, **kwargs)

    def ar(self, fmt: str, *args: Any, **kwargs: Any) -> CommandResult | None:
        return self.exec_command(self.ar_command, fmt, *args, **kwargs)

    def ld(self, fmt: str, *args: Any, **kwargs: Any) -> CommandResult | None:
        return self.exec_command(self.ld_command, fmt, *args, **kwargs)

    def exec(self, fmt: str, *args: Any, **kwargs: Any) -> CommandResult | None:
        """Run ``fmt`` as a whole command, with no tool prefix."""
        return self.exec_command("", fmt, *args, **kwargs)

    # -- Files ---------------------------------------------------------------------

    def move(self, src: PathArg, dest: PathArg) -> CommandResult | None:
        return self.exec_raw(f"{self.move_command} {_quote(src)} {_quote(dest)}")

    def copy(self, src: PathArg, dest: PathArg) -> CommandResult | None:
        return self.exec_raw(f"{self.copy_command} {_quote(src)} {_quote(dest)}")

    def remove(self, path: PathArg) -> CommandResult | None:
        return self.exec_raw(f"{self.remove_command} {_quote(path)}")

    def executable_file_name(self, name: str) -> str:
        return executable_file_name(name, self.os_family)

    file_exists = staticmethod(file_exists)


__all__ = [
    "DRYRUN_MARKER",
    "INVOKE_MARKER",
    "Builder",
    "assemble_command",
    "format_parameters",
]
