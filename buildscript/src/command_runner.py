"""Runners that hand assembled command lines to the platform shell."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List
import subprocess

from .errors import InvocationError, ShellInvocationError

SHELL_FAILURE_STATUS = 127
"""Exit status a POSIX shell reports when it could not run the command."""


@dataclass(slots=True)
class CommandResult:
    """Represents the outcome of an invoked command line."""

    command: str
    returncode: int


class CommandRunner:
    """Abstract shell runner interface.

    Only the invocation itself is judged here. A non-zero exit status from
    the invoked tool is returned to the caller, not raised, with the single
    exception of :data:`SHELL_FAILURE_STATUS`.
    """

    def run(self, command: str) -> CommandResult:
        raise NotImplementedError

    def _finalize(self, result: CommandResult) -> CommandResult:
        if result.returncode == SHELL_FAILURE_STATUS:
            raise ShellInvocationError(f"shell invocation error: {result.command}")
        return result


class ShellCommandRunner(CommandRunner):
    """Command runner that executes command lines via :mod:`subprocess`.

    Output is streamed straight to the console and the call blocks until the
    shell exits.
    """

    def run(self, command: str) -> CommandResult:
        try:
            process = subprocess.run(command, shell=True, check=False)
        except (FileNotFoundError, PermissionError) as exc:
            raise ShellInvocationError(f"shell invocation error: {exc}") from exc
        except OSError as exc:
            raise InvocationError(f"invocation error: {exc}") from exc

        return self._finalize(CommandResult(command=command, returncode=process.returncode))


class RecordingCommandRunner(CommandRunner):
    """Command runner that records command lines instead of executing them."""

    def __init__(self, returncode: int = 0) -> None:
        self.returncode = returncode
        self.commands: List[str] = []

    def run(self, command: str) -> CommandResult:
        self.commands.append(command)
        return self._finalize(CommandResult(command=command, returncode=self.returncode))


__all__ = [
    "SHELL_FAILURE_STATUS",
    "CommandResult",
    "CommandRunner",
    "RecordingCommandRunner",
    "ShellCommandRunner",
]
