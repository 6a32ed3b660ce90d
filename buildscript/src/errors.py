"""Status codes and the exception hierarchy raised by the builder."""
from __future__ import annotations

from enum import IntEnum


class Status(IntEnum):
    """Closed set of outcomes reported through the flat binding."""

    OK = 0
    OUT_OF_MEMORY = 1
    UNKNOWN = 2
    UNKNOWN_OS = 3
    UNKNOWN_CONSOLE_CODE_PAGE = 4
    OBJECT_REQUIRED = 5
    INVOCATION_ERROR = 6
    SHELL_INVOCATION_ERROR = 7
    STAT_FAILED = 8
    DIRECTORY_NAME_RESOLUTION_FAILED = 9
    CHANGE_DIRECTORY_FAILED = 10
    CURRENT_WORKING_DIRECTORY_FAILED = 11
    MISSING_EXECUTABLE_PATH = 12


_STATUS_MESSAGES = {
    Status.OK: "OK",
    Status.OUT_OF_MEMORY: "unable to allocate memory",
    Status.UNKNOWN: "unknown error",
    Status.UNKNOWN_OS: "unknown OS",
    Status.UNKNOWN_CONSOLE_CODE_PAGE: "unknown console code page",
    Status.OBJECT_REQUIRED: "object required",
    Status.INVOCATION_ERROR: "invoke failed",
    Status.SHELL_INVOCATION_ERROR: "shell invoke failed",
    Status.STAT_FAILED: "stat failed",
    Status.DIRECTORY_NAME_RESOLUTION_FAILED: "dirname failed",
    Status.CHANGE_DIRECTORY_FAILED: "change directory failed",
    Status.CURRENT_WORKING_DIRECTORY_FAILED: "get current working directory failed",
    Status.MISSING_EXECUTABLE_PATH: "missing executable path",
}

UNKNOWN_STATUS_MESSAGE = "unknown status code"


def status_message(code: int) -> str:
    """Return the human readable message for ``code``."""

    try:
        return _STATUS_MESSAGES[Status(code)]
    except ValueError:
        return UNKNOWN_STATUS_MESSAGE


class BuildError(RuntimeError):
    """Base class for failures detected by the builder.

    Each subclass pins the :class:`Status` it maps to, so callers that need a
    status code read ``exc.status`` instead of inspecting the message.
    """

    status: Status = Status.UNKNOWN

    def __init__(self, message: str | None = None):
        super().__init__(message or status_message(self.status))


class OutOfMemoryError(BuildError):
    status = Status.OUT_OF_MEMORY


class UnknownOSError(BuildError):
    status = Status.UNKNOWN_OS


class UnknownConsoleCodePageError(BuildError):
    status = Status.UNKNOWN_CONSOLE_CODE_PAGE


class ObjectRequiredError(BuildError):
    status = Status.OBJECT_REQUIRED


class InvocationError(BuildError):
    """The shell process could not be created."""

    status = Status.INVOCATION_ERROR


class ShellInvocationError(BuildError):
    """The shell could not be executed or could not run the command."""

    status = Status.SHELL_INVOCATION_ERROR


class StatFailedError(BuildError):
    status = Status.STAT_FAILED


class DirectoryNameResolutionError(BuildError):
    status = Status.DIRECTORY_NAME_RESOLUTION_FAILED


class ChangeDirectoryError(BuildError):
    status = Status.CHANGE_DIRECTORY_FAILED


class CurrentWorkingDirectoryError(BuildError):
    status = Status.CURRENT_WORKING_DIRECTORY_FAILED


class MissingExecutablePathError(BuildError):
    status = Status.MISSING_EXECUTABLE_PATH


class CommandFormatError(BuildError):
    """The format string and its arguments could not be expanded."""

    status = Status.UNKNOWN


__all__ = [
    "Status",
    "UNKNOWN_STATUS_MESSAGE",
    "status_message",
    "BuildError",
    "OutOfMemoryError",
    "UnknownOSError",
    "UnknownConsoleCodePageError",
    "ObjectRequiredError",
    "InvocationError",
    "ShellInvocationError",
    "StatFailedError",
    "DirectoryNameResolutionError",
    "ChangeDirectoryError",
    "CurrentWorkingDirectoryError",
    "MissingExecutablePathError",
    "CommandFormatError",
]
