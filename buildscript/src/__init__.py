"""Builder implementation, its helpers and the example driver."""

from .builder import DRYRUN_MARKER, INVOKE_MARKER, Builder, assemble_command, format_parameters
from .command_runner import CommandResult, CommandRunner, RecordingCommandRunner, ShellCommandRunner
from .config import BuilderSettings, DriverLayout, load_settings
from .driver import main
from .errors import (
    BuildError,
    ChangeDirectoryError,
    CommandFormatError,
    CurrentWorkingDirectoryError,
    DirectoryNameResolutionError,
    InvocationError,
    MissingExecutablePathError,
    ObjectRequiredError,
    OutOfMemoryError,
    ShellInvocationError,
    StatFailedError,
    Status,
    UnknownConsoleCodePageError,
    UnknownOSError,
    status_message,
)
from .filesystem import (
    change_directory,
    change_directory_to_program_dir,
    current_working_directory,
    dir_name,
    executable_file_name,
    file_exists,
    set_console_code_page,
)
from .platform import OSFamily, host_os_family, is_linux, is_macos, is_unix, is_windows

__all__ = [
    "DRYRUN_MARKER",
    "INVOKE_MARKER",
    "Builder",
    "assemble_command",
    "format_parameters",
    "CommandResult",
    "CommandRunner",
    "RecordingCommandRunner",
    "ShellCommandRunner",
    "BuilderSettings",
    "DriverLayout",
    "load_settings",
    "main",
    "BuildError",
    "ChangeDirectoryError",
    "CommandFormatError",
    "CurrentWorkingDirectoryError",
    "DirectoryNameResolutionError",
    "InvocationError",
    "MissingExecutablePathError",
    "ObjectRequiredError",
    "OutOfMemoryError",
    "ShellInvocationError",
    "StatFailedError",
    "Status",
    "UnknownConsoleCodePageError",
    "UnknownOSError",
    "status_message",
    "change_directory",
    "change_directory_to_program_dir",
    "current_working_directory",
    "dir_name",
    "executable_file_name",
    "file_exists",
    "set_console_code_page",
    "OSFamily",
    "host_os_family",
    "is_linux",
    "is_macos",
    "is_unix",
    "is_windows",
]
