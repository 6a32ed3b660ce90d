"""Write build logic as a Python program.

The :class:`Builder` wraps the C compiler, C++ compiler, archiver, linker and
basic file operations behind printf-style helpers, with dry-run and echo modes.
"""

from .src import (
    Builder,
    BuildError,
    OSFamily,
    Status,
    file_exists,
    main,
    status_message,
)

__all__ = ["Builder", "BuildError", "OSFamily", "Status", "file_exists", "main", "status_message"]
