"""Host operating system family detection."""
from __future__ import annotations

from enum import Enum
from functools import lru_cache
import os
import sys


OS_OVERRIDE_ENV = "BUILDSCRIPT_OS"


class OSFamily(Enum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"
    UNIX = "unix"

    @property
    def macro(self) -> str:
        """Preprocessor definition naming this family, e.g. ``-DLINUX``."""
        return f"-D{self.name}"


_WINDOWS_PLATFORMS = ("win32", "cygwin", "msys")
_UNIX_PLATFORM_PREFIXES = (
    "freebsd",
    "openbsd",
    "netbsd",
    "dragonfly",
    "sunos",
    "aix",
    "hp-ux",
)


def detect_os_family(platform_name: str) -> OSFamily | None:
    """Classify a ``sys.platform`` style string, or return ``None``."""

    name = platform_name.strip().lower()
    if name in _WINDOWS_PLATFORMS:
        return OSFamily.WINDOWS
    if name == "darwin":
        return OSFamily.MACOS
    if name.startswith("linux"):
        return OSFamily.LINUX
    if name.startswith(_UNIX_PLATFORM_PREFIXES):
        return OSFamily.UNIX
    return None


def parse_os_family(value: str) -> OSFamily | None:
    try:
        return OSFamily(value.strip().lower())
    except ValueError:
        return None


@lru_cache(maxsize=None)
def host_os_family() -> OSFamily | None:
    """Resolve the host family once per process.

    ``BUILDSCRIPT_OS`` takes precedence over ``sys.platform``; an unknown
    override is not recognised rather than silently ignored.
    """

    override = os.environ.get(OS_OVERRIDE_ENV)
    if override:
        return parse_os_family(override)
    return detect_os_family(sys.platform)


def is_windows() -> bool:
    return host_os_family() is OSFamily.WINDOWS


def is_macos() -> bool:
    return host_os_family() is OSFamily.MACOS


def is_linux() -> bool:
    return host_os_family() is OSFamily.LINUX


def is_unix() -> bool:
    return host_os_family() is OSFamily.UNIX


__all__ = [
    "OS_OVERRIDE_ENV",
    "OSFamily",
    "detect_os_family",
    "parse_os_family",
    "host_os_family",
    "is_windows",
    "is_macos",
    "is_linux",
    "is_unix",
]
