"""Leveled console output shared by the build tools."""
from __future__ import annotations

import sys


class Console:
    """Simple console output handler with configurable log level.

    Levels: none < error < info < debug
    Default: 'none' (no output)
    """

    LEVELS = {
        "none": 0,
        "error": 1,
        "info": 2,
        "debug": 3,
    }

    def __init__(self, level: str = "none"):
        if level not in self.LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self.level_name = level
        self.level = self.LEVELS[level]

    @classmethod
    def from_flags(cls, log: str | None, verbose: bool, default: str = "none") -> "Console":
        """Explicit ``log`` wins, otherwise ``verbose`` maps to debug.

        ``default`` applies only when neither flag was given.
        """
        if log and log != "none":
            return cls(level=log)
        if verbose:
            return cls(level="debug")
        return cls(level=log or default)

    def info(self, message: str) -> None:
        if self.level >= self.LEVELS["info"]:
            print(f"[INFO] {message}")

    def error(self, message: str) -> None:
        if self.level >= self.LEVELS["error"]:
            print(f"[ERROR] {message}", file=sys.stderr)

    def debug(self, message: str) -> None:
        if self.level >= self.LEVELS["debug"]:
            print(f"[DEBUG] {message}")
