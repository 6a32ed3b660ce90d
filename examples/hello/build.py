#!/usr/bin/env python3
"""Minimal build script using :class:`Builder` directly."""
from __future__ import annotations

from pathlib import Path
import sys

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from buildscript import Builder, BuildError  # noqa: E402
from buildscript.src.filesystem import change_directory_to_program_dir  # noqa: E402


def main(argv: list[str]) -> int:
    try:
        change_directory_to_program_dir(argv)
        b = Builder()
        exe = b.executable_file_name("hello")
        for cmd in argv[1:]:
            if cmd == "invoke":
                b.dry_run = False
            elif cmd == "build":
                b.cc("-o %s %s", exe, "hello.c")
            elif cmd == "clean":
                b.remove(exe)
        return 0
    except BuildError as exc:
        print(f"Error: {exc}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv))
