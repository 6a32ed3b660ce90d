#!/usr/bin/env python3
"""Build the greet library, its test and examples.

    python build.py build build-tests          # dry run
    python build.py invoke build build-tests   # really run
"""
from __future__ import annotations

from pathlib import Path
import sys

_ROOT = Path(__file__).resolve().parents[2]
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from buildscript.src.driver import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:], program=sys.argv[0]))
