"""Allow ``python -m buildscript``."""
from __future__ import annotations

from .src.driver import main

if __name__ == "__main__":  # pragma: no cover - exercised via the console script
    raise SystemExit(main())
