#!/usr/bin/env python3
"""Local CLI entrypoint to run dep-roulette from a source checkout.

Usage:
  python scripts/roulette.py [--root .] [--seed N] [--verbose]

This calls the same main() as the installed ``dep-roulette`` command.
"""

from __future__ import annotations

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from dep_roulette.cli import main  # noqa: E402


if __name__ == "__main__":
    raise SystemExit(main())
