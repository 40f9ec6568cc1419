#!/usr/bin/env python3
"""
Start the interactive projekt menu from a source checkout.

Usage:
    python scripts/start.py

Equivalent to `python -m app.projekt` or the installed `projekt` command.
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> None:
    from app.projekt.shell import main as shell_main

    shell_main()


if __name__ == "__main__":
    main()
