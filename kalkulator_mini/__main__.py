"""Main entry point for running kalkulator_mini as a module.

This allows running Kalkulator Mini with:
    python -m kalkulator_mini
    python -m kalkulator_mini -e "2+2"
    python -m kalkulator_mini --format json -e "2x + 1 = 3"
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
