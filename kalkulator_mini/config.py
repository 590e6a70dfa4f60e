"""Centralized configuration for Kalkulator Mini.

This module defines:
- Output rounding precision
- Input validation limits (length, parenthesis depth)
- Named constants and functions recognised by the lexer (as SymPy objects)
- Regex patterns used by the lexer

Configuration can be overridden via:
- CLI flags (see cli.py)
- Environment variables (prefixed with KALKULATOR_)
"""

import os
import re

import sympy as sp

try:
    import importlib.metadata

    VERSION = importlib.metadata.version("kalkulator-mini")
except Exception:
    # Fallback if package not installed
    VERSION = "0.1.0"

# Output configuration
MAX_ROUNDING_DIGITS = 15  # float64 keeps about 15 significant digits
ROUNDING_DIGITS = min(
    max(int(os.getenv("KALKULATOR_ROUNDING_DIGITS", "8")), 0), MAX_ROUNDING_DIGITS
)  # decimal places kept in results

# Input validation limits
MAX_INPUT_LENGTH = int(os.getenv("KALKULATOR_MAX_INPUT_LENGTH", "1000"))  # characters
MAX_EXPRESSION_DEPTH = int(
    os.getenv("KALKULATOR_MAX_EXPRESSION_DEPTH", "100")
)  # nested parentheses

# Named constants, substituted as numbers by the lexer
CONSTANTS = {
    "pi": sp.pi,
    "e": sp.E,
}

# Functions usable with a parenthesized or implicit argument.
# Each entry maps to a callable taking (argument, base); base is only used by log.
FUNCTIONS = {
    "sin": lambda arg, base: sp.sin(arg),
    "cos": lambda arg, base: sp.cos(arg),
    "tan": lambda arg, base: sp.tan(arg),
    "ln": lambda arg, base: sp.log(arg),
    "log": lambda arg, base: sp.log(arg, base),
}

DEFAULT_LOG_BASE = 10

# Reserved names, longest first so "ln" never shadows a longer match
RESERVED_NAMES = tuple(
    sorted(list(CONSTANTS) + list(FUNCTIONS), key=len, reverse=True)
)

NUMBER_REGEX = re.compile(r"[0-9.]+")
IDENTIFIER_REGEX = re.compile(r"[A-Za-z]+")
LOG_BASE_REGEX = re.compile(r"[0-9.]+")
