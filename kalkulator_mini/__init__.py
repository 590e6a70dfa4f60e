"""Kalkulator Mini: lexer, parser, evaluators and linear solver for one-line arithmetic."""

from .api import process_expression, validate_expression
from .types import CalcResult, CalculationError, CalculatorError

__all__ = [
    "config",
    "lexer",
    "notation",
    "parser",
    "evaluator",
    "solver",
    "calculator",
    "types",
    "api",
    "cli",
    "logging_config",
    "process_expression",
    "validate_expression",
    "CalcResult",
    "CalculationError",
    "CalculatorError",
]
