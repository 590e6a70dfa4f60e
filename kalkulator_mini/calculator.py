"""Orchestration of the lexer, classifier, parser, evaluators and solver.

``calculate`` is the raising core used by the public API: it picks the
evaluation path for one line of input and formats the rounded result.
"""

from __future__ import annotations

import math

from . import config
from .evaluator import evaluate_infix, evaluate_postfix
from .lexer import lex
from .logging_config import get_logger
from .notation import contains_equal, find_variable, is_postfix_expression
from .parser import parse
from .solver import solve_equation
from .types import CalculationError, CalculatorError

logger = get_logger("calculator")


def round_result(value: float, digits: int | None = None) -> float:
    """Round to ``digits`` decimal places, halves away from zero.

    Non-finite values, and values too large to carry a fractional digit
    once scaled, are returned unchanged.
    """
    if digits is None:
        digits = config.ROUNDING_DIGITS
    if not math.isfinite(value):
        return value
    scale = 10.0**digits
    scaled = value * scale
    if not math.isfinite(scaled):
        return value
    magnitude = abs(scaled)
    whole = math.floor(magnitude)
    # Compare the fraction instead of adding 0.5, which can round up itself
    if magnitude - whole >= 0.5:
        whole += 1
    rounded = math.copysign(whole, scaled) / scale
    # Normalise -0.0 so it prints as "0"
    return rounded + 0.0


def format_number(value: float, digits: int | None = None) -> str:
    """Format a rounded value without trailing zeros or exponent notation.

    Args:
        value: Value already rounded with :func:`round_result`
        digits: Decimal places to show at most (default: ROUNDING_DIGITS)

    Returns:
        Formatted string (e.g., "2", "0.25", "3.14159265")
    """
    if digits is None:
        digits = config.ROUNDING_DIGITS
    if not math.isfinite(value):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return f"{value:.{digits}f}".rstrip("0").rstrip(".")


def calculate(text: str) -> str:
    """Evaluate an expression or solve an equation given as text.

    Args:
        text: One line of input (e.g., "2 * (3 + 4)", "3 4 +", "2x + 1 = 3")

    Returns:
        The rounded value, or "<name>=<value>" for an equation

    Raises:
        CalculationError: On the first failure of any pipeline stage
    """
    tokens = lex(text)
    if not tokens:
        raise CalculationError(CalculatorError.EMPTY_EXPRESSION)

    name = find_variable(tokens)
    if name is not None and contains_equal(tokens):
        value = solve_equation(tokens)
        return f"{name}={format_number(round_result(value))}"

    if is_postfix_expression(tokens):
        logger.debug("Evaluating %r as postfix", text)
        value = evaluate_postfix(tokens)
    else:
        logger.debug("Evaluating %r as infix", text)
        value = evaluate_infix(parse(tokens))
    return format_number(round_result(value))
