"""Public API for Kalkulator Mini - returns structured objects without side effects."""

from __future__ import annotations

from .calculator import calculate
from .lexer import lex
from .logging_config import get_logger
from .notation import contains_equal, find_variable, is_postfix_expression
from .parser import parse
from .types import CalcResult, CalculationError, CalculatorError, TokenKind

logger = get_logger("api")


def process_expression(expression: str) -> CalcResult:
    """Evaluate an expression or solve a linear equation.

    Args:
        expression: Expression string (e.g., "2 * (3 + 4)", "sin(pi)",
            "3 4 + 2 *", "2 * x + 0.5 = 1")

    Returns:
        CalcResult with the formatted result, or the error kind and message

    Example:
        >>> from kalkulator_mini.api import process_expression
        >>> process_expression("2 * x + 1 = 2 * (1 - x)").result
        'x=0.25'
        >>> process_expression("2 / 0").error
        <CalculatorError.DIVISION_BY_ZERO: 'Division by zero'>
    """
    try:
        result = calculate(expression)
    except CalculationError as e:
        logger.info("Rejected %r: %s (%s)", expression, e.message, e.code.name)
        return CalcResult(ok=False, error=e.code, message=e.message)
    return CalcResult(ok=True, result=result)


def validate_expression(expression: str) -> tuple[bool, str | None]:
    """Check that an expression tokenizes and parses, without evaluating it.

    Equations in the variable are checked side by side; postfix input
    only needs to tokenize.

    Args:
        expression: Expression string to validate

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> from kalkulator_mini.api import validate_expression
        >>> validate_expression("2 * (3 + 4)")
        (True, None)
        >>> validate_expression("2 * (3 + 4")
        (False, "Unmatched '('")
    """
    try:
        tokens = lex(expression)
        if not tokens:
            raise CalculationError(CalculatorError.EMPTY_EXPRESSION)
        name = find_variable(tokens)
        if name is not None and contains_equal(tokens):
            split = next(
                i for i, token in enumerate(tokens) if token.kind is TokenKind.EQUAL
            )
            parse(tokens[:split])
            parse(tokens[split + 1:])
        elif not is_postfix_expression(tokens):
            parse(tokens)
    except CalculationError as e:
        return False, e.message
    return True, None
