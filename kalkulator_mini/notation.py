"""Token classification: postfix detection and the single-variable check."""

from __future__ import annotations

from typing import Sequence

from .types import (
    CalculationError,
    CalculatorError,
    OPERATOR_KINDS,
    Token,
    TokenKind,
)

_NOT_POSTFIX = frozenset(
    {TokenKind.LEFT_PARENTHESIS, TokenKind.RIGHT_PARENTHESIS, TokenKind.EQUAL}
)


def is_postfix_expression(tokens: Sequence[Token]) -> bool:
    """Return True if ``tokens`` look like postfix (RPN) notation.

    Heuristic: only flat arithmetic qualifies, and the stream is postfix as
    soon as an operator directly follows a number while exactly one
    operand is left over (``3 4 +`` qualifies, ``3 + 4`` never does).
    """
    if any(token.kind in _NOT_POSTFIX for token in tokens):
        return False

    last_was_number = False
    number_count = 0
    operator_count = 0
    for token in tokens:
        if token.kind is TokenKind.NUMBER:
            number_count += 1
            last_was_number = True
        elif token.kind in OPERATOR_KINDS:
            operator_count += 1
            if last_was_number and number_count - operator_count == 1:
                return True
            last_was_number = False
        else:
            last_was_number = False
    return False


def find_variable(tokens: Sequence[Token]) -> str | None:
    """Return the name of the single variable in ``tokens``, if any.

    Raises:
        CalculationError: MULTIPLE_VARIABLES if two different names appear
    """
    seen: str | None = None
    for token in tokens:
        if token.kind is not TokenKind.VARIABLE:
            continue
        if seen is None:
            seen = token.value
        elif token.value != seen:
            raise CalculationError(
                CalculatorError.MULTIPLE_VARIABLES,
                f"More than one variable: '{seen}' and '{token.value}'",
            )
    return seen


def contains_equal(tokens: Sequence[Token]) -> bool:
    return any(token.kind is TokenKind.EQUAL for token in tokens)
