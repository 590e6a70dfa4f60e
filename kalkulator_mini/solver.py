"""Linear equation solving by coefficient extraction.

Each side of ``lhs = rhs`` is parsed on its own and reduced to an affine
pair ``(coefficient, constant)`` meaning ``coefficient * x + constant``.
Any product of two terms in x, or a division by a term in x, makes the
equation non-linear and is rejected instead of solved.
"""

from __future__ import annotations

from typing import Sequence, Tuple

from .logging_config import get_logger
from .parser import parse
from .types import (
    BinOp,
    CalculationError,
    CalculatorError,
    Node,
    Num,
    Operator,
    Token,
    TokenKind,
    Var,
)

logger = get_logger("solver")

AffinePair = Tuple[float, float]


def extract_coefficients(node: Node) -> AffinePair:
    """Reduce an expression tree to ``(coefficient, constant)``.

    Raises:
        CalculationError: INVALID_EXPRESSION for non-linear terms,
            DIVISION_BY_ZERO when dividing by a constant zero
    """
    if isinstance(node, Num):
        return 0.0, node.value
    if isinstance(node, Var):
        return 1.0, 0.0
    if not isinstance(node, BinOp):
        raise TypeError(f"Not an expression node: {node!r}")

    lhs_coeff, lhs_const = extract_coefficients(node.left)
    rhs_coeff, rhs_const = extract_coefficients(node.right)

    if node.op is Operator.ADD:
        return lhs_coeff + rhs_coeff, lhs_const + rhs_const
    if node.op is Operator.SUB:
        return lhs_coeff - rhs_coeff, lhs_const - rhs_const
    if node.op is Operator.MUL:
        if lhs_coeff == 0.0:
            return rhs_coeff * lhs_const, rhs_const * lhs_const
        if rhs_coeff == 0.0:
            return lhs_coeff * rhs_const, lhs_const * rhs_const
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION,
            "Equation is not linear: product of two terms in the variable",
        )
    # Operator.DIV
    if rhs_coeff != 0.0:
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION,
            "Equation is not linear: division by the variable",
        )
    if rhs_const == 0.0:
        raise CalculationError(CalculatorError.DIVISION_BY_ZERO)
    return lhs_coeff / rhs_const, lhs_const / rhs_const


def solve_equation(tokens: Sequence[Token]) -> float:
    """Solve a linear equation in one variable.

    Args:
        tokens: Token stream containing an EQUAL token

    Returns:
        The value of the variable

    Raises:
        CalculationError: PARSE_ERROR if there is no '=', INVALID_EXPRESSION
            if the equation is non-linear, has no solution or is an identity
    """
    equal_pos = next(
        (i for i, token in enumerate(tokens) if token.kind is TokenKind.EQUAL),
        None,
    )
    if equal_pos is None:
        raise CalculationError(CalculatorError.PARSE_ERROR, "Equation needs an '='")

    left = parse(tokens[:equal_pos])
    right = parse(tokens[equal_pos + 1:])

    left_coeff, left_const = extract_coefficients(left)
    right_coeff, right_const = extract_coefficients(right)
    logger.debug(
        "Reduced equation to (%r, %r) = (%r, %r)",
        left_coeff,
        left_const,
        right_coeff,
        right_const,
    )

    a = left_coeff - right_coeff
    b = right_const - left_const
    if a == 0.0:
        # No solution and infinitely many solutions are reported alike
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION,
            "Equation has no unique solution",
        )
    return b / a
