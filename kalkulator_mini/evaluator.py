"""Numeric evaluation of expression trees (infix) and token streams (postfix)."""

from __future__ import annotations

from typing import Sequence

from .logging_config import get_logger
from .types import (
    BinOp,
    CalculationError,
    CalculatorError,
    Node,
    Num,
    OPERATOR_KINDS,
    Operator,
    Token,
    TokenKind,
    Var,
)

logger = get_logger("evaluator")


def apply_operator(op: Operator, lhs: float, rhs: float) -> float:
    """Apply a binary operator, rejecting division by exactly zero."""
    if op is Operator.ADD:
        return lhs + rhs
    if op is Operator.SUB:
        return lhs - rhs
    if op is Operator.MUL:
        return lhs * rhs
    if rhs == 0.0:
        raise CalculationError(CalculatorError.DIVISION_BY_ZERO)
    return lhs / rhs


def evaluate_infix(node: Node) -> float:
    """Evaluate an expression tree bottom-up.

    A variable cannot be resolved outside equation solving and fails with
    INVALID_EXPRESSION.
    """
    if isinstance(node, Num):
        return node.value
    if isinstance(node, Var):
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION,
            f"Cannot evaluate '{node.name}' without an equation",
        )
    if isinstance(node, BinOp):
        lhs = evaluate_infix(node.left)
        rhs = evaluate_infix(node.right)
        return apply_operator(node.op, lhs, rhs)
    raise TypeError(f"Not an expression node: {node!r}")


def evaluate_postfix(tokens: Sequence[Token]) -> float:
    """Evaluate a postfix token stream with a value stack.

    The top of the stack is the right-hand operand of each operator.
    """
    stack: list[float] = []
    for token in tokens:
        if token.kind is TokenKind.NUMBER:
            stack.append(token.value)
        elif token.kind in OPERATOR_KINDS:
            if len(stack) < 2:
                raise CalculationError(
                    CalculatorError.INVALID_EXPRESSION,
                    f"Operator '{token.kind.value}' needs two operands",
                )
            rhs = stack.pop()
            lhs = stack.pop()
            stack.append(apply_operator(Operator.from_token(token), lhs, rhs))
        else:
            raise CalculationError(
                CalculatorError.UNEXPECTED_TOKEN,
                f"Unexpected {token!r} in postfix expression",
            )

    if len(stack) != 1:
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION,
            f"Postfix expression left {len(stack)} values on the stack",
        )
    logger.debug("Postfix evaluation of %d tokens gave %r", len(tokens), stack[0])
    return stack[0]
