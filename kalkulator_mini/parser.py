"""Infix parser building an expression tree from tokens.

Recursive descent over the grammar (left-associative, usual precedence):

    expression := term (('+' | '-') term)*
    term       := factor (('*' | '/') factor)*
    factor     := ('+' | '-')* (NUMBER | VARIABLE | '(' expression ')')

Unary minus is folded into a number literal, or expressed as a
multiplication by -1 so the tree only ever holds the four binary operators.
"""

from __future__ import annotations

from typing import Sequence

from .config import MAX_EXPRESSION_DEPTH
from .logging_config import get_logger
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

logger = get_logger("parser")

_ADDITIVE = (TokenKind.PLUS, TokenKind.MINUS)
_MULTIPLICATIVE = (TokenKind.MULTIPLY, TokenKind.DIVIDE)


class _Parser:
    """Cursor over a token sequence; one token of lookahead."""

    def __init__(self, tokens: Sequence[Token]):
        self.tokens = tokens
        self.pos = 0
        self.depth = 0

    def peek(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        token = self.tokens[self.pos]
        self.pos += 1
        return token

    def expression(self) -> Node:
        node = self.term()
        token = self.peek()
        while token is not None and token.kind in _ADDITIVE:
            self.advance()
            node = BinOp(node, Operator.from_token(token), self.term())
            token = self.peek()
        return node

    def term(self) -> Node:
        node = self.factor()
        token = self.peek()
        while token is not None and token.kind in _MULTIPLICATIVE:
            self.advance()
            node = BinOp(node, Operator.from_token(token), self.factor())
            token = self.peek()
        return node

    def factor(self) -> Node:
        negate = False
        token = self._expect_operand()
        while token.kind in _ADDITIVE:
            if token.kind is TokenKind.MINUS:
                negate = not negate
            self.advance()
            token = self._expect_operand()

        node = self.primary(token)
        if not negate:
            return node
        if isinstance(node, Num):
            return Num(-node.value)
        return BinOp(Num(-1.0), Operator.MUL, node)

    def primary(self, token: Token) -> Node:
        kind = token.kind
        if kind is TokenKind.NUMBER:
            self.advance()
            return Num(token.value)
        if kind is TokenKind.VARIABLE:
            self.advance()
            return Var(token.value)
        if kind is TokenKind.LEFT_PARENTHESIS:
            return self.group()
        if kind is TokenKind.RIGHT_PARENTHESIS:
            if self.depth > 0:
                raise CalculationError(
                    CalculatorError.PARSE_ERROR, "Missing operand before ')'"
                )
            raise CalculationError(CalculatorError.UNMATCHED_RIGHT_PARENTHESIS)
        if kind in _MULTIPLICATIVE:
            raise CalculationError(
                CalculatorError.PARSE_ERROR, f"Missing operand before '{kind.value}'"
            )
        raise CalculationError(
            CalculatorError.UNEXPECTED_TOKEN, f"Unexpected '{kind.value}'"
        )

    def group(self) -> Node:
        self.depth += 1
        if self.depth > MAX_EXPRESSION_DEPTH:
            raise CalculationError(
                CalculatorError.PARSE_ERROR,
                f"Expression too deeply nested (>{MAX_EXPRESSION_DEPTH} levels)",
            )
        self.advance()
        node = self.expression()
        token = self.peek()
        if token is None:
            raise CalculationError(CalculatorError.UNMATCHED_LEFT_PARENTHESIS)
        if token.kind is not TokenKind.RIGHT_PARENTHESIS:
            raise CalculationError(CalculatorError.EXTRA_TOKENS_DETECTED)
        self.advance()
        self.depth -= 1
        return node

    def _expect_operand(self) -> Token:
        token = self.peek()
        if token is not None:
            return token
        if self.depth > 0:
            raise CalculationError(CalculatorError.UNMATCHED_LEFT_PARENTHESIS)
        if not self.tokens:
            raise CalculationError(CalculatorError.EMPTY_EXPRESSION)
        raise CalculationError(
            CalculatorError.PARSE_ERROR, "Missing operand at end of input"
        )


def parse_expression(tokens: Sequence[Token]) -> tuple[Node, Sequence[Token]]:
    """Parse one expression from the start of ``tokens``.

    Returns:
        Tuple of (expression tree, unconsumed tokens)

    Raises:
        CalculationError: If no expression can be read from the tokens
    """
    parser = _Parser(tokens)
    node = parser.expression()
    return node, tokens[parser.pos:]


def parse(tokens: Sequence[Token]) -> Node:
    """Parse ``tokens`` as a single complete infix expression.

    Raises:
        CalculationError: EXTRA_TOKENS_DETECTED if tokens remain after the
            expression, UNMATCHED_RIGHT_PARENTHESIS if the leftover starts
            with ')', or any error raised by :func:`parse_expression`.
    """
    node, rest = parse_expression(tokens)
    if rest:
        if rest[0].kind is TokenKind.RIGHT_PARENTHESIS:
            raise CalculationError(CalculatorError.UNMATCHED_RIGHT_PARENTHESIS)
        raise CalculationError(
            CalculatorError.EXTRA_TOKENS_DETECTED,
            f"Unexpected tokens after expression: {list(rest)!r}",
        )
    logger.debug("Parsed %d tokens into %r", len(tokens), node)
    return node
