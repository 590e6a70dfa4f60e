"""Type definitions: tokens, expression tree nodes, error kinds and results."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union


class TokenKind(Enum):
    """Lexical token kinds produced by the lexer."""

    NUMBER = "number"
    VARIABLE = "variable"
    PLUS = "+"
    MINUS = "-"
    MULTIPLY = "*"
    DIVIDE = "/"
    LEFT_PARENTHESIS = "("
    RIGHT_PARENTHESIS = ")"
    EQUAL = "="


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    ``value`` holds the float of a NUMBER token and the name of a VARIABLE
    token; it is None for every other kind.
    """

    kind: TokenKind
    value: float | str | None = None

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.kind.value!r})"
        return f"Token({self.kind.name}, {self.value!r})"


def number(value: float) -> Token:
    return Token(TokenKind.NUMBER, float(value))


def variable(name: str) -> Token:
    return Token(TokenKind.VARIABLE, name)


PLUS = Token(TokenKind.PLUS)
MINUS = Token(TokenKind.MINUS)
MULTIPLY = Token(TokenKind.MULTIPLY)
DIVIDE = Token(TokenKind.DIVIDE)
LEFT_PARENTHESIS = Token(TokenKind.LEFT_PARENTHESIS)
RIGHT_PARENTHESIS = Token(TokenKind.RIGHT_PARENTHESIS)
EQUAL = Token(TokenKind.EQUAL)

OPERATOR_KINDS = frozenset(
    {TokenKind.PLUS, TokenKind.MINUS, TokenKind.MULTIPLY, TokenKind.DIVIDE}
)


class Operator(Enum):
    """Binary operators of the expression tree."""

    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_token(cls, token: Token) -> Operator:
        return _OPERATOR_BY_KIND[token.kind]


_OPERATOR_BY_KIND = {
    TokenKind.PLUS: Operator.ADD,
    TokenKind.MINUS: Operator.SUB,
    TokenKind.MULTIPLY: Operator.MUL,
    TokenKind.DIVIDE: Operator.DIV,
}


@dataclass(frozen=True)
class Num:
    """Numeric leaf."""

    value: float


@dataclass(frozen=True)
class Var:
    """Leaf standing for the single unknown."""

    name: str


@dataclass(frozen=True)
class BinOp:
    """Binary operation; owns both children."""

    left: Node
    op: Operator
    right: Node


Node = Union[Num, Var, BinOp]


class CalculatorError(Enum):
    """Closed set of failure kinds reported by the calculator."""

    EMPTY_EXPRESSION = "Empty expression"
    MULTIPLE_VARIABLES = "More than one variable in expression"
    PARSE_ERROR = "Could not parse expression"
    UNEXPECTED_TOKEN = "Unexpected token"
    UNMATCHED_LEFT_PARENTHESIS = "Unmatched '('"
    UNMATCHED_RIGHT_PARENTHESIS = "Unmatched ')'"
    EXTRA_TOKENS_DETECTED = "Unexpected tokens after expression"
    INVALID_EXPRESSION = "Invalid expression"
    DIVISION_BY_ZERO = "Division by zero"

    @property
    def message(self) -> str:
        return self.value


class CalculationError(Exception):
    """Raised by every pipeline stage; carries the failure kind in ``code``."""

    def __init__(self, code: CalculatorError, message: str | None = None):
        self.code = code
        self.message = message or code.message
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


@dataclass
class CalcResult:
    """Result of processing one line of input."""

    ok: bool
    result: str | None = None
    error: CalculatorError | None = None
    message: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.error is not None:
            result_dict["error"] = self.error.name
        if self.message is not None:
            result_dict["message"] = self.message
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            error_name = self.error.name if self.error is not None else None
            return f"CalcResult(ok=False, error={error_name}, message={self.message!r})"
        return f"CalcResult(ok=True, result={self.result!r})"
