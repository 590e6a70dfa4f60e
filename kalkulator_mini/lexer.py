"""Lexer: turns input text into tokens.

Lexing runs in two passes:

1. Scanning splits the text into lexemes: plain tokens, named constants
   and function names. Each lexeme remembers whether it was written
   directly after the previous one (no whitespace in between).
2. Desugaring replaces constants by numbers, evaluates function
   applications (``cos(0)``, ``sinpi``, ``log100(10)``, ``log10``) to
   numbers and inserts the implicit multiplications of ``2x``, ``1.5pi``
   and ``2(3+4)``. Only the canonical token kinds come out of it, so the
   parser never sees a function.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

import sympy as sp

from .config import (
    CONSTANTS,
    DEFAULT_LOG_BASE,
    FUNCTIONS,
    IDENTIFIER_REGEX,
    LOG_BASE_REGEX,
    MAX_INPUT_LENGTH,
    NUMBER_REGEX,
    RESERVED_NAMES,
)
from .evaluator import evaluate_infix
from .logging_config import get_logger
from .parser import parse
from .types import (
    DIVIDE,
    EQUAL,
    LEFT_PARENTHESIS,
    MINUS,
    MULTIPLY,
    PLUS,
    RIGHT_PARENTHESIS,
    CalculationError,
    CalculatorError,
    Token,
    TokenKind,
    number,
    variable,
)

logger = get_logger("lexer")

SYMBOL_TOKENS = {
    "+": PLUS,
    "-": MINUS,
    "*": MULTIPLY,
    "/": DIVIDE,
    "(": LEFT_PARENTHESIS,
    ")": RIGHT_PARENTHESIS,
    "=": EQUAL,
}

# Digits kept when handing numbers to SymPy
_SYMPY_PRECISION = 30

# |cos(x)| below this counts as a pole of tan
_TAN_POLE_TOLERANCE = 1e-12


@dataclass(frozen=True)
class _Lexeme:
    token: Token | None = None
    function: str | None = None
    base: float | None = None
    constant: bool = False
    glued: bool = False

    def is_kind(self, kind: TokenKind) -> bool:
        return self.token is not None and self.token.kind is kind


def _parse_float(text: str) -> float:
    try:
        return float(text)
    except ValueError:
        raise CalculationError(
            CalculatorError.PARSE_ERROR, f"Invalid number '{text}'"
        ) from None


def _scan(text: str) -> list[_Lexeme]:
    lexemes: list[_Lexeme] = []
    glued = False
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char.isspace():
            glued = False
            pos += 1
            continue

        match = NUMBER_REGEX.match(text, pos)
        if match is not None:
            lexemes.append(_Lexeme(token=number(_parse_float(match.group())), glued=glued))
            pos = match.end()
        elif char in SYMBOL_TOKENS:
            lexemes.append(_Lexeme(token=SYMBOL_TOKENS[char], glued=glued))
            pos += 1
        elif char.isalpha():
            match = IDENTIFIER_REGEX.match(text, pos)
            if match is None:
                raise CalculationError(
                    CalculatorError.UNEXPECTED_TOKEN, f"Unrecognized character {char!r}"
                )
            pos = _scan_identifier(text, match, lexemes, glued)
        else:
            raise CalculationError(
                CalculatorError.UNEXPECTED_TOKEN, f"Unrecognized character {char!r}"
            )
        glued = True
    return lexemes


def _scan_identifier(text: str, match, lexemes: list[_Lexeme], glued: bool) -> int:
    """Split an alphabetic run into constants, functions and a variable.

    Returns the text position after everything consumed, which includes the
    digits of a ``logN`` base.
    """
    run = match.group()
    end = match.end()
    i = 0
    while i < len(run):
        name = next((n for n in RESERVED_NAMES if run.startswith(n, i)), None)
        if name is None:
            lexemes.append(_Lexeme(token=variable(run[i:]), glued=glued))
            break
        i += len(name)
        if name in CONSTANTS:
            value = float(CONSTANTS[name])
            lexemes.append(_Lexeme(token=number(value), constant=True, glued=glued))
        else:
            base = None
            if name == "log" and i == len(run):
                base_match = LOG_BASE_REGEX.match(text, end)
                if base_match is not None:
                    base = _parse_float(base_match.group())
                    end = base_match.end()
            lexemes.append(_Lexeme(function=name, base=base, glued=glued))
        glued = True
    return end


def _to_sympy(value: float) -> sp.Expr:
    if value.is_integer():
        return sp.Integer(int(value))
    return sp.Float(value, _SYMPY_PRECISION)


def apply_function(name: str, argument: float, base: float | None = None) -> float:
    """Evaluate a named function numerically.

    Raises:
        CalculationError: INVALID_EXPRESSION when the result is undefined,
            complex or infinite (``ln(0)``, ``log(-1)``, ``log1(5)``,
            ``tan(pi/2)``)
    """
    if base is None:
        base = DEFAULT_LOG_BASE
    if not math.isfinite(argument):
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION, f"{name}({argument}) is undefined"
        )
    # pi reaches here already rounded to a float, so tan(pi/2) is huge, not infinite
    if name == "tan" and abs(math.cos(argument)) < _TAN_POLE_TOLERANCE:
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION, f"tan({argument:g}) is undefined"
        )
    if name == "log" and (not math.isfinite(base) or base <= 0 or base == 1):
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION, f"Invalid logarithm base {base:g}"
        )
    try:
        result = sp.N(
            FUNCTIONS[name](_to_sympy(argument), _to_sympy(float(base))),
            _SYMPY_PRECISION,
        )
    except (TypeError, ValueError, ZeroDivisionError) as e:
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION, f"Cannot evaluate {name}: {e}"
        ) from e
    if not result.is_real or not result.is_finite:
        raise CalculationError(
            CalculatorError.INVALID_EXPRESSION,
            f"{name}({argument:g}) is undefined",
        )
    return float(result)


class _Desugarer:
    """Rewrites scanned lexemes into canonical tokens."""

    def __init__(self, lexemes: list[_Lexeme]):
        self.lexemes = lexemes

    def run(self) -> list[Token]:
        tokens: list[Token] = []
        ends_operand = False
        i = 0
        while i < len(self.lexemes):
            lexeme = self.lexemes[i]
            if lexeme.function is not None:
                value, next_i = self.apply(i)
                token = number(value)
                starts, ends = True, True
            else:
                token = lexeme.token
                next_i = i + 1
                starts, ends = self._operand_edges(lexeme)
            if lexeme.glued and ends_operand and starts:
                tokens.append(MULTIPLY)
            tokens.append(token)
            ends_operand = ends
            i = next_i
        return tokens

    @staticmethod
    def _operand_edges(lexeme: _Lexeme) -> tuple[bool, bool]:
        """Return (may follow an operand implicitly, may precede one implicitly)."""
        if lexeme.constant:
            return True, True
        kind = lexeme.token.kind
        if kind is TokenKind.NUMBER:
            return False, True
        if kind in (TokenKind.VARIABLE, TokenKind.LEFT_PARENTHESIS):
            return True, False
        if kind is TokenKind.RIGHT_PARENTHESIS:
            return False, True
        return False, False

    def apply(self, index: int) -> tuple[float, int]:
        """Evaluate the function application starting at ``index``.

        Returns:
            Tuple of (value, index of the first lexeme after the application)
        """
        lexeme = self.lexemes[index]
        name = lexeme.function
        following = index + 1
        if following < len(self.lexemes) and self.lexemes[following].is_kind(
            TokenKind.LEFT_PARENTHESIS
        ):
            close = self._matching_parenthesis(following)
            argument = self._evaluate_argument(name, self.lexemes[following + 1:close])
            next_index = close + 1
        else:
            operand = self._implicit_operand(name, following)
            if operand is not None:
                argument, next_index = operand
            elif lexeme.base is not None:
                # log10 on its own: the base is its own argument
                argument, next_index = lexeme.base, following
            else:
                raise CalculationError(
                    CalculatorError.PARSE_ERROR, f"Missing argument for {name}"
                )
        value = apply_function(name, argument, lexeme.base)
        logger.debug("Applied %s(%r) base %r = %r", name, argument, lexeme.base, value)
        return value, next_index

    def _implicit_operand(self, name: str, index: int) -> tuple[float, int] | None:
        if index >= len(self.lexemes):
            return None
        lexeme = self.lexemes[index]
        if lexeme.function is not None:
            return self.apply(index)
        if lexeme.is_kind(TokenKind.VARIABLE):
            raise CalculationError(
                CalculatorError.INVALID_EXPRESSION,
                f"Cannot apply {name} to the variable '{lexeme.token.value}'",
            )
        if not lexeme.is_kind(TokenKind.NUMBER):
            return None
        value = lexeme.token.value
        index += 1
        # 1.5pi: adjacent constants multiply into the operand
        while (
            index < len(self.lexemes)
            and self.lexemes[index].constant
            and self.lexemes[index].glued
        ):
            value *= self.lexemes[index].token.value
            index += 1
        return value, index

    def _matching_parenthesis(self, open_index: int) -> int:
        depth = 0
        for j in range(open_index, len(self.lexemes)):
            if self.lexemes[j].is_kind(TokenKind.LEFT_PARENTHESIS):
                depth += 1
            elif self.lexemes[j].is_kind(TokenKind.RIGHT_PARENTHESIS):
                depth -= 1
                if depth == 0:
                    return j
        raise CalculationError(CalculatorError.UNMATCHED_LEFT_PARENTHESIS)

    @staticmethod
    def _evaluate_argument(name: str, lexemes: list[_Lexeme]) -> float:
        if not lexemes:
            raise CalculationError(
                CalculatorError.PARSE_ERROR, f"Missing argument for {name}"
            )
        tokens = _Desugarer(lexemes).run()
        if any(token.kind is TokenKind.VARIABLE for token in tokens):
            raise CalculationError(
                CalculatorError.INVALID_EXPRESSION,
                f"Cannot apply {name} to an expression containing the variable",
            )
        return evaluate_infix(parse(tokens))


def lex(text: str) -> list[Token]:
    """Convert input text into a list of canonical tokens.

    Raises:
        CalculationError: PARSE_ERROR for over-long input or malformed
            numbers, UNEXPECTED_TOKEN for unrecognized characters, and any
            error raised while evaluating a function argument
    """
    if len(text) > MAX_INPUT_LENGTH:
        raise CalculationError(
            CalculatorError.PARSE_ERROR,
            f"Input too long (>{MAX_INPUT_LENGTH} characters)",
        )
    tokens = _Desugarer(_scan(text)).run()
    logger.debug("Lexed %r into %r", text, tokens)
    return tokens
