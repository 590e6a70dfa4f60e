"""Unit tests for parser module."""

import unittest

from kalkulator_mini.lexer import lex
from kalkulator_mini.parser import parse, parse_expression
from kalkulator_mini.types import (
    RIGHT_PARENTHESIS,
    BinOp,
    CalculationError,
    CalculatorError,
    Num,
    Operator,
    Var,
    number,
)


class TestParse(unittest.TestCase):
    """Test tree construction."""

    def test_single_number(self):
        self.assertEqual(parse(lex("42")), Num(42.0))

    def test_variable(self):
        self.assertEqual(parse(lex("x")), Var("x"))

    def test_precedence(self):
        self.assertEqual(
            parse(lex("1 + 2 * 3")),
            BinOp(Num(1.0), Operator.ADD, BinOp(Num(2.0), Operator.MUL, Num(3.0))),
        )

    def test_parentheses(self):
        self.assertEqual(
            parse(lex("2 * (3 + 4)")),
            BinOp(Num(2.0), Operator.MUL, BinOp(Num(3.0), Operator.ADD, Num(4.0))),
        )

    def test_left_associativity(self):
        self.assertEqual(
            parse(lex("8 - 3 - 2")),
            BinOp(BinOp(Num(8.0), Operator.SUB, Num(3.0)), Operator.SUB, Num(2.0)),
        )
        self.assertEqual(
            parse(lex("8 / 4 / 2")),
            BinOp(BinOp(Num(8.0), Operator.DIV, Num(4.0)), Operator.DIV, Num(2.0)),
        )

    def test_unary_minus(self):
        self.assertEqual(parse(lex("-3")), Num(-3.0))
        self.assertEqual(parse(lex("--3")), Num(3.0))
        self.assertEqual(parse(lex("+3")), Num(3.0))
        self.assertEqual(
            parse(lex("-x")), BinOp(Num(-1.0), Operator.MUL, Var("x"))
        )

    def test_unary_minus_binds_to_factor(self):
        self.assertEqual(
            parse(lex("2 * -3")), BinOp(Num(2.0), Operator.MUL, Num(-3.0))
        )


class TestParseExpression(unittest.TestCase):
    """Test partial parsing with leftover tokens."""

    def test_returns_remaining_tokens(self):
        node, rest = parse_expression(lex("1 + 2 ) 3"))
        self.assertEqual(node, BinOp(Num(1.0), Operator.ADD, Num(2.0)))
        self.assertEqual(list(rest), [RIGHT_PARENTHESIS, number(3)])

    def test_consumes_everything(self):
        _, rest = parse_expression(lex("(1 + 2) * 3"))
        self.assertEqual(list(rest), [])


class TestParseErrors(unittest.TestCase):
    """Test error selection for malformed input."""

    def assertParseError(self, text, code):
        with self.assertRaises(CalculationError) as ctx:
            parse(lex(text))
        self.assertEqual(ctx.exception.code, code, text)

    def test_empty(self):
        with self.assertRaises(CalculationError) as ctx:
            parse([])
        self.assertEqual(ctx.exception.code, CalculatorError.EMPTY_EXPRESSION)

    def test_trailing_operator(self):
        self.assertParseError("2 +", CalculatorError.PARSE_ERROR)
        self.assertParseError("2 * -", CalculatorError.PARSE_ERROR)

    def test_missing_left_operand(self):
        self.assertParseError("* 2", CalculatorError.PARSE_ERROR)
        self.assertParseError("2 + / 3", CalculatorError.PARSE_ERROR)

    def test_unmatched_left_parenthesis(self):
        self.assertParseError("2 * (3 + 4", CalculatorError.UNMATCHED_LEFT_PARENTHESIS)
        self.assertParseError("(", CalculatorError.UNMATCHED_LEFT_PARENTHESIS)
        self.assertParseError("((1)", CalculatorError.UNMATCHED_LEFT_PARENTHESIS)

    def test_unmatched_right_parenthesis(self):
        self.assertParseError("2)", CalculatorError.UNMATCHED_RIGHT_PARENTHESIS)
        self.assertParseError(")", CalculatorError.UNMATCHED_RIGHT_PARENTHESIS)
        self.assertParseError("(1))", CalculatorError.UNMATCHED_RIGHT_PARENTHESIS)

    def test_empty_group(self):
        self.assertParseError("()", CalculatorError.PARSE_ERROR)

    def test_extra_tokens(self):
        self.assertParseError("2 3", CalculatorError.EXTRA_TOKENS_DETECTED)
        self.assertParseError("(3 4)", CalculatorError.EXTRA_TOKENS_DETECTED)
        self.assertParseError("1 + 1 = 2", CalculatorError.EXTRA_TOKENS_DETECTED)

    def test_equal_in_operand_position(self):
        self.assertParseError("= 2", CalculatorError.UNEXPECTED_TOKEN)

    def test_too_deep_nesting(self):
        from kalkulator_mini.config import MAX_EXPRESSION_DEPTH

        depth = MAX_EXPRESSION_DEPTH + 1
        self.assertParseError(
            "(" * depth + "1" + ")" * depth, CalculatorError.PARSE_ERROR
        )


if __name__ == "__main__":
    unittest.main()
