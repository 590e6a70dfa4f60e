"""Unit tests for lexer module."""

import math
import unittest

from kalkulator_mini.lexer import apply_function, lex
from kalkulator_mini.types import (
    EQUAL,
    LEFT_PARENTHESIS,
    MULTIPLY,
    PLUS,
    RIGHT_PARENTHESIS,
    CalculationError,
    CalculatorError,
    TokenKind,
    number,
    variable,
)


class TestScanning(unittest.TestCase):
    """Test plain tokenization."""

    def test_basic_arithmetic(self):
        self.assertEqual(lex("1 + 1"), [number(1), PLUS, number(1)])
        self.assertEqual(lex("1+1"), [number(1), PLUS, number(1)])

    def test_decimal_numbers(self):
        self.assertEqual(lex("0.5"), [number(0.5)])
        self.assertEqual(lex(".25"), [number(0.25)])

    def test_equation_tokens(self):
        self.assertEqual(
            lex("x = 2"), [variable("x"), EQUAL, number(2)]
        )

    def test_empty_input(self):
        self.assertEqual(lex(""), [])
        self.assertEqual(lex("   \t"), [])

    def test_postfix_numbers_stay_separate(self):
        self.assertEqual(lex("3 4 +"), [number(3), number(4), PLUS])

    def test_multi_letter_variable(self):
        self.assertEqual(lex("xy"), [variable("xy")])

    def test_unrecognized_character(self):
        with self.assertRaises(CalculationError) as ctx:
            lex("2 $ 3")
        self.assertEqual(ctx.exception.code, CalculatorError.UNEXPECTED_TOKEN)

    def test_malformed_number(self):
        with self.assertRaises(CalculationError) as ctx:
            lex("1.2.3")
        self.assertEqual(ctx.exception.code, CalculatorError.PARSE_ERROR)

    def test_input_length_limit(self):
        from kalkulator_mini.config import MAX_INPUT_LENGTH

        with self.assertRaises(CalculationError) as ctx:
            lex("1" * (MAX_INPUT_LENGTH + 1))
        self.assertEqual(ctx.exception.code, CalculatorError.PARSE_ERROR)


class TestImplicitMultiplication(unittest.TestCase):
    """Test synthesized multiplication between adjacent operands."""

    def test_number_variable(self):
        self.assertEqual(lex("2x"), [number(2), MULTIPLY, variable("x")])

    def test_number_constant(self):
        tokens = lex("1.5pi")
        self.assertEqual(len(tokens), 3)
        self.assertEqual(tokens[1], MULTIPLY)
        self.assertAlmostEqual(tokens[2].value, math.pi)

    def test_constant_variable(self):
        tokens = lex("pix")
        self.assertEqual(tokens[1:], [MULTIPLY, variable("x")])

    def test_number_parenthesis(self):
        self.assertEqual(
            lex("3(1)"),
            [number(3), MULTIPLY, LEFT_PARENTHESIS, number(1), RIGHT_PARENTHESIS],
        )

    def test_adjacent_groups(self):
        tokens = lex("(1)(2)")
        self.assertEqual(tokens[3], MULTIPLY)

    def test_whitespace_prevents_multiplication(self):
        self.assertEqual(lex("2 x"), [number(2), variable("x")])

    def test_number_before_function(self):
        self.assertEqual(lex("2cos(0)"), [number(2), MULTIPLY, number(1)])


class TestConstantsAndFunctions(unittest.TestCase):
    """Test constant substitution and function desugaring."""

    def test_constants(self):
        self.assertAlmostEqual(lex("pi")[0].value, math.pi)
        self.assertAlmostEqual(lex("e")[0].value, math.e)

    def test_parenthesized_argument(self):
        self.assertEqual(lex("cos(0)"), [number(1)])
        self.assertAlmostEqual(lex("tan(pi/4)")[0].value, 1.0)

    def test_implicit_argument(self):
        tokens = lex("sinpi")
        self.assertEqual(len(tokens), 1)
        self.assertAlmostEqual(tokens[0].value, 0.0)

    def test_implicit_argument_with_constant_product(self):
        self.assertAlmostEqual(lex("sin1.5pi")[0].value, -1.0)

    def test_nested_implicit_application(self):
        self.assertAlmostEqual(lex("coscos0")[0].value, math.cos(1.0))

    def test_log_default_base(self):
        self.assertAlmostEqual(lex("log(100)")[0].value, 2.0)
        self.assertAlmostEqual(lex("log 1000")[0].value, 3.0)

    def test_log_base_is_own_argument(self):
        self.assertAlmostEqual(lex("log10")[0].value, 1.0)

    def test_log_explicit_base(self):
        self.assertAlmostEqual(lex("log100(10)")[0].value, 0.5)
        self.assertAlmostEqual(lex("log2(8)")[0].value, 3.0)

    def test_natural_log(self):
        self.assertAlmostEqual(lex("ln(e)")[0].value, 1.0)

    def test_function_result_feeds_expression(self):
        self.assertEqual(
            [t.kind for t in lex("cos(0) + 1")],
            [TokenKind.NUMBER, TokenKind.PLUS, TokenKind.NUMBER],
        )

    def test_unclosed_argument(self):
        with self.assertRaises(CalculationError) as ctx:
            lex("sin(90")
        self.assertEqual(
            ctx.exception.code, CalculatorError.UNMATCHED_LEFT_PARENTHESIS
        )

    def test_missing_argument(self):
        for text in ("log", "sin", "sin()", "cos +"):
            with self.subTest(text=text):
                with self.assertRaises(CalculationError) as ctx:
                    lex(text)
                self.assertEqual(ctx.exception.code, CalculatorError.PARSE_ERROR)

    def test_argument_with_variable(self):
        for text in ("sin(x)", "sinx", "log(2x)"):
            with self.subTest(text=text):
                with self.assertRaises(CalculationError) as ctx:
                    lex(text)
                self.assertEqual(
                    ctx.exception.code, CalculatorError.INVALID_EXPRESSION
                )

    def test_domain_errors(self):
        for text in ("ln(0)", "log(-1)", "log1(5)", "log0(5)"):
            with self.subTest(text=text):
                with self.assertRaises(CalculationError) as ctx:
                    lex(text)
                self.assertEqual(
                    ctx.exception.code, CalculatorError.INVALID_EXPRESSION
                )

    def test_division_by_zero_in_argument(self):
        with self.assertRaises(CalculationError) as ctx:
            lex("sin(1/0)")
        self.assertEqual(ctx.exception.code, CalculatorError.DIVISION_BY_ZERO)


class TestApplyFunction(unittest.TestCase):
    """Test direct function evaluation."""

    def test_trigonometry(self):
        self.assertEqual(apply_function("sin", 0.0), 0.0)
        self.assertAlmostEqual(apply_function("cos", math.pi), -1.0)

    def test_logarithm_bases(self):
        self.assertAlmostEqual(apply_function("log", 1000.0), 3.0)
        self.assertAlmostEqual(apply_function("log", 9.0, 3.0), 2.0)
        self.assertAlmostEqual(apply_function("ln", math.e), 1.0)

    def test_tan_poles(self):
        for argument in (math.pi / 2, -math.pi / 2, 3 * math.pi / 2):
            with self.subTest(argument=argument):
                with self.assertRaises(CalculationError) as ctx:
                    apply_function("tan", argument)
                self.assertEqual(ctx.exception.code, CalculatorError.INVALID_EXPRESSION)
        self.assertAlmostEqual(apply_function("tan", math.pi / 4), 1.0)

    def test_tan_pole_inside_expression(self):
        with self.assertRaises(CalculationError) as ctx:
            lex("2 * tan(pi/2)")
        self.assertEqual(ctx.exception.code, CalculatorError.INVALID_EXPRESSION)

    def test_non_finite_argument(self):
        with self.assertRaises(CalculationError):
            apply_function("sin", float("inf"))


if __name__ == "__main__":
    unittest.main()
