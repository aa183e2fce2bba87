import ast
import math
import random
import struct
import unittest
import sys
from concurrent.futures import ThreadPoolExecutor
from fractions import Fraction
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from evaluation_errors import (
    DivisionByZeroError,
    EvaluationError,
    InsufficientOperandsError,
    InvalidExpressionError,
    InvalidNumberError,
    MismatchedParenthesesError,
    UnknownFunctionError,
    UnknownOperatorError,
)
from expression_evaluator import EvaluationResult, ExpressionEvaluator, evaluate


def _reference(expr):
    """Evalúa con aritmética racional exacta usando la gramática de Python."""
    ops = {
        ast.Add: lambda a, b: a + b,
        ast.Sub: lambda a, b: a - b,
        ast.Mult: lambda a, b: a * b,
        ast.Div: lambda a, b: a / b,
    }

    def walk(node):
        if isinstance(node, ast.Expression):
            return walk(node.body)
        if isinstance(node, ast.Constant):
            return Fraction(node.value)
        if isinstance(node, ast.BinOp):
            return ops[type(node.op)](walk(node.left), walk(node.right))
        raise ValueError(f"Unsupported node: {type(node).__name__}")

    return walk(ast.parse(expr, mode="eval"))


def _random_expression(rng):
    parts = []
    for i in range(rng.randint(2, 4)):
        if i:
            parts.append(rng.choice("+-*/"))
        if rng.random() < 0.3:
            parts.append(
                f"({rng.randint(1, 9)}{rng.choice('+-*/')}{rng.randint(1, 9)})"
            )
        else:
            parts.append(str(rng.randint(1, 9)))
    return " ".join(parts)


class TestEvaluate(unittest.TestCase):
    def assertValue(self, expr, expected):
        result = evaluate(expr)
        self.assertTrue(result.ok, f"{expr!r} failed: {result.error}")
        self.assertAlmostEqual(result.value, expected, places=12)

    def assertError(self, expr, error_type):
        result = evaluate(expr)
        self.assertFalse(result.ok, f"{expr!r} returned {result.value}")
        self.assertIsInstance(result.error, error_type)
        return result.error

    def test_basic_arithmetic(self):
        self.assertValue("2+3", 5)
        self.assertValue("2+3*4", 14)
        self.assertValue("(2+3)*4", 20)
        self.assertValue("10-4-3", 3)
        self.assertValue("100/10/5", 2)
        self.assertValue("7/2", 3.5)
        self.assertValue(" 1.5 + .5 ", 2)
        self.assertValue("1.", 1)

    def test_power_right_associative(self):
        self.assertValue("2^3^2", 512)
        self.assertValue("(2^3)^2", 64)
        self.assertValue("2^0.5", math.sqrt(2))
        self.assertValue("2^-1", 0.5)

    def test_unary_negation(self):
        self.assertValue("-5+3", -2)
        self.assertValue("3-(-2)", 5)
        self.assertValue("2*-3", -6)
        self.assertValue("-(2+3)", -5)
        self.assertValue("-2^2", 4)
        self.assertValue("-sqrt(4)", -2)

    def test_functions(self):
        self.assertValue("sqrt(16)", 4)
        self.assertValue("sin(0)", 0)
        self.assertValue("cos(0)", 1)
        self.assertValue("tan(0)", 0)
        self.assertValue("sin(3.14159265358979/2)", 1)
        self.assertValue("sqrt(9)+sqrt(16)", 7)
        self.assertValue("2*sqrt(sqrt(16))", 4)

    def test_modulo_uses_sign_of_dividend(self):
        self.assertValue("7%3", 1)
        self.assertValue("7.5%2", 1.5)
        self.assertValue("-7%3", -1)
        self.assertValue("7%-3", 1)
        self.assertValue("2+3%2", 3)
        self.assertError("5%0", DivisionByZeroError)

    def test_ieee_results(self):
        self.assertTrue(math.isnan(evaluate("sqrt(-1)").value))
        self.assertTrue(math.isnan(evaluate("(0-8)^(1/3)").value))
        self.assertEqual(evaluate("10^400").value, math.inf)
        self.assertEqual(evaluate("-10^401").value, -math.inf)
        self.assertEqual(evaluate("0^(-1)").value, math.inf)
        self.assertEqual(evaluate("(-0)^(-1)").value, -math.inf)
        self.assertEqual(evaluate("(0-10)^400").value, math.inf)

    def test_domain_errors_give_nan(self):
        self.assertTrue(math.isnan(evaluate("sin(10^400)").value))
        self.assertTrue(math.isnan(evaluate("cos(10^400)").value))
        self.assertTrue(math.isnan(evaluate("tan(10^400)").value))
        self.assertTrue(math.isnan(evaluate("(10^400)%2").value))
        self.assertValue("2%(10^400)", 2)

    def test_division_by_zero(self):
        err = self.assertError("5/0", DivisionByZeroError)
        self.assertEqual(err.message, "Division by zero")
        self.assertError("5/(2-2)", DivisionByZeroError)
        self.assertValue("0/5", 0)

    def test_mismatched_parentheses(self):
        err = self.assertError("(1+2", MismatchedParenthesesError)
        self.assertEqual(str(err), "Mismatched parentheses")
        self.assertError("1+2)", MismatchedParenthesesError)
        self.assertError("sqrt(4", MismatchedParenthesesError)

    def test_unknown_function(self):
        err = self.assertError("foo(1)", UnknownFunctionError)
        self.assertEqual(err.name, "foo")
        self.assertEqual(err.message, "Unknown function: foo")
        self.assertError("2*x", UnknownFunctionError)

    def test_unknown_operator(self):
        err = self.assertError("2&3", UnknownOperatorError)
        self.assertEqual(err.symbol, "&")
        self.assertEqual(err.message, "Unknown operator: &")

    def test_insufficient_operands(self):
        err = self.assertError("1+", InsufficientOperandsError)
        self.assertEqual(err.message, "Invalid expression")
        self.assertError("*2", InsufficientOperandsError)
        err = self.assertError("sqrt()", InsufficientOperandsError)
        self.assertEqual(err.message, "Invalid function call")
        self.assertError("--5", InsufficientOperandsError)
        # Sin operandos no se llega a comprobar el nombre
        self.assertError("foo", InsufficientOperandsError)

    def test_invalid_expression(self):
        for expr in ("", "   ", "1 2", "3 4", "()", "(1)(2)"):
            with self.subTest(expr=expr):
                self.assertError(expr, InvalidExpressionError)
        self.assertError(None, InvalidExpressionError)

    def test_invalid_number(self):
        err = self.assertError("1.2.3", InvalidNumberError)
        self.assertEqual(err.text, "1.2.3")
        self.assertEqual(err.message, "Invalid number: 1.2.3")
        self.assertError(".", InvalidNumberError)
        self.assertError("2+..", InvalidNumberError)

    def test_all_errors_are_value_errors(self):
        for expr in ("5/0", "(1", "foo(1)", "", "1.2.3", "1+", "2&3"):
            with self.subTest(expr=expr):
                error = evaluate(expr).error
                self.assertIsInstance(error, EvaluationError)
                self.assertIsInstance(error, ValueError)

    def test_idempotent(self):
        for expr in ("2^3^2", "sin(1)/3", "sqrt(2)*sqrt(2)", "0.1+0.2", "-7%3"):
            first = struct.pack("<d", evaluate(expr).value)
            for _ in range(5):
                self.assertEqual(struct.pack("<d", evaluate(expr).value), first)

    def test_concurrent_calls(self):
        exprs = ["1+2*3", "sqrt(2)", "5/0", "(1", "2^10", "-4%3"] * 50
        expected = [evaluate(e) for e in exprs]
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(evaluate, exprs))
        for exp, res in zip(expected, results):
            self.assertEqual(exp.value, res.value)
            self.assertIs(type(exp.error), type(res.error))

    def test_matches_rational_reference(self):
        rng = random.Random(20240611)
        for _ in range(500):
            expr = _random_expression(rng)
            with self.subTest(expr=expr):
                try:
                    expected = _reference(expr)
                except ZeroDivisionError:
                    self.assertError(expr, DivisionByZeroError)
                    continue
                result = evaluate(expr)
                self.assertTrue(result.ok, f"{expr!r} failed: {result.error}")
                self.assertTrue(
                    math.isclose(
                        result.value, float(expected), rel_tol=1e-9, abs_tol=1e-6
                    ),
                    f"{expr!r}: {result.value} != {float(expected)}",
                )


class TestEvaluationResult(unittest.TestCase):
    def test_ok_result(self):
        result = evaluate("1+1")
        self.assertIsInstance(result, EvaluationResult)
        self.assertTrue(result.ok)
        self.assertIsNone(result.error)
        self.assertEqual(result.unwrap(), 2)

    def test_error_result(self):
        result = evaluate("5/0")
        self.assertFalse(result.ok)
        self.assertIsNone(result.value)
        with self.assertRaises(DivisionByZeroError):
            result.unwrap()


class TestCalculate(unittest.TestCase):
    def test_calculate_returns_float(self):
        self.assertEqual(ExpressionEvaluator().calculate("2+3"), 5.0)

    def test_calculate_raises(self):
        with self.assertRaises(DivisionByZeroError):
            ExpressionEvaluator().calculate("5/0")
        with self.assertRaises(ValueError):
            ExpressionEvaluator().calculate("foo(1)")

    def test_eval_postfix_rejects_parentheses(self):
        ev = ExpressionEvaluator()
        with self.assertRaises(MismatchedParenthesesError):
            ev.eval_postfix(ev.tokenize("(1)"))


if __name__ == "__main__":
    unittest.main()
