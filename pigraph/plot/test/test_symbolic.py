#-*- coding: utf-8 -*-

import unittest
from unittest_data_provider import data_provider

from pigraph.plot import symbolic
from pigraph.plot.symbolic import Expression, Equation, ParseFailure
from pigraph.plot.test.oracle import evaluate_glsl

import math

class TestParse(unittest.TestCase):
    valid = lambda: (
        ('x^2 + y^2 = 4', Equation),
        ('y = sin(x)', Equation),
        ('y = 2x', Equation),
        ('x*y', Expression),
        ('sin x', Expression),
        ('ln(x) + e^x', Expression),
        ('abs(x) = pi', Equation),
    )

    @data_provider(valid)
    def test_parse(self, text, kind):
        self.assertIsInstance(symbolic.parse_strict(text), kind)

    invalid = lambda: (
        ('',),
        ('x = ',),
        ('x = y = 1',),
        ('x +* 2',),
        ('z + x',),
        ('1/0',),
        ('sqrt(-1)',),
        ('(x',),
        ('gamma(x)',),
    )

    @data_provider(invalid)
    def test_parse_invalid(self, text):
        with self.assertRaises(ParseFailure):
            symbolic.parse_strict(text)
        self.assertIsNone(symbolic.parse(text))

    def test_implicit_multiplication(self):
        parsed = symbolic.parse_strict('2x y')
        self.assertEqual(parsed.expr, 2 * symbolic.X * symbolic.Y)

    def test_symbols_are_real(self):
        parsed = symbolic.parse_strict('x + y')
        self.assertEqual({s.name for s in parsed.expr.free_symbols}, {'x', 'y'})
        self.assertTrue(all(s.is_real for s in parsed.expr.free_symbols))

    def test_equation_difference(self):
        parsed = symbolic.parse_strict('x^2 + y^2 = 4')
        self.assertEqual(parsed.difference_expression().expr,
                         symbolic.X**2 + symbolic.Y**2 - 4)

    def test_display_notation(self):
        self.assertEqual(symbolic.parse_strict('x^2').to_display_notation(), 'x^2')
        self.assertEqual(symbolic.parse_strict('y = x^3').to_display_notation(), 'y = x^3')

    def test_equality_and_clone(self):
        a = symbolic.parse_strict('x^2 + y = 1')
        b = a.clone()
        self.assertIsNot(a, b)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertNotEqual(a, symbolic.parse_strict('x^2 + y = 2'))
        self.assertNotEqual(a.difference_expression(), a)


class TestGlslCode(unittest.TestCase):
    samples = lambda: (
        ('x^2', 3.0, 0.0),
        ('x^3', -2.0, 0.0),
        ('x^-2', 2.0, 0.0),
        ('x^10', -1.5, 0.0),
        ('x^11', -1.5, 0.0),
        ('x^-9', -1.5, 0.0),
        ('(x + 1)^2 - y', 0.5, 2.0),
        ('x/3', 2.0, 0.0),
        ('sqrt(x)', 2.0, 0.0),
        ('x^(1/3)', 8.0, 0.0),
        ('sin(x) cos(y)', 0.3, 0.7),
        ('tanh(x) + sinh(y)', 0.3, 0.7),
        ('abs(x) + sign(y)', -2.0, -3.0),
        ('e^x + ln(y)', 1.0, 2.0),
        ('pi x', 2.0, 0.0),
        ('floor(x) + ceiling(y)', 1.5, 1.5),
    )

    @data_provider(samples)
    def test_code_evaluates_like_sympy(self, text, x, y):
        parsed = symbolic.parse_strict(text)
        expected = float(parsed.expr.subs({symbolic.X: x, symbolic.Y: y}))
        code = parsed.to_code(['x', 'y'])
        self.assertAlmostEqual(evaluate_glsl(code, x, y), expected, places=9)

    def test_integer_powers_are_unrolled(self):
        code = symbolic.parse_strict('x^3').to_code(['x'])
        self.assertNotIn('pow', code)
        self.assertEqual(code, '(x*x*x)')

    def test_large_powers_keep_sign(self):
        code = symbolic.parse_strict('x^11').to_code(['x'])
        self.assertIn('sign(x)', code)
        self.assertLess(evaluate_glsl(code, -1.0), 0)

    def test_numbers_are_floats(self):
        code = symbolic.parse_strict('2x + 1').to_code(['x'])
        self.assertIn('2.0', code)
        self.assertIn('1.0', code)

    def test_foreign_variable(self):
        with self.assertRaises(ParseFailure):
            symbolic.parse_strict('x + y').to_code(['x'])


class TestSimplifyAndDerivative(unittest.TestCase):
    def test_simplify_keeps_kind(self):
        eq = symbolic.full_simplify(symbolic.parse_strict('x^2 + 2x + 1 = (x+1)^2 + y'))
        self.assertIsInstance(eq, Equation)
        ex = symbolic.full_simplify(symbolic.parse_strict('sin(x)^2 + cos(x)^2'))
        self.assertIsInstance(ex, Expression)
        self.assertEqual(ex.expr, 1)

    def test_simplify_rejects_other(self):
        with self.assertRaises(TypeError):
            symbolic.full_simplify('x')

    derivatives = lambda: (
        ('x^3', 2.0, 12.0),
        ('sin(x)', 0.0, 1.0),
        ('e^(2x)', 0.0, 2.0),
        ('abs(x)', -3.0, -1.0),
        ('5', 1.0, 0.0),
    )

    @data_provider(derivatives)
    def test_differentiate(self, text, x, slope):
        derivative = symbolic.differentiate(symbolic.parse_strict(text), 'x')
        self.assertIsNotNone(derivative)
        self.assertAlmostEqual(evaluate_glsl(derivative.to_code(['x']), x), slope, places=9)

    def test_differentiate_unprintable(self):
        self.assertIsNone(symbolic.differentiate(symbolic.parse_strict('sign(x)'), 'x'))

    def test_differentiate_is_cached(self):
        parsed = symbolic.parse_strict('x^5 + sin(x)')
        first = symbolic.differentiate(parsed, 'x')
        second = symbolic.differentiate(parsed.clone(), 'x')
        self.assertEqual(first, second)
        self.assertIs(first.expr, second.expr)
