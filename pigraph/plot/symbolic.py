#-*- coding: utf-8 -*-
"""
symbolic layer on top of sympy.

    parsed = parse('x^2 + y^2 = 4')
    parsed.difference_expression().to_code(['x', 'y'])
    >>> '(x*x) + (y*y) - 4.0'

text is parsed with implicit multiplication and ^ as power.
Only the free symbols x and y are accepted and every parsed
expression must be printable as glsl, so whatever parse()
returns can be put into a fragment shader.

:author: keksnicoh
"""
from pigraph.gl.glsl import glsl_float

import sympy as sp
from sympy.parsing.sympy_parser import parse_expr, standard_transformations, \
                                       implicit_multiplication_application, convert_xor
from sympy.printing.glsl import GLSLPrinter
from sympy.printing.precedence import PRECEDENCE
from functools import lru_cache

X = sp.Symbol('x', real=True)
Y = sp.Symbol('y', real=True)
SYMBOLS = {'x': X, 'y': Y}

TRANSFORMS = standard_transformations + (
    implicit_multiplication_application,
    convert_xor,
)

LOCALS = {
    'x': X, 'y': Y,
    'e': sp.E, 'pi': sp.pi,
    'abs': sp.Abs, 'ln': sp.log,
}

# functions the glsl printer renders into builtin glsl functions
GLSL_FUNCTIONS = (
    sp.sin, sp.cos, sp.tan, sp.asin, sp.acos, sp.atan,
    sp.sinh, sp.cosh, sp.tanh,
    sp.exp, sp.log, sp.Abs, sp.floor, sp.ceiling, sp.sign,
)

# integer powers up to this exponent are unrolled into products
UNROLL_POW = 8

class ParseFailure(ValueError):
    pass


class ShaderCodePrinter(GLSLPrinter):
    """
    glsl printer which renders every number as float literal
    and integer powers without pow(). glsl pow() is undefined
    for negative bases.
    """
    def _print_Integer(self, expr):
        return glsl_float(int(expr))

    _print_Zero = _print_Integer
    _print_One = _print_Integer
    _print_NegativeOne = _print_Integer

    def _print_Rational(self, expr):
        return '({}/{})'.format(glsl_float(expr.p), glsl_float(expr.q))

    _print_Half = _print_Rational

    def _print_Float(self, expr):
        return glsl_float(float(expr))

    def _print_NumberSymbol(self, expr):
        return glsl_float(float(expr.evalf(17)))

    _print_Pi = _print_NumberSymbol
    _print_Exp1 = _print_NumberSymbol
    _print_GoldenRatio = _print_NumberSymbol
    _print_EulerGamma = _print_NumberSymbol
    _print_Catalan = _print_NumberSymbol

    def _print_Pow(self, expr):
        base, exp = expr.base, expr.exp
        if not exp.is_Integer:
            return super()._print_Pow(expr)

        n = int(exp)
        factor = self.parenthesize(base, PRECEDENCE['Mul'], strict=True)
        if abs(n) <= UNROLL_POW:
            product = '*'.join([factor] * abs(n))
            if n < 0:
                return '(1.0/({}))'.format(product)
            return '({})'.format(product)

        # pow(abs(b), n) carries the sign of b for odd n
        power = 'pow(abs({}), {})'.format(self._print(base), glsl_float(abs(n)))
        if n % 2:
            power = '(sign({})*{})'.format(self._print(base), power)
        if n < 0:
            return '(1.0/{})'.format(power)
        return power


_PRINTER = ShaderCodePrinter({'user_functions': {
    'sinh': 'sinh', 'cosh': 'cosh', 'tanh': 'tanh', 'sign': 'sign',
}})

def check_printable(expr, variables=('x', 'y')):
    """ raises ParseFailure if **expr** cannot be rendered as glsl
        over **variables**. """
    unknown = sorted(s.name for s in expr.free_symbols if s.name not in variables)
    if len(unknown):
        raise ParseFailure('unknown symbol(s): {}'.format(', '.join(unknown)))
    if expr.has(sp.zoo, sp.oo, -sp.oo, sp.nan, sp.I):
        raise ParseFailure('expression is not real valued and finite')
    if expr.has(sp.Derivative):
        raise ParseFailure('unevaluated derivative')
    for function in expr.atoms(sp.Function):
        if not isinstance(function, GLSL_FUNCTIONS):
            raise ParseFailure('function "{}" is not supported'.format(type(function).__name__))

def glsl_code(expr, variables=('x', 'y')):
    check_printable(expr, variables)
    return _PRINTER.doprint(expr)

def display_notation(expr):
    return sp.sstr(expr).replace('**', '^')


class Expression():
    """ a real valued expression over x and y """
    def __init__(self, expr):
        self.expr = sp.sympify(expr)

    def to_code(self, variables):
        return glsl_code(self.expr, tuple(variables))

    def to_display_notation(self):
        return display_notation(self.expr)

    def clone(self):
        return Expression(self.expr)

    def __eq__(self, other):
        return isinstance(other, Expression) and self.expr == other.expr

    def __hash__(self):
        return hash(('expression', self.expr))

    def __repr__(self):
        return 'Expression({})'.format(self.to_display_notation())


class Equation():
    """ lhs = rhs """
    def __init__(self, lhs, rhs):
        self.lhs = sp.sympify(lhs)
        self.rhs = sp.sympify(rhs)

    def difference_expression(self):
        return Expression(self.lhs - self.rhs)

    def to_display_notation(self):
        return '{} = {}'.format(display_notation(self.lhs), display_notation(self.rhs))

    def clone(self):
        return Equation(self.lhs, self.rhs)

    def __eq__(self, other):
        return isinstance(other, Equation) and (self.lhs, self.rhs) == (other.lhs, other.rhs)

    def __hash__(self):
        return hash(('equation', self.lhs, self.rhs))

    def __repr__(self):
        return 'Equation({})'.format(self.to_display_notation())


def _parse_side(text):
    text = text.strip()
    if not text:
        raise ParseFailure('empty side')
    try:
        expr = parse_expr(text, local_dict=dict(LOCALS), transformations=TRANSFORMS)
    except ParseFailure:
        raise
    except Exception as e:
        # the tokenizer and sympify report malformed input with
        # whatever exception happens to fit.
        raise ParseFailure('{}: {}'.format(type(e).__name__, e)) from e

    if not isinstance(expr, sp.Expr):
        raise ParseFailure('"{}" is not an expression'.format(text))

    # split symbols are created without assumptions
    expr = expr.subs({s: SYMBOLS[s.name] for s in expr.free_symbols if s.name in SYMBOLS})
    check_printable(expr)
    return expr

def parse_strict(text):
    """ parses **text** into an Equation (one "=") or an
        Expression. Raises ParseFailure. """
    parts = text.split('=')
    if len(parts) > 2:
        raise ParseFailure('more than one "="')
    if len(parts) == 2:
        return Equation(_parse_side(parts[0]), _parse_side(parts[1]))
    return Expression(_parse_side(text))

def parse(text):
    """ like parse_strict() but returns None on malformed input """
    try:
        return parse_strict(text)
    except ParseFailure:
        return None


def _simplify(expr):
    simplified = sp.simplify(expr)
    try:
        check_printable(simplified)
    except ParseFailure:
        return expr
    return simplified

def full_simplify(ast):
    """ simplifies an Equation or an Expression. The kind of
        the ast is preserved. """
    if isinstance(ast, Equation):
        return Equation(_simplify(ast.lhs), _simplify(ast.rhs))
    if isinstance(ast, Expression):
        return Expression(_simplify(ast.expr))
    raise TypeError('cannot simplify {!r}'.format(ast))

@lru_cache(maxsize=256)
def _derivative(expr, name):
    derivative = sp.diff(expr, SYMBOLS.get(name, sp.Symbol(name)))
    try:
        check_printable(derivative)
    except ParseFailure:
        return None
    return derivative

def differentiate(expression, with_respect_to):
    """ returns the derivative of **expression** or None if sympy
        cannot express it in printable form. """
    derivative = _derivative(expression.expr, with_respect_to)
    if derivative is None:
        return None
    return Expression(derivative)
