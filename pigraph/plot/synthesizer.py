#-*- coding: utf-8 -*-
"""
fragment shader synthesis.

synthesize() renders the list of graph entries into the source
of one fragment shader. The shader draws the background, the
grid and the axes and then tests every valid entry in list order,
so the last matching entry wins a pixel.

    implicit  f(x, y) = 0    abs(f(x, y)) < EPSILON * GRAPH_THICKNESS
    explicit  y = f(x)       abs(y - f(x)) < EPSILON * GRAPH_THICKNESS * max(abs(f'(x)), 1)

the derivative widens the band where the graph is steep so the
line keeps its thickness on screen. If sympy cannot differentiate
f the explicit test falls back to the band without f'(x).

synthesize() is a pure function of its arguments. pick() runs the
same acceptance tests on the host for a single world point.

:author: keksnicoh
"""
from pigraph.common.helper import load_lib_file
from pigraph.gl.glsl import glsl_float, glsl_vec3
from pigraph.gl.shader import VERSION_DIRECTIVE
from pigraph.plot import grid, symbolic
from pigraph.plot.entry import ParsedEquation, ParsedFunction
from pigraph.plot.style import load_style

import numpy as np
import sympy as sp
from functools import lru_cache

FRAGMENT_TEMPLATE = load_lib_file('plot/shaders/graph.frg.glsl')

IMPLICIT_BLOCK = """
    // {notation}
    val = {code};
    if (abs(val) < EPSILON * GRAPH_THICKNESS) color = {color};
"""

EXPLICIT_BLOCK = """
    // {notation}
    val = {code};
    if (abs(y - val) < EPSILON * GRAPH_THICKNESS) color = {color};
"""

EXPLICIT_SLOPE_BLOCK = """
    // {notation}
    val = {code};
    dval = {derivative};
    if (abs(y - val) < EPSILON * GRAPH_THICKNESS * max(abs(dval), 1.0)) color = {color};
"""

class Kernel():
    """
    shader code and host evaluation of one simplified ast.
    for explicit functions **derivative** is the simplified
    derivative or None.
    """
    def __init__(self, explicit, expression, derivative=None):
        self.explicit = explicit
        self.expression = expression
        self.derivative = derivative
        variables = ['x'] if explicit else ['x', 'y']
        self.code = expression.to_code(variables)
        self.derivative_code = derivative.to_code(['x']) if derivative is not None else None
        self._f = sp.lambdify((symbolic.X, symbolic.Y), expression.expr, 'numpy')
        self._df = None
        if derivative is not None:
            self._df = sp.lambdify((symbolic.X, symbolic.Y), derivative.expr, 'numpy')

    def value(self, x, y):
        with np.errstate(all='ignore'):
            return float(self._f(np.float64(x), np.float64(y)))

    def slope(self, x):
        if self._df is None:
            return None
        with np.errstate(all='ignore'):
            return float(self._df(np.float64(x), np.float64(0.0)))

    def band(self, x, epsilon, graph_thickness):
        """ half width of the acceptance band at **x** """
        slope = self.slope(x) if self.explicit else None
        if slope is None:
            return epsilon * graph_thickness
        return epsilon * graph_thickness * max(abs(slope), 1.0)

    def accepts(self, x, y, epsilon, graph_thickness):
        value = self.value(x, y)
        if self.explicit:
            value = y - value
        return abs(value) < self.band(x, epsilon, graph_thickness)


@lru_cache(maxsize=256)
def _kernel(kind, ast):
    if kind is ParsedFunction:
        derivative = symbolic.differentiate(ast, 'x')
        if derivative is not None:
            derivative = symbolic.full_simplify(derivative)
        return Kernel(True, ast, derivative)
    return Kernel(False, ast.difference_expression())

def kernel(entry):
    """ Kernel of a valid entry """
    if not entry.is_valid:
        raise ValueError('{!r} has no simplified ast'.format(entry))
    kind = type(entry.result)
    if kind is ParsedFunction and isinstance(entry.simplified, symbolic.Expression):
        return _kernel(ParsedFunction, entry.simplified)
    if kind is ParsedEquation and isinstance(entry.simplified, symbolic.Equation):
        return _kernel(ParsedEquation, entry.simplified)
    raise ValueError('malformed entry {!r}: {} with {!r}'.format(entry, kind.__name__, entry.simplified))

def entry_block(entry):
    """ glsl block testing one entry. Empty for entries without
        a simplified ast. """
    if not entry.is_valid:
        return ''

    k = kernel(entry)
    notation = entry.display_notation()
    color = glsl_vec3(entry.color)
    if not k.explicit:
        return IMPLICIT_BLOCK.format(notation=notation, code=k.code, color=color)
    if k.derivative_code is None:
        return EXPLICIT_BLOCK.format(notation=notation, code=k.code, color=color)
    return EXPLICIT_SLOPE_BLOCK.format(notation=notation, code=k.code,
                                       derivative=k.derivative_code, color=color)

def synthesize(entries, graph_thickness, style=None):
    """ renders the fragment shader source for **entries** """
    style = style if style is not None else load_style()
    blocks = [entry_block(e) for e in entries]

    substitutions = {
        'VERSION':          VERSION_DIRECTIVE,
        'ENTRY_COUNT':      str(sum(1 for b in blocks if b)),
        'GRAPH_THICKNESS':  glsl_float(graph_thickness),
        'GRID_MIN_PIXELS':  glsl_float(grid.MIN_PIXELS),
        'GRID_MAX_PIXELS':  glsl_float(grid.MAX_PIXELS),
        'GRID_MAJOR_EVERY': glsl_float(grid.MAJOR_EVERY),
        'GRID_MAX_STEPS':   str(grid.MAX_STEPS),
        'BACKGROUND_COLOR': glsl_vec3(style['background-color']),
        'GRID_MINOR_COLOR': glsl_vec3(style['grid-minor-color']),
        'GRID_MAJOR_COLOR': glsl_vec3(style['grid-major-color']),
        'AXIS_COLOR':       glsl_vec3(style['axis-color']),
        'ENTRIES':          ''.join(blocks),
    }

    source = FRAGMENT_TEMPLATE
    for n, v in substitutions.items():
        source = source.replace('${'+n+'}', v)
    return source

def pick(entries, x, y, epsilon, graph_thickness):
    """ the entry the shader draws at world point (x, y), or None """
    picked = None
    for entry in entries:
        if entry.is_valid and kernel(entry).accepts(x, y, epsilon, graph_thickness):
            picked = entry
    return picked
