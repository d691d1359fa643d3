#-*- coding: utf-8 -*-

import unittest
from unittest_data_provider import data_provider

from pigraph.gl.glsl import find_uniforms
from pigraph.plot import symbolic
from pigraph.plot.entry import GraphEntry, GraphSession
from pigraph.plot.synthesizer import synthesize, entry_block, kernel, pick
from pigraph.plot.test.oracle import evaluate_glsl
from pigraph.plot.view import ViewTransform

import numpy as np
import re

EPSILON = 0.01
THICKNESS = 2.0

def block_lines(block, name):
    return re.findall(r'^\s*' + name + r' = (.*);$', block, flags=re.MULTILINE)

class TestSynthesize(unittest.TestCase):
    def test_empty_session(self):
        source = synthesize([], THICKNESS)
        self.assertTrue(source.startswith('#version 330 core'))
        self.assertNotIn('${', source)
        self.assertIn('// pigraph: 0 graph(s)', source)
        self.assertEqual(set(find_uniforms(source)),
                         {'viewStart', 'viewSize', 'EPSILON', 'iResolution', 'iTime', 'iMouse'})

    def test_entries_in_order(self):
        session = GraphSession()
        session.add('y = x', color=(1, 0, 0))
        session.add('nonsense +* 3')
        session.add('x^2 + y^2 = 4', color=(0, 0, 1))
        source = synthesize(session.entries, THICKNESS)

        self.assertIn('// pigraph: 2 graph(s)', source)
        self.assertLess(source.index('vec3(1.0, 0.0, 0.0)'), source.index('vec3(0.0, 0.0, 1.0)'))
        self.assertNotIn('nonsense', source)

    def test_idempotent(self):
        entries = [GraphEntry(0, 'y = sin(x)'), GraphEntry(1, 'x y = 1')]
        self.assertEqual(synthesize(entries, THICKNESS), synthesize(entries, THICKNESS))

    def test_remove_and_add_again(self):
        session = GraphSession()
        session.add('y = x^2')
        entry = session.add('x = 3', color=(0, 1, 0))
        before = synthesize(session.entries, THICKNESS)

        session.edit(entry, '')
        self.assertEqual(session.prune(), [entry])
        self.assertNotEqual(synthesize(session.entries, THICKNESS), before)

        session.add('x = 3', color=(0, 1, 0))
        self.assertEqual(synthesize(session.entries, THICKNESS), before)

    def test_thickness(self):
        self.assertIn('const float GRAPH_THICKNESS = 3.5;', synthesize([], 3.5))


class TestEntryBlock(unittest.TestCase):
    samples = lambda: (
        ('x^2 + y^2 = 4', 2.0, 0.0),
        ('x^2 + y^2 = 4', 0.0, 0.0),
        ('y = x^3 - 2x', 1.5, 0.0),
        ('sin(x) = cos(y)', 0.4, 1.1),
        ('y = e^x', -1.0, 0.0),
        ('x y - 1', 3.0, 0.5),
    )

    @data_provider(samples)
    def test_block_matches_kernel(self, text, x, y):
        entry = GraphEntry(0, text)
        block = entry_block(entry)
        k = kernel(entry)
        code, = block_lines(block, 'val')
        self.assertAlmostEqual(evaluate_glsl(code, x, y), k.value(x, y), places=6)

    def test_empty_and_invalid(self):
        self.assertEqual(entry_block(GraphEntry(0, '')), '')
        self.assertEqual(entry_block(GraphEntry(0, 'x +* 1')), '')

    def test_implicit_block(self):
        block = entry_block(GraphEntry(0, 'x^2 + y^2 = 4', color=(0, 1, 0)))
        self.assertIn('// x^2 + y^2 = 4', block)
        self.assertIn('abs(val) < EPSILON * GRAPH_THICKNESS', block)
        self.assertIn('color = vec3(0.0, 1.0, 0.0);', block)
        self.assertEqual(block_lines(block, 'dval'), [])

    def test_explicit_block_with_slope(self):
        block = entry_block(GraphEntry(0, 'y = x^3'))
        code, = block_lines(block, 'val')
        slope, = block_lines(block, 'dval')
        self.assertNotIn('y', code)
        self.assertAlmostEqual(evaluate_glsl(slope, 2.0), 12.0)
        self.assertIn('max(abs(dval), 1.0)', block)

    def test_explicit_block_without_slope(self):
        block = entry_block(GraphEntry(0, 'y = sign(x)'))
        self.assertEqual(block_lines(block, 'dval'), [])
        self.assertIn('abs(y - val) < EPSILON * GRAPH_THICKNESS)', block)

    def test_kernel_is_shared(self):
        self.assertIs(kernel(GraphEntry(0, 'y = x^2')), kernel(GraphEntry(7, 'y = x^2')))

    def test_kernel_of_invalid(self):
        with self.assertRaises(ValueError):
            kernel(GraphEntry(0, 'x +* 1'))


class TestAcceptance(unittest.TestCase):
    def test_circle(self):
        entry = GraphEntry(0, 'x^2 + y^2 = 4')
        self.assertTrue(kernel(entry).accepts(2.0, 0.0, EPSILON, THICKNESS))
        self.assertFalse(kernel(entry).accepts(0.0, 0.0, EPSILON, THICKNESS))

    def test_circle_through_view(self):
        view = ViewTransform(zoom=5, viewport=(500, 500))
        np.testing.assert_allclose(view.state.origin, (-2.5, -2.5))
        epsilon = view.state.epsilon
        self.assertAlmostEqual(epsilon, EPSILON)

        entry = GraphEntry(0, 'x^2 + y^2 - 4')
        x, y = view.to_world((0.9, 0.5))
        self.assertIs(pick([entry], x, y, epsilon, THICKNESS), entry)
        x, y = view.to_world((0.5, 0.5))
        self.assertIsNone(pick([entry], x, y, epsilon, THICKNESS))

    def test_steep_band(self):
        k = kernel(GraphEntry(0, 'y = x^3'))
        self.assertAlmostEqual(k.band(3.0, EPSILON, THICKNESS), EPSILON * THICKNESS * 27)
        self.assertAlmostEqual(k.band(0.0, EPSILON, THICKNESS), EPSILON * THICKNESS)
        self.assertTrue(k.accepts(3.0, 27.3, EPSILON, THICKNESS))
        self.assertFalse(k.accepts(0.0, 0.3, EPSILON, THICKNESS))

    def test_implicit_band_is_flat(self):
        k = kernel(GraphEntry(0, 'y - x^3 = 0'))
        self.assertAlmostEqual(k.band(3.0, EPSILON, THICKNESS), EPSILON * THICKNESS)

    def test_pick_last_wins(self):
        a = GraphEntry(0, 'y = x')
        b = GraphEntry(1, 'x = y')
        c = GraphEntry(2, 'y = -x')
        self.assertIs(pick([a, b, c], 1.0, 1.0, EPSILON, THICKNESS), b)
        self.assertIs(pick([a, b, c], 0.0, 0.0, EPSILON, THICKNESS), c)
        self.assertIsNone(pick([a, b, c], 1.0, 0.0, EPSILON, THICKNESS))
        self.assertIsNone(pick([GraphEntry(3, '')], 0.0, 0.0, EPSILON, THICKNESS))

    implicit_texts = lambda: (
        ('x^2 + y^2 = 4', ),
        ('x y = 1', ),
        ('sin(x) = y', ),
        ('y^2 = x^3 - x', ),
    )

    @data_provider(implicit_texts)
    def test_implicit_band_against_emitted_code(self, text):
        entry = GraphEntry(0, text)
        code, = block_lines(entry_block(entry), 'val')
        difference = symbolic.parse_strict(text).difference_expression()
        for x in np.linspace(-2.5, 2.5, 21):
            for y in np.linspace(-2.5, 2.5, 21):
                value = evaluate_glsl(code, x, y)
                expected = float(difference.expr.subs({symbolic.X: x, symbolic.Y: y}))
                self.assertAlmostEqual(value, expected, places=6)
                self.assertEqual(pick([entry], x, y, EPSILON, THICKNESS) is entry,
                                 abs(value) < EPSILON * THICKNESS)

    poles = lambda: (
        ('y = 1/x', 0.0, 0.0),
        ('y = 1/x', 0.0, 5.0),
        ('y = log(x)', 0.0, 0.0),
        ('y = log(x)', -1.0, 0.0),
        ('x y = 1/x', 0.0, 1.0),
    )

    @data_provider(poles)
    def test_pick_at_pole(self, text, x, y):
        entry = GraphEntry(0, text)
        self.assertIsNone(pick([entry], x, y, EPSILON, THICKNESS))
