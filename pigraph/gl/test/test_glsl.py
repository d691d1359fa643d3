#-*- coding: utf-8 -*-

import unittest
from unittest_data_provider import data_provider

from pigraph.gl.glsl import UniformType, find_uniforms, find_attributes, \
                            glsl_float, glsl_vec3

import numpy as np

class TestGlslUtilities(unittest.TestCase):
    casts = lambda: (
        (UniformType.INT, 3, ()),
        (UniformType.FLOAT, 2.5, ()),
        (UniformType.VEC2, (1, 2), (2, )),
        (UniformType.VEC3, [1, 2, 3], (3, )),
        (UniformType.VEC4, np.ones(4), (4, )),
    )

    @data_provider(casts)
    def test_cast(self, utype, value, shape):
        cast = utype.cast(value)
        self.assertEqual(cast.shape, shape)
        self.assertEqual(cast.dtype, np.dtype(utype.dtype))

    bad_casts = lambda: (
        (UniformType.VEC2, (1, 2, 3)),
        (UniformType.VEC3, 1.0),
        (UniformType.FLOAT, (1.0, 2.0)),
        (UniformType.FLOAT, 'abc'),
    )

    @data_provider(bad_casts)
    def test_cast_rejects(self, utype, value):
        with self.assertRaises(ValueError):
            utype.cast(value)

    def test_find_uniforms(self):
        source = """
            uniform vec2 viewStart;
            uniform float EPSILON = 0.1;
              uniform   vec4 color ;
            // uniform vec3 commented;
            float uniformish;
        """
        self.assertEqual(find_uniforms(source), {
            'viewStart': 'vec2',
            'EPSILON': 'float',
            'color': 'vec4',
        })

    def test_find_attributes(self):
        source = """
            in vec2 vertex;
            layout (location = 1) in vec2 tex;
            out vec2 frag_uv;
        """
        self.assertEqual(find_attributes(source), {'vertex': 'vec2', 'tex': 'vec2'})

    floats = lambda: (
        (1, '1.0'),
        (2.5, '2.5'),
        (-3, '-3.0'),
        (1e-20, '1e-20'),
        (np.float32(0.5), '0.5'),
    )

    @data_provider(floats)
    def test_glsl_float(self, value, literal):
        self.assertEqual(glsl_float(value), literal)

    def test_glsl_float_rejects_non_finite(self):
        with self.assertRaises(ValueError):
            glsl_float(float('inf'))
        with self.assertRaises(ValueError):
            glsl_float(float('nan'))

    def test_glsl_vec3(self):
        self.assertEqual(glsl_vec3((1, 0, 0.5)), 'vec3(1.0, 0.0, 0.5)')
