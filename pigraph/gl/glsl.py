#-*- coding: utf-8 -*-
"""
glsl type helpers.

UniformType is the closed set of value types a uniform may
carry between the host and a program. Each member knows its
glsl name, the numpy dtype used on the host and the shape
of one value.
"""
from enum import Enum
import numpy as np
import re

STAGE_VERTEX = 'vertex'
STAGE_FRAGMENT = 'fragment'

class UniformType(Enum):
    INT    = ('int',    np.int32,   ())
    FLOAT  = ('float',  np.float32, ())
    DOUBLE = ('double', np.float64, ())
    VEC2   = ('vec2',   np.float32, (2, ))
    VEC3   = ('vec3',   np.float32, (3, ))
    VEC4   = ('vec4',   np.float32, (4, ))

    def __init__(self, glsl_name, dtype, shape):
        self.glsl_name = glsl_name
        self.dtype = dtype
        self.shape = shape

    def cast(self, value):
        """ casts **value** to the host representation of this
            type. Raises ValueError if the value has the wrong
            number of components. """
        try:
            arr = np.array(value, dtype=self.dtype)
        except (TypeError, ValueError) as e:
            raise ValueError('cannot cast {!r} to {}: {}'.format(value, self.glsl_name, e))
        if arr.shape != self.shape:
            raise ValueError('{} expects shape {} but got {!r} with shape {}'.format(
                self.glsl_name, self.shape, value, arr.shape))
        return arr


def find_uniforms(gl_code):
    """ finds uniform declarations

            uniform <type> <name>;

        returns a dict {name: glsl_type} """
    # example: uniform float dorp = 2;
    #          uniform vec3 burb;
    return {k: t for t, k in re.findall(
        r'^\s*uniform\s+(\w+)\s+(\w+)\s*(?:=[^;]*)?;',
        gl_code,
        flags=re.MULTILINE)}


def find_attributes(gl_code):
    """ finds vertex inputs

            in <type> <name>;

        returns a dict {name: glsl_type} """
    return {k: t for t, k in re.findall(
        r'^\s*(?:layout\s*\([^)]*\)\s*)?in\s+(\w+)\s+(\w+)\s*;',
        gl_code,
        flags=re.MULTILINE)}


def glsl_float(value):
    """ renders a python number as a glsl float literal """
    value = float(value)
    if not np.isfinite(value):
        raise ValueError('cannot render {} as glsl literal'.format(value))
    literal = repr(value)
    if 'e' in literal or '.' in literal:
        return literal
    return literal + '.0'


def glsl_vec3(values):
    return 'vec3({})'.format(', '.join(glsl_float(v) for v in values))
