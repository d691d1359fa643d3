"""
pigraph.gl

thin layer around the OpenGL program lifecycle: shaders,
programs, the fullscreen quad and the uniform table. All
calls into OpenGL go through pigraph.gl.driver so everything
importable from here works without a GL context.

    from pigraph.gl import *

"""
from pigraph.gl.pigraphgl import PIGRAPH_GL
from pigraph.gl.errors import GlError, ShaderError, ProgramError
from pigraph.gl.glsl import UniformType, STAGE_VERTEX, STAGE_FRAGMENT
from pigraph.gl.shader import Shader, Program, CompiledProgram, ProgramManager
from pigraph.gl.uniforms import UniformStore

__all__ = ['PIGRAPH_GL', 'GlError', 'ShaderError', 'ProgramError',
           'UniformType', 'STAGE_VERTEX', 'STAGE_FRAGMENT',
           'Shader', 'Program', 'CompiledProgram', 'ProgramManager',
           'UniformStore']
