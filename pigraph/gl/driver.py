#-*- coding: utf-8 -*-
"""
the gl driver is the only place where OpenGL functions
are called. Shaders, programs, meshes and uniforms get a
driver injected and speak to the GPU through it.

    driver = GlDriver()
    shader_id = driver.compile_shader(STAGE_VERTEX, source)

errors reported by the OpenGL implementation are raised as
ShaderError (compile) or ProgramError (link) carrying the
info log of the driver.
"""
from pigraph.gl.errors import ShaderError, ProgramError
from pigraph.gl.glsl import UniformType, STAGE_VERTEX, STAGE_FRAGMENT
from pigraph.gl.pigraphgl import PIGRAPH_GL

from OpenGL.GL import *
from ctypes import c_void_p
import numpy as np

class GlDriver():
    """
    PyOpenGL implementation of the driver interface.
    """
    STAGES = {
        STAGE_VERTEX:   GL_VERTEX_SHADER,
        STAGE_FRAGMENT: GL_FRAGMENT_SHADER,
    }

    def describe(self):
        """ reports vendor and versions of the current context """
        for label, name in (('Vendor', GL_VENDOR),
                            ('Renderer', GL_RENDERER),
                            ('OpenGL version', GL_VERSION),
                            ('GLSL version', GL_SHADING_LANGUAGE_VERSION)):
            value = glGetString(name)
            PIGRAPH_GL.info('  + {:<16} {}'.format(label, value.decode() if value else '?'))

    # -- shaders and programs

    def compile_shader(self, stage, source):
        shader_id = glCreateShader(self.STAGES[stage])
        if not shader_id:
            raise ShaderError(stage, 'glCreateShader returns an invalid id.')

        glShaderSource(shader_id, source)
        glCompileShader(shader_id)
        if not glGetShaderiv(shader_id, GL_COMPILE_STATUS):
            error_log = _decode(glGetShaderInfoLog(shader_id))
            glDeleteShader(shader_id)
            raise ShaderError(stage, error_log)
        return shader_id

    def delete_shader(self, shader_id):
        glDeleteShader(shader_id)

    def link_program(self, shader_ids):
        program_id = glCreateProgram()
        if not program_id:
            raise ProgramError('glCreateProgram returns an invalid id')

        for shader_id in shader_ids:
            glAttachShader(program_id, shader_id)
        glLinkProgram(program_id)

        if not glGetProgramiv(program_id, GL_LINK_STATUS):
            error_log = _decode(glGetProgramInfoLog(program_id))
            glDeleteProgram(program_id)
            raise ProgramError(error_log)

        for shader_id in shader_ids:
            glDetachShader(program_id, shader_id)
        return program_id

    def delete_program(self, program_id):
        glDeleteProgram(program_id)

    def use_program(self, program_id):
        glUseProgram(program_id or 0)

    def uniform_location(self, program_id, name):
        return glGetUniformLocation(program_id, name)

    def attrib_location(self, program_id, name):
        return glGetAttribLocation(program_id, name)

    def uniform(self, location, utype, value):
        """ transmits **value** to the uniform at **location** of
            the program in use, with the call matching **utype** """
        if utype is UniformType.INT:
            glUniform1i(location, int(value))
        elif utype is UniformType.FLOAT:
            glUniform1f(location, float(value))
        elif utype is UniformType.DOUBLE:
            glUniform1d(location, float(value))
        elif utype is UniformType.VEC2:
            glUniform2fv(location, 1, value)
        elif utype is UniformType.VEC3:
            glUniform3fv(location, 1, value)
        elif utype is UniformType.VEC4:
            glUniform4fv(location, 1, value)
        else:
            raise NotImplementedError('oops! type "{}" not implemented by driver.'.format(utype))

    # -- vertex arrays

    def create_vertex_array(self, vertices, attribute_locations):
        """ uploads strided **vertices** into a new buffer and
            creates a vertex array object pointing the fields
            of the vertex dtype to **attribute_locations**.
            returns (vao, vbo) """
        vao = glGenVertexArrays(1)
        vbo = glGenBuffers(1)

        glBindVertexArray(vao)
        glBindBuffer(GL_ARRAY_BUFFER, vbo)
        glBufferData(GL_ARRAY_BUFFER, vertices.nbytes, vertices, GL_STATIC_DRAW)

        dtype = vertices.dtype
        for attribute, location in attribute_locations.items():
            if location < 0:
                continue
            if dtype[attribute].subdtype is None:
                components = 1
            else:
                components = dtype[attribute].subdtype[1][0]

            glVertexAttribPointer(location,
                                  components,
                                  GL_FLOAT,
                                  GL_FALSE,
                                  dtype.itemsize,
                                  c_void_p(dtype.fields[attribute][1]))
            glEnableVertexAttribArray(location)

        glBindBuffer(GL_ARRAY_BUFFER, 0)
        glBindVertexArray(0)
        return vao, vbo

    def delete_vertex_array(self, vao, vbo):
        glDeleteVertexArrays(1, [vao])
        glDeleteBuffers(1, [vbo])

    def draw_arrays(self, vao, count):
        glBindVertexArray(vao)
        glDrawArrays(GL_TRIANGLE_STRIP, 0, count)
        glBindVertexArray(0)

    # -- framebuffer

    def viewport(self, width, height):
        glViewport(0, 0, int(width), int(height))

    def clear(self, color=(0, 0, 0, 1)):
        glClearColor(*color)
        glClear(GL_COLOR_BUFFER_BIT | GL_DEPTH_BUFFER_BIT)

    def prepare_background(self):
        glDisable(GL_DEPTH_TEST)
        glDisable(GL_BLEND)


def _decode(log):
    if isinstance(log, bytes):
        return log.decode(errors='replace').strip()
    return str(log).strip()
