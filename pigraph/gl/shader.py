#-*- coding: utf-8 -*-
"""
shader library

    driver          = GlDriver()
    try:
        program         = Program(driver)
        vertex_shader   = Shader(STAGE_VERTEX, load_lib_file('gl/shaders/quad.vrt.glsl'))
        fragment_shader = Shader(STAGE_FRAGMENT, fragment_source)

        program.shaders.append(vertex_shader)
        program.shaders.append(fragment_shader)
        program.link()
    except (ShaderError, ProgramError) as e:
        print('oh no, too bad..', e)

programs find out which attributes and uniforms are present in
given shaders.

the ProgramManager on top of that owns the program which is
currently drawn. A freshly linked program replaces the active
one only after it linked, so there is always a valid program
to draw.

:author: Nicolas 'keksnicoh' Heimann
"""
from pigraph.gl.errors import ShaderError, ProgramError
from pigraph.gl.glsl import *
from pigraph.gl.mesh import StridedVertexMesh, mesh2d_fullscreen_quad
from pigraph.common.helper import load_lib_file
from pigraph.gl.pigraphgl import PIGRAPH_GL

import re

VERSION_DIRECTIVE = '330 core'

class Shader():
    """
    shader representation
    """
    def __init__(self, stage, source, substitutions={}):
        """
        initializes shader by given source.
        matches all attributes and uniforms
        by using regex
        """
        self.substitutions = {
            'VERSION': VERSION_DIRECTIVE
        }
        self.substitutions.update(substitutions)

        self.source = source
        self.stage = stage
        self.gl_shader_id = None

        # {name: glsl_type} of all uniforms within the shader
        self.uniforms = None

        # {name: glsl_type} of vertex inputs
        self.attributes = None

        self._precompiled_source = self.source
        self.parse()

    def parse(self):
        """
        prepares the shader by substituting tags and extracting
        uniforms and attributes from the glsl code.
        """
        self._compile_tags()
        self.attributes = find_attributes(self._precompiled_source)
        self.uniforms = find_uniforms(self._precompiled_source)

    def compile(self, driver):
        """
        compiles shader and returns gl id
        """
        if self.gl_shader_id is None:
            self.gl_shader_id = driver.compile_shader(self.stage, self._precompiled_source)
        return self.gl_shader_id

    def delete(self, driver):
        """
        deletes gl shader if exists
        """
        if self.gl_shader_id is not None:
            driver.delete_shader(self.gl_shader_id)
            self.gl_shader_id = None

    def _compile_tags(self):
        self._precompiled_source = re.sub(r'\{\%\s+version\s+\%\}',
                                          '#version {}'.format(self.substitutions['VERSION']),
                                          self._precompiled_source,
                                          flags=re.MULTILINE)

        for n, v in self.substitutions.items():
            self._precompiled_source = self._precompiled_source.replace('${'+str(n)+'}', str(v))


class Program():
    """
    opengl render program representation
    """
    def __init__(self, driver):
        self.driver = driver
        self.shaders = []
        self.gl_program_id = None

        # {name: location} of vertex inputs
        self.attributes = {}

        # {name: (location, glsl_type)}
        self.uniforms = {}

    def get_shader(self, stage):
        for shader in self.shaders:
            if shader.stage == stage:
                return shader

    @property
    def deleted(self):
        return self.gl_program_id is None

    def link(self):
        """
        compiles all shaders and links them together. the shader
        objects are released afterwards whether linking worked
        or not.
        """
        if self.gl_program_id is not None:
            raise ProgramError('program {} is already linked'.format(self.gl_program_id))

        try:
            shader_ids = [shader.compile(self.driver) for shader in self.shaders]
            self.gl_program_id = self.driver.link_program(shader_ids)
        finally:
            for shader in self.shaders:
                shader.delete(self.driver)

        try:
            self._configure_attributes()
            self._configure_uniforms()
        except ShaderError:
            self.delete()
            raise
        return self.gl_program_id

    def use(self):
        """
        tells opengl state to use this program
        """
        if self.gl_program_id is None:
            raise ProgramError('cannot use a program which is not linked or was deleted.')
        self.driver.use_program(self.gl_program_id)

    def unuse(self):
        self.driver.use_program(0)

    def delete(self):
        """
        deletes gl program if exists
        """
        if self.gl_program_id is not None:
            self.driver.delete_program(self.gl_program_id)
            self.gl_program_id = None

    def uniform_location(self, name):
        """
        returns the location of uniform **name** or -1 if the
        program does not declare it or the linker removed it.
        """
        if name not in self.uniforms:
            return -1
        return self.uniforms[name][0]

    def uniform_type(self, name):
        if name in self.uniforms:
            return self.uniforms[name][1]

    def _configure_attributes(self):
        self.attributes = {}
        vertex_shader = self.get_shader(STAGE_VERTEX)
        if vertex_shader is not None:
            self.attributes.update({k: self.driver.attrib_location(self.gl_program_id, k)
                                    for k in vertex_shader.attributes})

    def _configure_uniforms(self):
        self.uniforms = {}
        for shader in self.shaders:
            for k, glsl_type in shader.uniforms.items():
                # check whether any uniform is defined in 2 shaders with different types.
                if k in self.uniforms and self.uniforms[k][1] != glsl_type:
                    raise ShaderError(shader.stage, 'uniform "{name}" appears twice with different types: {t1}, {t2}'.format(
                        name=k,
                        t1=self.uniforms[k][1],
                        t2=glsl_type
                    ))

                location = self.driver.uniform_location(self.gl_program_id, k)
                if location == -1:
                    PIGRAPH_GL.debug('uniform "{}" was removed by the linker of program {}.'.format(k, self.gl_program_id))
                self.uniforms[k] = (location, glsl_type)


class CompiledProgram():
    """
    a linked program together with the fullscreen quad it
    draws and the fragment source it was built from.
    """
    def __init__(self, program, mesh, source, generation):
        self.program = program
        self.mesh = mesh
        self.source = source
        self.generation = generation

    @property
    def handle(self):
        return self.program.gl_program_id

    @property
    def released(self):
        return self.program.deleted

    def use(self):
        self.program.use()

    def unuse(self):
        self.program.unuse()

    def draw(self):
        self.mesh.draw()

    def delete(self):
        self.mesh.delete()
        self.program.delete()

    def __repr__(self):
        return 'CompiledProgram(handle={}, generation={})'.format(self.handle, self.generation)


class ProgramManager():
    """
    compiles and links programs and owns the active one.

        manager = ProgramManager(driver)
        compiled = manager.compile_and_link(vertex_source, fragment_source)
        manager.replace_active(compiled)
        ...
        manager.destroy()

    """
    def __init__(self, driver):
        self.driver = driver
        self.active = None
        self.generation = 0

    def compile_and_link(self, vertex_source, fragment_source):
        """
        returns a CompiledProgram. ShaderError and ProgramError
        from the driver propagate. A failed attempt leaves no
        gpu objects behind and does not touch the active program.
        """
        program = Program(self.driver)
        program.shaders.append(Shader(STAGE_VERTEX, vertex_source))
        program.shaders.append(Shader(STAGE_FRAGMENT, fragment_source))
        program.link()

        try:
            mesh = StridedVertexMesh(self.driver,
                                     mesh2d_fullscreen_quad(),
                                     attribute_locations=program.attributes)
        except Exception:
            program.delete()
            raise

        self.generation += 1
        PIGRAPH_GL.debug('linked program {} (generation {}).'.format(program.gl_program_id, self.generation))
        return CompiledProgram(program, mesh, fragment_source, self.generation)

    def compile_fragment(self, fragment_source):
        """ links **fragment_source** against the fullscreen quad vertex shader """
        return self.compile_and_link(load_lib_file('gl/shaders/quad.vrt.glsl'), fragment_source)

    def replace_active(self, compiled):
        """
        makes **compiled** the active program and releases the
        previously active one. returns the previous program.
        """
        if compiled.released:
            raise ProgramError('cannot activate {} since it was released.'.format(compiled))

        previous = self.active
        self.active = compiled
        if previous is not None and previous is not compiled:
            PIGRAPH_GL.debug('release superseded program {} (generation {}).'.format(
                previous.handle, previous.generation))
            previous.delete()
        return previous

    def destroy(self):
        """ releases the active program """
        if self.active is not None:
            self.active.delete()
            self.active = None
