#-*- coding: utf-8 -*-
"""
uniform table shared by all programs the synthesizer builds.

    uniforms = UniformStore(driver)
    uniforms.declare('viewSize', UniformType.VEC2, (10, 6))
    ...
    manager.replace_active(compiled)
    uniforms.resolve_locations(compiled)
    compiled.use()
    uniforms.push_all(compiled)

values live on the host and outlive programs. Locations are
only valid for the program they were resolved against, so
every relink must be followed by resolve_locations() before
the next push_all().
"""
from pigraph.gl.errors import UndeclaredUniform, DuplicateUniform, \
                              UniformTypeMismatch, StaleUniformLocations
from pigraph.gl.glsl import UniformType
from pigraph.gl.pigraphgl import PIGRAPH_GL

from collections import OrderedDict

class Uniform():
    def __init__(self, name, utype, value):
        self.name = name
        self.utype = utype
        self.value = utype.cast(value)
        self.location = -1

    def __repr__(self):
        return 'Uniform({}, {}, location={})'.format(self.name, self.utype.glsl_name, self.location)


class UniformStore():
    def __init__(self, driver):
        self.driver = driver
        self._uniforms = OrderedDict()

        # the program the current locations belong to
        self._program = None

    def declare(self, name, utype, value):
        """ registers uniform **name** of type **utype** with
            an initial **value**. """
        if not isinstance(utype, UniformType):
            raise TypeError('utype must be a UniformType, got {!r}'.format(utype))
        if name in self._uniforms:
            raise DuplicateUniform('uniform "{}" is already declared as {}.'.format(
                name, self._uniforms[name].utype.glsl_name))
        self._uniforms[name] = Uniform(name, utype, value)

    def get(self, name, utype):
        value = self._lookup(name, utype).value
        if value.shape == ():
            return value[()]
        return value.copy()

    def set(self, name, utype, value):
        uniform = self._lookup(name, utype)
        uniform.value = utype.cast(value)

    def location(self, name):
        if name not in self._uniforms:
            raise UndeclaredUniform('uniform "{}" was never declared.'.format(name))
        return self._uniforms[name].location

    def resolve_locations(self, program):
        """
        looks up the location of every declared uniform within
        **program**. Uniforms the program does not declare resolve
        to -1 and are skipped by push_all().
        """
        program = getattr(program, 'program', program)
        if program.deleted:
            raise StaleUniformLocations('cannot resolve locations against a deleted program.')

        missing = []
        for uniform in self._uniforms.values():
            glsl_type = program.uniform_type(uniform.name)
            if glsl_type is not None and glsl_type != uniform.utype.glsl_name:
                raise UniformTypeMismatch('uniform "{}" is declared as {} but the program declares {}.'.format(
                    uniform.name, uniform.utype.glsl_name, glsl_type))
            uniform.location = program.uniform_location(uniform.name)
            if uniform.location == -1:
                missing.append(uniform.name)

        if len(missing):
            PIGRAPH_GL.hint('uniforms not used by program {}: {}'.format(
                program.gl_program_id, ', '.join(missing)))
        self._program = program

    def push_all(self, program=None):
        """
        transmits all values with a location to the program in
        use. If **program** is given it must be the program the
        locations were resolved against.
        """
        if self._program is None:
            raise StaleUniformLocations('push_all() before resolve_locations().')
        if program is not None and getattr(program, 'program', program) is not self._program:
            raise StaleUniformLocations('locations were resolved against program {}, not {}.'.format(
                self._program.gl_program_id, getattr(program, 'handle', None)))
        if self._program.deleted:
            raise StaleUniformLocations('locations belong to a released program.')

        for uniform in self._uniforms.values():
            if uniform.location != -1:
                self.driver.uniform(uniform.location, uniform.utype, uniform.value)

    def _lookup(self, name, utype):
        if name not in self._uniforms:
            raise UndeclaredUniform('uniform "{}" was never declared.'.format(name))
        uniform = self._uniforms[name]
        if uniform.utype is not utype:
            raise UniformTypeMismatch('uniform "{}" is declared as {} but accessed as {}.'.format(
                name, uniform.utype.glsl_name, getattr(utype, 'glsl_name', utype)))
        return uniform
