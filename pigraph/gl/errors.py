#-*- coding: utf-8 -*-
"""
exception hierarchy of the gl layer.

ShaderError and ProgramError are raised when the graphics
driver rejects a source or a link. The uniform errors are
contract violations of the calling code.
"""

class GlError(Exception):
    @property
    def message(self):
        return str(self)

class ShaderError(GlError):
    def __init__(self, stage, msg):
        GlError.__init__(self, 'Shader({}): {}'.format(stage, msg))
        self.stage = stage
        self.log = msg

class ProgramError(GlError):
    pass

class UniformError(GlError):
    pass

class UndeclaredUniform(UniformError, KeyError):
    def __str__(self):
        return GlError.__str__(self)

class DuplicateUniform(UniformError):
    pass

class UniformTypeMismatch(UniformError, TypeError):
    pass

class StaleUniformLocations(UniformError):
    pass
