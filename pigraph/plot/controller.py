#-*- coding: utf-8 -*-
"""
rebuild policy of the graph program.

any change of the session or of the style marks the controller
dirty. At the end of the edit pass update() synthesizes the
fragment shader, links it, swaps it in and resolves and pushes
the uniforms against it. A program which fails to compile or
link is reported and dropped, the previous program keeps being
drawn.

    controller = RecompilationController(session, manager, uniforms, style)
    ...
    controller.update()
    controller.draw()

:author: keksnicoh
"""
from pigraph.gl.common import Event
from pigraph.gl.errors import ShaderError, ProgramError
from pigraph.gl.pigraphgl import PIGRAPH_GL
from pigraph.plot.synthesizer import synthesize

# style keys which end up in the synthesized source
SOURCE_STYLES = {'graph-thickness', 'background-color', 'grid-minor-color',
                 'grid-major-color', 'axis-color'}

class RecompilationController():
    def __init__(self, session, manager, uniforms, style):
        self.session = session
        self.manager = manager
        self.uniforms = uniforms
        self.style = style

        # the first update() builds the initial program
        self.dirty = True

        self.last_error = None
        self.source = None

        self.on_rebuild = Event()

        session.on_change.append(self.mark_dirty)
        style.on_change.append(self._style_changed)

    def mark_dirty(self, *args):
        self.dirty = True

    def _style_changed(self, key, value):
        if key in SOURCE_STYLES:
            self.mark_dirty()

    def update(self):
        """
        rebuilds the program if anything changed since the last
        call. returns True if a new program became active.
        """
        if not self.dirty:
            return False
        self.dirty = False

        entries = self.session.entries
        source = synthesize(entries, self.style['graph-thickness'], style=self.style)
        PIGRAPH_GL.info('synthesized fragment shader for {} entries ({} chars).'.format(
            len([e for e in entries if e.is_valid]), len(source)))
        PIGRAPH_GL.debug(source)

        try:
            compiled = self.manager.compile_fragment(source)
        except (ShaderError, ProgramError) as e:
            self.last_error = e.message
            PIGRAPH_GL.error('could not build graph program, keeping the previous one:')
            for line in e.message.split('\n'):
                PIGRAPH_GL.error('    {}'.format(line))
            for i, line in enumerate(source.split('\n')):
                PIGRAPH_GL.debug('{:>4} {}'.format(i + 1, line))
            return False

        self.manager.replace_active(compiled)
        self.uniforms.resolve_locations(compiled)
        compiled.use()
        self.uniforms.push_all(compiled)
        compiled.unuse()

        self.last_error = None
        self.source = source
        PIGRAPH_GL.info('graph program {} active (generation {}).'.format(compiled.handle, compiled.generation))
        self.on_rebuild(self, compiled)
        return True

    def draw(self):
        """ binds the active program, pushes the uniforms and draws
            the fullscreen quad. returns False if there is no program. """
        active = self.manager.active
        if active is None:
            return False
        active.use()
        self.uniforms.push_all(active)
        active.draw()
        active.unuse()
        return True

    def destroy(self):
        self.manager.destroy()
