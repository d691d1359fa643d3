"""
interactive 2d equation plotter.

    plot2d('x^2 + y^2 = 4', 'y = sin(x)')

the window draws the graph program as background and an imgui
panel on top where equations are edited. Frame order:

    gui pass        pointer input, entry edits
    background      rebuild if dirty, push uniforms, draw

:author: keksnicoh
"""
from pigraph.gl.driver import GlDriver
from pigraph.gl.glfw import GLFW_Context, GLFW_run
from pigraph.gl.glsl import UniformType
from pigraph.gl.pigraphgl import PIGRAPH_GL
from pigraph.gl.shader import ProgramManager
from pigraph.gl.uniforms import UniformStore
from pigraph.plot.controller import RecompilationController
from pigraph.plot.entry import GraphSession, Invalid
from pigraph.plot.synthesizer import pick
from pigraph.plot.style import Style, load_style
from pigraph.plot.view import ViewTransform, pointer_uv

import imgui

# name, type, initial value
UNIFORMS = (
    ('viewStart',   UniformType.VEC2,  (0.0, 0.0)),
    ('viewSize',    UniformType.VEC2,  (1.0, 1.0)),
    ('EPSILON',     UniformType.FLOAT, 0.01),
    ('iResolution', UniformType.VEC2,  (1.0, 1.0)),
    ('iTime',       UniformType.FLOAT, 0.0),
    ('iMouse',      UniformType.VEC2,  (0.0, 0.0)),
)

TEXT_BUFFER = 256

def plot2d(*equations, style=None):
    """ opens a plot window with **equations** and runs until it
        closes. **style** is a Style or a dict of overrides. """
    if not isinstance(style, Style):
        style = load_style(style)
    window = GLFW_Context(size=style['size'], title=style['title'])
    Plotter2dBasic(window, equations, style)
    for window in GLFW_run(window):
        pass


class Plotter2dBasic():
    def __init__(self, window, equations=(), style=None):
        self.window = window
        self.style = style if style is not None else load_style()
        self.session = GraphSession(default_color=self.style['entry-color'])
        for text in equations:
            self.session.add(text)

        self.view = ViewTransform(zoom=self.style['initial-zoom'],
                                  viewport=self.style['size'],
                                  zoom_step=self.style['zoom-step'])

        self.driver = None
        self.uniforms = None
        self.controller = None

        self._new_text = ''
        self._world = None

        window.on_ready.append(self.init)
        window.on_gui.append(self.gui)
        window.on_background.append(self.draw)
        window.on_close.append(self.close)

    def init(self, window):
        self.driver = GlDriver()
        PIGRAPH_GL.info('OpenGL context ready:')
        self.driver.describe()

        self.uniforms = UniformStore(self.driver)
        for name, utype, value in UNIFORMS:
            self.uniforms.declare(name, utype, value)

        self.controller = RecompilationController(self.session,
                                                  ProgramManager(self.driver),
                                                  self.uniforms,
                                                  self.style)

    # -- gui pass

    def gui(self, window):
        self._pointer_input()

        imgui.begin('piGraph', False, imgui.WINDOW_ALWAYS_AUTO_RESIZE)
        imgui.text('{:.1f} fps'.format(imgui.get_io().framerate))
        if imgui.button('refresh shader program'):
            self.controller.mark_dirty()
        imgui.same_line()
        if imgui.button('reset view'):
            self.view.reset()
        imgui.separator()

        self._entries_gui()
        self._diagnostics_gui()
        imgui.end()

    def _pointer_input(self):
        io = imgui.get_io()
        self._world = None

        # minimized window or pointer outside of the window
        if min(io.display_size) <= 0 or io.mouse_pos[0] < -1e6:
            return

        gui_busy = (io.want_capture_mouse or imgui.is_any_item_active()
                    or imgui.is_any_item_focused() or imgui.is_any_item_hovered())
        uv = pointer_uv(io.mouse_pos, io.display_size)
        self.view.update(uv, io.mouse_down[0], io.mouse_wheel, gui_busy)
        if not gui_busy:
            self._world = self.view.to_world(uv)

    def _entries_gui(self):
        for i, entry in enumerate(self.session.entries):
            changed, text = imgui.input_text('entry {}###entry{}'.format(i, entry.id), entry.text, TEXT_BUFFER)
            self.session.set_focus(entry, imgui.is_item_active())
            if changed:
                self.session.edit(entry, text)

            changed, color = imgui.color_edit3('draw color###color{}'.format(entry.id), *entry.color)
            if changed:
                self.session.set_color(entry, color)

            if isinstance(entry.result, Invalid):
                imgui.text_colored(entry.result.message, 1.0, 0.4, 0.4)
            elif entry.is_valid:
                imgui.text_disabled(entry.display_notation())
            imgui.separator()

        # same imgui id as the entry the slot turns into
        label = 'entry {}###entry{}'.format(len(self.session.entries), self.session.next_id)
        changed, self._new_text = imgui.input_text(label, self._new_text, TEXT_BUFFER)
        if changed and self._new_text.strip():
            entry = self.session.add(self._new_text)
            self.session.set_focus(entry, True)
            self._new_text = ''

        self.session.prune()

    def _diagnostics_gui(self):
        if self._world is not None:
            x, y = self._world
            imgui.text('x = {:.6g}, y = {:.6g}'.format(x, y))
            hit = None
            if not self.view.dragging:
                hit = pick(self.session.entries, x, y, self.view.state.epsilon, self.style['graph-thickness'])
            if hit is not None:
                imgui.text_colored('on {}'.format(hit.display_notation()), *hit.color)

        if self.controller.last_error is not None:
            imgui.text_colored('shader error', 1.0, 0.4, 0.4)
            imgui.text_wrapped(self.controller.last_error)

        if self.controller.source is not None:
            expanded, _ = imgui.collapsing_header('fragment shader')
            if expanded:
                imgui.input_text_multiline('###source', self.controller.source,
                                           len(self.controller.source) + 1, 600, 300,
                                           imgui.INPUT_TEXT_READ_ONLY)

    # -- background

    def draw(self, window):
        width, height = window.resolution
        self.view.resize(width, height)

        self.driver.viewport(width, height)
        self.driver.clear(tuple(self.style['background-color']) + (1.0, ))
        self.driver.prepare_background()

        self.controller.update()

        self.view.apply(self.uniforms)
        self.uniforms.set('iResolution', UniformType.VEC2, (width, height))
        self.uniforms.set('iTime', UniformType.FLOAT, window.time)
        self.uniforms.set('iMouse', UniformType.VEC2, (0.0, 0.0))
        self.controller.draw()

    def close(self, window):
        if self.controller is not None:
            self.controller.destroy()
