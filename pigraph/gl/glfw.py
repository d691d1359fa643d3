"""
provides a pigraph integration of the GLFW
window context library together with the imgui
immediate mode gui.

    window = GLFW_Context(size=(1200, 720), title='piGraph')
    window.on_ready.append(init)
    window.on_gui.append(gui)
    window.on_background.append(draw)
    for window in GLFW_run(window):
        pass

:author: keksnicoh
"""
from pigraph.gl.context import Context, GlVersion, CloseContextException
from pigraph.gl.pigraphgl import PIGRAPH_GL

import glfw
import imgui
from imgui.integrations.glfw import GlfwRenderer

def_version = GlVersion('3.3', core_profile=True, forward_compat=True)

def bootstrap_gl(version=def_version):
    """
    bootstrap GL with a given **version**
    """
    if not glfw.init():
        raise RuntimeError('glfw.init() error')

    glfw.window_hint(glfw.CONTEXT_VERSION_MAJOR, version.version[0])
    glfw.window_hint(glfw.CONTEXT_VERSION_MINOR, version.version[1])

    if version.forward_compat != True:
        raise RuntimeError('version.forward_compat=False not supported at the moment')
    if version.core_profile != True:
        raise RuntimeError('version.core_profile=False not supported at the moment')

    glfw.window_hint(glfw.OPENGL_FORWARD_COMPAT, glfw.TRUE)
    glfw.window_hint(glfw.OPENGL_PROFILE, glfw.OPENGL_CORE_PROFILE)


class GLFW_Context(Context):
    """
    a glfw context manages the window created by glfw.create_window
    and the imgui renderer drawing into it.
    """
    def __init__(self, size, title='no title', vsync=True):
        super().__init__()
        self.size = tuple(size)
        self.title = title
        self.vsync = vsync
        self._handle = None
        self._impl = None
        self._glfw_initialized = False
        self._closed = False

    def bootstrap(self):
        if self._glfw_initialized:
            raise RuntimeError('allready initialized.')

        self._handle = glfw.create_window(int(self.size[0]), int(self.size[1]), self.title, None, None)
        if not self._handle:
            raise RuntimeError('glfw.create_window() error')

        glfw.make_context_current(self._handle)
        glfw.swap_interval(1 if self.vsync else 0)

        imgui.create_context()
        self._impl = GlfwRenderer(self._handle)
        self._glfw_initialized = True

    @property
    def resolution(self):
        """ framebuffer size in physical pixels """
        return glfw.get_framebuffer_size(self._handle)

    @property
    def time(self):
        """ monotonic seconds since glfw.init() """
        return glfw.get_time()

    def context(self):
        glfw.make_context_current(self._handle)
        self.__gl_context_enable__()

    def cycle(self):
        if glfw.window_should_close(self._handle):
            raise CloseContextException()

        glfw.poll_events()
        self._impl.process_inputs()
        imgui.new_frame()

        self.context()
        self.on_gui(self)
        self.on_background(self)

        imgui.render()
        self._impl.render(imgui.get_draw_data())
        glfw.swap_buffers(self._handle)

    def close(self):
        """ releases gl objects through on_close and destroys the window """
        if self._closed or not self._glfw_initialized:
            return
        self._closed = True
        self.context()
        self.on_close(self)
        self._impl.shutdown()
        glfw.destroy_window(self._handle)


def GLFW_run(*windows, version=def_version):
    """
    executes a list of GLFW *windows* with a specific
    OpenGL **version** profile.

    This is a generator which yields the window
    which cycle will be executed next.
    """
    windows = list(windows)
    bootstrap_gl(version)

    try:
        for window in windows:
            window.bootstrap()
            window.context()
            window.on_ready(window)

        while len(windows):
            for window in windows[:]:
                try:
                    yield window
                    window.cycle()
                except CloseContextException:
                    PIGRAPH_GL.info('closing window "{}".'.format(window.title))
                    window.close()
                    windows.remove(window)
    finally:
        for window in windows:
            window.close()
        glfw.terminate()
