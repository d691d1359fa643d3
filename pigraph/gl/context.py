"""
basic context api a window integration implements.

:author: keksnicoh
"""
from pigraph.gl.common import Event
from pigraph.gl.pigraphgl import PIGRAPH_GL

class ContextException(Exception): pass
class CloseContextException(ContextException): pass

class Context():
    """
    context API:

    events:
    -------
    on_ready        when the context is ready to let
                    the OpenGL.GL functions do their job.

    on_gui          once per frame, inside the gui frame. widgets
                    are submitted and input is read here.

    on_background   once per frame after on_gui, draws below
                    the gui.

    on_close        before the context goes away. gl objects
                    must be released here.

    """
    def __init__(self):
        self.on_ready = Event()
        self.on_gui = Event()
        self.on_background = Event()
        self.on_close = Event()

    def __gl_context_enable__(self):
        """ activates OpenGL context """
        PIGRAPH_GL.CONTEXT = self


class GlVersion():
    """
    represents OpenGL driver profile
    """
    def __init__(self, version, core_profile=True, forward_compat=True):
        if type(version) is str:
            prt = version.split('.')
            if len(prt) > 2:
                raise ValueError('Argument version must by either tuple or a string. version examples: "4", "4.0", "3.1"')

            version = (int(prt[0]), 0) if len(prt) == 1 else (int(prt[0]), int(prt[1]))

        self.version = version
        self.core_profile = bool(core_profile)
        self.forward_compat = bool(forward_compat)
