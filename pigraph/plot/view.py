#-*- coding: utf-8 -*-
"""
view transform between screen and world coordinates.

screen positions are given as uv in [0, 1]^2 with (0, 0) at
the bottom left of the viewport. The view is defined by the
world coordinate of the bottom left corner (origin) and the
world width of the viewport (zoom):

    view_size = (zoom, zoom * height / width)
    world     = origin + uv * view_size
    epsilon   = zoom / width

the pointer input pans (drag) and zooms (wheel) the view.
While the gui uses the pointer and one frame after that the
view ignores the pointer.

:author: keksnicoh
"""
from pigraph.gl.glsl import UniformType

import numpy as np

class ViewState():
    def __init__(self, origin=(-5.0, -3.0), zoom=10.0, viewport=(1200, 720)):
        self.origin = np.array(origin, dtype=np.float64)
        self.zoom = float(zoom)
        self.viewport = (int(viewport[0]), int(viewport[1]))

    @property
    def view_size(self):
        w, h = self.viewport
        return np.array((self.zoom, self.zoom * h / w), dtype=np.float64)

    @property
    def epsilon(self):
        return self.zoom / self.viewport[0]

    def __repr__(self):
        return 'ViewState(origin={}, zoom={}, viewport={})'.format(
            tuple(self.origin), self.zoom, self.viewport)


def pointer_uv(position, size):
    """ window coordinates (origin top left) to uv """
    return np.array((position[0] / size[0], 1.0 - position[1] / size[1]), dtype=np.float64)


class ViewTransform():
    """
    pan and zoom state machine.

        view = ViewTransform(zoom=10, viewport=(1200, 720))
        view.update(uv, button_down, wheel, gui_busy)
        view.apply(uniforms)

    """
    COOLDOWN_FRAMES = 1

    def __init__(self, zoom=10.0, viewport=(1200, 720), zoom_step=0.1, center=(0.0, 0.0)):
        self.zoom_step = float(zoom_step)
        self.state = ViewState(zoom=zoom, viewport=viewport)
        self._initial = (float(zoom), tuple(center))
        self._anchor = None
        self._cooldown = 0
        self.center_on(center)

    @property
    def dragging(self):
        return self._anchor is not None

    def center_on(self, point):
        self.state.origin = np.array(point, dtype=np.float64) - 0.5 * self.state.view_size

    def reset(self):
        """ back to the initial zoom, centered on the initial center """
        self._anchor = None
        self.state.zoom = self._initial[0]
        self.center_on(self._initial[1])

    def resize(self, width, height):
        self.state.viewport = (max(int(width), 1), max(int(height), 1))

    def to_world(self, uv):
        return self.state.origin + np.asarray(uv, dtype=np.float64) * self.state.view_size

    # -- pan

    def begin_pan(self, uv):
        self._anchor = (np.array(uv, dtype=np.float64), self.state.origin.copy())

    def pan_to(self, uv):
        anchor_uv, anchor_origin = self._anchor
        self.state.origin = anchor_origin + (anchor_uv - np.asarray(uv, dtype=np.float64)) * self.state.view_size

    def end_pan(self):
        self._anchor = None

    # -- zoom

    def zoom_at(self, uv, wheel):
        """ zooms by **wheel** steps keeping the world point under
            **uv** fixed. """
        world = self.to_world(uv)
        factor = max(1.0 + wheel * self.zoom_step, 0.1)
        self.state.zoom *= factor
        self.state.origin = world - np.asarray(uv, dtype=np.float64) * self.state.view_size

    # -- input

    def update(self, uv, button_down, wheel=0.0, gui_busy=False):
        """
        feeds one frame of pointer input. returns True if the
        view changed.
        """
        if gui_busy:
            self._cooldown = self.COOLDOWN_FRAMES
        elif self._cooldown > 0:
            self._cooldown -= 1
        else:
            return self._handle_pointer(uv, button_down, wheel)

        if not button_down:
            self._anchor = None
        return False

    def _handle_pointer(self, uv, button_down, wheel):
        changed = False
        if wheel:
            self.zoom_at(uv, wheel)
            changed = True

        if button_down:
            if self._anchor is None:
                self.begin_pan(uv)
            else:
                before = self.state.origin.copy()
                self.pan_to(uv)
                changed = changed or not np.array_equal(before, self.state.origin)
        else:
            self.end_pan()
        return changed

    # -- uniforms

    def apply(self, uniforms):
        """ writes viewStart, viewSize and EPSILON """
        uniforms.set('viewStart', UniformType.VEC2, self.state.origin)
        uniforms.set('viewSize', UniformType.VEC2, self.state.view_size)
        uniforms.set('EPSILON', UniformType.FLOAT, self.state.epsilon)
