"""
style of a plot.

every style value is given as string and parsed by the
parser registered for its key:

    style = Style(STYLE_DESCRIPTION, DEFAULT_STYLE)
    style['axis-color'] = '#ffffff'
    style['axis-color']
    >>> (1.0, 1.0, 1.0)

"""
from pigraph.common.color import hex_to_rgba
from pigraph.gl.common import Event

import numpy as np

DEFAULT_STYLE = {
    'graph-thickness':  '2',
    'background-color': '#161616ff',
    'grid-minor-color': '#2b2b2bff',
    'grid-major-color': '#5c5c5cff',
    'axis-color':       '#c8c8c8ff',
    'entry-color':      '#ff00ffff',
    'zoom-step':        '.1',
    'initial-zoom':     '10',
    'size':             '1200 720',
    'title':            'piGraph',
}

def parse_1c3(string):
    return tuple(hex_to_rgba(string)[:3])

def parse_1c4(string):
    return tuple(hex_to_rgba(string))

def parse_2i1(string):
    split = [s for s in string.split(' ') if s.strip()]
    if len(split) == 1:
        return (int(split[0]), int(split[0]))
    if len(split) != 2:
        raise ValueError('expected "<w> <h>" but got "{}"'.format(string))
    return (int(split[0]), int(split[1]))

def parse_positive_float(string):
    value = float(string)
    if not np.isfinite(value) or not value > 0:
        raise ValueError('expected a finite positive number but got "{}"'.format(string))
    return value

STYLE_DESCRIPTION = {
    'graph-thickness':  parse_positive_float,
    'background-color': parse_1c3,
    'grid-minor-color': parse_1c3,
    'grid-major-color': parse_1c3,
    'axis-color':       parse_1c3,
    'entry-color':      parse_1c3,
    'zoom-step':        parse_positive_float,
    'initial-zoom':     parse_positive_float,
    'size':             parse_2i1,
    'title':            str,
}

class Style():
    """
    parsed style values. on_change is invoked with (key, value)
    whenever a value actually changes.
    """
    def __init__(self, description=STYLE_DESCRIPTION, style=DEFAULT_STYLE):
        self._description = dict(description)
        self._style = {}
        self.on_change = Event()
        if style is not None:
            self.load(style)

    def load(self, style):
        for k in style:
            self.set(k, style[k])

    def set(self, key, value):
        if not key in self._description:
            raise ValueError('unknown style "{}". Known styles: {}'.format(
                key, ', '.join(sorted(self._description))))
        try:
            value = self._description[key](value)
        except (AttributeError, TypeError, ValueError) as e:
            raise ValueError('invalid value {!r} for style "{}": {}'.format(value, key, e))
        if not key in self._style or self._style[key] != value:
            self._style[key] = value
            self.on_change(key, value)

    def get(self, key):
        return self._style[key]

    def __getitem__(self, key): return self.get(key)
    def __setitem__(self, key, value): return self.set(key, value)


def load_style(overrides=None):
    """ the default style updated by **overrides** """
    style = Style(STYLE_DESCRIPTION, DEFAULT_STYLE)
    if overrides:
        style.load(overrides)
    return style
