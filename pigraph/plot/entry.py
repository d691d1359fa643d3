#-*- coding: utf-8 -*-
"""
graph entries are the equations a user typed in.

every entry carries the state of its last parse:

    Empty()                   no text
    Invalid(message)          text which does not parse
    ParsedEquation(ast)       implicit f(x, y) = g(x, y)
    ParsedFunction(ast)       explicit y = f(x)

and the simplified ast which is derived from the parse result
whenever the text changes. The session keeps the ordered list
of entries and reports every change through its on_change event.

:author: keksnicoh
"""
from pigraph.gl.common import Event
from pigraph.gl.pigraphgl import PIGRAPH_GL
from pigraph.plot import symbolic

from collections import namedtuple

Empty = namedtuple('Empty', [])
Invalid = namedtuple('Invalid', ['message'])
ParsedEquation = namedtuple('ParsedEquation', ['ast'])
ParsedFunction = namedtuple('ParsedFunction', ['ast'])

EMPTY = Empty()

DEFAULT_COLOR = (1.0, 0.0, 1.0)

def classify(parsed):
    """
    sorts a parsed Equation or Expression into the implicit
    or explicit case.

        y = f(x)        ParsedFunction(f)
        f(x)            ParsedFunction(f)
        f(x, y)         ParsedEquation(f(x, y) = 0)
        f = g           ParsedEquation(f = g)

    """
    Y = symbolic.Y
    if isinstance(parsed, symbolic.Equation):
        if parsed.lhs == Y and not parsed.rhs.has(Y):
            return ParsedFunction(symbolic.Expression(parsed.rhs))
        return ParsedEquation(parsed)
    if isinstance(parsed, symbolic.Expression):
        if not parsed.expr.has(Y):
            return ParsedFunction(parsed)
        return ParsedEquation(symbolic.Equation(parsed.expr, 0))
    raise TypeError('cannot classify {!r}'.format(parsed))


class GraphEntry():
    def __init__(self, id, text='', color=DEFAULT_COLOR):
        self.id = id
        self.color = tuple(float(c) for c in color)
        self.text = text
        self.result = EMPTY
        self.simplified = None
        self.focused = False
        self.reparse()

    @property
    def is_empty(self):
        return not self.text.strip()

    @property
    def is_valid(self):
        return self.simplified is not None

    def set_text(self, text):
        """ sets the text and reparses. Returns False if the text
            did not change. """
        if text == self.text:
            return False
        self.text = text
        self.reparse()
        return True

    def set_color(self, color):
        color = tuple(float(c) for c in color)
        if color == self.color:
            return False
        self.color = color
        return True

    def reparse(self):
        if self.is_empty:
            self.result, self.simplified = EMPTY, None
            return

        try:
            self.result = classify(symbolic.parse_strict(self.text))
        except symbolic.ParseFailure as e:
            PIGRAPH_GL.debug('entry {}: cannot parse "{}": {}'.format(self.id, self.text, e))
            self.result, self.simplified = Invalid(str(e)), None
            return

        self.simplified = symbolic.full_simplify(self.result.ast)

    def display_notation(self):
        if self.simplified is None:
            return None
        if isinstance(self.result, ParsedFunction):
            return 'y = {}'.format(self.simplified.to_display_notation())
        return self.simplified.to_display_notation()

    def __repr__(self):
        return 'GraphEntry({}, {!r}, {})'.format(self.id, self.text, type(self.result).__name__)


class GraphSession():
    """
    ordered list of graph entries.

        session = GraphSession()
        session.on_change.append(controller.mark_dirty)
        entry = session.add('x^2 + y^2 = 4')
        session.edit(entry, 'x^2 + y^2 = 9')

    on_change is invoked with (session, reason) where reason is
    one of "add", "edit", "color" and "remove".
    """
    def __init__(self, default_color=DEFAULT_COLOR):
        self.default_color = tuple(default_color)
        self.entries = []
        self.on_change = Event()
        self._next_id = 0

    @property
    def next_id(self):
        """ the id the next added entry receives """
        return self._next_id

    def add(self, text, color=None):
        """ appends a new entry for non-empty **text** """
        if not text.strip():
            return None
        entry = GraphEntry(self._next_id, text, color or self.default_color)
        self._next_id += 1
        self.entries.append(entry)
        self.on_change(self, 'add')
        return entry

    def edit(self, entry, text):
        if not entry.set_text(text):
            return False
        self.on_change(self, 'edit')
        return True

    def set_color(self, entry, color):
        if not entry.set_color(color):
            return False
        self.on_change(self, 'color')
        return True

    def set_focus(self, entry, focused):
        entry.focused = bool(focused)

    def prune(self):
        """ removes entries which are empty and not focused. an
            empty entry keeps living while it is edited. Returns
            the removed entries. """
        kept = [e for e in self.entries if not e.is_empty or e.focused]
        removed = [e for e in self.entries if e not in kept]
        if len(removed):
            self.entries = kept
            self.on_change(self, 'remove')
        return removed

