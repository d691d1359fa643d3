#-*- coding: utf-8 -*-
"""
observer helper shared by the window, the session and the style.
"""

class Event(list):
    """
    list of callbacks. Calling the event calls every callback
    with the same arguments in the order they were appended.

        session.on_change.append(controller.mark_dirty)
        session.on_change(session, 'add')

    callbacks may remove themselves while the event runs.
    """
    MAX_LISTENERS = 163

    def __call__(self, *args, **kwargs):
        for callback in self[:]:
            callback(*args, **kwargs)

    def append(self, callback):
        if len(self) >= Event.MAX_LISTENERS:
            raise OverflowError('more than {} listeners'.format(Event.MAX_LISTENERS))
        super().append(callback)
