#-*- coding: utf-8 -*-
"""
global gl state and console reporting.

    from pigraph.gl import PIGRAPH_GL
    PIGRAPH_GL.DEBUG = True
    PIGRAPH_GL.warn('something looks odd')
    PIGRAPH_GL.hint('and this is how to fix it')

all messages go through the "pigraph" logger. If the application
did not configure logging, a console handler with colored level
tags is installed on first use.
"""
import logging

from termcolor import colored

LOGGER_NAME = 'pigraph'

_LEVEL_TAGS = {
    logging.DEBUG:    ('debug', 'blue'),
    logging.INFO:     ('info', 'cyan'),
    logging.WARNING:  ('warn', 'yellow'),
    logging.ERROR:    ('error', 'red'),
    logging.CRITICAL: ('fatal', 'red'),
}

class ColoredFormatter(logging.Formatter):
    def format(self, record):
        tag, color = _LEVEL_TAGS.get(record.levelno, (record.levelname.lower(), None))
        if getattr(record, 'hint', False):
            tag, color = 'hint', 'green'
        prefix = colored('[{:>5}]'.format(tag), color) if color else '[{:>5}]'.format(tag)
        return '{} {}'.format(prefix, super().format(record))


class PIGRAPH_GL():
    """
    class level facade. There is exactly one gl context per
    process so there is no point in instances.
    """
    DEBUG = False

    # the active window context, set by the window when it
    # makes its GL context current.
    CONTEXT = None

    _logger = None

    @classmethod
    def logger(cls):
        if cls._logger is None:
            logger = logging.getLogger(LOGGER_NAME)
            if not logger.handlers and not logging.getLogger().handlers:
                handler = logging.StreamHandler()
                handler.setFormatter(ColoredFormatter('%(message)s'))
                logger.addHandler(handler)
                logger.propagate = False
            cls._logger = logger
        cls._logger.setLevel(logging.DEBUG if cls.DEBUG else logging.INFO)
        return cls._logger

    @classmethod
    def debug(cls, msg, *args):
        cls.logger().debug(msg, *args)

    @classmethod
    def info(cls, msg, *args):
        cls.logger().info(msg, *args)

    @classmethod
    def hint(cls, msg, *args):
        cls.logger().info(msg, *args, extra={'hint': True})

    @classmethod
    def warn(cls, msg, *args):
        cls.logger().warning(msg, *args)

    @classmethod
    def error(cls, msg, *args):
        cls.logger().error(msg, *args)
