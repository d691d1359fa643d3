"""
pigraph command line

    python -m pigraph "x^2 + y^2 = 4" "y = sin(x)"
    pigraph --debug --style graph-thickness=3 "y = x^3"

"""
from pigraph.gl.pigraphgl import PIGRAPH_GL
from pigraph.plot.style import load_style

import argparse

def parse_style_args(items):
    style = {}
    for item in items:
        key, sep, value = item.partition('=')
        if not sep:
            raise argparse.ArgumentTypeError('style must be given as key=value, got "{}"'.format(item))
        style[key.strip()] = value
    return style

def main(argv=None):
    parser = argparse.ArgumentParser(prog='pigraph', description='interactive equation plotter')
    parser.add_argument('equations', nargs='*', help='initial equations, e.g. "x^2 + y^2 = 4"')
    parser.add_argument('--style', action='append', default=[], metavar='KEY=VALUE',
                        help='style override, e.g. axis-color=#ffffffff')
    parser.add_argument('--debug', action='store_true', help='log synthesized shaders')
    args = parser.parse_args(argv)

    PIGRAPH_GL.DEBUG = args.debug
    try:
        style = load_style(parse_style_args(args.style))
    except (argparse.ArgumentTypeError, ValueError) as e:
        parser.error(str(e))

    # the plotter pulls in glfw and imgui
    from pigraph.plot.plotter2d import plot2d
    plot2d(*args.equations, style=style)

if __name__ == '__main__':
    main()
