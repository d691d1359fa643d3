import os

BASE = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

def load_lib_file(relative_path):
    """ reads a file shipped with the pigraph package, e.g.

            load_lib_file('gl/shaders/quad.vrt.glsl')

    """
    with open(os.path.join(BASE, *relative_path.split('/')), 'r') as content_file:
        content = content_file.read()

    return content
