#-*- coding: utf-8 -*-
"""
contains the fullscreen quad mesh every synthesized
program is drawn with.

:author: Nicolas 'keksnicoh' Heimann
"""
import numpy as np

# quad mesh dtype.
QUAD_DTYPE = np.dtype([
    ('vertex', np.float32, 2),
    ('tex', np.float32, 2),
])

class StridedVertexMesh():
    """
    strided mesh

    mesh has a single buffer with strided data e.g.

       1. (vertex1, tex1)
       2. (vertex2, tex2)
           ...

    drawn as a triangle strip.
    """
    def __init__(self, driver, vertices, attribute_locations={'vertex': 0, 'tex': 1}):
        """
        Arguments:
            - driver: the gl driver
            - vertices: strided numpy data (must have a dtype)
            - attribute_locations: the locations of the attributes in the corresponding
                shader program. Attributes the vertices do not carry are ignored.
        """
        self.driver = driver
        self.vertices = vertices
        self.attribute_locations = {k: v for k, v in attribute_locations.items()
                                    if k in vertices.dtype.names}
        self.vao = None
        self.vbo = None
        self.init()

    def init(self):
        self.vao, self.vbo = self.driver.create_vertex_array(self.vertices, self.attribute_locations)

    def draw(self):
        """
        draws the vertex array object
        """
        self.driver.draw_arrays(self.vao, len(self.vertices))

    def delete(self):
        if self.vao is not None:
            self.driver.delete_vertex_array(self.vao, self.vbo)
            self.vao = None
            self.vbo = None


def mesh2d_fullscreen_quad():
    """ a quad covering the whole clip space. tex (0, 0) is
        the bottom left corner of the viewport. """
    mesh = np.zeros(4, dtype=QUAD_DTYPE)
    mesh['vertex'] = [(-1, -1), (1, -1), (-1, 1), (1, 1)]
    mesh['tex'] = [(0, 0), (1, 0), (0, 1), (1, 1)]
    return mesh
