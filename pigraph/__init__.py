"""
pigraph

interactive equation plotter. Every edit of an equation
synthesizes and relinks a fragment shader which draws all
equations over a pannable and zoomable grid.

:author: keksnicoh
"""
__version__ = '0.1.0'
