"""
pigraph.plot

equation plotting on top of pigraph.gl: the graph entry model,
the view transform and the synthesizer which turns entries
into one fragment shader.

    from pigraph.plot.plotter2d import plot2d
    plot2d('x^2 + y^2 = 4', 'y = sin(x)')

:author: keksnicoh
"""
