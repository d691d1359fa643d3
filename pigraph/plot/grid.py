"""
grid spacing selection. the fragment shader runs the same loop
per pixel; this module is the host side reference of it.

starting at one world unit the spacing doubles while its size on
screen is below MIN_PIXELS and halves while above MAX_PIXELS.
Both loops stop after MAX_STEPS iterations.
"""
MIN_PIXELS = 10.0
MAX_PIXELS = 40.0
MAX_STEPS = 128

# major grid lines every MAJOR_EVERY minor lines
MAJOR_EVERY = 5.0

def grid_spacing(view_width, resolution_x):
    """ world distance between two minor grid lines """
    pixels_per_unit = resolution_x / view_width
    spacing = 1.0
    for _ in range(MAX_STEPS):
        if spacing * pixels_per_unit >= MIN_PIXELS:
            break
        spacing *= 2.0
    for _ in range(MAX_STEPS):
        if spacing * pixels_per_unit <= MAX_PIXELS:
            break
        spacing *= 0.5
    return spacing
