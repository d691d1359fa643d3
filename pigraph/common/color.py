def hex_to_rgba(hexstr):
    """ '#rrggbb' or '#rrggbbaa' to a list of floats in [0, 1].
        alpha defaults to 1. """
    hexstr = hexstr.strip().lstrip('#')
    if len(hexstr) not in (6, 8):
        raise ValueError('invalid hex color "{}"'.format(hexstr))
    rgba = [float(i)/255 for i in bytes.fromhex(hexstr)]
    if len(rgba) == 3:
        rgba.append(1.0)
    return rgba
