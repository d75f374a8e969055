"""Colour conversions between HSL stops, hex strings and RGBA tuples.

RGBA tuples follow the CSS ``rgba()`` convention: integer channels in
[0, 255] and a float alpha in [0, 1].
"""
import colorsys
import math


def _round(v):
    # Round half up like Math.round, not to even
    return int(math.floor(v + 0.5))


def _clamp(v, lo, hi):
    return max(lo, min(hi, v))


def hsl_to_rgb(h, s, l):
    """
    Convert a CSS style HSL triple to integer RGB channels.

    :param h: float, hue in degrees (wraps modulo 360)
    :param s: float, saturation in percent [0, 100]
    :param l: float, lightness in percent [0, 100]
    :return: tuple (r, g, b) of ints in [0, 255]
    """
    h = (h % 360.0) / 360.0
    s = _clamp(s, 0.0, 100.0) / 100.0
    l = _clamp(l, 0.0, 100.0) / 100.0
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return _round(r * 255), _round(g * 255), _round(b * 255)


def hsl_to_rgba(h, s, l):
    return hsl_to_rgb(h, s, l) + (1.0,)


def hsl_to_css(h, s, l):
    return "hsl({:g}, {:g}%, {:g}%)".format(h, s, l)


def rgba_to_css(rgba):
    r, g, b, a = rgba
    return "rgba({}, {}, {}, {:g})".format(r, g, b, a)


def parse_hex(colour):
    """Parse ``#rgb`` or ``#rrggbb`` into an opaque RGBA tuple."""
    value = colour.lstrip('#')
    if len(value) == 3:
        value = ''.join(ch * 2 for ch in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex colour {colour!r}")
    r, g, b = (int(value[i:i + 2], 16) for i in (0, 2, 4))
    return r, g, b, 1.0


def to_rgba(colour):
    """
    Normalise a colour given as a hex string, an HSL triple or an RGB(A)
    tuple into an RGBA tuple.

    Three element sequences are read as HSL stops, four element sequences
    as RGBA with alpha in [0, 1].
    """
    if isinstance(colour, str):
        return parse_hex(colour)
    colour = tuple(colour)
    if len(colour) == 3:
        return hsl_to_rgba(*colour)
    if len(colour) == 4:
        r, g, b, a = colour
        return (_clamp(_round(r), 0, 255), _clamp(_round(g), 0, 255),
                _clamp(_round(b), 0, 255), _clamp(float(a), 0.0, 1.0))
    raise ValueError(f"Cannot interpret {colour!r} as a colour")
