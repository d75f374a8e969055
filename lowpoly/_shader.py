"""Per-cell colour sampling and shading."""
import math


def clamp_centre(triangle, width, height):
    """
    Pixel coordinate of a triangle's centre, clamped into the surface.

    :return: (x, y) ints in [0, width - 1] x [0, height - 1]
    """
    centre = triangle.centre()
    x = min(max(centre.x, 0), width - 1)
    y = min(max(centre.y, 0), height - 1)
    return int(x), int(y)


def shade_factor(depth, rng):
    """Random factor drawn uniformly from [-depth, depth]."""
    return rng.random() * 2 * depth - depth


def shade_colour(pixel, factor):
    """
    Darken (factor > 0) or lighten (factor < 0) a sampled pixel.

    :param pixel: (r, g, b, a) ints as read from the surface
    :param factor: float, multiplicative shading factor
    :return: (r, g, b, a) with float alpha in [0, 1]
    """
    r, g, b, a = pixel
    channels = (min(max(int(math.floor(c - c * factor + 0.5)), 0), 255)
                for c in (r, g, b))
    return tuple(channels) + (a / 255,)


def draw_cell(surface, triangle, depth, rng, source=None):
    """
    Sample the background at the triangle's centre, shade the colour and
    fill the triangle with it.

    :param source: optional uint8 array (height, width, 4) to sample from,
                   the painted background; the live surface is sampled
                   when None
    :return: the RGBA fill colour
    """
    x, y = clamp_centre(triangle, surface.width, surface.height)
    if source is None:
        pixel = surface.get_pixel(x, y)
    else:
        pixel = tuple(int(v) for v in source[y, x])
    colour = shade_colour(pixel, shade_factor(depth, rng))
    surface.fill_polygon(triangle.vertices, colour)
    return colour
