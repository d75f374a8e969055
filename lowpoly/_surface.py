"""
In-memory RGBA drawing surface.

The surface plays the part of a 2D canvas context: it can clear regions,
fill rectangles with solid colours or linear gradients, fill polygon paths,
read pixels back and export its raster. Pixels are stored in a numpy
``uint8`` array of shape (height, width, 4); Pillow rasterises polygon
paths and handles encoding.
"""
import base64
import io
import math

import numpy
from PIL import Image, ImageDraw

from lowpoly._colour import to_rgba

COMPOSITE_MODES = ('source-over', 'multiply')


def _to_uint8(a):
    return numpy.clip(numpy.floor(a * 255.0 + 0.5), 0, 255).astype(numpy.uint8)


def _rgba_array(rgba):
    r, g, b, a = rgba
    return numpy.array([r / 255.0, g / 255.0, b / 255.0, a])


def composite(dst, src, mode='source-over', mask=None):
    """
    Composite a source over a destination region using the W3C
    compositing model with a separable blend mode.

    :param dst: uint8 array (h, w, 4), the destination pixels
    :param src: float array broadcastable to (h, w, 4), non-premultiplied
                RGBA in [0, 1]
    :param mode: str, 'source-over' or 'multiply'
    :param mask: optional boolean or float coverage array (h, w)
    :return: uint8 array (h, w, 4)
    """
    if mode not in COMPOSITE_MODES:
        raise ValueError(f"Unsupported composite mode {mode!r}")
    src = numpy.asarray(src, dtype=float)
    cb = dst[..., :3] / 255.0
    ab = dst[..., 3:4] / 255.0
    cs = src[..., :3]
    a_s = src[..., 3:4]
    if mask is not None:
        a_s = a_s * numpy.asarray(mask, dtype=float)[..., None]

    if mode == 'multiply':
        # Blend only where there is a backdrop to blend with
        cs = (1.0 - ab) * cs + ab * (cs * cb)

    ao = a_s + ab * (1.0 - a_s)
    co = a_s * cs + ab * cb * (1.0 - a_s)
    with numpy.errstate(divide='ignore', invalid='ignore'):
        c = numpy.where(ao > 0.0, co / ao, 0.0)
    out = numpy.concatenate([numpy.broadcast_to(c, cb.shape),
                             numpy.broadcast_to(ao, ab.shape)], axis=-1)
    return _to_uint8(out)


class LinearGradient:
    """
    A linear gradient between two points in surface coordinates.

    Colour stops are added with ``add_color_stop``; pixels are coloured by
    projecting their centres onto the gradient vector, clamping the
    parameter to [0, 1] and interpolating between the surrounding stops.
    """
    def __init__(self, x0, y0, x1, y1):
        self.start = (float(x0), float(y0))
        self.end = (float(x1), float(y1))
        self.stops = []

    def add_color_stop(self, offset, colour):
        if not 0.0 <= offset <= 1.0:
            raise ValueError(f"Gradient stop offset {offset} outside [0, 1]")
        self.stops.append((float(offset), to_rgba(colour)))
        # Stable, so equal offsets keep insertion order
        self.stops.sort(key=lambda stop: stop[0])

    def evaluate(self, width, height):
        """Return a float RGBA array (height, width, 4) in [0, 1]."""
        out = numpy.zeros((height, width, 4))
        x0, y0 = self.start
        dx = self.end[0] - x0
        dy = self.end[1] - y0
        length2 = dx * dx + dy * dy
        if not self.stops or length2 == 0.0:
            return out  # paints nothing

        px = numpy.arange(width) + 0.5 - x0
        py = numpy.arange(height) + 0.5 - y0
        t = (px[None, :] * dx + py[:, None] * dy) / length2
        t = numpy.clip(t, 0.0, 1.0)

        offsets = numpy.array([s[0] for s in self.stops])
        colours = numpy.array([_rgba_array(s[1]) for s in self.stops])
        for k in range(4):
            out[..., k] = numpy.interp(t, offsets, colours[:, k])
        return out


class Surface:
    """
    A fixed size RGBA raster with a canvas-like drawing API.

    :param width: int, surface width in pixels
    :param height: int, surface height in pixels
    """
    def __init__(self, width, height):
        self.width = int(width)
        self.height = int(height)
        self.pixels = numpy.zeros((self.height, self.width, 4),
                                  dtype=numpy.uint8)
        self.composite = 'source-over'

    def __repr__(self):
        return f"Surface({self.width}, {self.height})"

    @classmethod
    def from_image(cls, image):
        image = image.convert('RGBA')
        surface = cls(*image.size)
        surface.pixels = numpy.array(image, dtype=numpy.uint8)
        return surface

    def _region(self, x, y, w, h):
        if w < 0:
            x, w = x + w, -w
        if h < 0:
            y, h = y + h, -h
        # Pixels whose centres fall inside the rectangle
        x0 = max(0, math.ceil(x - 0.5))
        y0 = max(0, math.ceil(y - 0.5))
        x1 = min(self.width, math.ceil(x + w - 0.5))
        y1 = min(self.height, math.ceil(y + h - 0.5))
        return x0, y0, max(x0, x1), max(y0, y1)

    def create_linear_gradient(self, x0, y0, x1, y1):
        return LinearGradient(x0, y0, x1, y1)

    def clear_rect(self, x, y, w, h):
        x0, y0, x1, y1 = self._region(x, y, w, h)
        self.pixels[y0:y1, x0:x1] = 0

    def clear(self):
        self.clear_rect(0, 0, self.width, self.height)

    def fill_rect(self, x, y, w, h, style):
        """
        Fill a rectangle with an RGBA colour or a ``LinearGradient``,
        composited with the current ``composite`` mode.
        """
        x0, y0, x1, y1 = self._region(x, y, w, h)
        if x1 <= x0 or y1 <= y0:
            return
        if isinstance(style, LinearGradient):
            src = style.evaluate(self.width, self.height)[y0:y1, x0:x1]
        else:
            src = _rgba_array(to_rgba(style))
        dst = self.pixels[y0:y1, x0:x1]
        self.pixels[y0:y1, x0:x1] = composite(dst, src, self.composite)

    def fill_polygon(self, vertices, colour):
        """
        Fill the closed path through ``vertices`` with a solid colour.

        The path starts at the first vertex, runs through the others and
        closes back to the start. There is no stroke and no anti-aliasing.
        """
        vertices = [(float(vx), float(vy)) for vx, vy in vertices]
        if len(vertices) < 3:
            return
        xs = [v[0] for v in vertices]
        ys = [v[1] for v in vertices]
        x0 = max(0, int(math.floor(min(xs))))
        y0 = max(0, int(math.floor(min(ys))))
        x1 = min(self.width, int(math.ceil(max(xs))) + 1)
        y1 = min(self.height, int(math.ceil(max(ys))) + 1)
        if x1 <= x0 or y1 <= y0:
            return

        local = [(vx - x0, vy - y0) for vx, vy in vertices]
        mask_img = Image.new('L', (x1 - x0, y1 - y0), 0)
        draw = ImageDraw.Draw(mask_img)
        draw.polygon(local, fill=255)
        # Edge pixels too, so polygons sharing an edge leave no seam
        draw.line(local + [local[0]], fill=255)
        mask = numpy.asarray(mask_img) > 0
        if not mask.any():
            return

        dst = self.pixels[y0:y1, x0:x1]
        self.pixels[y0:y1, x0:x1] = composite(
            dst, _rgba_array(to_rgba(colour)), self.composite, mask=mask)

    def get_pixel(self, x, y):
        """Integer RGBA of the pixel at column ``x``, row ``y``."""
        return tuple(int(v) for v in self.pixels[int(y), int(x)])

    def get_image_data(self, x=0, y=0, w=None, h=None):
        w = self.width if w is None else w
        h = self.height if h is None else h
        return self.pixels[y:y + h, x:x + w].copy()

    def draw_image(self, image, box=None):
        """
        Draw a Pillow image scaled onto the full surface.

        :param image: PIL.Image.Image
        :param box: optional (left, upper, right, lower) crop box in image
                    coordinates, the region that is scaled to the surface
        """
        if self.width == 0 or self.height == 0:
            return
        scaled = image.convert('RGBA').resize(
            (self.width, self.height), resample=Image.Resampling.LANCZOS,
            box=box)
        src = numpy.asarray(scaled, dtype=float) / 255.0
        self.pixels = composite(self.pixels, src, self.composite)

    def to_image(self):
        return Image.fromarray(self.pixels)

    def to_data_url(self, format='PNG'):
        """Encode the raster as a ``data:`` URL."""
        if self.width == 0 or self.height == 0:
            return 'data:,'
        buf = io.BytesIO()
        self.to_image().save(buf, format=format)
        mime = Image.MIME.get(format.upper(), 'image/png')
        encoded = base64.b64encode(buf.getvalue()).decode('ascii')
        return f"data:{mime};base64,{encoded}"

    def save(self, fp, format=None):
        self.to_image().save(fp, format=format)
