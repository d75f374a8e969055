"""
Low-poly triangulated backgrounds.

Usage::

    from lowpoly import Renderer, RenderConfig

    with Renderer(640, 480, rng=42) as renderer:
        result = renderer.render(RenderConfig(cell_size=40, variance=0.75,
                                              depth=0.1,
                                              colours=[(200, 50, 50),
                                                       (320, 60, 40)]))
    result.surface.save('background.png')
"""
import logging

from ._background import draw_background, finish_background, paint_gradient
from ._colour import hsl_to_css, hsl_to_rgb, rgba_to_css
from ._config import RenderConfig
from ._geometry import Point, Triangle
from ._image import ImageLoader, ImageLoadError, cover_box, draw_image_cover
from ._mesh import (ROW_SPACING, Mesh, generate_points, generate_triangles,
                    grid_dimensions)
from ._render import Renderer, RenderResult
from ._shader import clamp_centre, draw_cell, shade_colour
from ._surface import LinearGradient, Surface

# Optional modules for plotting:
try:
    from ._plotting import plot_mesh
except ImportError:
    logging.warning("Mesh plotting is unavailable. To use install "
                    "matplotlib, install using ex. `pip install matplotlib` ")
    matplotlib_available = False
else:
    matplotlib_available = True

__all__ = [
    "Renderer",
    "RenderResult",
    "RenderConfig",
    "Surface",
    "LinearGradient",
    "Point",
    "Triangle",
    "Mesh",
    "ROW_SPACING",
    "grid_dimensions",
    "generate_points",
    "generate_triangles",
    "draw_background",
    "finish_background",
    "paint_gradient",
    "ImageLoader",
    "ImageLoadError",
    "cover_box",
    "draw_image_cover",
    "clamp_centre",
    "draw_cell",
    "shade_colour",
    "hsl_to_rgb",
    "hsl_to_css",
    "rgba_to_css",
]
if matplotlib_available:
    __all__.append("plot_mesh")
