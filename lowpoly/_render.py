"""
Render orchestration: background, mesh, shading, export.

A render is a single linear pipeline. The background stage returns a
future; mesh generation and shading only start once it has resolved,
since shading reads back the painted background.
"""
import logging
from concurrent.futures import TimeoutError as FutureTimeoutError
from collections.abc import Mapping

import numpy

from lowpoly._background import draw_background, finish_background
from lowpoly._config import RenderConfig
from lowpoly._image import ImageLoader, ImageLoadError
from lowpoly._mesh import Mesh
from lowpoly._shader import draw_cell
from lowpoly._surface import Surface


class RenderResult:
    """
    Everything produced by one render call.

    :param config: RenderConfig used for the render
    :param surface: Surface holding the final raster
    :param mesh: Mesh of points and triangles
    :param fills: list of RGBA fill colours, one per triangle
    :param background: uint8 array, snapshot of the painted background
    :param data_url: str, PNG ``data:`` URL of the final raster
    """
    def __init__(self, config, surface, mesh, fills, background, data_url):
        self.config = config
        self.surface = surface
        self.mesh = mesh
        self.fills = fills
        self.background = background
        self.data_url = data_url

    @property
    def points(self):
        return self.mesh.points

    @property
    def triangles(self):
        return self.mesh.triangles

    def __repr__(self):
        return (f"RenderResult({self.surface!r}, {self.mesh!r})")


class Renderer:
    """
    Renders low-poly backgrounds onto a surface.

    :param width, height: int, size of a new surface (ignored when
                          ``surface`` is given)
    :param surface: Surface, optional existing surface to draw on
    :param rng: numpy.random.Generator or seed for the jitter and shading
    :param loader: ImageLoader, optional; one is created on demand and
                   closed with the renderer otherwise
    """
    def __init__(self, width=0, height=0, surface=None, rng=None,
                 loader=None):
        self.surface = surface if surface is not None else Surface(width,
                                                                   height)
        if isinstance(rng, numpy.random.Generator):
            self.rng = rng
        else:
            self.rng = numpy.random.default_rng(rng)
        self.loader = loader
        self._owns_loader = False

    @property
    def width(self):
        return self.surface.width

    @property
    def height(self):
        return self.surface.height

    def _get_loader(self):
        if self.loader is None:
            self.loader = ImageLoader()
            self._owns_loader = True
        return self.loader

    def render(self, config, callback=None, previous=None):
        """
        Run one full render.

        :param config: RenderConfig, or a mapping of options merged onto
                       ``previous`` (see ``RenderConfig.from_options``)
        :param callback: optional callable invoked with the RenderResult
        :param previous: RenderConfig supplying values for options that
                         ``config`` leaves out
        :return: RenderResult
        """
        if isinstance(config, Mapping):
            config = RenderConfig.from_options(config, previous=previous)
        elif previous is not None:
            logging.warning("`previous` is ignored when a RenderConfig is "
                            "passed, use RenderConfig.merge instead")
        config.validate()

        surface = self.surface
        loader = self._get_loader() if config.uses_image else self.loader

        future = draw_background(surface, config, loader)
        try:
            finish_background(surface, future, timeout=config.image_timeout)
        except FutureTimeoutError as e:
            future.cancel()
            raise ImageLoadError(f"Background image {config.image!r} did not "
                                 f"load within {config.image_timeout} s") from e
        background = surface.get_image_data()

        mesh = Mesh.generate(surface.width, surface.height, config.cell_size,
                             config.variance, self.rng)

        fills = []
        if surface.width > 0 and surface.height > 0:
            for triangle in mesh.triangles:
                fills.append(draw_cell(surface, triangle, config.depth,
                                       self.rng, source=background))

        result = RenderResult(config, surface, mesh, fills, background,
                              surface.to_data_url())
        logging.debug(f"Rendered {len(fills)} cells on a "
                      f"{surface.width}x{surface.height} surface")
        if callback is not None:
            callback(result)
        return result

    def close(self):
        if self._owns_loader and self.loader is not None:
            self.loader.close()
            self.loader = None
            self._owns_loader = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()
