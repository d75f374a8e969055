"""End to end tests of the render pipeline."""
import base64
import io
import threading
from concurrent.futures import Future
from unittest.mock import MagicMock, patch

import numpy
import pytest
from PIL import Image

from lowpoly._colour import hsl_to_rgb
from lowpoly._config import RenderConfig
from lowpoly._image import ImageLoader, ImageLoadError
from lowpoly._mesh import Mesh
from lowpoly._render import Renderer, RenderResult
from lowpoly._shader import clamp_centre
from lowpoly._surface import Surface


@pytest.fixture
def flat_config():
    return RenderConfig(cell_size=20, variance=0, depth=0,
                        colours=[(200, 50, 50)])


class TestFlatScenario:
    """100x100 surface, cell size 20, no jitter, no shading."""

    def test_background_is_stop_times_overlay(self, flat_config):
        with Renderer(100, 100, rng=0) as renderer:
            result = renderer.render(flat_config)
        r, g, b = hsl_to_rgb(200, 50, 50)
        top = result.background[0, 50]
        bottom = result.background[99, 50]
        assert tuple(top[:3]) == pytest.approx((r, g, b), abs=1)
        assert bottom[0] < top[0] and bottom[2] < top[2]
        # Flat fill: every row is uniform
        assert (result.background == result.background[:, :1]).all()

    def test_fills_equal_sampled_pixels(self, flat_config):
        with Renderer(100, 100, rng=0) as renderer:
            result = renderer.render(flat_config)
        assert len(result.fills) == len(result.triangles)
        # With depth 0 every fill is the background pixel at its centre
        for triangle, fill in zip(result.triangles, result.fills):
            x, y = clamp_centre(triangle, 100, 100)
            expected = tuple(int(v) for v in result.background[y, x][:3])
            assert fill == expected + (1.0,)

    def test_grid_and_points(self, flat_config):
        with Renderer(100, 100, rng=0) as renderer:
            result = renderer.render(flat_config)
        assert (result.mesh.columns, result.mesh.rows) == (9, 11)
        assert result.points[0] == (-20.0, -20.0)
        assert len(result.triangles) == 2 * 8 * 9

    def test_data_url(self, flat_config):
        with Renderer(100, 100, rng=0) as renderer:
            result = renderer.render(flat_config)
        raw = base64.b64decode(result.data_url.split(',', 1)[1])
        im = Image.open(io.BytesIO(raw)).convert('RGBA')
        assert im.size == (100, 100)
        assert numpy.array_equal(numpy.asarray(im), result.surface.pixels)


class TestRenderer:

    def test_callback_receives_result(self, flat_config):
        seen = []
        with Renderer(40, 30, rng=1) as renderer:
            result = renderer.render(flat_config, callback=seen.append)
        assert seen == [result]
        assert isinstance(result, RenderResult)

    def test_mapping_options_merge_onto_previous(self, flat_config):
        with Renderer(40, 40, rng=1) as renderer:
            result = renderer.render({'cellSize': 10}, previous=flat_config)
        assert result.config.cell_size == 10
        assert result.config.colours == flat_config.colours

    def test_seeded_renders_are_reproducible(self):
        config = RenderConfig(cell_size=15, variance=0.8, depth=0.3,
                              colours=[(10, 80, 60), (250, 70, 40)])
        a = Renderer(60, 40, rng=99).render(config)
        b = Renderer(60, 40, rng=99).render(config)
        assert numpy.array_equal(a.surface.pixels, b.surface.pixels)
        assert a.fills == b.fills

    def test_shading_changes_pixels(self):
        config = RenderConfig(cell_size=15, variance=0.5, depth=0.4,
                              colours=[(10, 80, 60)])
        result = Renderer(60, 40, rng=3).render(config)
        assert not numpy.array_equal(result.surface.pixels, result.background)

    def test_mesh_covers_surface(self):
        """Filling every triangle of a fresh mesh leaves no pixel bare."""
        surface = Surface(80, 50)
        mesh = Mesh.generate(80, 50, 12, 0.15, numpy.random.default_rng(5))
        for triangle in mesh.triangles:
            surface.fill_polygon(triangle.vertices, (0, 0, 0, 1.0))
        assert (surface.pixels[..., 3] == 255).all()

    def test_unjittered_mesh_covers_surface(self):
        surface = Surface(37, 61)
        mesh = Mesh.generate(37, 61, 9, 0, numpy.random.default_rng(0))
        for triangle in mesh.triangles:
            surface.fill_polygon(triangle.vertices, (0, 0, 0, 1.0))
        assert (surface.pixels[..., 3] == 255).all()

    def test_existing_surface(self, flat_config):
        surface = Surface(30, 30)
        result = Renderer(surface=surface, rng=0).render(flat_config)
        assert result.surface is surface

    def test_zero_size_surface(self, flat_config):
        result = Renderer(0, 0, rng=0).render(flat_config)
        assert result.fills == []
        assert result.data_url == 'data:,'

    def test_invalid_config(self):
        with pytest.raises(ValueError):
            Renderer(10, 10).render(RenderConfig(cell_size=0,
                                                 colours=[(1, 1, 1)]))
        with pytest.raises(ValueError):
            Renderer(10, 10).render(RenderConfig())


class TestImageRender:

    def test_image_background(self, image_file):
        config = RenderConfig(cell_size=10, image=image_file, use_image=True)
        with Renderer(50, 50, rng=0) as renderer:
            result = renderer.render(config)
            assert renderer.loader is not None
        assert renderer.loader is None
        assert tuple(result.background[25, 2][:3]) == (255, 0, 0)
        assert tuple(result.background[25, 47][:3]) == (0, 0, 255)
        assert len(result.fills) == len(result.triangles)

    def test_supplied_loader_is_not_closed(self, image_file):
        config = RenderConfig(cell_size=10, image=image_file, use_image=True)
        loader = ImageLoader()
        try:
            with Renderer(20, 20, loader=loader) as renderer:
                renderer.render(config)
            assert renderer.loader is loader
            assert loader.load(image_file).result(timeout=10) is not None
        finally:
            loader.close()

    def test_load_failure_raises(self, tmp_path):
        config = RenderConfig(image=tmp_path / 'missing.png', use_image=True)
        with Renderer(20, 20) as renderer:
            with pytest.raises(ImageLoadError):
                renderer.render(config)

    def test_load_timeout_raises(self, image_file):
        pending = Future()
        config = RenderConfig(image=image_file, use_image=True,
                              image_timeout=0.05)
        with patch('lowpoly._render.draw_background', return_value=pending):
            with Renderer(20, 20) as renderer:
                with pytest.raises(ImageLoadError):
                    renderer.render(config)
        assert pending.cancelled()

    def test_late_image_does_not_touch_surface(self, image_file):
        """An image that arrives after its render timed out is discarded."""
        release = threading.Event()

        def slow_read(reference, timeout):
            release.wait(10)
            return Image.new('RGBA', (4, 4), (255, 0, 0, 255))

        image_config = RenderConfig(image=image_file, use_image=True,
                                    image_timeout=0.05)
        gradient_config = RenderConfig(cell_size=10, colours=[(120, 100, 50)])
        with patch('lowpoly._image.read_image', side_effect=slow_read):
            renderer = Renderer(20, 20, rng=0)
            with pytest.raises(ImageLoadError):
                renderer.render(image_config)
            result = renderer.render(gradient_config)
            before = result.surface.pixels.copy()
            release.set()
            # Waits for the abandoned load to finish
            renderer.close()
        assert numpy.array_equal(result.surface.pixels, before)

    def test_image_timeout_is_passed_per_load(self, quadrant_image):
        read = MagicMock(return_value=quadrant_image)
        with patch('lowpoly._image.read_image', read):
            with Renderer(20, 20, rng=0) as renderer:
                for timeout in (3.0, 7.5):
                    renderer.render(RenderConfig(
                        cell_size=10, image='http://example.com/a.png',
                        use_image=True, image_timeout=timeout))
        assert [c.args[1] for c in read.call_args_list] == [3.0, 7.5]
