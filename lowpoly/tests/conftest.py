import numpy
import pytest
from PIL import Image


@pytest.fixture
def rng():
    """Seeded generator so jitter and shading are reproducible."""
    return numpy.random.default_rng(1234)


class SequenceRNG:
    """Stand-in generator returning a fixed cycle of uniform samples."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = 0

    def random(self, size=None):
        if size is None:
            v = self.values[self.calls % len(self.values)]
            self.calls += 1
            return v
        n = int(numpy.prod(size))
        out = [self.values[(self.calls + k) % len(self.values)]
               for k in range(n)]
        self.calls += n
        return numpy.array(out, dtype=float).reshape(size)


@pytest.fixture
def sequence_rng():
    return SequenceRNG


@pytest.fixture
def quadrant_image():
    """200x100 image: left half red, right half blue."""
    im = Image.new('RGBA', (200, 100), (255, 0, 0, 255))
    im.paste((0, 0, 255, 255), (100, 0, 200, 100))
    return im


@pytest.fixture
def image_file(tmp_path, quadrant_image):
    path = tmp_path / 'quadrants.png'
    quadrant_image.save(path)
    return path
