"""Asynchronous image loading and cover-fit drawing of background images."""
import base64
import io
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from urllib.parse import unquote_to_bytes, urlparse

import requests
from PIL import Image, UnidentifiedImageError


class ImageLoadError(RuntimeError):
    """Raised when a background image cannot be fetched or decoded."""


def _decode_data_url(url):
    header, sep, payload = url.partition(',')
    if not sep:
        raise ImageLoadError("Malformed data URL")
    if header.endswith(';base64'):
        return base64.b64decode(payload)
    return unquote_to_bytes(payload)


def read_image(reference, timeout=30):
    """
    Fetch and decode an image reference synchronously.

    :param reference: an http(s) URL, a ``data:`` URL, a file system path
                      or an already decoded ``PIL.Image.Image``
    :param timeout: float, network timeout in seconds
    :return: PIL.Image.Image in RGBA mode
    """
    try:
        if isinstance(reference, Image.Image):
            image = reference.copy()
        elif isinstance(reference, (str, os.PathLike)):
            ref = os.fspath(reference)
            scheme = urlparse(ref).scheme.lower()
            if scheme in ('http', 'https'):
                r = requests.get(ref, timeout=timeout)
                r.raise_for_status()
                image = Image.open(io.BytesIO(r.content))
            elif scheme == 'data':
                image = Image.open(io.BytesIO(_decode_data_url(ref)))
            else:
                image = Image.open(ref)
            image.load()
        else:
            raise TypeError(f"Unsupported image reference {reference!r}")
    except ImageLoadError:
        raise
    except (OSError, ValueError, TypeError, UnidentifiedImageError,
            requests.RequestException) as e:
        raise ImageLoadError(f"Could not load image {reference!r}: {e}") from e

    logging.info("Loaded background image {} ({}x{})".format(
        reference if not isinstance(reference, Image.Image) else 'object',
        *image.size))
    return image.convert('RGBA')


class ImageLoader:
    """
    Loads background images off the calling thread.

    ``load`` returns a ``concurrent.futures.Future`` resolving to the
    decoded image, or failing with ``ImageLoadError``.

    :param max_workers: int, size of the loading thread pool
    :param timeout: float, network timeout in seconds for URL references
    """
    def __init__(self, max_workers=1, timeout=30):
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(max_workers=max_workers,
                                            thread_name_prefix='lowpoly-image')

    def load(self, reference, timeout=None):
        """
        Start loading ``reference`` on the pool.

        :param timeout: float, network timeout for this load, defaults to
                        the loader's ``timeout``
        """
        if timeout is None:
            timeout = self.timeout
        return self._executor.submit(read_image, reference, timeout)

    def close(self):
        self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


def cover_box(image_size, target_size, offset=(0.5, 0.5)):
    """
    Crop box of an image that fills a target area exactly when scaled,
    preserving the aspect ratio (CSS ``background-size: cover``).

    :param image_size: (width, height) of the source image
    :param target_size: (width, height) of the target area
    :param offset: (x, y) position of the crop window within the overflow,
                   0 aligns left/top, 1 aligns right/bottom
    :return: (left, upper, right, lower) in image coordinates
    """
    iw, ih = image_size
    w, h = target_size
    ox = min(max(offset[0], 0.0), 1.0)
    oy = min(max(offset[1], 0.0), 1.0)
    if iw <= 0 or ih <= 0 or w <= 0 or h <= 0:
        return 0.0, 0.0, float(iw), float(ih)

    scale = max(w / iw, h / ih)
    cw = min(iw, w / scale)
    ch = min(ih, h / scale)
    cx = (iw - cw) * ox
    cy = (ih - ch) * oy
    return cx, cy, cx + cw, cy + ch


def draw_image_cover(surface, image, offset=(0.5, 0.5)):
    box = cover_box(image.size, (surface.width, surface.height), offset)
    surface.draw_image(image, box=box)
