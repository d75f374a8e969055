"""
Background fill stage.

The background is either a multi-stop gradient multiplied with a fixed
white to light-gray overlay, or a source image drawn with a cover fit.
Pixels painted here are sampled by the cell shader, so the stage hands
back a future and shading waits for ``finish_background`` to return.
"""
import logging
from concurrent.futures import Future

from lowpoly._colour import hsl_to_rgba
from lowpoly._image import draw_image_cover

OVERLAY_STOPS = ('#fff', '#ccc')


def paint_gradient(surface, colours, overlay=True):
    """
    Paint the colour-stop gradient over the full surface.

    :param surface: Surface
    :param colours: sequence of (h, s, l) stops spread evenly over [0, 1]
    :param overlay: bool, multiply with the vertical overlay gradient
    """
    colours = list(colours)
    if not colours:
        raise ValueError("At least one colour stop is required to paint a "
                         "gradient background")
    w, h = surface.width, surface.height
    surface.clear_rect(0, 0, w, h)
    surface.composite = 'multiply'
    try:
        if len(colours) == 1:
            style = hsl_to_rgba(*colours[0])
        else:
            style = surface.create_linear_gradient(0, 0, w, h)
            for i, c in enumerate(colours):
                style.add_color_stop(i / (len(colours) - 1), hsl_to_rgba(*c))
        surface.fill_rect(0, 0, w, h, style)

        if overlay:
            shade = surface.create_linear_gradient(0, 0, 0, h)
            shade.add_color_stop(0, OVERLAY_STOPS[0])
            shade.add_color_stop(1, OVERLAY_STOPS[1])
            surface.fill_rect(0, 0, w, h, shade)
    finally:
        surface.composite = 'source-over'


def draw_background(surface, config, loader=None):
    """
    Start painting the background described by ``config``.

    The gradient is painted immediately. For an image background only the
    load is started; the image is drawn by ``finish_background`` on the
    calling thread, so a load that is abandoned never touches the surface.

    :param surface: Surface
    :param config: RenderConfig
    :param loader: ImageLoader, required for the image path
    :return: concurrent.futures.Future resolving to the decoded image, or
             to None when the gradient has been painted
    """
    surface.clear_rect(0, 0, surface.width, surface.height)
    if config.use_image and config.image:
        if loader is None:
            raise ValueError("An ImageLoader is required to draw an image "
                             "background")
        logging.debug("Loading image background")
        return loader.load(config.image, timeout=config.image_timeout)

    logging.debug(f"Drawing gradient background with {len(config.colours)} "
                  f"colour stop(s)")
    future = Future()
    try:
        paint_gradient(surface, config.colours)
    except Exception as e:
        future.set_exception(e)
    else:
        future.set_result(None)
    return future


def finish_background(surface, future, timeout=None):
    """
    Wait for the background future and draw a loaded image with a cover
    fit. Raises ``concurrent.futures.TimeoutError`` if the future is not
    done within ``timeout`` seconds, leaving the surface untouched.
    """
    image = future.result(timeout=timeout)
    if image is not None:
        surface.clear_rect(0, 0, surface.width, surface.height)
        draw_image_cover(surface, image)
