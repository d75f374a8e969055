"""Render configuration."""
import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional, Tuple

# External option names and the fields they map to
OPTION_ALIASES = {
    'geometry': 'geometry',
    'cellSize': 'cell_size',
    'depth': 'depth',
    'variance': 'variance',
    'colours': 'colours',
    'colors': 'colours',
    'image': 'image',
    'useImage': 'use_image',
    'imageTimeout': 'image_timeout',
}


def _normalise_colours(colours):
    return tuple(tuple(float(v) for v in c) for c in colours)


@dataclass(frozen=True)
class RenderConfig:
    """
    Parameters of one render call.

    :param geometry: unused placeholder kept for option compatibility
    :param cell_size: float, spacing of the point grid in pixels
    :param depth: float, magnitude of the random per-cell shading
    :param variance: float, magnitude of the random per-point jitter,
                     as a fraction of ``cell_size``
    :param colours: tuple of (h, s, l) gradient stops
    :param image: background image reference, see ``ImageLoader.load``
    :param use_image: bool, draw ``image`` instead of the gradient
    :param image_timeout: float, seconds to wait for the image background
    """
    geometry: int = 0
    cell_size: float = 40
    depth: float = 0.0
    variance: float = 0.0
    colours: Tuple[Tuple[float, float, float], ...] = field(default=())
    image: Optional[Any] = None
    use_image: bool = False
    image_timeout: float = 30.0

    def __post_init__(self):
        object.__setattr__(self, 'colours', _normalise_colours(self.colours))

    @property
    def uses_image(self):
        return bool(self.use_image and self.image)

    def merge(self, **overrides):
        """
        Shallow merge: the given fields replace those of this config, all
        others keep their current values.
        """
        return replace(self, **overrides)

    @classmethod
    def from_options(cls, options, previous=None):
        """
        Build a config from a mapping of options, merged onto ``previous``.

        Accepts both the camelCase option names (``cellSize``,
        ``useImage``, ...) and the field names.
        """
        names = {f.name for f in fields(cls)}
        changes = {}
        for key, value in dict(options).items():
            name = OPTION_ALIASES.get(key, key)
            if name not in names:
                logging.warning(f"Ignoring unknown render option {key!r}")
                continue
            changes[name] = value
        base = previous if previous is not None else cls()
        return replace(base, **changes)

    def validate(self):
        """Raise ValueError for configurations that cannot be rendered."""
        if not self.cell_size > 0:
            raise ValueError(f"cell_size must be positive, got "
                             f"{self.cell_size}")
        if not self.uses_image and not self.colours:
            raise ValueError("colours must contain at least one (h, s, l) "
                             "stop when no image background is used")
        if self.uses_image and not self.image_timeout > 0:
            raise ValueError(f"image_timeout must be positive, got "
                             f"{self.image_timeout}")
        return self
