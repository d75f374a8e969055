"""
Low-poly rendition of a photograph.

Usage:  python examples/image_background.py <path-or-url> [width height]

The image is loaded off the calling thread and drawn with a cover fit;
shading only starts once it has been drawn.
"""
import sys

from lowpoly import ImageLoadError, Renderer, RenderConfig

reference = sys.argv[1] if len(sys.argv) > 1 else 'photo.jpg'
width, height = (int(v) for v in sys.argv[2:4]) if len(sys.argv) > 3 \
    else (640, 360)

config = RenderConfig(cell_size=24, variance=0.6, depth=0.08,
                      image=reference, use_image=True, image_timeout=20)

with Renderer(width, height, rng=1) as renderer:
    try:
        result = renderer.render(config)
    except ImageLoadError as e:
        sys.exit(f"Could not render: {e}")

result.surface.save('image_background.png')
print(f"Rendered {len(result.fills)} cells over {reference}")
