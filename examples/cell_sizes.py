"""
Comparing cell sizes, jitter and shading depth.

Renders the same gradient with progressively finer grids. Each render
starts from the previous configuration and only overrides what changes.
"""
from lowpoly import Renderer, RenderConfig

config = RenderConfig(colours=[(15, 80, 60), (45, 90, 55)], depth=0.05)

with Renderer(480, 270, rng=7) as renderer:
    for cell_size, variance, depth in [(80, 0.2, 0.05), (40, 0.5, 0.1),
                                       (20, 0.9, 0.2)]:
        config = config.merge(cell_size=cell_size, variance=variance,
                              depth=depth)
        result = renderer.render(config)
        fn = f"cells_{cell_size}.png"
        result.surface.save(fn)
        print(f"cell_size={cell_size:3d}: {len(result.triangles):4d} "
              f"triangles -> {fn}")

# Options can also be given with the camelCase names, merged explicitly
with Renderer(480, 270, rng=7) as renderer:
    result = renderer.render({'cellSize': 30, 'depth': 0.0}, previous=config)
    print(f"Merged config: {result.config}")
