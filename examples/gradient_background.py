"""
Gradient low-poly background.

Renders a three stop HSL gradient, triangulates it and shades every cell,
then saves the result as a PNG and prints the head of its data URL.
"""
from lowpoly import Renderer, RenderConfig

config = RenderConfig(cell_size=40, variance=0.75, depth=0.1,
                      colours=[(200, 50, 50), (280, 60, 45), (330, 70, 55)])

with Renderer(800, 450, rng=42) as renderer:
    result = renderer.render(config)

print(f"Grid: {result.mesh.columns} x {result.mesh.rows} points, "
      f"{len(result.triangles)} triangles")
result.surface.save('gradient_background.png')
print(f"Data URL: {result.data_url[:60]}...")
