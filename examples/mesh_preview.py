"""
Mesh preview.

Plots the jittered point grid and its triangles over the rendered raster,
with the visible surface outlined, to show how far the grid overhangs it.
"""
import matplotlib.pyplot as plt

from lowpoly import Renderer, RenderConfig, plot_mesh

config = RenderConfig(cell_size=30, variance=0.5, depth=0.15,
                      colours=[(190, 60, 45), (150, 50, 55)])
result = Renderer(300, 200, rng=3).render(config)

fig, ax = plot_mesh(result.mesh, result=result)
(x_min, x_max), (y_min, y_max) = result.mesh.bounds()
ax.set_title(f"grid spans x [{x_min:.0f}, {x_max:.0f}], "
             f"y [{y_min:.0f}, {y_max:.0f}]")
plt.tight_layout()
plt.show()
