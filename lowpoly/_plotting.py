"""Matplotlib preview of a generated mesh."""
import os

import numpy
from matplotlib import pyplot
from matplotlib.patches import Rectangle


def plot_mesh(mesh, result=None, ax=None, show=False, save_fig=False,
              plot_path='fig/', fig_name='mesh.png'):
    """
    Plot the points and triangle edges of a mesh.

    :param mesh: Mesh
    :param result: RenderResult, optional; its raster is drawn underneath
                   and its surface outlined
    :param ax: matplotlib axes to draw into, a new figure is created if None
    :param show: bool, call pyplot.show()
    :param save_fig: bool, save the figure to ``plot_path + fig_name``
    :return: (fig, ax)
    """
    # Define colours:
    lo = numpy.array([242, 189, 138]) / 255  # light orange
    do = numpy.array([235, 129, 27]) / 255  # Dark alert orange

    if ax is None:
        fig, ax = pyplot.subplots()
    else:
        fig = ax.figure

    xy, tri = mesh.as_arrays()
    if result is not None:
        w, h = result.surface.width, result.surface.height
        ax.imshow(result.surface.pixels, extent=(0, w, h, 0))
        ax.add_patch(Rectangle((0, 0), w, h, fill=False, ec=do, lw=1.5))

    if len(tri):
        ax.triplot(xy[:, 0], xy[:, 1], tri, color=lo, lw=0.5)
    ax.plot(xy[:, 0], xy[:, 1], '.', color=do, markersize=3)

    ax.set_aspect('equal')
    if not ax.yaxis_inverted():
        ax.invert_yaxis()  # raster coordinates, y grows downwards

    if save_fig:
        os.makedirs(plot_path, exist_ok=True)
        fig.savefig(os.path.join(plot_path, fig_name), bbox_inches='tight')
    if show:
        pyplot.show()
    return fig, ax
