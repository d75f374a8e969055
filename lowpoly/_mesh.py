"""
Jittered hexagonal point grid and its triangulation.

Rows of points alternate between two horizontal phases (a brick pattern)
and are spaced ``ROW_SPACING * cell_size`` apart, so that the undisturbed
grid tiles as equilateral triangles. Each point is displaced by uniform
random jitter. The grid is sized to overhang the surface by at least one
cell on every side so that no bare edge shows after jitter.
"""
import logging
import math

import numpy

from lowpoly._geometry import Point, Triangle

ROW_SPACING = 0.866  # height of an equilateral triangle with unit sides


def grid_dimensions(width, height, cell_size):
    """
    Number of columns and rows of a grid covering a surface.

    :param width: surface width in pixels
    :param height: surface height in pixels
    :param cell_size: float, distance between neighbouring points
    :return: (columns, rows)
    """
    if not cell_size > 0:
        raise ValueError(f"cell_size must be positive, got {cell_size}")
    grid_width = width + cell_size * 2
    grid_height = height + cell_size * 2
    columns = math.ceil(grid_width / cell_size) + 2
    # One extra row keeps the last triangulated row below the surface
    rows = math.ceil(grid_height / (cell_size * ROW_SPACING)) + 2
    return columns, rows


def lattice(columns, rows, cell_size):
    """Undisturbed lattice positions as an array of shape (rows * columns, 2)."""
    j = numpy.tile(numpy.arange(columns, dtype=float), rows)
    i = numpy.repeat(numpy.arange(rows), columns)
    x = j * cell_size - cell_size
    x = numpy.where(i % 2 == 1, x - cell_size / 2, x)
    y = i * cell_size * ROW_SPACING - cell_size
    return numpy.column_stack([x, y])


def generate_points(columns, rows, cell_size, variance, rng):
    """
    Generate the jittered grid in row-major order.

    Both coordinates of every point receive an independent offset drawn
    uniformly from [-variance * cell_size, variance * cell_size].

    :param rng: numpy.random.Generator supplying the jitter
    :return: list of Point
    """
    xy = lattice(columns, rows, cell_size)
    jitter = (rng.random(xy.shape) - 0.5) * variance * cell_size * 2
    xy = xy + jitter
    return [Point(float(x), float(y)) for x, y in xy]


def quad_indices(columns, rows):
    """
    Yield the point indices (top-left, top-right, bottom-right, bottom-left)
    of every quad in the grid.

    The bottom pair is the point directly below the anchor and its right
    hand neighbour, so every quad spans two adjacent points in each of two
    adjacent rows. Anchors in the last column of a row, or in the last two
    rows, are skipped so that no quad wraps into the next row or indexes
    past the end of the grid.
    """
    for i in range(columns * max(rows - 2, 0)):
        if (i + 1) % columns == 0:
            continue
        yield i, i + 1, i + columns + 1, i + columns


def generate_triangles(points, columns, rows):
    """
    Split every quad of the grid into two triangles along the
    top-right to bottom-left diagonal.

    :return: list of Triangle referencing objects in ``points``
    """
    if len(points) != columns * rows:
        raise ValueError(f"Expected {columns * rows} points for a "
                         f"{columns}x{rows} grid, got {len(points)}")
    triangles = []
    for tl, tr, br, bl in quad_indices(columns, rows):
        triangles.append(Triangle(points[tl], points[tr], points[bl]))
        triangles.append(Triangle(points[tr], points[br], points[bl]))
    return triangles


class Mesh:
    """
    A generated point grid together with its triangles.

    Meshes are rebuilt from scratch for every render, see ``Mesh.generate``.
    """
    def __init__(self, columns, rows, points, triangles):
        self.columns = columns
        self.rows = rows
        self.points = points
        self.triangles = triangles

    def __repr__(self):
        return (f"Mesh(columns={self.columns}, rows={self.rows}, "
                f"triangles={len(self.triangles)})")

    @classmethod
    def generate(cls, width, height, cell_size, variance, rng):
        columns, rows = grid_dimensions(width, height, cell_size)
        points = generate_points(columns, rows, cell_size, variance, rng)
        triangles = generate_triangles(points, columns, rows)
        logging.debug(f"Generated {columns}x{rows} grid with "
                      f"{len(triangles)} triangles")
        return cls(columns, rows, points, triangles)

    def bounds(self):
        """((x_min, x_max), (y_min, y_max)) of the generated points."""
        xy = numpy.array(self.points, dtype=float).reshape(-1, 2)
        return ((xy[:, 0].min(), xy[:, 0].max()),
                (xy[:, 1].min(), xy[:, 1].max()))

    def as_arrays(self):
        """
        Points as an array (N, 2) and triangles as an index array (M, 3).
        """
        xy = numpy.array(self.points, dtype=float).reshape(-1, 2)
        index = {id(p): k for k, p in enumerate(self.points)}
        tri = numpy.array([[index[id(v)] for v in t] for t in self.triangles],
                          dtype=int).reshape(-1, 3)
        return xy, tri
