"""Point and triangle primitives of the low-poly mesh."""
from typing import NamedTuple


class Point(NamedTuple):
    x: float
    y: float


class Triangle:
    """
    One rendering cell of the mesh.

    A triangle holds references to three points of a generated point
    sequence, it never copies or owns them.

    :param a, b, c: Point, the ordered vertices of the cell
    """
    __slots__ = ('vertices',)

    def __init__(self, a, b, c):
        self.vertices = (a, b, c)

    def __iter__(self):
        return iter(self.vertices)

    def __getitem__(self, i):
        return self.vertices[i]

    def __len__(self):
        return 3

    def __repr__(self):
        return "Triangle({}, {}, {})".format(*self.vertices)

    def centre(self):
        """Mean of the three vertices, the colour sampling location."""
        a, b, c = self.vertices
        return Point((a.x + b.x + c.x) / 3.0, (a.y + b.y + c.y) / 3.0)
