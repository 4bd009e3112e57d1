"""Points, colours and mesh vertices."""

from __future__ import annotations

import itertools
import math
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Point:
    """A 2D coordinate."""

    x: float
    y: float


def average_points(a: Point, b: Point) -> Point:
    """Return the midpoint of two points."""
    return Point((a.x + b.x) / 2.0, (a.y + b.y) / 2.0)


def distance_between(a: Point, b: Point) -> float:
    """Return the Euclidean distance between two points."""
    return math.sqrt((a.x - b.x) * (a.x - b.x) + (a.y - b.y) * (a.y - b.y))


@dataclass(frozen=True)
class Color:
    """An integer RGB colour; white by default."""

    r: int = 255
    g: int = 255
    b: int = 255

    def is_white(self) -> bool:
        return self.r == 255 and self.g == 255 and self.b == 255

    def is_black(self) -> bool:
        return self.r == 0 and self.g == 0 and self.b == 0


def average_colors(a: Color, b: Color) -> Color:
    """Return the channel-wise average of two colours, truncated to integers."""
    return Color(
        int((a.r + b.r) / 2.0),
        int((a.g + b.g) / 2.0),
        int((a.b + b.b) / 2.0),
    )


class Vertex:
    """A mesh vertex with a position, a colour and its neighbouring elements.

    Every vertex receives a unique, increasing id on creation.
    """

    _ids = itertools.count()

    def __init__(self, x: float, y: float, r: float, g: float, b: float) -> None:
        self.id: int = next(Vertex._ids)
        self.point = Point(float(x), float(y))
        self.color = Color(int(r), int(g), int(b))
        self.triangles: set[Any] = set()
        self.edges: set[Any] = set()

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    @property
    def r(self) -> float:
        return float(self.color.r)

    @property
    def g(self) -> float:
        return float(self.color.g)

    @property
    def b(self) -> float:
        return float(self.color.b)

    def average(self, other: Vertex) -> None:
        """Move this vertex to the midpoint of itself and other, blending colours."""
        self.point = average_points(self.point, other.point)
        self.color = average_colors(self.color, other.color)

    def add_triangle(self, triangle: Any) -> None:
        if not triangle.has_vertex(self):
            raise ValueError("triangle does not use this vertex")
        if triangle in self.triangles:
            raise ValueError("triangle already registered at this vertex")
        self.triangles.add(triangle)

    def add_edge(self, edge: Any) -> None:
        if edge.v1 is not self and edge.v2 is not self:
            raise ValueError("edge does not use this vertex")
        if edge in self.edges:
            raise ValueError("edge already registered at this vertex")
        self.edges.add(edge)

    def remove_triangle(self, triangle: Any) -> None:
        if not triangle.has_vertex(self):
            raise ValueError("triangle does not use this vertex")
        try:
            self.triangles.remove(triangle)
        except KeyError:
            raise ValueError("triangle not registered at this vertex") from None

    def remove_edge(self, edge: Any) -> None:
        if edge.v1 is not self and edge.v2 is not self:
            raise ValueError("edge does not use this vertex")
        try:
            self.edges.remove(edge)
        except KeyError:
            raise ValueError("edge not registered at this vertex") from None

    def __str__(self) -> str:
        return f" VERTEX {self.id:6d} <{self.x:8.3f},{self.y:8.3f}>"

    def __repr__(self) -> str:
        return f"Vertex(id={self.id}, x={self.x}, y={self.y}, color={self.color})"