"""Mesh edges and triangles, plus the triangle geometry helpers they use."""

from __future__ import annotations

import itertools
import math
from typing import Any

from meshsimplify.geometry import Point, Vertex, distance_between

# Priority given to an edge that may not be collapsed under "shortest".
ILLEGAL_PRIORITY = 10000.0


def triangle_area(a: Point, b: Point, c: Point) -> float:
    """Return the area of the triangle abc using Heron's formula."""
    ab = distance_between(a, b)
    bc = distance_between(b, c)
    ca = distance_between(c, a)
    s = (ab + bc + ca) / 2.0
    return math.sqrt(max(0.0, s * (s - ab) * (s - bc) * (s - ca)))


def angle_between(a: Point, b: Point, c: Point) -> float:
    """Return the counter-clockwise angle at a from a->b to a->c, in [0, 2*pi).

    Returns NaN when either vector has zero length.
    """
    v1x, v1y = b.x - a.x, b.y - a.y
    v2x, v2y = c.x - a.x, c.y - a.y
    len1 = math.hypot(v1x, v1y)
    len2 = math.hypot(v2x, v2y)
    if len1 == 0.0 or len2 == 0.0:
        return math.nan
    angle = math.atan2(v2y / len2, v2x / len2) - math.atan2(v1y / len1, v1x / len1)
    if angle < 0:
        angle += 2 * math.pi
    return angle


def right_side_up(a: Point, b: Point, c: Point) -> bool:
    """Return True if the winding a, b, c gives interior angles summing to 180 degrees."""
    total = sum(
        math.degrees(angle)
        for angle in (
            angle_between(a, b, c),
            angle_between(b, c, a),
            angle_between(c, a, b),
        )
    )
    return abs(total - 180.0) < 0.01


class Edge:
    """An edge between two vertices; v1 always has the smaller id.

    The edge caches its length and whether collapsing it is legal; call
    recalculate_value() whenever its neighbourhood changes.
    """

    def __init__(self, a: Vertex, b: Vertex, mesh: Any) -> None:
        if a.id == b.id:
            raise ValueError("an edge needs two distinct vertices")
        self.v1, self.v2 = (a, b) if a.id < b.id else (b, a)
        self.mesh = mesh
        self.length = -1.0
        self.legal = False
        self.recalculate_value()

    def priority_value(self) -> float:
        """Return the value used to order this edge for collapsing."""
        which = self.mesh.which
        if which == "shortest":
            return self.length if self.legal else ILLEGAL_PRIORITY
        if which == "color":
            return self.length
        raise ValueError(f"Unknown choice of next edge to collapse: {which}")

    def recalculate_value(self) -> None:
        self.length = distance_between(self.v1.point, self.v2.point)
        self.legal = bool(self.mesh.is_legal_collapse(self))

    def check_value(self) -> bool:
        """Report stale cached values; return True if an error was found."""
        length2 = distance_between(self.v1.point, self.v2.point)
        legal2 = bool(self.mesh.is_legal_collapse(self))
        error = False
        if self.legal != legal2:
            print(f"LEGALITY ERROR! {self} {int(self.legal)} should be {int(legal2)}")
            error = True
        if abs(self.length - length2) > 0.0001:
            print(f"LENGTH ERROR!   {self} {self.length:g} should be {length2:g}")
            error = True
        return error

    def __str__(self) -> str:
        text = f"EDGE {self.v1.id} {self.v2.id}"
        if self.legal:
            text += f"  len={distance_between(self.v1.point, self.v2.point):g}"
        return text

    def __repr__(self) -> str:
        return f"Edge({self.v1.id}, {self.v2.id})"


class Triangle:
    """A triangle whose first vertex has the smallest id, winding preserved.

    Every triangle receives a unique, increasing id on creation.
    """

    _ids = itertools.count()

    def __init__(self, a: Vertex, b: Vertex, c: Vertex, mesh: Any) -> None:
        if a.id < b.id and a.id < c.id:
            pts = [a, b, c]
        elif b.id < a.id and b.id < c.id:
            pts = [b, c, a]
        elif c.id < a.id and c.id < b.id:
            pts = [c, a, b]
        else:
            raise ValueError("a triangle needs three distinct vertices")
        self._pts: list[Vertex] = pts
        self.mesh = mesh
        if not self.is_right_side_up():
            raise ValueError("triangle is not oriented right side up")
        self.id: int = next(Triangle._ids)

    @property
    def vertices(self) -> tuple[Vertex, Vertex, Vertex]:
        return (self._pts[0], self._pts[1], self._pts[2])

    def vertex(self, i: int) -> Vertex:
        if not 0 <= i < 3:
            raise IndexError(f"triangle vertex index {i} out of range")
        return self._pts[i]

    def has_vertex(self, vertex: Vertex) -> bool:
        return any(p is vertex for p in self._pts)

    def _points_with(self, vertex: Vertex, point: Point) -> list[Point]:
        if not self.has_vertex(vertex):
            raise ValueError("vertex is not part of this triangle")
        return [point if p is vertex else p.point for p in self._pts]

    def area(self) -> float:
        return triangle_area(*(p.point for p in self._pts))

    def area_after_replacement(self, vertex: Vertex, point: Point) -> float:
        """Return the area if vertex were moved to point."""
        return triangle_area(*self._points_with(vertex, point))

    def is_right_side_up(self) -> bool:
        """Check the winding order; always True unless the mesh preserves area."""
        if self.mesh.preserve_area:
            return right_side_up(*(p.point for p in self._pts))
        return True

    def right_side_up_after_replacement(self, vertex: Vertex, point: Point) -> bool:
        """Return whether the triangle stays right side up if vertex moves to point."""
        return right_side_up(*self._points_with(vertex, point))

    def replace_vertex(self, old: Vertex, new: Vertex) -> None:
        """Put new in the slot currently held by old."""
        for i, p in enumerate(self._pts):
            if p is old:
                self._pts[i] = new
                return
        raise ValueError("vertex is not part of this triangle")

    def __str__(self) -> str:
        ids = " ".join(str(p.id) for p in self._pts)
        return f" TRIANGLE {self.id} [ {ids} ]"

    def __repr__(self) -> str:
        return f"Triangle(id={self.id}, vertices={[p.id for p in self._pts]})"