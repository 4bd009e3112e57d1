"""A triangle mesh laid over an image, simplified by repeated edge collapses."""

from __future__ import annotations

import os
import random
from typing import Iterable, Optional, Union

from meshsimplify.elements import Edge, Triangle
from meshsimplify.geometry import Vertex, average_points
from meshsimplify.image import Image
from meshsimplify.priority_queue import PriorityQueue

# The image is scaled to fit a MAXIMUM_SVG x MAXIMUM_SVG box ...
MAXIMUM_SVG = 800
# ... drawn with a border this wide.
BORDER = 20
# Fraction of a grid cell by which interior vertices are jittered, so
# that edge lengths are unique.
RANDOM_JITTER = 0.2
# Fixed seed for repeatable meshes and random collapses.
SEED = 42

WHICH_CHOICES = ("shortest", "random", "color")
METHOD_CHOICES = ("linear", "priority_queue")

PathLike = Union[str, "os.PathLike[str]"]


class MeshConsistencyError(Exception):
    """Raised when the mesh's connectivity bookkeeping is inconsistent."""


def _edge_key(a: Vertex, b: Vertex) -> tuple[int, int]:
    return (a.id, b.id) if a.id < b.id else (b.id, a.id)


def _key_of(edge: Edge) -> tuple[int, int]:
    return (edge.v1.id, edge.v2.id)


class Mesh:
    """A grid of jittered vertices coloured from an image, split into triangles.

    Vertices, edges and triangles are always visited in id order, so
    every run with the same input gives the same result.
    """

    def __init__(
        self,
        image: Image,
        num_rows: int,
        num_cols: int,
        which: str = "shortest",
        method: str = "linear",
        preserve_area: bool = False,
        debug: bool = False,
    ) -> None:
        if which not in WHICH_CHOICES:
            raise ValueError(f"Unknown edge choice {which}")
        if method not in METHOD_CHOICES:
            raise ValueError(f"Unknown method to find best edge {method}")
        if num_rows < 1 or num_cols < 1:
            raise ValueError(f"invalid grid dimensions {num_cols}x{num_rows}")
        if image.width == 0 or image.height == 0:
            raise ValueError("cannot build a mesh over an empty image")

        self.which = which
        self.method = method
        self.preserve_area = preserve_area
        self.debug = debug

        self._rng = random.Random(SEED)
        self._vertices: dict[int, Vertex] = {}
        self._edges: dict[tuple[int, int], Edge] = {}
        self._triangles: dict[int, Triangle] = {}
        self._edges_pq: Optional[PriorityQueue[Edge]] = (
            PriorityQueue(Edge.priority_value)
            if method == "priority_queue" and which != "random"
            else None
        )
        self._next_random_edge: Optional[Edge] = None

        longest = max(image.width, image.height)
        self.width = MAXIMUM_SVG * image.width / longest
        self.height = MAXIMUM_SVG * image.height / longest
        dx = self.width / num_cols
        dy = self.height / num_rows

        # (0, 0) is the upper-left corner; y grows downwards.
        points: list[Vertex] = []
        for j in range(num_rows + 1):
            for i in range(num_cols + 1):
                rand_dx = 2 * self._rng.random() - 1.0
                rand_dy = 2 * self._rng.random() - 1.0
                if i in (0, num_cols):
                    rand_dx = 0.0
                if j in (0, num_rows):
                    rand_dy = 0.0
                x = BORDER + i * dx + rand_dx * RANDOM_JITTER * dx
                y = BORDER + j * dy + rand_dy * RANDOM_JITTER * dy
                px = i * image.width // (num_cols + 1)
                py = j * image.height // (num_rows + 1)
                c = image.get_pixel(px, image.height - py - 1)
                vertex = Vertex(x, y, c.r, c.g, c.b)
                self._vertices[vertex.id] = vertex
                points.append(vertex)

        stride = num_cols + 1
        for j in range(num_rows):
            for i in range(num_cols):
                a = points[j * stride + i]
                b = points[j * stride + i + 1]
                c = points[(j + 1) * stride + i + 1]
                d = points[(j + 1) * stride + i]
                # Clockwise order keeps every triangle right side up.
                if self._rng.random() > 0.5:
                    self._add_triangle(a, b, c)
                    self._add_triangle(a, c, d)
                else:
                    self._add_triangle(a, b, d)
                    self._add_triangle(b, c, d)

    @classmethod
    def from_file(
        cls,
        path: PathLike,
        num_rows: int,
        num_cols: int,
        which: str = "shortest",
        method: str = "linear",
        preserve_area: bool = False,
        debug: bool = False,
    ) -> Mesh:
        """Build a mesh over the PPM image stored at path."""
        return cls(Image.load(path), num_rows, num_cols, which, method, preserve_area, debug)

    # ------------------------------------------------------------------
    # accessors

    @property
    def vertices(self) -> list[Vertex]:
        return [self._vertices[k] for k in sorted(self._vertices)]

    @property
    def edges(self) -> list[Edge]:
        return [self._edges[k] for k in sorted(self._edges)]

    @property
    def triangles(self) -> list[Triangle]:
        return [self._triangles[k] for k in sorted(self._triangles)]

    def num_vertices(self) -> int:
        return len(self._vertices)

    def num_edges(self) -> int:
        return len(self._edges)

    def num_triangles(self) -> int:
        return len(self._triangles)

    def area(self) -> float:
        return sum(t.area() for t in self.triangles)

    def is_legal_collapse(self, edge: Edge) -> bool:
        """Return whether collapsing edge keeps triangles upright and the area stable.

        Always True unless the mesh preserves area.
        """
        if not self.preserve_area:
            return True
        a, b = edge.v1, edge.v2
        avg = average_points(a.point, b.point)
        before_sum = 0.0
        after_sum = 0.0
        # Triangles holding both vertices vanish, so they count only before.
        for t in sorted(a.triangles, key=lambda t: t.id):
            before_sum += t.area()
            if not t.has_vertex(b):
                after_sum += t.area_after_replacement(a, avg)
                if not t.right_side_up_after_replacement(a, avg):
                    return False
        for t in sorted(b.triangles, key=lambda t: t.id):
            if not t.has_vertex(a):
                before_sum += t.area()
                after_sum += t.area_after_replacement(b, avg)
                if not t.right_side_up_after_replacement(b, avg):
                    return False
        total = before_sum + after_sum
        if total > 0 and abs(before_sum - after_sum) / total > 0.001:
            return False
        return True

    def find_edge(self) -> Optional[Edge]:
        """Return the next edge to collapse, or None if there is none."""
        if self.which == "random":
            # Remember the choice so it can be shown before it is collapsed.
            if self._next_random_edge is None:
                legal = [e for e in self.edges if e.legal]
                if legal:
                    self._next_random_edge = legal[self._rng.randrange(len(legal))]
            return self._next_random_edge

        if self._edges_pq is None:
            best: Optional[Edge] = None
            for e in self.edges:
                if e.legal and (best is None or e.length < best.length):
                    best = e
            return best

        if not self._edges_pq:
            return None
        top = self._edges_pq.top()
        return top if top.legal else None

    # ------------------------------------------------------------------
    # simplification

    def collapse(self) -> bool:
        """Collapse the next edge to its midpoint; return False if nothing changed.

        The vertex with the smaller id survives at the averaged position and
        the one or two triangles that border the edge are removed.
        """
        edge = self.find_edge()
        if edge is None:
            return False
        a, b = edge.v1, edge.v2

        for t in sorted((t for t in a.triangles if t.has_vertex(b)), key=lambda t: t.id):
            self._remove_triangle(t)

        old_edges = a.edges | b.edges
        neighbours = {v for e in old_edges for v in (e.v1, e.v2)} - {a, b}
        for e in sorted(old_edges, key=_key_of):
            self._remove_edge(e.v1, e.v2)

        for t in sorted(b.triangles, key=lambda t: t.id):
            b.remove_triangle(t)
            t.replace_vertex(b, a)
            a.add_triangle(t)

        a.average(b)
        self._remove_vertex(b)

        for t in sorted(a.triangles, key=lambda t: t.id):
            for v in t.vertices:
                if v is not a:
                    self._add_edge(a, v)

        for v in sorted(neighbours, key=lambda v: v.id):
            if not v.triangles:
                self._remove_vertex(v)

        self._next_random_edge = None
        affected = {a} | {v for t in a.triangles for v in t.vertices}
        affected |= {v for v in neighbours if v.id in self._vertices}
        self._recalculate_edges(self._edges_around(affected))
        return True

    def simplify(self, target_count: int) -> None:
        """Collapse edges until there are at most target_count triangles or none can go."""
        while self.num_triangles() > target_count:
            if not self.collapse():
                break
        self.check()

    # ------------------------------------------------------------------
    # consistency check

    def check(self) -> None:
        """In debug mode, verify the connectivity bookkeeping and report it."""
        if not self.debug:
            return
        print("Mesh Check... ", end="", flush=True)

        for t in self.triangles:
            pts = t.vertices
            for i, v in enumerate(pts):
                if t not in v.triangles:
                    raise MeshConsistencyError(f"{t} missing from vertex {v.id}")
                w = pts[(i + 1) % 3]
                if _edge_key(v, w) not in self._edges:
                    raise MeshConsistencyError(f"{t} has no edge {v.id}-{w.id}")

        for v in self.vertices:
            for t in v.triangles:
                if not t.has_vertex(v):
                    raise MeshConsistencyError(f"vertex {v.id} lists {t} which lacks it")

        for (id1, id2), e in sorted(self._edges.items()):
            if not id1 < id2 or (e.v1.id, e.v2.id) != (id1, id2):
                raise MeshConsistencyError(f"badly keyed edge {id1} {id2}")
            count = sum(1 for t in e.v1.triangles if t.has_vertex(e.v2))
            # interior edges border two triangles, border edges one
            if count not in (1, 2):
                raise MeshConsistencyError(f"{e} borders {count} triangles")

        print("completed")

    def __str__(self) -> str:
        return (
            f"{self.num_vertices():6d} vertices, "
            f"{self.num_edges():6d} edges, "
            f"{self.num_triangles():6d} triangles, "
            f"area = {self.area():10.2f}"
        )

    # ------------------------------------------------------------------
    # private modifiers

    def _remove_vertex(self, vertex: Vertex) -> None:
        if vertex.triangles or vertex.edges:
            raise MeshConsistencyError(f"vertex {vertex.id} is still in use")
        if self._vertices.pop(vertex.id, None) is None:
            raise MeshConsistencyError(f"vertex {vertex.id} is not in the mesh")

    def _add_edge(self, a: Vertex, b: Vertex) -> Edge:
        key = _edge_key(a, b)
        edge = self._edges.get(key)
        if edge is None:
            edge = Edge(a, b, self)
            self._edges[key] = edge
            edge.v1.add_edge(edge)
            edge.v2.add_edge(edge)
            if self._edges_pq is not None:
                self._edges_pq.push(edge)
        return edge

    def _remove_edge(self, a: Vertex, b: Vertex) -> None:
        edge = self._edges.pop(_edge_key(a, b), None)
        if edge is None:
            return
        if self._edges_pq is not None:
            self._edges_pq.remove(edge)
        edge.v1.remove_edge(edge)
        edge.v2.remove_edge(edge)
        if self._next_random_edge is edge:
            self._next_random_edge = None

    def _add_triangle(self, a: Vertex, b: Vertex, c: Vertex) -> None:
        t = Triangle(a, b, c, self)
        self._triangles[t.id] = t
        for v in (a, b, c):
            v.add_triangle(t)
        self._add_edge(a, b)
        self._add_edge(b, c)
        self._add_edge(c, a)
        # The new triangle may change collapse legality around it.
        self._recalculate_edges(self._edges_around((a, b, c)))

    def _remove_triangle(self, t: Triangle) -> None:
        for v in t.vertices:
            v.remove_triangle(t)
        del self._triangles[t.id]

    @staticmethod
    def _edges_around(vertices: Iterable[Vertex]) -> set[Edge]:
        return {e for v in vertices for e in v.edges}

    def _recalculate_edges(self, edges: Iterable[Edge]) -> None:
        for e in sorted(edges, key=_key_of):
            e.recalculate_value()
            if self._edges_pq is not None:
                self._edges_pq.update_position(e)