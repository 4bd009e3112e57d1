import math
from dataclasses import dataclass

import pytest

from meshsimplify.elements import (
    ILLEGAL_PRIORITY,
    Edge,
    Triangle,
    angle_between,
    right_side_up,
    triangle_area,
)
from meshsimplify.geometry import Point, Vertex, distance_between


@dataclass
class _FakeMesh:
    which: str = "shortest"
    preserve_area: bool = False
    legal: bool = True

    def is_legal_collapse(self, edge):
        return self.legal


def _square():
    # Top-left, top-right, bottom-right, bottom-left in y-down coordinates.
    a = Vertex(0, 0, 10, 20, 30)
    b = Vertex(4, 0, 10, 20, 30)
    c = Vertex(4, 3, 10, 20, 30)
    d = Vertex(0, 3, 10, 20, 30)
    return a, b, c, d


# ---------------------------------------------------------------- helpers


def test_triangle_area_right_triangle():
    assert triangle_area(Point(0, 0), Point(4, 0), Point(4, 3)) == pytest.approx(6.0)


def test_triangle_area_degenerate_is_zero():
    assert triangle_area(Point(0, 0), Point(1, 1), Point(2, 2)) == pytest.approx(0.0, abs=1e-9)


def test_triangle_area_independent_of_order():
    p = [Point(1, 2), Point(5, 7), Point(-3, 4)]
    assert triangle_area(*p) == pytest.approx(triangle_area(p[2], p[0], p[1]))
    assert triangle_area(*p) == pytest.approx(triangle_area(p[1], p[0], p[2]))


def test_angle_between_quarter_turn():
    assert angle_between(Point(0, 0), Point(1, 0), Point(0, 1)) == pytest.approx(math.pi / 2)


def test_angle_between_is_in_range_and_complementary():
    a, b, c = Point(0, 0), Point(2, 1), Point(-1, 3)
    forward = angle_between(a, b, c)
    backward = angle_between(a, c, b)
    assert 0 <= forward < 2 * math.pi
    assert forward + backward == pytest.approx(2 * math.pi)


def test_angle_between_zero_length_is_nan():
    result = angle_between(Point(1, 1), Point(1, 1), Point(2, 2))
    assert repr(result) == "nan"


def test_right_side_up_degenerate_is_false():
    assert right_side_up(Point(1, 1), Point(1, 1), Point(2, 2)) is False


def test_right_side_up_orientation():
    a, b, c = Point(0, 0), Point(1, 0), Point(1, 1)
    assert right_side_up(a, b, c)
    assert right_side_up(b, c, a)
    assert not right_side_up(a, c, b)


# ---------------------------------------------------------------- edges


def test_edge_orders_vertices_by_id():
    a, b, _, _ = _square()
    edge = Edge(b, a, _FakeMesh())
    assert edge.v1 is a
    assert edge.v2 is b


def test_edge_rejects_same_vertex():
    a, _, _, _ = _square()
    with pytest.raises(ValueError):
        Edge(a, a, _FakeMesh())


def test_edge_caches_length_and_legality():
    a, b, c, _ = _square()
    edge = Edge(a, c, _FakeMesh(legal=False))
    assert edge.length == pytest.approx(distance_between(a.point, c.point))
    assert edge.legal is False


def test_priority_shortest_uses_length_when_legal():
    a, b, _, _ = _square()
    edge = Edge(a, b, _FakeMesh())
    assert edge.priority_value() == pytest.approx(edge.length)


def test_priority_shortest_illegal_is_large():
    a, b, _, _ = _square()
    edge = Edge(a, b, _FakeMesh(legal=False))
    assert edge.priority_value() == 10000
    assert ILLEGAL_PRIORITY == 10000


def test_priority_color_uses_length_even_if_illegal():
    a, b, _, _ = _square()
    edge = Edge(a, b, _FakeMesh(which="color", legal=False))
    assert edge.priority_value() == pytest.approx(edge.length)


def test_priority_unknown_choice_raises():
    a, b, _, _ = _square()
    edge = Edge(a, b, _FakeMesh(which="random"))
    with pytest.raises(ValueError):
        edge.priority_value()


def test_recalculate_value_follows_mesh_and_geometry():
    a, b, _, _ = _square()
    mesh = _FakeMesh()
    edge = Edge(a, b, mesh)
    before = edge.length
    other = Vertex(8, 0, 0, 0, 0)
    a.average(other)
    mesh.legal = False
    edge.recalculate_value()
    assert edge.legal is False
    assert edge.length < before
    assert edge.length == pytest.approx(distance_between(a.point, b.point))


def test_check_value_detects_stale_state(capsys):
    a, b, _, _ = _square()
    mesh = _FakeMesh()
    edge = Edge(a, b, mesh)
    assert edge.check_value() is False
    mesh.legal = False
    assert edge.check_value() is True
    assert "LEGALITY ERROR!" in capsys.readouterr().out


def test_check_value_detects_stale_length(capsys):
    a, b, _, _ = _square()
    edge = Edge(a, b, _FakeMesh())
    a.average(Vertex(8, 0, 0, 0, 0))
    assert edge.check_value() is True
    assert "LENGTH ERROR!" in capsys.readouterr().out


def test_edge_str():
    a, b, _, _ = _square()
    legal = Edge(a, b, _FakeMesh())
    assert str(legal) == f"EDGE {a.id} {b.id}  len=4"
    illegal = Edge(a, b, _FakeMesh(legal=False))
    assert str(illegal) == f"EDGE {a.id} {b.id}"


# ---------------------------------------------------------------- triangles


def test_triangle_rotates_smallest_id_first():
    a, b, c, _ = _square()
    mesh = _FakeMesh()
    t = Triangle(b, c, a, mesh)
    assert [t.vertex(i) for i in range(3)] == [a, b, c]
    t2 = Triangle(c, a, b, mesh)
    assert t2.vertices == (a, b, c)


def test_triangle_ids_increase():
    a, b, c, d = _square()
    mesh = _FakeMesh()
    t1 = Triangle(a, b, c, mesh)
    t2 = Triangle(a, c, d, mesh)
    assert t2.id > t1.id


def test_triangle_rejects_repeated_vertex():
    a, b, _, _ = _square()
    with pytest.raises(ValueError):
        Triangle(a, b, a, _FakeMesh())


def test_triangle_upside_down_rejected_when_preserving_area():
    a, b, c, _ = _square()
    with pytest.raises(ValueError):
        Triangle(a, c, b, _FakeMesh(preserve_area=True))
    # without area preservation the winding is not checked
    t = Triangle(a, c, b, _FakeMesh(preserve_area=False))
    assert t.is_right_side_up()


def test_triangle_vertex_index_out_of_range():
    a, b, c, _ = _square()
    t = Triangle(a, b, c, _FakeMesh())
    with pytest.raises(IndexError):
        t.vertex(3)


def test_triangle_has_vertex():
    a, b, c, d = _square()
    t = Triangle(a, b, c, _FakeMesh())
    assert t.has_vertex(b)
    assert not t.has_vertex(d)


def test_triangle_area_matches_helper():
    a, b, c, _ = _square()
    t = Triangle(a, b, c, _FakeMesh(preserve_area=True))
    assert t.area() == pytest.approx(triangle_area(a.point, b.point, c.point))


def test_area_after_replacement_with_same_point_is_unchanged():
    a, b, c, _ = _square()
    t = Triangle(a, b, c, _FakeMesh())
    for v in (a, b, c):
        assert t.area_after_replacement(v, v.point) == pytest.approx(t.area())


def test_area_after_replacement_does_not_move_vertex():
    a, b, c, _ = _square()
    t = Triangle(a, b, c, _FakeMesh())
    moved = t.area_after_replacement(c, Point(4, 6))
    assert moved == pytest.approx(2 * t.area())
    assert c.point == Point(4, 3)


def test_replacement_of_foreign_vertex_raises():
    a, b, c, d = _square()
    t = Triangle(a, b, c, _FakeMesh())
    with pytest.raises(ValueError):
        t.area_after_replacement(d, Point(0, 0))
    with pytest.raises(ValueError):
        t.right_side_up_after_replacement(d, Point(0, 0))


def test_right_side_up_after_replacement_detects_flip():
    a, b, c, _ = _square()
    t = Triangle(a, b, c, _FakeMesh(preserve_area=True))
    assert t.right_side_up_after_replacement(c, Point(3, 2))
    assert not t.right_side_up_after_replacement(c, Point(2, -3))


def test_replace_vertex_keeps_slot():
    a, b, c, d = _square()
    t = Triangle(a, b, c, _FakeMesh())
    t.replace_vertex(c, d)
    assert t.vertex(2) is d
    assert not t.has_vertex(c)
    with pytest.raises(ValueError):
        t.replace_vertex(c, a)


def test_triangle_str():
    a, b, c, _ = _square()
    t = Triangle(a, b, c, _FakeMesh())
    assert str(t) == f" TRIANGLE {t.id} [ {a.id} {b.id} {c.id} ]"