"""Tests for triangle ids, vertices, edges, and signatures."""

import pytest

from tonnetz._triangles import (
    edge_id,
    parse_edge_id,
    parse_tri_id,
    tri_centroid,
    tri_edges,
    tri_id,
    tri_vertices,
    triangle_pcs,
)
from tonnetz._types import DOWN, UP, LatticeCoord, TriRef

C = LatticeCoord


def test_up_vertices():
    assert tri_vertices(TriRef(UP, C(2, 3))) == (C(2, 3), C(3, 3), C(2, 4))


def test_down_vertices():
    assert tri_vertices(TriRef(DOWN, C(2, 3))) == (C(3, 4), C(3, 3), C(2, 4))


def test_up_origin_is_c_major():
    assert triangle_pcs(TriRef(UP, C(0, 0))) == (0, 4, 7)


def test_down_origin_is_e_minor():
    assert triangle_pcs(TriRef(DOWN, C(0, 0))) == (4, 7, 11)


def test_tri_id_round_trip():
    tri = TriRef(DOWN, C(-1, 4))
    assert tri_id(tri) == "T:D:-1,4"
    assert parse_tri_id(tri_id(tri)) == tri


@pytest.mark.parametrize("bad", ["T:X:0,0", "T:U", "U:0,0", "T:U:0"])
def test_parse_tri_id_rejects_malformed(bad):
    with pytest.raises(ValueError):
        parse_tri_id(bad)


def test_edge_id_order_independent():
    a, b = C(1, 0), C(0, 1)
    assert edge_id(a, b) == edge_id(b, a) == "E:N:0,1|N:1,0"


def test_parse_edge_id():
    assert parse_edge_id("E:N:0,1|N:1,0") == (C(0, 1), C(1, 0))
    with pytest.raises(ValueError):
        parse_edge_id("E:N:0,1")


def test_tri_edges_follow_vertex_order():
    tri = TriRef(UP, C(0, 0))
    v0, v1, v2 = tri_vertices(tri)
    assert tri_edges(tri) == (edge_id(v0, v1), edge_id(v1, v2), edge_id(v2, v0))


def test_up_and_down_share_one_edge():
    up = set(tri_edges(TriRef(UP, C(0, 0))))
    down = set(tri_edges(TriRef(DOWN, C(0, 0))))
    assert up & down == {"E:N:0,1|N:1,0"}


def test_centroid():
    c = tri_centroid(TriRef(UP, C(0, 0)))
    assert c.u == pytest.approx(1 / 3)
    assert c.v == pytest.approx(1 / 3)
