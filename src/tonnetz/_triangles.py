"""Triangle ids, vertices, edges, and pitch-class signatures."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._coords import node_id, parse_node_id, pc
from ._types import UP, Centroid, LatticeCoord, TriRef

if TYPE_CHECKING:
    from ._types import EdgeId, TriId


def tri_id(tri: TriRef) -> TriId:
    return f"T:{tri.orientation}:{tri.anchor.u},{tri.anchor.v}"


def parse_tri_id(tid: TriId) -> TriRef:
    """Inverse of tri_id()."""
    parts = tid.split(":")
    if len(parts) != 3 or parts[0] != "T" or parts[1] not in ("U", "D"):
        raise ValueError(f"Invalid triangle id: {tid!r}")
    anchor = parse_node_id("N:" + parts[2])
    return TriRef(parts[1], anchor)  # type: ignore[arg-type]


def tri_vertices(
    tri: TriRef,
) -> tuple[LatticeCoord, LatticeCoord, LatticeCoord]:
    """Three vertices of a triangle.

    Up at (u,v):   (u,v), (u+1,v), (u,v+1)
    Down at (u,v): (u+1,v+1), (u+1,v), (u,v+1)
    """
    u, v = tri.anchor.u, tri.anchor.v
    if tri.orientation == UP:
        return (
            LatticeCoord(u, v),
            LatticeCoord(u + 1, v),
            LatticeCoord(u, v + 1),
        )
    return (
        LatticeCoord(u + 1, v + 1),
        LatticeCoord(u + 1, v),
        LatticeCoord(u, v + 1),
    )


def edge_id(a: LatticeCoord, b: LatticeCoord) -> EdgeId:
    """Order-independent edge id from two endpoint coordinates."""
    id_a = node_id(a.u, a.v)
    id_b = node_id(b.u, b.v)
    if id_a <= id_b:
        return f"E:{id_a}|{id_b}"
    return f"E:{id_b}|{id_a}"


def parse_edge_id(eid: EdgeId) -> tuple[LatticeCoord, LatticeCoord]:
    """Inverse of edge_id(); endpoints come back in canonical order."""
    if not eid.startswith("E:"):
        raise ValueError(f"Invalid edge id: {eid!r}")
    a, sep, b = eid[2:].partition("|")
    if not sep:
        raise ValueError(f"Invalid edge id: {eid!r}")
    return parse_node_id(a), parse_node_id(b)


def edges_from_vertices(
    verts: tuple[LatticeCoord, LatticeCoord, LatticeCoord],
) -> tuple[EdgeId, EdgeId, EdgeId]:
    return (
        edge_id(verts[0], verts[1]),
        edge_id(verts[1], verts[2]),
        edge_id(verts[2], verts[0]),
    )


def tri_edges(tri: TriRef) -> tuple[EdgeId, EdgeId, EdgeId]:
    """Edges v0-v1, v1-v2, v2-v0."""
    return edges_from_vertices(tri_vertices(tri))


def triangle_pcs(tri: TriRef) -> tuple[int, int, int]:
    """Signature: the triangle's three pitch classes, ascending."""
    a, b, c = sorted(pc(p.u, p.v) for p in tri_vertices(tri))
    return a, b, c


def signature_key(pcs) -> str:
    """Index key for a pitch-class triple, e.g. "0-4-7"."""
    return "-".join(str(p) for p in sorted(pcs))


def tri_centroid(tri: TriRef) -> Centroid:
    """Mean of the three vertices."""
    v0, v1, v2 = tri_vertices(tri)
    return Centroid((v0.u + v1.u + v2.u) / 3, (v0.v + v1.v + v2.v) / 3)
