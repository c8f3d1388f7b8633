"""Window index: edge, node, signature, and id lookup tables for a lattice region."""

from __future__ import annotations

import logging
from collections import defaultdict
from types import MappingProxyType
from typing import TYPE_CHECKING

from ._coords import node_id, pc, parse_node_id
from ._triangles import (
    edges_from_vertices,
    signature_key,
    tri_edges,
    tri_id,
    tri_vertices,
    triangle_pcs,
)
from ._types import DOWN, UP, LatticeCoord, TriRef, WindowBounds, WindowIndices

if TYPE_CHECKING:
    from ._types import EdgeId, TriId

logger = logging.getLogger(__name__)

_ORIENTATIONS = (UP, DOWN)


def build_window_indices(bounds: WindowBounds) -> WindowIndices:
    """Build all lookup tables for a rectangular window of anchors.

    Enumerates every Up and Down triangle anchored inside ``bounds``
    (inclusive) and registers it under its 3 edges, 3 vertex nodes, and
    signature. Cost is linear in the anchor count, so callers build once per
    window and share the result.
    """
    edge_to_tris: dict[str, list[str]] = defaultdict(list)
    node_to_tris: dict[str, list[str]] = defaultdict(list)
    sig_to_tris: dict[str, list[str]] = defaultdict(list)
    tri_id_to_ref: dict[str, TriRef] = {}

    for u in range(bounds.u_min, bounds.u_max + 1):
        for v in range(bounds.v_min, bounds.v_max + 1):
            for orientation in _ORIENTATIONS:
                tri = TriRef(orientation, LatticeCoord(u, v))
                tid = tri_id(tri)
                tri_id_to_ref[tid] = tri

                # Vertices computed once; edges and pcs derive from them
                verts = tri_vertices(tri)
                for eid in edges_from_vertices(verts):
                    edge_to_tris[eid].append(tid)
                for vert in verts:
                    node_to_tris[node_id(vert.u, vert.v)].append(tid)
                sig = signature_key(pc(p.u, p.v) for p in verts)
                sig_to_tris[sig].append(tid)

    pc_to_nodes: dict[int, list[LatticeCoord]] = defaultdict(list)
    for nid in node_to_tris:
        node = parse_node_id(nid)
        pc_to_nodes[pc(node.u, node.v)].append(node)

    logger.debug(
        "Built window indices for %s: %d triangles, %d edges, %d nodes",
        bounds, len(tri_id_to_ref), len(edge_to_tris), len(node_to_tris),
    )

    return WindowIndices(
        bounds=bounds,
        edge_to_tris=_freeze(edge_to_tris),
        node_to_tris=_freeze(node_to_tris),
        sig_to_tris=_freeze(sig_to_tris),
        tri_id_to_ref=MappingProxyType(tri_id_to_ref),
        pc_to_nodes=_freeze(pc_to_nodes),
    )


def _freeze(table: dict) -> MappingProxyType:
    return MappingProxyType({k: tuple(vals) for k, vals in table.items()})


def adjacent_triangles(tri: TriRef, indices: WindowIndices) -> list[TriId]:
    """Triangles sharing an edge with ``tri`` (0-3, never ``tri`` itself)."""
    self_id = tri_id(tri)
    seen: list[TriId] = []
    for eid in tri_edges(tri):
        for tid in indices.edge_to_tris.get(eid, ()):
            if tid != self_id and tid not in seen:
                seen.append(tid)
    return seen


def edge_union_pcs(eid: EdgeId, indices: WindowIndices) -> list[int] | None:
    """Ascending pitch-class union of the two triangles on an edge.

    Returns None for boundary edges (only one registered triangle) and for
    edges outside the window. Two adjacent triads share the edge's two
    endpoints, so the union always has 4 pitch classes.
    """
    tris = indices.edge_to_tris.get(eid)
    if tris is None or len(tris) < 2:
        return None

    pcs_a = triangle_pcs(indices.tri_id_to_ref[tris[0]])
    pcs_b = triangle_pcs(indices.tri_id_to_ref[tris[1]])
    return sorted(set(pcs_a) | set(pcs_b))
