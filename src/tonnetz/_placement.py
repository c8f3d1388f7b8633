"""Main-triad placement and chord decomposition into lattice shapes."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Sequence

from ._coords import node_id, pc, world_dist2
from ._errors import TonnetzError
from ._index import adjacent_triangles
from ._triangles import signature_key, tri_centroid, tri_id, tri_vertices, triangle_pcs
from ._types import Centroid, LatticeCoord, Shape

if TYPE_CHECKING:
    from ._types import Chord, TriId, TriRef, WindowIndices

logger = logging.getLogger(__name__)

MAX_EXTENSION_TRIANGLES = 2


def place_main_triad(
    chord: Chord, focus: LatticeCoord | Centroid, indices: WindowIndices
) -> TriRef | None:
    """Pick the triangle spelling the chord's main triad nearest ``focus``.

    Diminished and augmented triads never occur as a triangle signature, so
    they return None. Distance is measured in world space between the
    triangle centroid and ``focus``; ties go to the smaller TriId.
    """
    if chord.quality in ("dim", "aug"):
        return None

    candidates = indices.sig_to_tris.get(signature_key(chord.main_triad_pcs))
    if not candidates:
        return None

    best_id: TriId | None = None
    best_dist = float("inf")
    for cid in candidates:
        d = world_dist2(tri_centroid(indices.tri_id_to_ref[cid]), focus)
        if d < best_dist or (d == best_dist and cid < best_id):
            best_id = cid
            best_dist = d

    return indices.tri_id_to_ref[best_id]


def decompose_chord_to_shape(
    chord: Chord,
    main_tri: TriRef | None,
    focus: LatticeCoord | Centroid,
    indices: WindowIndices,
) -> Shape:
    """Cover every chord tone with a triangle cluster, dots, or both.

    With no main triangle (dim/aug) every tone becomes a dot, chained
    outward from the root node nearest ``focus``. Otherwise the main
    triangle grows by up to MAX_EXTENSION_TRIANGLES adjacent triangles made
    only of chord tones, and leftover tones become dots near the cluster.
    """
    if main_tri is None:
        shape = _dot_only_shape(chord, focus, indices)
    else:
        shape = _triangulated_shape(chord, main_tri, indices)
    _check_coverage(shape)
    return shape


# -- Dot-only path --

def _dot_only_shape(
    chord: Chord, focus: LatticeCoord | Centroid, indices: WindowIndices
) -> Shape:
    logger.debug(
        "No triangle for quality %r (root %d), using dot chain",
        chord.quality, chord.root_pc,
    )
    anchor = _nearest_node(chord.root_pc, [focus], indices)
    placed: list[LatticeCoord] = [anchor]
    dot_nodes: list[LatticeCoord] = [anchor]

    # Greedy chain: each tone snaps to whatever is already placed, not the anchor
    for p in chord.chord_pcs:
        if p == chord.root_pc:
            continue
        node = _nearest_node(p, placed, indices)
        placed.append(node)
        dot_nodes.append(node)

    return Shape(
        chord=chord,
        main_tri=None,
        ext_tris=(),
        dot_pcs=chord.chord_pcs,
        covered_pcs=frozenset(),
        root_vertex_index=None,
        centroid_uv=Centroid(float(anchor.u), float(anchor.v)),
        dot_nodes=tuple(dot_nodes),
    )


# -- Triangulated path --

def _triangulated_shape(
    chord: Chord, main_tri: TriRef, indices: WindowIndices
) -> Shape:
    chord_pc_set = set(chord.chord_pcs)
    cluster: list[TriRef] = [main_tri]
    cluster_ids: set[TriId] = {tri_id(main_tri)}
    covered: set[int] = set(triangle_pcs(main_tri))
    ext_tris: list[TriRef] = []
    main_centroid = tri_centroid(main_tri)

    for _ in range(MAX_EXTENSION_TRIANGLES):
        best: tuple[int, float, str] | None = None
        best_ref: TriRef | None = None

        for member in cluster:
            for adj_id in adjacent_triangles(member, indices):
                if adj_id in cluster_ids:
                    continue
                adj_ref = indices.tri_id_to_ref[adj_id]
                adj_pcs = triangle_pcs(adj_ref)
                if not chord_pc_set.issuperset(adj_pcs):
                    continue
                new_count = sum(1 for p in adj_pcs if p not in covered)
                if new_count == 0:
                    continue

                # Most new tones, then closest to the main triangle, then id
                key = (-new_count, world_dist2(tri_centroid(adj_ref), main_centroid), adj_id)
                if best is None or key < best:
                    best = key
                    best_ref = adj_ref

        if best_ref is None:
            break
        ext_tris.append(best_ref)
        cluster.append(best_ref)
        cluster_ids.add(best[2])
        covered.update(triangle_pcs(best_ref))

    dot_pcs = tuple(p for p in chord.chord_pcs if p not in covered)
    dot_nodes: tuple[LatticeCoord, ...] = ()
    if dot_pcs:
        center = _cluster_centroid(cluster)
        dot_nodes = tuple(_nearest_node(p, [center], indices) for p in dot_pcs)

    main_verts = tri_vertices(main_tri)
    root_index = next(
        (i for i, vert in enumerate(main_verts) if pc(vert.u, vert.v) == chord.root_pc),
        None,
    )
    if root_index is None:
        raise TonnetzError(
            f"main triangle {tri_id(main_tri)} does not contain root {chord.root_pc}"
        )
    root_vertex = main_verts[root_index]

    return Shape(
        chord=chord,
        main_tri=main_tri,
        ext_tris=tuple(ext_tris),
        dot_pcs=dot_pcs,
        covered_pcs=frozenset(covered),
        root_vertex_index=root_index,
        centroid_uv=Centroid(float(root_vertex.u), float(root_vertex.v)),
        dot_nodes=dot_nodes,
    )


# -- Helpers --

def _cluster_centroid(tris: list[TriRef]) -> Centroid:
    """Mean of the unique vertices across a triangle cluster."""
    verts: list[LatticeCoord] = []
    for tri in tris:
        for vert in tri_vertices(tri):
            if vert not in verts:
                verts.append(vert)
    sum_u = 0
    sum_v = 0
    for vert in verts:
        sum_u += vert.u
        sum_v += vert.v
    return Centroid(sum_u / len(verts), sum_v / len(verts))


def _nearest_node(
    target_pc: int,
    references: Sequence[LatticeCoord | Centroid],
    indices: WindowIndices,
) -> LatticeCoord:
    """Node carrying ``target_pc`` closest to any of ``references``.

    Ties go to the smaller NodeId.
    """
    best: LatticeCoord | None = None
    best_key: tuple[float, str] | None = None
    for node in indices.pc_to_nodes.get(target_pc, ()):
        d = min(world_dist2(node, ref) for ref in references)
        key = (d, node_id(node.u, node.v))
        if best_key is None or key < best_key:
            best_key = key
            best = node
    if best is None:
        raise TonnetzError(f"window holds no node with pitch class {target_pc}")
    return best


def _check_coverage(shape: Shape) -> None:
    dots = set(shape.dot_pcs)
    if shape.covered_pcs | dots != set(shape.chord.chord_pcs) or shape.covered_pcs & dots:
        raise TonnetzError(
            f"shape does not cover chord tones exactly once: chord "
            f"{shape.chord.chord_pcs}, covered {sorted(shape.covered_pcs)}, "
            f"dots {shape.dot_pcs}"
        )
