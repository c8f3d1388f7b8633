"""Tonnetz: harmonic-geometry engine placing chord symbols on a triangular lattice."""

from __future__ import annotations

from ._chords import compute_chord_pcs, parse_chord_symbol
from ._coords import coord, node_id, parse_node_id, pc, to_world, world_dist2
from ._engine import DEFAULT_BOUNDS, TonnetzEngine
from ._errors import (
    ChordSymbolError,
    LibraryChecksumError,
    LibraryFormatError,
    LibraryVersionError,
    TonnetzError,
    UnsupportedChordError,
)
from ._index import adjacent_triangles, build_window_indices, edge_union_pcs
from ._library import load_library
from ._notation import clean_chord_symbol, split_progression
from ._placement import (
    MAX_EXTENSION_TRIANGLES,
    decompose_chord_to_shape,
    place_main_triad,
)
from ._progression import (
    BEATS_PER_CHORD,
    REUSE_FACTOR,
    load_progression,
    map_progression_to_shapes,
)
from ._triangles import (
    edge_id,
    parse_edge_id,
    parse_tri_id,
    tri_centroid,
    tri_edges,
    tri_id,
    tri_vertices,
    triangle_pcs,
)
from ._types import (
    DOWN,
    UP,
    Centroid,
    Chord,
    ChordEvent,
    CleanResult,
    LatticeCoord,
    LibraryEntry,
    ProgressionResult,
    Shape,
    TriRef,
    WindowBounds,
    WindowIndices,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "build",
    "BEATS_PER_CHORD",
    "Centroid",
    "Chord",
    "ChordEvent",
    "ChordSymbolError",
    "CleanResult",
    "DEFAULT_BOUNDS",
    "DOWN",
    "LatticeCoord",
    "LibraryChecksumError",
    "LibraryEntry",
    "LibraryFormatError",
    "LibraryVersionError",
    "MAX_EXTENSION_TRIANGLES",
    "ProgressionResult",
    "REUSE_FACTOR",
    "Shape",
    "TonnetzEngine",
    "TonnetzError",
    "TriRef",
    "UP",
    "UnsupportedChordError",
    "WindowBounds",
    "WindowIndices",
    "adjacent_triangles",
    "build_window_indices",
    "clean_chord_symbol",
    "compute_chord_pcs",
    "coord",
    "decompose_chord_to_shape",
    "edge_id",
    "edge_union_pcs",
    "load_library",
    "load_progression",
    "map_progression_to_shapes",
    "node_id",
    "parse_chord_symbol",
    "parse_edge_id",
    "parse_node_id",
    "parse_tri_id",
    "pc",
    "place_main_triad",
    "split_progression",
    "to_world",
    "tri_centroid",
    "tri_edges",
    "tri_id",
    "tri_vertices",
    "triangle_pcs",
    "world_dist2",
]


def build(bounds: WindowBounds | None = None) -> TonnetzEngine:
    """Build window indices and return a ready-to-use TonnetzEngine.

    Args:
        bounds: Anchor region to index. If None, uses DEFAULT_BOUNDS.
    """
    if bounds is None:
        bounds = DEFAULT_BOUNDS
    return TonnetzEngine(build_window_indices(bounds))
