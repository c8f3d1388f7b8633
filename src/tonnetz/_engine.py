"""TonnetzEngine: holds one window index and exposes the placement API."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ._chords import parse_chord_symbol
from ._index import adjacent_triangles, build_window_indices, edge_union_pcs
from ._placement import decompose_chord_to_shape, place_main_triad
from ._progression import load_progression, map_progression_to_shapes
from ._types import Centroid, Chord, WindowBounds

if TYPE_CHECKING:
    from ._types import (
        EdgeId,
        LatticeCoord,
        ProgressionResult,
        Shape,
        TriId,
        TriRef,
        WindowIndices,
    )

DEFAULT_BOUNDS = WindowBounds(u_min=-8, u_max=8, v_min=-8, v_max=8)

ORIGIN = Centroid(0.0, 0.0)


class TonnetzEngine:
    """Main entry point. Holds the active window index.

    The index is read-only; rebuild() swaps in a new one with a single
    assignment, so an index fetched earlier through ``indices`` stays valid.
    """

    __slots__ = ("_indices",)

    def __init__(self, indices: WindowIndices) -> None:
        self._indices = indices

    @property
    def indices(self) -> WindowIndices:
        return self._indices

    @property
    def bounds(self) -> WindowBounds:
        return self._indices.bounds

    def rebuild(self, bounds: WindowBounds) -> WindowIndices:
        """Replace the window index with one built for ``bounds``."""
        indices = build_window_indices(bounds)
        self._indices = indices
        return indices

    # -- Lattice queries --

    def adjacent(self, tri: TriRef) -> list[TriId]:
        return adjacent_triangles(tri, self._indices)

    def edge_union(self, eid: EdgeId) -> list[int] | None:
        return edge_union_pcs(eid, self._indices)

    # -- Placement API --

    def place(
        self, chord: Chord | str, focus: LatticeCoord | Centroid = ORIGIN
    ) -> TriRef | None:
        return place_main_triad(_as_chord(chord), focus, self._indices)

    def shape(
        self, chord: Chord | str, focus: LatticeCoord | Centroid = ORIGIN
    ) -> Shape:
        """Place and decompose a single chord."""
        chord = _as_chord(chord)
        indices = self._indices
        main_tri = place_main_triad(chord, focus, indices)
        return decompose_chord_to_shape(chord, main_tri, focus, indices)

    def map_progression(
        self,
        chords: list[Chord | str],
        focus: LatticeCoord | Centroid = ORIGIN,
    ) -> list[Shape]:
        """Chain-place chords; symbols are parsed strictly (errors propagate)."""
        return map_progression_to_shapes(
            [_as_chord(c) for c in chords], focus, self._indices,
        )

    def load_progression(
        self,
        chords: str | list[str],
        focus: LatticeCoord | Centroid = ORIGIN,
        **kwargs,
    ) -> ProgressionResult:
        """Lenient pipeline: clean symbols, skip unparseable ones, time events."""
        return load_progression(chords, focus, self._indices, **kwargs)


def _as_chord(chord: Chord | str) -> Chord:
    if isinstance(chord, Chord):
        return chord
    return parse_chord_symbol(chord)
