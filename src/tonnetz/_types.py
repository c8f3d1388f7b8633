"""Data structures for tonnetz."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal, Mapping

Orientation = Literal["U", "D"]
Quality = Literal["maj", "min", "dim", "aug"]
Extension = Literal["6", "7", "maj7", "add9", "6/9"]

# Canonical string ids: "N:u,v", "T:U:u,v" / "T:D:u,v", "E:N:a,b|N:c,d"
NodeId = str
TriId = str
EdgeId = str

UP: Orientation = "U"
DOWN: Orientation = "D"


@dataclass(slots=True, frozen=True)
class LatticeCoord:
    u: int
    v: int


@dataclass(slots=True, frozen=True)
class Centroid:
    """Fractional lattice point: a focus or a shape's anchor position."""

    u: float
    v: float


@dataclass(slots=True, frozen=True)
class TriRef:
    orientation: Orientation
    anchor: LatticeCoord


@dataclass(slots=True, frozen=True)
class WindowBounds:
    u_min: int   # inclusive anchor range
    u_max: int
    v_min: int
    v_max: int


@dataclass(slots=True, frozen=True)
class WindowIndices:
    bounds: WindowBounds
    edge_to_tris: Mapping[EdgeId, tuple[TriId, ...]]
    node_to_tris: Mapping[NodeId, tuple[TriId, ...]]
    sig_to_tris: Mapping[str, tuple[TriId, ...]]      # "0-4-7"
    tri_id_to_ref: Mapping[TriId, TriRef]
    pc_to_nodes: Mapping[int, tuple[LatticeCoord, ...]]


@dataclass(slots=True, frozen=True)
class Chord:
    root_pc: int
    quality: Quality
    extension: Extension | None
    chord_pcs: tuple[int, ...]               # triad then extension, no dups
    main_triad_pcs: tuple[int, int, int]     # root, third, fifth


@dataclass(slots=True, frozen=True)
class Shape:
    chord: Chord
    main_tri: TriRef | None
    ext_tris: tuple[TriRef, ...]
    dot_pcs: tuple[int, ...]
    covered_pcs: frozenset[int]
    root_vertex_index: int | None
    centroid_uv: Centroid
    dot_nodes: tuple[LatticeCoord, ...] = ()   # parallel to dot_pcs


@dataclass(slots=True, frozen=True)
class CleanResult:
    cleaned: str
    warning: str | None = None


@dataclass(slots=True, frozen=True)
class ChordEvent:
    shape: Shape
    start_beat: int
    duration_beats: int


@dataclass(slots=True, frozen=True)
class ProgressionResult:
    shapes: list[Shape]
    events: list[ChordEvent]
    cleaned_symbols: list[str]
    warnings: list[str] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class LibraryEntry:
    id: str
    title: str
    genre: str
    harmonic_features: list[str]
    comment: str
    tempo: int
    chords: list[str]
    composer: str | None = None
