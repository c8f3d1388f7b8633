"""Tests for the TonnetzEngine facade."""

import pytest

import tonnetz
from tonnetz import (
    DEFAULT_BOUNDS,
    DOWN,
    UP,
    Centroid,
    ChordSymbolError,
    LatticeCoord,
    TriRef,
    UnsupportedChordError,
    WindowBounds,
)


def test_build_default_bounds(engine):
    assert engine.bounds == DEFAULT_BOUNDS
    assert len(engine.indices.tri_id_to_ref) == 2 * 17 * 17


def test_build_custom_bounds():
    eng = tonnetz.build(WindowBounds(-2, 2, -2, 2))
    assert len(eng.indices.tri_id_to_ref) == 50


def test_version():
    assert tonnetz.__version__ == "0.1.0"


def test_place_accepts_string(engine):
    assert engine.place("C") == TriRef(UP, LatticeCoord(0, 0))
    assert engine.place("Bdim") is None


def test_shape_accepts_string_and_chord(engine):
    from_str = engine.shape("Cmaj7")
    from_chord = engine.shape(tonnetz.parse_chord_symbol("Cmaj7"))
    assert from_str == from_chord
    assert from_str.ext_tris == (TriRef(DOWN, LatticeCoord(0, 0)),)


def test_shape_with_focus(engine):
    shape = engine.shape("C", Centroid(4.0, 0.0))
    assert shape.main_tri != TriRef(UP, LatticeCoord(0, 0))
    assert shape.chord.root_pc == 0


def test_adjacent(engine):
    adj = engine.adjacent(TriRef(UP, LatticeCoord(0, 0)))
    assert set(adj) == {"T:D:-1,0", "T:D:0,-1", "T:D:0,0"}


def test_edge_union(engine):
    assert engine.edge_union("E:N:0,0|N:1,0") is not None
    assert engine.edge_union("E:N:99,99|N:100,99") is None


def test_map_progression_strict(engine):
    shapes = engine.map_progression(["Dm7", "G7", "Cmaj7"])
    assert len(shapes) == 3
    with pytest.raises(ChordSymbolError):
        engine.map_progression(["Dm7", "X7"])
    with pytest.raises(UnsupportedChordError):
        engine.map_progression(["Caug7"])


def test_load_progression_lenient(engine):
    result = engine.load_progression("Dm7 | X7 | Cmaj7")
    assert result.skipped == ["X7"]
    assert len(result.events) == 2


def test_load_progression_kwargs(engine):
    result = engine.load_progression("C G", beats_per_chord=3)
    assert [e.start_beat for e in result.events] == [0, 3]


def test_rebuild_keeps_old_indices_valid():
    eng = tonnetz.build(WindowBounds(-3, 3, -3, 3))
    old = eng.indices
    new = eng.rebuild(WindowBounds(-1, 1, -1, 1))
    assert eng.indices is new
    assert eng.bounds == WindowBounds(-1, 1, -1, 1)
    assert len(old.tri_id_to_ref) == 98
    assert len(new.tri_id_to_ref) == 18
    assert tonnetz.place_main_triad(tonnetz.parse_chord_symbol("C"), Centroid(0.0, 0.0), old) is not None
