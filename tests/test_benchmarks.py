"""Benchmark suite for the tonnetz placement engine.

Measures index construction, single-chord placement, and progression
mapping across window sizes and progression lengths.

Run:  pytest tests/test_benchmarks.py --benchmark-enable
Skip: pytest tests/ -m "not benchmark"
"""

from __future__ import annotations

import pytest

import tonnetz
from tonnetz._chords import parse_chord_symbol
from tonnetz._notation import _SCANNER, clean_chord_symbol
from tonnetz._types import Centroid, WindowBounds

pytestmark = pytest.mark.benchmark

ORIGIN = Centroid(0.0, 0.0)

# ---------------------------------------------------------------------------
# Sample progressions
# ---------------------------------------------------------------------------

II_V_I = "Dm7 | G7 | Cmaj7"

BLUES_12 = "C7 C7 C7 C7 F7 F7 C7 C7 G7 F7 C7 G7"

RHYTHM_CHANGES = (
    "Bbmaj7 G7 Cm7 F7 Dm7 G7 Cm7 F7 Fm7 Bb7 Ebmaj7 Ab7 Dm7 G7 Cm7 F7 "
    "D7 D7 G7 G7 C7 C7 F7 F7"
)

LONG_200 = " ".join([RHYTHM_CHANGES] * 8 + ["Bbmaj7"] * 8)

SAMPLE_PROGRESSIONS = {
    "ii_v_i": II_V_I,
    "blues_12": BLUES_12,
    "rhythm_changes": RHYTHM_CHANGES,
    "long_200": LONG_200,
}

MESSY_SYMBOLS = ["CΔ7", "A-7", "Bø7", "G7(b9)", "F#m7/E", "Csus4", "C+7", "Ebmi9"]

# ---------------------------------------------------------------------------
# 1. Index construction
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("radius", [4, 8, 16])
def test_bench_build_window(benchmark, radius):
    """build_window_indices() for a square window of the given radius."""
    bounds = WindowBounds(-radius, radius, -radius, radius)
    benchmark.extra_info["n_triangles"] = 2 * (2 * radius + 1) ** 2
    benchmark.pedantic(
        tonnetz.build_window_indices, args=(bounds,), rounds=5, iterations=1,
    )


# ---------------------------------------------------------------------------
# 2. Single chord
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("symbol", ["C", "Am7", "C6/9", "Bdim7"])
def test_bench_shape(benchmark, engine, symbol):
    """Place + decompose one chord at the origin."""
    chord = parse_chord_symbol(symbol)
    benchmark(engine.shape, chord, ORIGIN)


def test_bench_parse(benchmark):
    benchmark.pedantic(
        parse_chord_symbol, args=("F#m7",), rounds=1000, iterations=100,
    )


def test_bench_clean(benchmark):
    """clean_chord_symbol() over a batch of non-canonical spellings."""

    def clean_all():
        return [clean_chord_symbol(s) for s in MESSY_SYMBOLS]

    benchmark(clean_all)


def test_bench_alias_scan(benchmark):
    """Aho-Corasick alias scan of a single chord suffix."""
    benchmark.pedantic(
        _SCANNER.scan, args=("m7b5",), rounds=1000, iterations=100,
    )


# ---------------------------------------------------------------------------
# 3. Progressions
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("key", list(SAMPLE_PROGRESSIONS.keys()))
def test_bench_load_progression(benchmark, engine, key):
    """Full text pipeline: split, clean, parse, chain-place, time."""
    text = SAMPLE_PROGRESSIONS[key]
    benchmark.extra_info["n_chords"] = len(text.split())
    benchmark(engine.load_progression, text)


def test_bench_map_progression(benchmark, engine):
    """Chain placement alone over pre-parsed chords."""
    chords = [parse_chord_symbol(s) for s in RHYTHM_CHANGES.split()]
    benchmark(engine.map_progression, chords)


def test_bench_library(benchmark):
    """load_library() including manifest and checksum validation."""
    benchmark.pedantic(tonnetz.load_library, rounds=5, iterations=1, warmup_rounds=0)
