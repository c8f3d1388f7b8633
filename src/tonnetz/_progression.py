"""Progression sequencing: chained placement with root reuse, and the text pipeline."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from ._chords import parse_chord_symbol
from ._coords import world_dist2
from ._errors import ChordSymbolError
from ._notation import clean_chord_symbol, split_progression
from ._placement import decompose_chord_to_shape, place_main_triad
from ._triangles import tri_centroid
from ._types import ChordEvent, ProgressionResult

if TYPE_CHECKING:
    from ._types import Centroid, Chord, LatticeCoord, Shape, TriRef, WindowIndices

logger = logging.getLogger(__name__)

# A repeated root may return to its earlier spot if that costs at most 50%
# more travel than the nearest placement.
REUSE_FACTOR = 1.5

BEATS_PER_CHORD = 4


def _distance(tri: TriRef, focus: LatticeCoord | Centroid) -> float:
    return math.sqrt(world_dist2(tri_centroid(tri), focus))


def map_progression_to_shapes(
    chords: list[Chord],
    initial_focus: LatticeCoord | Centroid,
    indices: WindowIndices,
    *,
    reuse_factor: float = REUSE_FACTOR,
) -> list[Shape]:
    """Place each chord relative to the previous shape's centroid.

    A chord whose root appeared earlier gets two candidate placements: the
    one nearest the current focus and the one nearest where that root was
    first drawn. The remembered spot wins unless it is more than
    ``reuse_factor`` times as far from the current focus.
    """
    focus = initial_focus
    prior_root: dict[int, Centroid] = {}
    shapes: list[Shape] = []

    for chord in chords:
        main_tri = place_main_triad(chord, focus, indices)

        remembered = prior_root.get(chord.root_pc)
        if remembered is not None:
            reuse_tri = place_main_triad(chord, remembered, indices)
            if main_tri is None:
                main_tri = reuse_tri
            elif reuse_tri is not None and reuse_tri != main_tri:
                d_prox = _distance(main_tri, focus)
                d_reuse = _distance(reuse_tri, focus)
                if d_reuse <= reuse_factor * d_prox:
                    logger.debug(
                        "Reusing placement for root %d (%.3f vs %.3f)",
                        chord.root_pc, d_reuse, d_prox,
                    )
                    main_tri = reuse_tri

        shape = decompose_chord_to_shape(chord, main_tri, focus, indices)
        shapes.append(shape)
        prior_root.setdefault(chord.root_pc, shape.centroid_uv)
        focus = shape.centroid_uv

    return shapes


def load_progression(
    chords: str | list[str],
    focus: LatticeCoord | Centroid,
    indices: WindowIndices,
    *,
    beats_per_chord: int = BEATS_PER_CHORD,
) -> ProgressionResult:
    """Full pipeline from chord symbols to shapes and timed events.

    Args:
        chords: Progression text ("Dm7 | G7 | Cmaj7") or pre-split symbols.
        focus: Where the first chord is placed.
        indices: Window to place into.
        beats_per_chord: Uniform duration of every chord.

    Symbols that still fail to parse after cleaning are skipped and listed
    in ``skipped``; the pipeline itself never raises on bad input.
    """
    # Step 1: Tokenize
    if isinstance(chords, str):
        symbols = split_progression(chords)
    else:
        symbols = list(chords)

    # Step 2: Clean + parse, skipping failures
    parsed: list[Chord] = []
    cleaned_symbols: list[str] = []
    warnings: list[str] = []
    skipped: list[str] = []
    for raw in symbols:
        result = clean_chord_symbol(raw)
        if result.warning:
            logger.warning("%s", result.warning)
            warnings.append(result.warning)
        try:
            parsed.append(parse_chord_symbol(result.cleaned))
        except ChordSymbolError as e:
            logger.warning("Skipping chord %r: %s", raw, e)
            skipped.append(raw)
            continue
        cleaned_symbols.append(result.cleaned)

    # Step 3: Chained placement
    shapes = map_progression_to_shapes(parsed, focus, indices)

    # Step 4: Uniform timing
    events = [
        ChordEvent(shape=shape, start_beat=i * beats_per_chord, duration_beats=beats_per_chord)
        for i, shape in enumerate(shapes)
    ]

    return ProgressionResult(
        shapes=shapes,
        events=events,
        cleaned_symbols=cleaned_symbols,
        warnings=warnings,
        skipped=skipped,
    )
