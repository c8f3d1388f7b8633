"""Chord-symbol parsing and pitch-class expansion."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from ._errors import ChordSymbolError, UnsupportedChordError
from ._types import Chord

if TYPE_CHECKING:
    from ._types import Extension, Quality

ROOT_MAP: dict[str, int] = {
    "C": 0, "C#": 1, "Db": 1,
    "D": 2, "D#": 3, "Eb": 3,
    "E": 4,
    "F": 5, "F#": 6, "Gb": 6,
    "G": 7, "G#": 8, "Ab": 8,
    "A": 9, "A#": 10, "Bb": 10,
    "B": 11,
}

TRIAD_INTERVALS: dict[str, tuple[int, int, int]] = {
    "maj": (0, 4, 7),
    "min": (0, 3, 7),
    "dim": (0, 3, 6),
    "aug": (0, 4, 8),
}

EXTENSION_INTERVALS: dict[str, tuple[int, ...]] = {
    "6": (9,),
    "7": (10,),
    "maj7": (11,),
    "add9": (2,),
    "6/9": (9, 2),
}

_QUALITY_TOKENS = {"m": "min", "dim": "dim", "aug": "aug"}

# Root letter, accidental, quality (bare "m" unless it starts "maj"), extension.
_CHORD_RE = re.compile(r"([A-G])(#|b)?(m(?!aj)|dim|aug)?(maj7|add9|6/9|6|7)?")


def parse_chord_symbol(text: str) -> Chord:
    """Parse a chord symbol such as ``"Dm7"`` or ``"F#6/9"``.

    The root letter is case-insensitive; quality and extension tokens are
    case-sensitive.

    Raises:
        ChordSymbolError: If the symbol does not match the chord grammar.
        UnsupportedChordError: If an augmented triad carries an extension.
    """
    stripped = text.strip()
    normalized = stripped[:1].upper() + stripped[1:]
    match = _CHORD_RE.fullmatch(normalized)
    if match is None:
        raise ChordSymbolError(f"invalid chord symbol: {text!r}")

    letter, accidental, quality_token, ext_token = match.groups()
    root_name = letter + (accidental or "")
    root_pc = ROOT_MAP.get(root_name)
    if root_pc is None:
        raise ChordSymbolError(f"invalid chord symbol: unknown root {root_name!r}")

    quality = _QUALITY_TOKENS[quality_token] if quality_token else "maj"
    if quality == "aug" and ext_token is not None:
        raise UnsupportedChordError(
            f"augmented + extension unsupported: {text!r}"
        )

    return compute_chord_pcs(root_pc, quality, ext_token)  # type: ignore[arg-type]


def compute_chord_pcs(
    root_pc: int, quality: Quality, extension: Extension | None
) -> Chord:
    """Expand root, quality, and extension into a Chord.

    ``chord_pcs`` keeps triad-then-extension order with duplicates removed.
    """
    if quality not in TRIAD_INTERVALS:
        raise ValueError(f"unknown quality {quality!r}")
    if extension is not None and extension not in EXTENSION_INTERVALS:
        raise ValueError(f"unknown extension {extension!r}")

    root_pc %= 12
    r, t, f = ((root_pc + i) % 12 for i in TRIAD_INTERVALS[quality])
    pcs = [r, t, f]
    if extension is not None:
        for interval in EXTENSION_INTERVALS[extension]:
            p = (root_pc + interval) % 12
            if p not in pcs:
                pcs.append(p)

    return Chord(
        root_pc=root_pc,
        quality=quality,
        extension=extension,
        chord_pcs=tuple(pcs),
        main_triad_pcs=(r, t, f),
    )
