"""Chord notation cleaning (Aho-Corasick alias scan) and progression splitting."""

from __future__ import annotations

import re

import ahocorasick

from ._types import CleanResult

# Alternate spellings rewritten to the chord grammar. Matched only after the
# root, leftmost-longest, so "+9" wins over "+" and "ø7" over "ø".
ALIASES: dict[str, str] = {
    "Δ7": "maj7",
    "Δ": "maj7",
    "△7": "maj7",
    "△": "maj7",
    "M7": "maj7",
    "ma7": "maj7",
    "ø7": "dim7",
    "ø": "dim7",
    "m7b5": "dim7",
    "min": "m",
    "mi": "m",
    "°7": "dim",
    "°": "dim",
    "+9": "add9",
    "+": "aug",
}

# Aliases that change the pitch content; rewriting them warns.
LOSSY_ALIASES: dict[str, str] = {
    "°7": "fully diminished seventh reduced to diminished triad",
}

_ROOT_RE = re.compile(r"([A-Ga-g][#b]?)(.*)", re.DOTALL)
_DASH_MINOR_RE = re.compile(r"^-")
_SLASH_BASS_RE = re.compile(r"(?<!6)/[A-Ga-g][#b]?$")
_PAREN_RE = re.compile(r"\([^)]*\)")
_BARE_NINE_RE = re.compile(r"(?<!add)(?<!6/)9$")
_SUS_RE = re.compile(r"sus[24]?")
_AUG_EXT_RE = re.compile(r"aug(maj7|add9|6/9|6|7)$")
_SPLIT_RE = re.compile(r"[|\s]+")


class AliasScanner:
    __slots__ = ("_ac",)

    def __init__(self, aliases: dict[str, str]) -> None:
        ac = ahocorasick.Automaton()
        for alias, replacement in aliases.items():
            ac.add_word(alias, (alias, replacement))
        ac.make_automaton()
        self._ac = ac

    def scan(self, text: str) -> list[tuple[int, int, str]]:
        """Leftmost-longest non-overlapping matches as (start, end, replacement)."""
        raw_matches: list[tuple[int, int, str]] = []
        for end_inclusive, (alias, replacement) in self._ac.iter(text):
            end = end_inclusive + 1
            raw_matches.append((end - len(alias), end, replacement))

        raw_matches.sort(key=lambda m: (m[0], -(m[1] - m[0])))

        selected: list[tuple[int, int, str]] = []
        last_end = -1
        for start, end, replacement in raw_matches:
            if start >= last_end:
                selected.append((start, end, replacement))
                last_end = end
        return selected

    def rewrite(
        self, text: str, matches: list[tuple[int, int, str]] | None = None
    ) -> str:
        """Replace each match; ``matches`` defaults to ``scan(text)``."""
        if matches is None:
            matches = self.scan(text)
        parts: list[str] = []
        pos = 0
        for start, end, replacement in matches:
            parts.append(text[pos:start])
            parts.append(replacement)
            pos = end
        parts.append(text[pos:])
        return "".join(parts)


_SCANNER = AliasScanner(ALIASES)


def clean_chord_symbol(raw: str) -> CleanResult:
    """Normalize common notation variants before parse_chord_symbol().

    Lossy rewrites (sus removal, dropping an extension from an augmented
    triad, reducing a fully diminished seventh) come back with a warning
    naming each of them; everything else is silent.
    """
    s = raw.strip()
    if not s:
        return CleanResult(s)

    s = _SLASH_BASS_RE.sub("", s)
    s = _PAREN_RE.sub("", s)

    m = _ROOT_RE.fullmatch(s)
    if m is None:
        return CleanResult(s)
    root, rest = m.groups()

    # Dash means minor only directly after the root
    rest = _DASH_MINOR_RE.sub("m", rest)

    losses: list[str] = []
    matches = _SCANNER.scan(rest)
    for start, end, _ in matches:
        reason = LOSSY_ALIASES.get(rest[start:end])
        if reason is not None:
            losses.append(reason)
    rest = _SCANNER.rewrite(rest, matches)
    rest = _BARE_NINE_RE.sub("add9", rest)

    if _SUS_RE.search(rest):
        rest = _SUS_RE.sub("", rest)
        losses.append("sus removed (unsupported)")

    if _AUG_EXT_RE.search(rest):
        rest = _AUG_EXT_RE.sub("aug", rest)
        losses.append("extension on augmented triad removed")

    cleaned = root + rest
    if not losses:
        return CleanResult(cleaned)
    return CleanResult(cleaned, f"{raw!r} -> {'; '.join(losses)}, treated as {cleaned!r}")


def split_progression(text: str) -> list[str]:
    """Split progression text on '|' and whitespace, dropping empty tokens."""
    if not text.strip():
        return []
    return [t for t in _SPLIT_RE.split(text.strip()) if t]
