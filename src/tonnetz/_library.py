"""Bundled progression library: manifest check and entry validation."""

from __future__ import annotations

import hashlib
import json
import logging
from importlib import resources
from pathlib import Path
from typing import Any

from ._errors import (
    LibraryChecksumError,
    LibraryFormatError,
    LibraryVersionError,
    TonnetzError,
)
from ._types import LibraryEntry

logger = logging.getLogger(__name__)

LIBRARY_FORMAT_VERSION = "1.0"

_LIBRARY_FILE = "library.json"
_MANIFEST_FILE = "manifest.json"

# Required entry fields and their JSON types; "composer" is optional.
_ENTRY_SCHEMA: dict[str, type] = {
    "id": str,
    "title": str,
    "genre": str,
    "harmonic_features": list,
    "comment": str,
    "tempo": int,
    "chords": list,
}


def _bundled_dir() -> Path:
    return Path(str(resources.files("tonnetz") / "data"))


def _file_digest(path: Path) -> str:
    return hashlib.sha256(path.read_bytes()).hexdigest()


def _check_manifest(data_dir: Path) -> None:
    """Verify the manifest's format version and the library file digest."""
    manifest_path = data_dir / _MANIFEST_FILE
    if not manifest_path.exists():
        raise TonnetzError(f"progression library manifest not found in {data_dir}")
    manifest = json.loads(manifest_path.read_text(encoding="utf-8"))

    version = manifest.get("version")
    if version != LIBRARY_FORMAT_VERSION:
        raise LibraryVersionError(
            f"progression library format {version!r} is not supported "
            f"(expected {LIBRARY_FORMAT_VERSION!r})"
        )

    library_path = data_dir / _LIBRARY_FILE
    if not library_path.exists():
        raise TonnetzError(f"progression library file missing: {library_path}")
    expected = manifest.get("files", {}).get(_LIBRARY_FILE)
    if expected is None:
        raise TonnetzError(f"manifest lists no digest for {_LIBRARY_FILE}")
    if _file_digest(library_path) != expected:
        raise LibraryChecksumError(
            f"{_LIBRARY_FILE} does not match its manifest digest; "
            f"the bundled library was modified"
        )


def _entry_from_json(raw: Any, position: int, seen_ids: set[str]) -> LibraryEntry:
    if not isinstance(raw, dict):
        raise LibraryFormatError(f"library entry {position} is not an object")
    label = raw.get("id", position)

    for name, kind in _ENTRY_SCHEMA.items():
        if name not in raw:
            raise LibraryFormatError(f"library entry {label!r} has no {name!r}")
        value = raw[name]
        # bool is an int subclass; a tempo of true is still malformed
        if not isinstance(value, kind) or isinstance(value, bool):
            raise LibraryFormatError(
                f"library entry {label!r}: {name!r} should be {kind.__name__}"
            )

    composer = raw.get("composer")
    if composer is not None and not isinstance(composer, str):
        raise LibraryFormatError(f"library entry {label!r}: 'composer' should be str")
    if raw["id"] in seen_ids:
        raise LibraryFormatError(f"duplicate library entry id {raw['id']!r}")
    if raw["tempo"] <= 0:
        raise LibraryFormatError(f"library entry {label!r}: tempo must be positive")
    chords = raw["chords"]
    if not chords or not all(isinstance(c, str) and c.strip() for c in chords):
        raise LibraryFormatError(
            f"library entry {label!r}: chords must be non-empty chord symbols"
        )
    seen_ids.add(raw["id"])

    return LibraryEntry(
        id=raw["id"],
        title=raw["title"],
        genre=raw["genre"],
        harmonic_features=[str(f) for f in raw["harmonic_features"]],
        comment=raw["comment"],
        tempo=raw["tempo"],
        chords=list(chords),
        composer=composer,
    )


def load_library(data_dir: Path | str | None = None) -> list[LibraryEntry]:
    """Load the progression library.

    Args:
        data_dir: Directory holding manifest.json and library.json. If None,
            uses the copy bundled with the package.

    Raises:
        LibraryVersionError: Unsupported library format version.
        LibraryChecksumError: library.json differs from its manifest digest.
        LibraryFormatError: An entry is missing fields or malformed.
    """
    data_dir = _bundled_dir() if data_dir is None else Path(data_dir)
    _check_manifest(data_dir)

    raw_entries = json.loads((data_dir / _LIBRARY_FILE).read_text(encoding="utf-8"))
    if not isinstance(raw_entries, list):
        raise LibraryFormatError(f"{_LIBRARY_FILE} must hold a list of entries")

    seen_ids: set[str] = set()
    entries = [
        _entry_from_json(raw, i, seen_ids) for i, raw in enumerate(raw_entries)
    ]
    logger.info("Loaded %d library progressions from %s", len(entries), data_dir)
    return entries
