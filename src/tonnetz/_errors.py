"""Tonnetz error types."""


class TonnetzError(Exception):
    """Base error for all tonnetz failures."""


class ChordSymbolError(TonnetzError, ValueError):
    """Chord symbol does not match the chord grammar."""


class UnsupportedChordError(ChordSymbolError):
    """Chord symbol is well-formed but has no supported voicing."""


class LibraryVersionError(TonnetzError):
    """Library manifest version mismatch."""


class LibraryChecksumError(TonnetzError):
    """Library file checksum verification failed."""


class LibraryFormatError(TonnetzError):
    """Library entry is missing a field or has a malformed value."""
