"""Type definitions for the fret_trainer project."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

import numpy as np

from .core.errors import InvalidFretRange


@dataclass(frozen=True)
class Note:
    """A pitch class plus octave in scientific pitch notation (C4 is middle C)."""

    pitch_class: str  # One of the 12 sharp names, e.g. 'C#'
    octave: int  # e.g. 2

    def __str__(self):
        return f"{self.pitch_class}{self.octave}"


@dataclass(frozen=True)
class FretRange:
    """Inclusive range of frets to practise on."""

    MAX_FRET: ClassVar[int] = 24

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0:
            raise InvalidFretRange(f"Fret range start must be >= 0, got {self.start}")
        if self.end < self.start:
            raise InvalidFretRange(
                f"Fret range end ({self.end}) is before start ({self.start})"
            )
        if self.end > self.MAX_FRET:
            raise InvalidFretRange(
                f"Fret range end ({self.end}) is past the last fret ({self.MAX_FRET})"
            )

    def __iter__(self):
        return iter(range(self.start, self.end + 1))

    def __str__(self):
        return f"{self.start}-{self.end}"


@dataclass(frozen=True)
class Candidate:
    """Represents a playable position on the fretboard and the note it sounds."""

    string: int  # String number (1 is the thinnest string)
    fret: int  # Fret number (0 for open string)
    note: Note

    def __str__(self):
        return f"S{self.string}F{self.fret} ({self.note})"


@dataclass
class AudioFrame:
    """One block of mono samples from the frame source."""

    samples: np.ndarray  # Float samples, nominally in [-1, 1]
    sample_rate: int  # Hz

    def __len__(self):
        return len(self.samples)
