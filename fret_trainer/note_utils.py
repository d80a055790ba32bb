"""Utility functions for working with musical notes and frequencies."""

import math
import re
from typing import List, Optional

from .logger import get_logger
from .note_types import Note

# Get logger for this module
logger = get_logger(__name__)

# Standard reference: A4 = 440Hz, MIDI note 69
A4_FREQ = 440.0
A4_MIDI = 69

# Chromatic scale anchored at C, index matches MIDI note number mod 12
NOTE_ORDER: List[str] = [
    "C",
    "C#",
    "D",
    "D#",
    "E",
    "F",
    "F#",
    "G",
    "G#",
    "A",
    "A#",
    "B",
]
NATURAL_NOTES = frozenset(["C", "D", "E", "F", "G", "A", "B"])

# Note name with optional sharp and a (possibly negative) octave, e.g. 'C#-1'
NOTE_PATTERN = re.compile(r"^([A-G]#?)(-?[0-9]+)$")


def parse_note(text: str) -> Note:
    """Parse a note name in scientific pitch notation.

    Args:
        text: The note name (e.g., 'E2', 'F#3', 'C-1')

    Returns:
        Note: The parsed note

    Raises:
        ValueError: If the text is not a sharp-spelled note with an octave
    """
    match = NOTE_PATTERN.match(text.strip()) if text else None
    if not match:
        raise ValueError(f"Invalid note name: {text!r}")
    return Note(match.group(1), int(match.group(2)))


def midi_number(note: Note) -> int:
    """Absolute semitone number of a note (C-1 is 0, A4 is 69)."""
    return (note.octave + 1) * 12 + NOTE_ORDER.index(note.pitch_class)


def note_from_midi(number: int) -> Note:
    """Inverse of ``midi_number``; works for negative numbers too."""
    return Note(NOTE_ORDER[number % 12], number // 12 - 1)


def note_from_offset(base: Note, semitones: int) -> Note:
    """Move a note up (or down, for negative offsets) by a number of semitones.

    Examples:
        >>> note_from_offset(Note("E", 2), 5)  # Note('A', 2)
        >>> note_from_offset(Note("C", 4), -1)  # Note('B', 3)
    """
    index = NOTE_ORDER.index(base.pitch_class) + semitones
    # Floor division and modulo keep negative indices on the right octave
    return Note(NOTE_ORDER[index % 12], base.octave + index // 12)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def note_from_frequency(freq: float) -> Optional[Note]:
    """Convert frequency to the nearest equal-tempered note.

    Args:
        freq: Frequency in Hz

    Returns:
        The nearest note, or None for non-positive or non-finite input

    Note:
        Exact half-semitone boundaries round up, so a frequency exactly
        between A4 and A#4 maps to A#4.
    """
    if freq is None or not math.isfinite(freq) or freq <= 0:
        logger.debug(f"No note for frequency: {freq}")
        return None

    # Calculate half steps from A4
    half_steps = round_half_up(12 * math.log2(freq / A4_FREQ))
    return note_from_midi(A4_MIDI + half_steps)


def note_frequency(note: Note) -> float:
    """Equal-tempered frequency of a note in Hz (A4 = 440Hz)."""
    return A4_FREQ * 2.0 ** ((midi_number(note) - A4_MIDI) / 12.0)


def is_natural(pitch_class: str) -> bool:
    """True for the seven natural letters, False for sharps."""
    return pitch_class in NATURAL_NOTES
