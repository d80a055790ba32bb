"""Enumerate the playable notes for a selection of strings and frets."""

from typing import Dict, Iterable, List, Mapping

from .core.errors import ConfigurationError, EmptyCandidateSet
from .logger import get_logger
from .note_types import Candidate, FretRange, Note
from .note_utils import is_natural, note_from_offset, parse_note

# Get logger for this module
logger = get_logger(__name__)

StringTuning = Mapping[int, Note]

# Standard six-string guitar tuning, string 1 is the high E
STANDARD_TUNING: Dict[int, Note] = {
    6: parse_note("E2"),
    5: parse_note("A2"),
    4: parse_note("D3"),
    3: parse_note("G3"),
    2: parse_note("B3"),
    1: parse_note("E4"),
}


def enumerate_candidates(
    tuning: StringTuning,
    selected_strings: Iterable[int],
    fret_range: FretRange,
    include_incidentals: bool,
) -> List[Candidate]:
    """Build the candidate set for the current configuration.

    Candidates are ordered by string then fret, both ascending. The order only
    makes the output deterministic; selection treats the set as unordered.

    Args:
        tuning: Open-string note for each string id
        selected_strings: String ids the player wants to practise
        fret_range: Inclusive range of frets
        include_incidentals: If False, skip sharps

    Returns:
        A non-empty list of candidates

    Raises:
        ConfigurationError: If a selected string is not part of the tuning
        EmptyCandidateSet: If nothing is playable with this configuration
    """
    strings = sorted(set(selected_strings))
    if not strings:
        raise EmptyCandidateSet("No strings selected")

    unknown = [s for s in strings if s not in tuning]
    if unknown:
        raise ConfigurationError(
            f"Unknown string(s) {unknown}, expected one of {sorted(tuning)}"
        )

    candidates = []
    for string in strings:
        for fret in fret_range:
            note = note_from_offset(tuning[string], fret)
            if not include_incidentals and not is_natural(note.pitch_class):
                continue
            candidates.append(Candidate(string, fret, note))

    if not candidates:
        raise EmptyCandidateSet(
            f"No natural notes on string(s) {strings} between frets {fret_range}"
        )

    logger.debug(
        "Enumerated %d candidates (strings=%s, frets=%s, incidentals=%s)",
        len(candidates),
        strings,
        fret_range,
        include_incidentals,
    )
    return candidates


def distinct_notes(candidates: Iterable[Candidate]) -> List[Note]:
    """Unique notes in a candidate set, in first-seen order."""
    seen = {}
    for candidate in candidates:
        seen.setdefault(candidate.note, None)
    return list(seen)
