import random
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Mapping, Optional

import numpy as np

from .core.config import GameConfig
from .core.errors import EmptyCandidateSet
from .core.events import Correct, EventEmitter, GameEvent, PitchDetected, TargetChanged
from .core.interfaces import IPitchDetector
from .fretboard import STANDARD_TUNING, distinct_notes, enumerate_candidates
from .logger import get_logger
from .note_types import AudioFrame, Candidate, Note
from .note_utils import note_from_frequency
from .pitch_detector import PitchDetector

# Get logger for this module
logger = get_logger(__name__)


class Phase(Enum):
    AWAITING_INPUT = "awaiting_input"
    CORRECT = "correct"
    # The Correct phase lasts until the player stops playing
    AWAITING_SILENCE = "correct"


@dataclass
class Session:
    """Current round of the game. Mutated only through ``process_frame``."""

    candidates: List[Candidate] = field(default_factory=list)
    target: Optional[Candidate] = None
    phase: Phase = Phase.AWAITING_INPUT


def pick_new_note(
    candidates: List[Candidate],
    previous: Optional[Candidate] = None,
    rng: Optional[random.Random] = None,
) -> Candidate:
    """Pick a random target, avoiding an immediate repeat of the previous note.

    Repeats are allowed only when every candidate sounds the same note.

    Raises:
        EmptyCandidateSet: If there is nothing to pick from
    """
    if not candidates:
        raise EmptyCandidateSet("Cannot pick a target from an empty candidate set")

    rng = rng or random
    pool = candidates
    if previous is not None and len(distinct_notes(candidates)) > 1:
        pool = [c for c in candidates if c.note != previous.note]
    return rng.choice(pool)


def _candidate_settings(config: GameConfig):
    return (config.selected_strings, config.fret_range, config.include_incidentals)


def _assign_target(session: Session, rng: Optional[random.Random]) -> TargetChanged:
    old_target = session.target
    session.target = pick_new_note(session.candidates, old_target, rng)
    session.phase = Phase.AWAITING_INPUT
    logger.debug("New target: %s (was: %s)", session.target, old_target)
    return TargetChanged(session.target.string, session.target.fret, session.target.note)


def process_frame(
    session: Session,
    config: GameConfig,
    frame: AudioFrame,
    detector: IPitchDetector,
    rng: Optional[random.Random] = None,
) -> List[GameEvent]:
    """Advance the session by one audio frame.

    In the Correct phase the frame is only checked for silence, which ends the
    round and picks a new target. Otherwise the frame's pitch is compared
    against the target note.

    Returns:
        The events produced by this frame (possibly none)
    """
    if session.target is None:
        return []

    if session.phase is Phase.CORRECT:
        if detector.is_silent(frame, config.silence_threshold):
            return [_assign_target(session, rng)]
        return []

    freq = detector.detect(frame, config.silence_threshold)
    note = note_from_frequency(freq) if freq is not None else None
    if note is None:
        return []

    if note == session.target.note:
        session.phase = Phase.CORRECT
        logger.info("Correct! %s on string %d", note, session.target.string)
        return [Correct(note)]
    return [PitchDetected(note, freq)]


class NoteGame:
    """A game that asks for notes on the fretboard and listens for them.

    Owns the session, candidate set and configuration. Frame processing and
    configuration changes are serialized by one lock, so frames may arrive on
    the audio thread while settings change from another thread.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        detector: Optional[IPitchDetector] = None,
        tuning: Mapping[int, Note] = STANDARD_TUNING,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Initialize the game.

        Args:
            config: Initial settings, defaults to ``GameConfig()``
            detector: Optional, an IPitchDetector for dependency injection/testing
            tuning: Open-string notes of the instrument
            rng: Optional random source for reproducible target choices
        """
        self.config = config if config is not None else GameConfig()
        self.detector = detector if detector is not None else PitchDetector()
        self.tuning = dict(tuning)
        self.rng = rng
        self.session = Session()
        self.events = EventEmitter()
        self.stats = {"rounds": 0, "correct": 0, "times": []}
        self._lock = threading.Lock()
        self._round_started = 0.0

    @property
    def target(self) -> Optional[Candidate]:
        return self.session.target

    @property
    def phase(self) -> Phase:
        return self.session.phase

    def on(self, event_type, callback: Callable) -> None:
        """Register a listener; see ``EventEmitter.on``."""
        self.events.on(event_type, callback)

    def start(self) -> TargetChanged:
        """Build the candidate set and pick the first target.

        Raises:
            ConfigurationError: If the current configuration has no playable notes
        """
        return self._apply(None, {}, new_round=True)

    def skip(self) -> TargetChanged:
        """Abandon the current target and pick another one."""
        return self._apply(None, {}, new_round=True)

    def update_config(
        self, config: Optional[GameConfig] = None, **changes
    ) -> Optional[TargetChanged]:
        """Apply new settings.

        Either pass a complete ``GameConfig`` or keyword changes to the current
        one. The candidates are rebuilt and a new target picked only when the
        strings, fret range or incidentals setting change; other settings such
        as the silence threshold keep the current round. If the new settings
        are invalid the error propagates and the previous settings, candidates
        and target stay in place.

        Returns:
            The ``TargetChanged`` event for a new round, or None

        Raises:
            ConfigurationError: For an invalid or unplayable configuration
        """
        return self._apply(config, changes, new_round=False)

    def _apply(
        self, config: Optional[GameConfig], changes: dict, new_round: bool
    ) -> Optional[TargetChanged]:
        with self._lock:
            new_config = config if config is not None else self.config
            if changes:
                new_config = new_config.replace(**changes)
            if not (
                new_round
                or self.session.target is None
                or _candidate_settings(new_config) != _candidate_settings(self.config)
            ):
                self.config = new_config
                logger.info("Configuration applied, target kept: %s", self.session.target)
                return None

            candidates = enumerate_candidates(
                self.tuning,
                new_config.selected_strings,
                new_config.fret_range,
                new_config.include_incidentals,
            )

            self.config = new_config
            self.session.candidates = candidates
            event = self._new_round()
            logger.info(
                "Configuration applied: %d candidates, target %s",
                len(candidates),
                self.session.target,
            )

        self.events.emit(event)
        return event

    def _new_round(self) -> TargetChanged:
        event = _assign_target(self.session, self.rng)
        self.stats["rounds"] += 1
        self._round_started = time.time()
        return event

    def process_frame(self, frame: AudioFrame) -> List[GameEvent]:
        """Run one frame through the state machine and emit the resulting events."""
        with self._lock:
            events = process_frame(
                self.session, self.config, frame, self.detector, self.rng
            )
            for event in events:
                if isinstance(event, Correct):
                    self.stats["correct"] += 1
                    self.stats["times"].append(time.time() - self._round_started)
                elif isinstance(event, TargetChanged):
                    self.stats["rounds"] += 1
                    self._round_started = time.time()

        for event in events:
            self.events.emit(event)
        return events

    def on_frame(self, samples: np.ndarray, sample_rate: int) -> None:
        """Frame source callback."""
        self.process_frame(AudioFrame(samples, sample_rate))
