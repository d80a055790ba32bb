"""Console presentation of game events."""

import sys
from typing import Optional, TextIO

import pyfiglet

from .core.events import Correct, PitchDetected, TargetChanged
from .logger import get_logger

# Get logger for this module
logger = get_logger(__name__)


class ConsoleUI:
    """Prints prompts and results for a NoteGame to a text stream."""

    def __init__(
        self,
        show_detected_pitch: bool = True,
        big_text: bool = True,
        stream: Optional[TextIO] = None,
    ):
        self.show_detected_pitch = show_detected_pitch
        self.big_text = big_text
        self.stream = stream if stream is not None else sys.stdout
        self._last_detected = None

    def attach(self, game) -> None:
        """Subscribe to a game's events."""
        game.on(TargetChanged, self.on_target_changed)
        game.on(PitchDetected, self.on_pitch_detected)
        game.on(Correct, self.on_correct)

    def _write(self, text: str) -> None:
        self.stream.write(text + "\n")
        self.stream.flush()

    def on_target_changed(self, event: TargetChanged) -> None:
        self._last_detected = None
        self._write("")
        self._write(f"String {event.string}")
        if self.big_text:
            self._write(pyfiglet.figlet_format(f"Play {event.note}").rstrip())
        else:
            self._write(f"Play {event.note}")

    def on_pitch_detected(self, event: PitchDetected) -> None:
        # Print only when the heard note changes
        if not self.show_detected_pitch or event.note == self._last_detected:
            return
        self._last_detected = event.note
        if event.frequency is not None:
            self._write(f"Detected: {event.note} ({event.frequency:.1f}Hz)")
        else:
            self._write(f"Detected: {event.note}")

    def on_correct(self, event: Correct) -> None:
        self._write(f"Correct! You played {event.note}")

    def show_stats(self, game) -> None:
        """Print the in-memory statistics of the session that just ended."""
        stats = game.stats
        self._write("\n===== Session Statistics =====")
        self._write(f"Notes prompted: {stats['rounds']}")
        self._write(f"Notes completed: {stats['correct']}")
        if stats["times"]:
            avg_time = sum(stats["times"]) / len(stats["times"])
            self._write(f"Average time per note: {avg_time:.2f} seconds")
            self._write(f"Fastest note: {min(stats['times']):.2f} seconds")
            self._write(f"Slowest note: {max(stats['times']):.2f} seconds")
