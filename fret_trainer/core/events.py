"""Event system for fret_trainer components."""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Type, Union

from ..logger import get_logger
from ..note_types import Note

logger = get_logger(__name__)


@dataclass(frozen=True)
class TargetChanged:
    """A new note was picked for the player."""

    string: int
    fret: int
    note: Note


@dataclass(frozen=True)
class PitchDetected:
    """A note was heard that does not match the target."""

    note: Note
    frequency: Optional[float] = None


@dataclass(frozen=True)
class Correct:
    """The player hit the target note."""

    note: Note


GameEvent = Union[TargetChanged, PitchDetected, Correct]


class EventEmitter:
    """Event emitter dispatching game events by their type."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Optional[Type], List[Callable]] = {}

    def on(self, event_type: Optional[Type], callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event class to listen for, or None for every event
            callback: Function to call with the event when it occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def emit(self, event: GameEvent) -> None:
        """Emit an event to listeners of its type and to catch-all listeners.

        Listener errors are logged and never reach the caller, which is
        usually the audio callback.
        """
        for key in (type(event), None):
            for callback in self._listeners.get(key, []):
                try:
                    callback(event)
                except Exception as e:
                    logger.error(f"Error in event listener for {event}: {e}")

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners = {}
        logger.debug("Cleared all event listeners")
