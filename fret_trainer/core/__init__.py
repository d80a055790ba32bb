"""Core components for the fret_trainer application."""

from .errors import ConfigurationError, EmptyCandidateSet, InvalidFretRange

__all__ = ["ConfigurationError", "EmptyCandidateSet", "InvalidFretRange"]
