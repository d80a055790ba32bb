"""Fretboard ear trainer: prompts for a note and listens for it."""

__version__ = "0.1.0"
