"""Error types raised on the configuration path.

Nothing here is raised from per-frame processing: quiet or malformed audio
degrades to "no pitch" instead.
"""


class ConfigurationError(ValueError):
    """The configuration cannot produce a playable session."""


class InvalidFretRange(ConfigurationError):
    """Fret range is negative, inverted, or past the last fret."""


class EmptyCandidateSet(ConfigurationError):
    """No playable notes for the selected strings, frets and filters."""
