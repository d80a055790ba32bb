"""Defines the core interfaces for the fret_trainer application."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable, Optional

import numpy as np

from ..note_types import AudioFrame

FrameCallback = Callable[[np.ndarray, int], None]


class IFrameSource(ABC):
    """Interface for anything that delivers fixed-size blocks of audio."""

    @abstractmethod
    def start(self, callback: FrameCallback) -> bool:
        """Start delivering frames as ``callback(samples, sample_rate)``."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop delivering frames."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check if frames are being delivered."""
        pass

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate of the delivered frames."""
        pass


class IPitchDetector(ABC):
    """Interface for per-frame pitch detection."""

    @abstractmethod
    def is_silent(self, frame: AudioFrame, silence_threshold: float) -> bool:
        """True if the frame's amplitude is below the silence threshold."""
        pass

    @abstractmethod
    def detect(self, frame: AudioFrame, silence_threshold: float) -> Optional[float]:
        """Return the fundamental frequency in Hz, or None for no pitch."""
        pass
