"""Monophonic pitch detection by time-domain autocorrelation."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .core.interfaces import IPitchDetector
from .logger import get_logger
from .note_types import AudioFrame

# Get logger for this module
logger = get_logger(__name__)

# Samples quieter than this at the frame edges mark where analysis starts/ends
EDGE_THRESHOLD = 0.2


def _mono(samples) -> np.ndarray:
    """Flatten a frame to a 1-D float array (first channel of 2-D input)."""
    data = np.asarray(samples, dtype=np.float64)
    if data.ndim > 1:
        data = data[:, 0]
    return data


def rms(samples) -> float:
    """Root-mean-square amplitude of a block of samples (0.0 for empty input)."""
    data = _mono(samples)
    if data.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(data * data)))


def trim_edges(samples: np.ndarray, threshold: float = EDGE_THRESHOLD) -> Tuple[int, int]:
    """Find the analysis bounds ``[r1, r2)`` of a frame.

    ``r1`` is the first index in the first half whose magnitude is below the
    threshold, ``r2`` the first such index scanning back from the end. Both
    fall back to the frame bounds when no quiet sample is found.
    """
    size = len(samples)
    half = (size + 1) // 2
    quiet = np.abs(samples) < threshold

    head = np.flatnonzero(quiet[:half])
    r1 = int(head[0]) if head.size else 0

    # Offsets 1 .. half-1 from the end, nearest to the end first
    tail = np.flatnonzero(quiet[size - half + 1 :][::-1])
    r2 = size - (int(tail[0]) + 1) if tail.size else size - 1
    return r1, r2


def autocorrelate(samples: np.ndarray) -> np.ndarray:
    """Unnormalised autocorrelation ``c[i] = sum_j x[j] * x[j + i]`` for i >= 0."""
    n = len(samples)
    return np.correlate(samples, samples, mode="full")[n - 1 :]


def detect_pitch(frame: AudioFrame, silence_threshold: float) -> Optional[float]:
    """Estimate the fundamental frequency of one frame.

    Args:
        frame: Audio samples and their sample rate
        silence_threshold: RMS amplitude below which the frame counts as silent

    Returns:
        Frequency in Hz, or None when the frame is silent or no period can be
        resolved. Never raises for quiet or malformed audio.
    """
    samples = _mono(frame.samples)
    if samples.size == 0 or not np.all(np.isfinite(samples)):
        return None

    level = rms(samples)
    if level < silence_threshold:
        return None

    r1, r2 = trim_edges(samples)
    buf = samples[r1:r2]
    if buf.size < 2:
        logger.debug("Degenerate pitch estimate: trimmed frame too short (%d)", buf.size)
        return None

    corr = autocorrelate(buf)

    # Skip the zero-lag peak and its descent
    rising = np.flatnonzero(np.diff(corr) >= 0)
    if not rising.size:
        logger.debug("Degenerate pitch estimate: autocorrelation never rises")
        return None
    d = int(rising[0])

    maxpos = d + int(np.argmax(corr[d:]))
    if maxpos <= 0 or corr[maxpos] <= 0:
        logger.debug("Degenerate pitch estimate: no positive peak after lag %d", d)
        return None

    freq = frame.sample_rate / maxpos
    logger.debug(f"Detected {freq:.1f}Hz (rms {level:.4f}, period {maxpos} samples)")
    return freq


class PitchDetector(IPitchDetector):
    """Autocorrelation pitch detector used by the game for each frame."""

    def is_silent(self, frame: AudioFrame, silence_threshold: float) -> bool:
        samples = _mono(frame.samples)
        if not np.all(np.isfinite(samples)):
            # Non-finite samples count as silence
            return True
        return rms(samples) < silence_threshold

    def detect(self, frame: AudioFrame, silence_threshold: float) -> Optional[float]:
        return detect_pitch(frame, silence_threshold)
