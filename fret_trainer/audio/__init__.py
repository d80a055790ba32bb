"""Frame sources for fret_trainer.

The microphone source lives in ``fret_trainer.audio.microphone`` and is
imported on demand, since sounddevice needs the PortAudio library at import.
"""

from .wav_source import WavFileFrameSource

__all__ = ["WavFileFrameSource"]
