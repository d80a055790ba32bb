"""WAV file frame source built on soundfile."""

from __future__ import annotations
import threading
import time
from typing import Optional

import numpy as np
import soundfile as sf

from ..core.interfaces import FrameCallback, IFrameSource
from ..logger import get_logger

logger = get_logger(__name__)


class WavFileFrameSource(IFrameSource):
    """Frame source that plays back a WAV file, for practice without a microphone."""

    def __init__(
        self,
        file_path: str,
        frames_per_buffer: int = 2048,
        realtime: bool = True,
    ):
        self._file_path = file_path
        self._frames_per_buffer = frames_per_buffer
        self._realtime = realtime
        self._callback: Optional[FrameCallback] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None

        with sf.SoundFile(self._file_path) as f:
            self._sample_rate = f.samplerate

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def is_running(self) -> bool:
        return self._running

    def frames(self):
        """Yield fixed-size mono frames; the last partial block is zero-padded."""
        with sf.SoundFile(self._file_path) as f:
            while True:
                data = f.read(self._frames_per_buffer, dtype="float32", always_2d=True)
                if len(data) == 0:
                    return

                mono = data[:, 0].copy()
                if len(mono) < self._frames_per_buffer:
                    mono = np.pad(mono, (0, self._frames_per_buffer - len(mono)))
                yield mono

    def start(self, callback: FrameCallback) -> bool:
        if self._running:
            return True

        self._callback = callback
        self._running = True
        self._thread = threading.Thread(target=self._stream_data, daemon=True)
        self._thread.start()
        return True

    def stop(self) -> None:
        self._running = False
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until playback finishes."""
        if self._thread:
            self._thread.join(timeout)

    def _stream_data(self) -> None:
        try:
            for frame in self.frames():
                if not self._running:
                    break
                self._callback(frame, self._sample_rate)
                if self._realtime:
                    # Simulate real-time playback speed
                    time.sleep(self._frames_per_buffer / self._sample_rate)
        except (OSError, RuntimeError) as e:
            logger.error(f"Error streaming WAV file {self._file_path}: {e}")
        finally:
            self._running = False
