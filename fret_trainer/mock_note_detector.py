from typing import Iterable, Optional, Union

from .core.interfaces import IPitchDetector
from .note_types import AudioFrame

# Script entry for a frame below the silence threshold
SILENT = "silent"

Reading = Union[float, None, str]


class MockNoteDetector(IPitchDetector):
    """A scripted detector for unit tests. Each frame consumes one reading.

    A float is a detected frequency, ``None`` is an audible frame with no
    resolvable pitch and ``SILENT`` is a frame below the threshold. Once the
    script runs out every frame is silent.
    """

    def __init__(self, readings: Iterable[Reading] = ()):
        self.readings = list(readings)
        self.calls = 0

    def feed(self, *readings: Reading) -> None:
        self.readings.extend(readings)

    def _next(self) -> Reading:
        self.calls += 1
        return self.readings.pop(0) if self.readings else SILENT

    def is_silent(self, frame: AudioFrame, silence_threshold: float) -> bool:
        return self._next() == SILENT

    def detect(self, frame: AudioFrame, silence_threshold: float) -> Optional[float]:
        reading = self._next()
        return None if reading == SILENT else reading
