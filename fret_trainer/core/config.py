"""Configuration values and persistence for fret_trainer components."""

import dataclasses
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

from ..logger import get_logger
from ..note_types import FretRange
from .errors import ConfigurationError

logger = get_logger(__name__)


@dataclass(frozen=True)
class GameConfig:
    """Everything the game reads from the player's settings.

    Instances are immutable; use ``replace`` to derive a changed copy, which
    is validated the same way as a freshly built one.
    """

    silence_threshold: float = 0.01  # RMS amplitude cutoff
    selected_strings: FrozenSet[int] = frozenset({1, 2, 3, 4, 5, 6})
    fret_range: FretRange = field(default_factory=lambda: FretRange(0, 12))
    include_incidentals: bool = False
    show_detected_pitch: bool = True  # Presentation only

    def __post_init__(self):
        # Accept any iterable of string ids, store a frozenset
        object.__setattr__(self, "selected_strings", frozenset(self.selected_strings))
        if not 0.0 <= self.silence_threshold <= 1.0:
            raise ConfigurationError(
                f"Silence threshold must be between 0 and 1, got {self.silence_threshold}"
            )

    def replace(self, **changes) -> "GameConfig":
        """Return a copy with the given fields changed."""
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "silence_threshold": self.silence_threshold,
            "selected_strings": sorted(self.selected_strings),
            "fret_start": self.fret_range.start,
            "fret_end": self.fret_range.end,
            "include_incidentals": self.include_incidentals,
            "show_detected_pitch": self.show_detected_pitch,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GameConfig":
        defaults = cls()
        return cls(
            silence_threshold=float(
                data.get("silence_threshold", defaults.silence_threshold)
            ),
            selected_strings=frozenset(
                int(s) for s in data.get("selected_strings", defaults.selected_strings)
            ),
            fret_range=FretRange(
                int(data.get("fret_start", defaults.fret_range.start)),
                int(data.get("fret_end", defaults.fret_range.end)),
            ),
            include_incidentals=bool(
                data.get("include_incidentals", defaults.include_incidentals)
            ),
            show_detected_pitch=bool(
                data.get("show_detected_pitch", defaults.show_detected_pitch)
            ),
        )


@dataclass(frozen=True)
class AudioConfig:
    """Settings for the microphone frame source."""

    device_id: Optional[int] = None
    sample_rate: int = 44100
    frames_per_buffer: int = 2048

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AudioConfig":
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


class ConfigManager:
    """Configuration manager for fret_trainer settings files."""

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files, or None to use default
        """
        if config_dir is None:
            # Use ~/.config/fret_trainer by default
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "fret_trainer")

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def _load(self, name: str) -> Dict[str, Any]:
        config_file = self.config_dir / f"{name}.json"
        if not config_file.exists():
            return {}
        try:
            with open(config_file, "r") as f:
                data = json.load(f)
            logger.info(f"Loaded configuration from {config_file}")
            return data
        except (OSError, ValueError) as e:
            logger.error(f"Error loading configuration from {config_file}: {e}")
            return {}

    def _save(self, name: str, data: Dict[str, Any]) -> bool:
        config_file = self.config_dir / f"{name}.json"
        try:
            with open(config_file, "w") as f:
                json.dump(data, f, indent=2)
            logger.info(f"Saved configuration to {config_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

    def load_game_config(self) -> GameConfig:
        """Load the game settings, falling back to defaults.

        A stored configuration that no longer validates is reported and
        replaced by the defaults rather than stopping the program.
        """
        data = self._load("game")
        try:
            return GameConfig.from_dict(data)
        except (ConfigurationError, TypeError, ValueError) as e:
            logger.error(f"Ignoring invalid game configuration: {e}")
            return GameConfig()

    def save_game_config(self, config: GameConfig) -> bool:
        return self._save("game", config.to_dict())

    def load_audio_config(self) -> AudioConfig:
        try:
            return AudioConfig.from_dict(self._load("audio_input"))
        except (TypeError, ValueError) as e:
            logger.error(f"Ignoring invalid audio configuration: {e}")
            return AudioConfig()

    def save_audio_config(self, config: AudioConfig) -> bool:
        return self._save("audio_input", config.to_dict())

    def reset(self) -> None:
        """Reset all configuration files to defaults."""
        self.save_game_config(GameConfig())
        self.save_audio_config(AudioConfig())
