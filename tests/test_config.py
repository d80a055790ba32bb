import json
import os
import tempfile
import unittest

from fret_trainer.core.config import AudioConfig, ConfigManager, GameConfig
from fret_trainer.core.errors import ConfigurationError, InvalidFretRange
from fret_trainer.note_types import FretRange


class TestGameConfig(unittest.TestCase):
    def test_defaults(self):
        config = GameConfig()
        self.assertEqual(config.selected_strings, frozenset({1, 2, 3, 4, 5, 6}))
        self.assertEqual(config.fret_range, FretRange(0, 12))
        self.assertFalse(config.include_incidentals)
        self.assertTrue(config.show_detected_pitch)

    def test_strings_are_frozen(self):
        config = GameConfig(selected_strings=[3, 1, 3])
        self.assertEqual(config.selected_strings, frozenset({1, 3}))
        self.assertEqual(hash(config), hash(GameConfig(selected_strings={1, 3})))

    def test_threshold_range(self):
        GameConfig(silence_threshold=0.0)
        GameConfig(silence_threshold=1.0)
        with self.assertRaises(ConfigurationError):
            GameConfig(silence_threshold=-0.1)
        with self.assertRaises(ConfigurationError):
            GameConfig(silence_threshold=1.01)

    def test_replace_validates(self):
        config = GameConfig()
        changed = config.replace(include_incidentals=True, fret_range=FretRange(3, 7))
        self.assertTrue(changed.include_incidentals)
        self.assertEqual(changed.fret_range, FretRange(3, 7))
        self.assertFalse(config.include_incidentals)
        with self.assertRaises(ConfigurationError):
            config.replace(silence_threshold=2.0)

    def test_dict_round_trip(self):
        config = GameConfig(
            silence_threshold=0.05,
            selected_strings={2, 4},
            fret_range=FretRange(1, 9),
            include_incidentals=True,
            show_detected_pitch=False,
        )
        self.assertEqual(GameConfig.from_dict(config.to_dict()), config)

    def test_from_partial_dict(self):
        config = GameConfig.from_dict({"fret_end": 5})
        self.assertEqual(config.fret_range, FretRange(0, 5))
        self.assertEqual(config.selected_strings, GameConfig().selected_strings)

    def test_from_dict_rejects_bad_range(self):
        with self.assertRaises(InvalidFretRange):
            GameConfig.from_dict({"fret_start": 8, "fret_end": 2})


class TestConfigManager(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.config_dir = os.path.join(self._tmp.name, "settings")
        self.manager = ConfigManager(self.config_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def test_creates_directory(self):
        self.assertTrue(os.path.isdir(self.config_dir))

    def test_defaults_without_files(self):
        self.assertEqual(self.manager.load_game_config(), GameConfig())
        self.assertEqual(self.manager.load_audio_config(), AudioConfig())

    def test_save_and_load(self):
        game = GameConfig(selected_strings={6}, fret_range=FretRange(0, 5))
        audio = AudioConfig(device_id=3, sample_rate=48000, frames_per_buffer=1024)
        self.assertTrue(self.manager.save_game_config(game))
        self.assertTrue(self.manager.save_audio_config(audio))

        reloaded = ConfigManager(self.config_dir)
        self.assertEqual(reloaded.load_game_config(), game)
        self.assertEqual(reloaded.load_audio_config(), audio)

        with open(os.path.join(self.config_dir, "game.json")) as f:
            self.assertEqual(json.load(f)["selected_strings"], [6])

    def test_invalid_file_falls_back_to_defaults(self):
        with open(os.path.join(self.config_dir, "game.json"), "w") as f:
            json.dump({"fret_start": 9, "fret_end": 1}, f)
        self.assertEqual(self.manager.load_game_config(), GameConfig())

    def test_corrupt_file_falls_back_to_defaults(self):
        with open(os.path.join(self.config_dir, "audio_input.json"), "w") as f:
            f.write("{not json")
        self.assertEqual(self.manager.load_audio_config(), AudioConfig())

    def test_unknown_audio_keys_ignored(self):
        with open(os.path.join(self.config_dir, "audio_input.json"), "w") as f:
            json.dump({"sample_rate": 22050, "channels": 2}, f)
        self.assertEqual(self.manager.load_audio_config().sample_rate, 22050)

    def test_reset(self):
        self.manager.save_game_config(GameConfig(include_incidentals=True))
        self.manager.reset()
        self.assertEqual(self.manager.load_game_config(), GameConfig())


if __name__ == "__main__":
    unittest.main()
