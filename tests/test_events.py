import io
import unittest

from fret_trainer.core.events import Correct, EventEmitter, PitchDetected, TargetChanged
from fret_trainer.note_types import Note
from fret_trainer.ui import ConsoleUI


class TestEventEmitter(unittest.TestCase):
    def setUp(self):
        self.emitter = EventEmitter()

    def test_dispatch_by_type(self):
        correct, targets = [], []
        self.emitter.on(Correct, correct.append)
        self.emitter.on(TargetChanged, targets.append)

        self.emitter.emit(Correct(Note("A", 2)))
        self.emitter.emit(TargetChanged(5, 0, Note("A", 2)))

        self.assertEqual(correct, [Correct(Note("A", 2))])
        self.assertEqual(targets, [TargetChanged(5, 0, Note("A", 2))])

    def test_catch_all(self):
        seen = []
        self.emitter.on(None, seen.append)
        self.emitter.emit(PitchDetected(Note("C", 4), 261.6))
        self.emitter.emit(Correct(Note("C", 4)))
        self.assertEqual(len(seen), 2)

    def test_duplicate_listener_registered_once(self):
        seen = []
        self.emitter.on(Correct, seen.append)
        self.emitter.on(Correct, seen.append)
        self.emitter.emit(Correct(Note("E", 2)))
        self.assertEqual(len(seen), 1)

    def test_listener_error_is_contained(self):
        seen = []

        def broken(event):
            raise ValueError("boom")

        self.emitter.on(Correct, broken)
        self.emitter.on(Correct, seen.append)
        self.emitter.emit(Correct(Note("E", 2)))
        self.assertEqual(seen, [Correct(Note("E", 2))])

    def test_clear(self):
        seen = []
        self.emitter.on(None, seen.append)
        self.emitter.clear()
        self.emitter.emit(Correct(Note("E", 2)))
        self.assertEqual(seen, [])

    def test_events_are_values(self):
        self.assertEqual(Correct(Note("G", 3)), Correct(Note("G", 3)))
        self.assertNotEqual(
            TargetChanged(3, 0, Note("G", 3)), TargetChanged(6, 3, Note("G", 2))
        )


class TestConsoleUI(unittest.TestCase):
    def setUp(self):
        self.stream = io.StringIO()

    def test_plain_prompt(self):
        ui = ConsoleUI(big_text=False, stream=self.stream)
        ui.on_target_changed(TargetChanged(3, 2, Note("A", 3)))
        output = self.stream.getvalue()
        self.assertIn("String 3", output)
        self.assertIn("Play A3", output)

    def test_banner_prompt(self):
        ui = ConsoleUI(big_text=True, stream=self.stream)
        ui.on_target_changed(TargetChanged(1, 0, Note("E", 4)))
        output = self.stream.getvalue()
        self.assertIn("String 1", output)
        # Banner text spans several lines
        self.assertGreater(len(output.splitlines()), 3)

    def test_detected_pitch_printed_once_per_note(self):
        ui = ConsoleUI(stream=self.stream)
        ui.on_pitch_detected(PitchDetected(Note("B", 3), 247.0))
        ui.on_pitch_detected(PitchDetected(Note("B", 3), 246.5))
        ui.on_pitch_detected(PitchDetected(Note("C", 4), 261.6))
        lines = self.stream.getvalue().splitlines()
        self.assertEqual(lines, ["Detected: B3 (247.0Hz)", "Detected: C4 (261.6Hz)"])

    def test_detected_pitch_hidden(self):
        ui = ConsoleUI(show_detected_pitch=False, stream=self.stream)
        ui.on_pitch_detected(PitchDetected(Note("B", 3), 247.0))
        self.assertEqual(self.stream.getvalue(), "")

    def test_correct(self):
        ui = ConsoleUI(stream=self.stream)
        ui.on_correct(Correct(Note("D", 3)))
        self.assertIn("Correct! You played D3", self.stream.getvalue())


if __name__ == "__main__":
    unittest.main()
