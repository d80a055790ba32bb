import unittest

from fret_trainer.note_types import Note
from fret_trainer.note_utils import (
    NOTE_ORDER,
    is_natural,
    note_frequency,
    note_from_frequency,
    note_from_offset,
    parse_note,
    round_half_up,
)


class TestScientificPitchNotation(unittest.TestCase):
    def test_a4(self):
        # A4 should be 440 Hz
        self.assertEqual(note_from_frequency(440.0), Note("A", 4))

    def test_a5(self):
        self.assertEqual(note_from_frequency(880.0), Note("A", 5))

    def test_middle_c(self):
        # Middle C (C4) should be ~261.63 Hz
        self.assertEqual(note_from_frequency(261.63), Note("C", 4))

    def test_octave_transitions(self):
        # Test octave transitions (B3 -> C4)
        self.assertEqual(note_from_frequency(246.94), Note("B", 3))
        self.assertEqual(note_from_frequency(261.63), Note("C", 4))

    def test_guitar_open_strings(self):
        self.assertEqual(str(note_from_frequency(82.41)), "E2")
        self.assertEqual(str(note_from_frequency(110.0)), "A2")
        self.assertEqual(str(note_from_frequency(146.83)), "D3")
        self.assertEqual(str(note_from_frequency(196.0)), "G3")
        self.assertEqual(str(note_from_frequency(246.94)), "B3")
        self.assertEqual(str(note_from_frequency(329.63)), "E4")

    def test_sharps(self):
        self.assertEqual(str(note_from_frequency(277.18)), "C#4")
        self.assertEqual(str(note_from_frequency(311.13)), "D#4")

    def test_no_note_for_non_positive(self):
        self.assertIsNone(note_from_frequency(0))
        self.assertIsNone(note_from_frequency(-5))
        self.assertIsNone(note_from_frequency(float("nan")))
        self.assertIsNone(note_from_frequency(float("inf")))

    def test_half_semitone_boundaries(self):
        # The A4/A#4 boundary is 440 * 2 ** (1 / 24) = 452.89 Hz
        self.assertEqual(note_from_frequency(452.8), Note("A", 4))
        self.assertEqual(note_from_frequency(453.0), Note("A#", 4))
        # The G#4/A4 boundary is 440 * 2 ** (-1 / 24) = 427.47 Hz
        self.assertEqual(note_from_frequency(427.6), Note("A", 4))
        self.assertEqual(note_from_frequency(427.3), Note("G#", 4))

    def test_ties_round_up(self):
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(-0.5), 0)
        self.assertEqual(round_half_up(1.5), 2)
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(-1.5), -1)
        self.assertEqual(round_half_up(0.49), 0)

    def test_very_low_frequency_has_negative_octave(self):
        self.assertEqual(note_from_frequency(8.18), Note("C", -1))


class TestNoteArithmetic(unittest.TestCase):
    def test_octave_wrap(self):
        for pitch_class in NOTE_ORDER:
            for octave in range(-1, 8):
                base = Note(pitch_class, octave)
                self.assertEqual(note_from_offset(base, 12), Note(pitch_class, octave + 1))
                self.assertEqual(note_from_offset(base, -12), Note(pitch_class, octave - 1))
                self.assertEqual(note_from_offset(base, 0), base)

    def test_fretted_notes(self):
        self.assertEqual(note_from_offset(Note("E", 2), 5), Note("A", 2))
        self.assertEqual(note_from_offset(Note("E", 2), 8), Note("C", 3))
        self.assertEqual(note_from_offset(Note("B", 3), 1), Note("C", 4))
        self.assertEqual(note_from_offset(Note("G", 3), 24), Note("G", 5))

    def test_negative_offsets(self):
        self.assertEqual(note_from_offset(Note("C", 4), -1), Note("B", 3))
        self.assertEqual(note_from_offset(Note("C", 4), -13), Note("B", 2))
        self.assertEqual(note_from_offset(Note("E", 2), -28), Note("C", 0))

    def test_offset_agrees_with_frequency(self):
        base = Note("E", 2)
        for fret in range(25):
            note = note_from_offset(base, fret)
            self.assertEqual(note_from_frequency(note_frequency(note)), note)

    def test_note_frequency(self):
        self.assertAlmostEqual(note_frequency(Note("A", 4)), 440.0)
        self.assertAlmostEqual(note_frequency(Note("A", 2)), 110.0)
        self.assertAlmostEqual(note_frequency(Note("E", 2)), 82.4069, places=3)


class TestNoteNames(unittest.TestCase):
    def test_parse_note(self):
        self.assertEqual(parse_note("E2"), Note("E", 2))
        self.assertEqual(parse_note("F#3"), Note("F#", 3))
        self.assertEqual(parse_note(" C-1 "), Note("C", -1))

    def test_parse_note_rejects_invalid(self):
        for text in ["", "H2", "E", "Bb3", "e2", "E#2x"]:
            with self.assertRaises(ValueError):
                parse_note(text)

    def test_str_round_trip(self):
        self.assertEqual(str(Note("G#", 4)), "G#4")
        self.assertEqual(parse_note(str(Note("D#", 0))), Note("D#", 0))

    def test_is_natural(self):
        for pitch_class in ["C", "D", "E", "F", "G", "A", "B"]:
            self.assertTrue(is_natural(pitch_class))
        for pitch_class in ["C#", "D#", "F#", "G#", "A#"]:
            self.assertFalse(is_natural(pitch_class))


if __name__ == "__main__":
    unittest.main()
