"""Tests for chord detection and progression analysis."""

import numpy as np
import pytest

from pitchscope.core import Note, NoteEvent
from pitchscope.inference import ChordDetector, detect_chord
from pitchscope.inference.chords import to_midi


class TestToMidi:
    """Tests for note description parsing."""

    def test_numbers(self):
        assert to_midi(60) == 60
        assert to_midi(60.0) == 60
        assert to_midi(60.5) is None
        assert to_midi(True) is None

    def test_names(self):
        assert to_midi("C4") == 60
        assert to_midi("F#3") == 54
        assert to_midi("Bb2") == 46
        assert to_midi("X9") is None

    def test_structured(self):
        assert to_midi(("E", 4)) == 64
        assert to_midi({"midi": 67}) == 67
        assert to_midi({"note_number": 62}) == 62
        assert to_midi({"name": "A", "octave": 3}) == 57
        assert to_midi({}) is None
        assert to_midi(None) is None

    def test_numpy_scalars(self):
        assert to_midi(np.int64(60)) == 60
        assert to_midi(np.int8(64)) == 64
        assert to_midi(np.float32(67.0)) == 67
        assert to_midi(np.float64(67.5)) is None
        assert to_midi(np.bool_(True)) is None
        assert to_midi(("E", np.int32(4))) == 64
        assert to_midi({"name": "A", "octave": np.int64(3)}) == 57

    def test_note_objects(self):
        event = NoteEvent(pitch=72, onset=0.0, offset=1.0)
        note = Note(name="G", octave=3, exact_frequency=196.0, cents_deviation=0, confidence=1.0)
        assert to_midi(event) == 72
        assert to_midi(note) == 55


class TestChordDetection:
    """Tests for ChordDetector.detect."""

    def test_c_major_root_position(self):
        result = detect_chord([60, 64, 67])

        assert result.name == "Cmaj"
        assert result.root == "C"
        assert result.type == "maj"
        assert result.inversion == 0
        assert result.bass is None
        assert result.confidence == pytest.approx(1.0)
        assert result.notes == ["C", "E", "G"]

    def test_first_inversion(self):
        result = detect_chord([64, 67, 72])

        assert result.name == "Cmaj/E"
        assert result.root == "C"
        assert result.inversion == 1
        assert result.bass == "E"
        assert result.notes == ["E", "G", "C"]

    def test_second_inversion(self):
        result = detect_chord([67, 72, 76])
        assert result.name == "Cmaj/G"
        assert result.inversion == 2

    def test_minor_triad(self):
        result = detect_chord([57, 60, 64])
        assert result.name == "Amin"

    def test_dominant_seventh(self):
        result = detect_chord([55, 59, 62, 65])
        assert result.name == "G7"
        assert result.confidence == pytest.approx(1.0)

    def test_missing_fifth_lowers_confidence(self):
        result = detect_chord([60, 64, 70])
        assert result.name == "C7"
        # 3 matched * 10 - 1 missing * 5, out of 4 tones * 10
        assert result.confidence == pytest.approx(25 / 40)

    def test_power_chord(self):
        result = detect_chord([60, 67])
        assert result.name == "C5"
        assert result.inversion == 0

    def test_tie_prefers_lower_inversion(self):
        # E G A C is both C6/E (1st inversion) and Amin7/E (2nd inversion)
        result = detect_chord([64, 67, 69, 72])
        assert result.name == "C6/E"
        assert result.inversion == 1

    def test_octave_doublings_ignored(self):
        assert detect_chord([48, 60, 64, 67, 72]).name == "Cmaj"

    def test_same_result_for_names(self):
        by_number = detect_chord([60, 64, 67])
        by_name = detect_chord(["C4", "E4", "G4"])
        by_pair = detect_chord([("C", 4), ("E", 4), ("G", 4)])
        assert by_number == by_name == by_pair

    def test_numpy_array(self):
        result = detect_chord(np.array([60, 64, 67]))
        assert result.name == "Cmaj"
        assert result.notes == ["C", "E", "G"]

        assert detect_chord(np.array([64.0, 67.0, 72.0])).name == "Cmaj/E"

    def test_malformed_entries_dropped(self):
        result = detect_chord(["X9", None, {}, 60, 64, 67])
        assert result.name == "Cmaj"

    def test_unmatched_notes_fall_back(self):
        result = detect_chord([60, 61])

        assert result.name == "Notes"
        assert not result.is_chord
        assert result.root is None
        assert result.notes == ["C", "C#"]
        assert result.confidence == pytest.approx(0.1)

    def test_too_few_notes(self):
        assert detect_chord([60]).name == "Notes"
        assert detect_chord([60]).notes == ["C"]
        assert detect_chord([]).notes == []
        assert detect_chord([60, 60]).name == "Notes"

    def test_confidence_bounded(self):
        for notes in ([60, 64, 67], [60, 64, 70], [60, 62, 64, 67, 71], [64, 67, 69, 72]):
            result = detect_chord(notes)
            assert 0.0 <= result.confidence <= 1.0


class TestProgression:
    """Tests for ChordDetector.detect_progression."""

    @staticmethod
    def _events():
        return [
            # C major, slightly ragged onsets
            NoteEvent(pitch=60, onset=0.0, offset=1.0),
            NoteEvent(pitch=64, onset=0.02, offset=1.0),
            NoteEvent(pitch=67, onset=0.0, offset=1.0),
            # G major
            NoteEvent(pitch=55, onset=1.0, offset=2.0),
            NoteEvent(pitch=59, onset=1.01, offset=2.0),
            NoteEvent(pitch=62, onset=1.0, offset=2.0),
            # Single note: not a chord
            NoteEvent(pitch=72, onset=2.0, offset=2.4),
            # C major restruck twice back to back
            NoteEvent(pitch=60, onset=2.5, offset=3.0),
            NoteEvent(pitch=64, onset=2.5, offset=3.0),
            NoteEvent(pitch=67, onset=2.5, offset=3.0),
            NoteEvent(pitch=60, onset=3.0, offset=3.5),
            NoteEvent(pitch=64, onset=3.0, offset=3.5),
            NoteEvent(pitch=67, onset=3.0, offset=3.5),
        ]

    def test_segments(self):
        segments = ChordDetector().detect_progression(self._events())

        assert [s.chord.name for s in segments] == ["Cmaj", "Gmaj", "Cmaj"]
        assert segments[0].onset == pytest.approx(0.0)
        assert segments[0].offset == pytest.approx(1.0)
        assert segments[1].onset == pytest.approx(1.0)

    def test_repeated_chord_merges(self):
        segments = ChordDetector().detect_progression(self._events())
        last = segments[-1]

        assert last.onset == pytest.approx(2.5)
        assert last.offset == pytest.approx(3.5)
        assert last.duration == pytest.approx(1.0)

    def test_empty(self):
        assert ChordDetector().detect_progression([]) == []

    def test_resolution_must_be_positive(self):
        detector = ChordDetector()
        with pytest.raises(ValueError):
            detector.detect_progression(self._events(), onset_resolution=0)
        with pytest.raises(ValueError):
            detector.detect_progression(self._events(), onset_resolution=-0.05)
