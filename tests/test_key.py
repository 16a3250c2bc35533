"""Tests for key detection."""

import pytest

from pitchscope.core import Note
from pitchscope.core.constants import KEY_SIGNATURES
from pitchscope.inference import KeyDetector, analyze_musical_key


def _note(name, octave, magnitude):
    return Note(
        name=name,
        octave=octave,
        exact_frequency=0.0,
        cents_deviation=0,
        confidence=1.0,
        magnitude=magnitude,
    )


class TestKeyScoring:
    """Tests for KeyDetector.score_keys."""

    def test_scores_every_key(self):
        scores = KeyDetector().score_keys({"C": 1.0, "E": 1.0, "G": 1.0})
        assert set(scores) == set(KEY_SIGNATURES)

    def test_c_major_score(self):
        weights = {"C": 5, "E": 3, "G": 4, "D": 2, "F": 1}
        scores = KeyDetector().score_keys(weights)

        # 5*5 + 2*1 + 3*2 + 1*1 + 4*3
        assert scores["C Major"] == pytest.approx(46.0)
        # E (3) is outside C minor: 25 + 2 + 1 + 12 - 1.5
        assert scores["C Minor"] == pytest.approx(38.5)

    def test_enharmonic_scale_spelling(self):
        # F# Major lists E#, which must match F
        scores = KeyDetector().score_keys({"F#": 5, "A#": 2, "C#": 4, "F": 1})
        assert scores["F# Major"] == pytest.approx(25 + 4 + 12 + 1)


class TestKeyDetection:
    """Tests for KeyDetector.analyze / analyze_histogram."""

    def test_c_major(self):
        result = KeyDetector().analyze_histogram({"C": 5, "E": 3, "G": 4, "D": 2, "F": 1})

        assert result.name == "C Major"
        assert result.root == "C"
        assert result.mode == "major"
        assert result.notes == KEY_SIGNATURES["C Major"]
        # Runner-up is C Minor (38.5)
        assert result.confidence == pytest.approx(0.5 + 0.5 * (46 - 38.5) / 46)

    def test_confidence_bounds(self):
        detector = KeyDetector()
        for histogram in [
            {"C": 5, "E": 3, "G": 4},
            {"A": 4, "C": 2, "E": 3, "B": 1},
            {"F#": 5, "A#": 2, "C#": 4, "F": 1},
        ]:
            result = detector.analyze_histogram(histogram)
            assert result is not None
            assert 0.5 <= result.confidence <= 0.95

    def test_f_sharp_major(self):
        result = KeyDetector().analyze_histogram({"F#": 5, "A#": 2, "C#": 4, "F": 1})
        assert result.name == "F# Major"

    def test_needs_three_distinct_notes(self):
        detector = KeyDetector()
        assert detector.analyze_histogram({}) is None
        assert detector.analyze_histogram({"C": 10, "G": 8}) is None
        assert detector.analyze(["C", "C", "E"]) is None

    def test_flat_spellings_merge(self):
        detector = KeyDetector()
        assert detector.build_histogram(["Bb", "A#", ("Eb", 2.0)]) == {"A#": 2.0, "D#": 2.0}

    def test_unknown_names_ignored(self):
        histogram = KeyDetector().build_histogram(["C", "H", "E", "G"])
        assert histogram == {"C": 1.0, "E": 1.0, "G": 1.0}

    def test_from_note_objects(self):
        notes = [
            _note("A", 3, 200.0),
            _note("C", 4, 120.0),
            _note("E", 4, 150.0),
            _note("A", 4, 100.0),
        ]
        result = analyze_musical_key(notes)

        assert result is not None
        assert result.name == "A Minor"

    def test_weighted_pairs(self):
        result = analyze_musical_key([("G", 5.0), ("B", 2.0), ("D", 3.0), ("F#", 1.0)])
        assert result.name == "G Major"

    def test_mapping_items(self):
        notes = [
            {"name": "C", "octave": 4, "weight": 5.0},
            {"name": "E", "octave": 4, "weight": 3.0},
            {"name": "G", "octave": 4, "weight": 4.0},
            {"name": "D", "octave": 4, "magnitude": 2.0},
            {"name": "F"},
        ]
        detector = KeyDetector()

        assert detector.build_histogram(notes) == {"C": 5.0, "E": 3.0, "G": 4.0, "D": 2.0, "F": 1.0}
        assert analyze_musical_key(notes).name == "C Major"

    def test_malformed_items_skipped(self):
        notes = ["C", "E", "G", ("D", 4, 2.0), ("A", "loud"), (5, 1.0), None, 42, {"weight": 3.0}]
        histogram = KeyDetector().build_histogram(notes)

        assert histogram == {"C": 1.0, "E": 1.0, "G": 1.0}
        assert analyze_musical_key(notes).name == "C Major"
