"""Frequency to note mapping against the equal-temperament table."""

import math
from typing import List, Optional, Sequence

from ..core import AnalysisConfig, DEFAULT_CONFIG, FrequencyCandidate, Note
from ..core.constants import NOTE_FREQUENCIES

# (upper bound Hz, fraction of the reference frequency)
STABILITY_BANDS = [
    (100.0, 0.15),
    (200.0, 0.10),
    (500.0, 0.08),
    (1000.0, 0.05),
]
HIGH_STABILITY = 0.03


def stability_tolerance(reference: float) -> float:
    """Adaptive pitch-stability band in Hz; wider for low notes."""
    for upper, fraction in STABILITY_BANDS:
        if reference < upper:
            return reference * fraction
    return reference * HIGH_STABILITY


class NoteMapper:
    """Maps frequencies to named notes with tuning deviation."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def frequency_to_note(self, frequency: float) -> Optional[Note]:
        """
        Find the note closest to a frequency.

        Args:
            frequency: Frequency in Hz

        Returns:
            Note, or None if the frequency is out of range or more than
            max_cents_deviation away from every reference pitch
        """
        cfg = self.config
        if not (cfg.min_note_frequency <= frequency <= cfg.max_note_frequency):
            return None

        closest_name = None
        closest_octave = 0
        closest_frequency = 0.0
        closest_distance = math.inf

        for name, octave_freqs in NOTE_FREQUENCIES.items():
            for octave, reference in enumerate(octave_freqs):
                distance = abs(reference - frequency)
                if distance < closest_distance:
                    closest_distance = distance
                    closest_name = name
                    closest_octave = octave
                    closest_frequency = reference

        cents = 1200 * math.log2(frequency / closest_frequency)
        if abs(cents) > cfg.max_cents_deviation:
            return None

        return Note(
            name=closest_name,
            octave=closest_octave,
            exact_frequency=closest_frequency,
            cents_deviation=int(round(cents)),
            confidence=1 - abs(cents) / cfg.max_cents_deviation,
            frequency=frequency,
            tolerance_hz=stability_tolerance(closest_frequency),
        )

    def detect_notes(self, candidates: Sequence[FrequencyCandidate]) -> List[Note]:
        """
        Map frequency candidates to notes.

        Quiet candidates are skipped. When two candidates land on the same
        note and octave the louder one is kept, in the slot of the first.
        """
        detected: List[Note] = []
        index = {}

        for candidate in candidates:
            if candidate.magnitude < self.config.min_note_magnitude:
                continue

            note = self.frequency_to_note(candidate.frequency)
            if note is None:
                continue

            note.frequency = candidate.frequency
            note.magnitude = candidate.magnitude
            note.is_fundamental = candidate.is_fundamental
            note.is_harmonic = candidate.is_harmonic

            key = (note.name, note.octave)
            if key in index:
                position = index[key]
                if detected[position].magnitude < note.magnitude:
                    detected[position] = note
            else:
                index[key] = len(detected)
                detected.append(note)

        return detected


def frequency_to_note(
    frequency: float, config: Optional[AnalysisConfig] = None
) -> Optional[Note]:
    """Convenience wrapper around NoteMapper.frequency_to_note."""
    return NoteMapper(config).frequency_to_note(frequency)


def detect_notes(
    candidates: Sequence[FrequencyCandidate],
    config: Optional[AnalysisConfig] = None,
) -> List[Note]:
    """Convenience wrapper around NoteMapper.detect_notes."""
    return NoteMapper(config).detect_notes(candidates)
