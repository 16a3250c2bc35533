"""Inference layer - Musical understanding from frequencies and notes.

- Note mapping (frequency -> pitch class, octave, cents)
- Key detection (tonal center from a weighted note histogram)
- Chord recognition, inversions and progressions
- Guitar string tuning

Pipeline: Candidates → Notes → [Key, Chords]
"""

from .notes import NoteMapper, frequency_to_note, detect_notes
from .key import KeyDetector, analyze_musical_key
from .chords import ChordDetector, detect_chord
from .tuner import analyze_guitar_string

__all__ = [
    # Note mapping
    "NoteMapper",
    "frequency_to_note",
    "detect_notes",
    # Key detection
    "KeyDetector",
    "analyze_musical_key",
    # Chord detection
    "ChordDetector",
    "detect_chord",
    # Tuning
    "analyze_guitar_string",
]
