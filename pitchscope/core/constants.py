"""Global constants and reference tables for PitchScope."""

from typing import Dict, List, Tuple

# Pitch names
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Spellings used by key signature tables that are not in PITCH_NAMES
ENHARMONICS = {
    "E#": "F",
    "B#": "C",
    "Cb": "B",
    "Fb": "E",
    "Db": "C#",
    "Eb": "D#",
    "Gb": "F#",
    "Ab": "G#",
    "Bb": "A#",
}

# Equal temperament reference
A4_FREQUENCY = 440.0
A4_MIDI = 69
NUM_OCTAVES = 9  # Octaves 0-8


def _equal_temperament(pitch_index: int, octave: int) -> float:
    midi = (octave + 1) * 12 + pitch_index
    return round(A4_FREQUENCY * 2 ** ((midi - A4_MIDI) / 12.0), 2)


# Note frequencies (A4 = 440Hz) for octaves 0-8, rounded to 0.01 Hz
NOTE_FREQUENCIES: Dict[str, List[float]] = {
    name: [_equal_temperament(index, octave) for octave in range(NUM_OCTAVES)]
    for index, name in enumerate(PITCH_NAMES)
}

# Key signatures and their scales (scale degree order)
KEY_SIGNATURES: Dict[str, List[str]] = {
    "C Major": ["C", "D", "E", "F", "G", "A", "B"],
    "G Major": ["G", "A", "B", "C", "D", "E", "F#"],
    "D Major": ["D", "E", "F#", "G", "A", "B", "C#"],
    "A Major": ["A", "B", "C#", "D", "E", "F#", "G#"],
    "E Major": ["E", "F#", "G#", "A", "B", "C#", "D#"],
    "B Major": ["B", "C#", "D#", "E", "F#", "G#", "A#"],
    "F# Major": ["F#", "G#", "A#", "B", "C#", "D#", "E#"],
    "F Major": ["F", "G", "A", "A#", "C", "D", "E"],
    "A Minor": ["A", "B", "C", "D", "E", "F", "G"],
    "E Minor": ["E", "F#", "G", "A", "B", "C", "D"],
    "B Minor": ["B", "C#", "D", "E", "F#", "G", "A"],
    "F# Minor": ["F#", "G#", "A", "B", "C#", "D", "E"],
    "C# Minor": ["C#", "D#", "E", "F#", "G#", "A", "B"],
    "G# Minor": ["G#", "A#", "B", "C#", "D#", "E", "F#"],
    "D Minor": ["D", "E", "F", "G", "A", "A#", "C"],
    "G Minor": ["G", "A", "A#", "C", "D", "D#", "F"],
    "C Minor": ["C", "D", "D#", "F", "G", "G#", "A#"],
}

# Scale degree weights: I, ii, iii, IV, V, vi, vii
KEY_TONIC_WEIGHTS = {
    "major": [5, 1, 2, 1, 3, 1, 1],
    "minor": [5, 1, 3, 1, 3, 1, 1],  # i, ii°, III, iv, v/V, VI, VII
}

# Chord templates: semitone offsets above the root (root itself implied).
# Ordered so that simpler chords are tried first.
CHORD_TEMPLATES: Dict[str, List[int]] = {
    # Triads
    "maj": [4, 7],
    "min": [3, 7],
    "dim": [3, 6],
    "aug": [4, 8],
    "sus2": [2, 7],
    "sus4": [5, 7],
    "5": [7],
    # Sixths
    "6": [4, 7, 9],
    "min6": [3, 7, 9],
    "6/9": [4, 7, 9, 14],
    # Sevenths
    "7": [4, 7, 10],
    "maj7": [4, 7, 11],
    "min7": [3, 7, 10],
    "minmaj7": [3, 7, 11],
    "dim7": [3, 6, 9],
    "hdim7": [3, 6, 10],
    "aug7": [4, 8, 10],
    "7sus4": [5, 7, 10],
    # Added tones
    "add9": [4, 7, 14],
    "madd9": [3, 7, 14],
    # Extended
    "9": [4, 7, 10, 14],
    "maj9": [4, 7, 11, 14],
    "min9": [3, 7, 10, 14],
    "11": [4, 7, 10, 14, 17],
    "min11": [3, 7, 10, 14, 17],
    "13": [4, 7, 10, 14, 21],
    "maj13": [4, 7, 11, 14, 21],
}

# Standard guitar tuning, low to high
GUITAR_STRINGS: List[Tuple[str, float]] = [
    ("E2", 82.41),
    ("A2", 110.00),
    ("D3", 146.83),
    ("G3", 196.00),
    ("B3", 246.94),
    ("E4", 329.63),
]

# Capture defaults (browser analyser node)
DEFAULT_FFT_SIZE = 4096
DEFAULT_SR = 44100
