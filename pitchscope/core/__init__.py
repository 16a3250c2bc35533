"""Core types, tables and configuration for PitchScope."""

from .note import (
    FrequencyCandidate,
    Note,
    NoteEvent,
    note_name_to_midi,
    midi_to_note_name,
    parse_note_name,
    normalize_pitch_name,
)
from .results import (
    KeyResult,
    ChordResult,
    ChordSegment,
    GuitarStringReading,
    AnalysisResult,
)
from .config import AnalysisConfig, DEFAULT_CONFIG, SENSITIVITY_PRESETS
from .constants import (
    PITCH_NAMES,
    NOTE_FREQUENCIES,
    KEY_SIGNATURES,
    CHORD_TEMPLATES,
    GUITAR_STRINGS,
    DEFAULT_SR,
    DEFAULT_FFT_SIZE,
)

__all__ = [
    "FrequencyCandidate",
    "Note",
    "NoteEvent",
    "note_name_to_midi",
    "midi_to_note_name",
    "parse_note_name",
    "normalize_pitch_name",
    "KeyResult",
    "ChordResult",
    "ChordSegment",
    "GuitarStringReading",
    "AnalysisResult",
    "AnalysisConfig",
    "DEFAULT_CONFIG",
    "SENSITIVITY_PRESETS",
    "PITCH_NAMES",
    "NOTE_FREQUENCIES",
    "KEY_SIGNATURES",
    "CHORD_TEMPLATES",
    "GUITAR_STRINGS",
    "DEFAULT_SR",
    "DEFAULT_FFT_SIZE",
]
