"""Note data classes - the units flowing through one analysis tick."""

import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .constants import ENHARMONICS, PITCH_NAMES

_NOTE_NAME_RE = re.compile(r"^\s*([A-Ga-g])([#b]?)(-?\d+)\s*$")


@dataclass(frozen=True)
class FrequencyCandidate:
    """A spectral peak that may be a musical pitch."""

    frequency: float  # Hz, sub-bin precision
    magnitude: float  # 0-255 normalized
    source_bin: int
    is_fundamental: bool = False
    is_harmonic: bool = False
    harmonic_score: float = 0.0
    harmonic_count: int = 0


@dataclass
class Note:
    """A named pitch identified from a frequency candidate."""

    name: str  # Pitch class (e.g., "C#")
    octave: int  # 0-8
    exact_frequency: float  # Equal-temperament reference in Hz
    cents_deviation: int  # Signed distance from the reference
    confidence: float  # 0.0 - 1.0
    frequency: float = 0.0  # Measured frequency in Hz
    magnitude: float = 0.0  # 0-255
    is_fundamental: bool = False
    is_harmonic: bool = False
    tolerance_hz: float = 0.0  # Pitch stability band around the reference

    @property
    def midi(self) -> int:
        """MIDI note number (C4 = 60)."""
        return note_name_to_midi(self.name, self.octave)

    @property
    def full_name(self) -> str:
        """Get note name with octave (e.g., 'A4')."""
        return f"{self.name}{self.octave}"


@dataclass
class NoteEvent:
    """A timed MIDI note, e.g. from a score or a capture log."""

    pitch: int  # MIDI pitch (0-127)
    onset: float  # Start time in seconds
    offset: float  # End time in seconds
    velocity: int = 64  # MIDI velocity (0-127)

    @property
    def duration(self) -> float:
        """Note duration in seconds."""
        return self.offset - self.onset

    @property
    def pitch_name(self) -> str:
        """Get note name (e.g., 'C4', 'A#3')."""
        return f"{midi_to_note_name(self.pitch)}{self.pitch // 12 - 1}"

    @property
    def pitch_class(self) -> int:
        """Get pitch class (0-11, where 0=C)."""
        return self.pitch % 12


def normalize_pitch_name(name: str) -> Optional[str]:
    """Map a pitch spelling to its PITCH_NAMES entry, or None if unknown."""
    if name in PITCH_NAMES:
        return name
    return ENHARMONICS.get(name)


def note_name_to_midi(name: str, octave: int) -> Optional[int]:
    """Convert note name and octave to MIDI number (C4 = 60)."""
    pitch = normalize_pitch_name(name)
    if pitch is None:
        return None
    return (octave + 1) * 12 + PITCH_NAMES.index(pitch)


def midi_to_note_name(midi: int) -> str:
    """Convert MIDI number to its pitch-class name (octave dropped)."""
    return PITCH_NAMES[midi % 12]


def parse_note_name(text: str) -> Optional[Tuple[str, int]]:
    """Parse 'C#4' / 'Bb3' style text into (pitch name, octave)."""
    match = _NOTE_NAME_RE.match(text)
    if not match:
        return None
    letter, accidental, octave = match.groups()
    pitch = normalize_pitch_name(letter.upper() + accidental)
    if pitch is None:
        return None
    return pitch, int(octave)

