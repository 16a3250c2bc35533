"""PitchScope - Pitch and harmony analysis of magnitude spectra.

Architecture Layers:
    1. core/       - Value types, reference tables, configuration
    2. analysis/   - Spectral peaks, harmonic scoring, audio -> spectra
    3. inference/  - Notes, key, chords, guitar tuning
    4. pipeline    - One analysis tick per spectrum
"""

__version__ = "0.1.0"

# Core types
from .core import (
    AnalysisConfig,
    AnalysisResult,
    ChordResult,
    FrequencyCandidate,
    KeyResult,
    Note,
    NoteEvent,
)

# Analysis layer
from .analysis import SpectralPeakExtractor, HarmonicAnalyzer, extract_peaks, analyze_harmonics

# Inference layer
from .inference import (
    NoteMapper,
    KeyDetector,
    ChordDetector,
    frequency_to_note,
    detect_notes,
    analyze_musical_key,
    detect_chord,
    analyze_guitar_string,
)

# Pipeline
from .pipeline import SpectrumAnalyzer, AnalysisSession, analyze_spectrum, is_likely_instrument

__all__ = [
    # Core
    "AnalysisConfig",
    "AnalysisResult",
    "ChordResult",
    "FrequencyCandidate",
    "KeyResult",
    "Note",
    "NoteEvent",
    # Analysis
    "SpectralPeakExtractor",
    "HarmonicAnalyzer",
    "extract_peaks",
    "analyze_harmonics",
    # Inference
    "NoteMapper",
    "KeyDetector",
    "ChordDetector",
    "frequency_to_note",
    "detect_notes",
    "analyze_musical_key",
    "detect_chord",
    "analyze_guitar_string",
    # Pipeline
    "SpectrumAnalyzer",
    "AnalysisSession",
    "analyze_spectrum",
    "is_likely_instrument",
]
