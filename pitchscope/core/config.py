"""Analysis configuration - every empirically tuned threshold in one place."""

from dataclasses import dataclass, replace
from typing import Tuple


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the pitch and harmony analysis engine.

    Attributes:
        min_frequency: Lower edge of the analysed band in Hz (default: 20)
        max_frequency: Upper edge of the analysed band in Hz (default: 5000)
        noise_floor_multiplier: Peak threshold as a multiple of the mean
            linear power of the band (default: 10)
        magnitude_offset_db: dB offset before normalising to 0-255 (default: 100)
        magnitude_scale: Scale from offset dB to 0-255 (default: 2.55)
        max_peaks: Number of candidates returned per spectrum (default: 12)
        low_frequency_cutoff: Fundamentals below this use the loose
            harmonic tolerance (default: 200)
        low_harmonic_tolerance: Relative tolerance below the cutoff (default: 0.03)
        high_harmonic_tolerance: Relative tolerance above the cutoff (default: 0.015)
        harmonic_range: Harmonic numbers checked above a fundamental (default: 2-10)
        subharmonic_range: Harmonic numbers checked when testing whether a
            candidate is itself a harmonic (default: 2-5)
        harmonic_boost: Maximum relative magnitude boost for a fundamental (default: 0.5)
        min_note_frequency: Lowest frequency mapped to a note (default: 15)
        max_note_frequency: Highest frequency mapped to a note (default: 8000)
        max_cents_deviation: Largest accepted distance from a reference pitch (default: 50)
        min_note_magnitude: Candidates quieter than this are not mapped (default: 20)
        key_min_notes: Distinct pitch classes needed for key detection (default: 3)
        key_out_of_scale_penalty: Weight multiplier subtracted for notes
            outside a key (default: 0.5)
        key_max_confidence: Confidence ceiling for key detection (default: 0.95)
        chord_match_weight: Score per matched interval (default: 10)
        chord_missing_penalty: Score lost per missing template interval (default: 5)
        chord_extra_penalty: Score lost per interval outside the template (default: 2)
        chord_min_score: Minimum score for a chord candidate (default: 15)
        chord_min_matched: Minimum matched intervals for a chord candidate (default: 2)
        chord_inversion_min_matched: Matched tones required before an
            inversion is reported (default: 3)
        chord_fallback_confidence: Confidence of the "Notes" fallback (default: 0.1)
        instrument_min_harmonics: Harmonics on the leading fundamental that
            mark input as instrumental (default: 3)
    """

    # Spectral peak extraction
    min_frequency: float = 20.0
    max_frequency: float = 5000.0
    noise_floor_multiplier: float = 10.0
    magnitude_offset_db: float = 100.0
    magnitude_scale: float = 2.55
    max_peaks: int = 12

    # Harmonic analysis
    low_frequency_cutoff: float = 200.0
    low_harmonic_tolerance: float = 0.03
    high_harmonic_tolerance: float = 0.015
    harmonic_range: Tuple[int, int] = (2, 10)
    subharmonic_range: Tuple[int, int] = (2, 5)
    harmonic_boost: float = 0.5

    # Note mapping
    min_note_frequency: float = 15.0
    max_note_frequency: float = 8000.0
    max_cents_deviation: float = 50.0
    min_note_magnitude: float = 20.0

    # Key detection
    key_min_notes: int = 3
    key_out_of_scale_penalty: float = 0.5
    key_max_confidence: float = 0.95

    # Chord detection
    chord_match_weight: int = 10
    chord_missing_penalty: int = 5
    chord_extra_penalty: int = 2
    chord_min_score: int = 15
    chord_min_matched: int = 2
    chord_inversion_min_matched: int = 3
    chord_fallback_confidence: float = 0.1

    # Instrument heuristic
    instrument_min_harmonics: int = 3

    def with_sensitivity(self, preset: str) -> "AnalysisConfig":
        """Return a copy tuned by a named sensitivity preset.

        Raises:
            ValueError: If the preset name is unknown
        """
        key = preset.lower()
        if key not in SENSITIVITY_PRESETS:
            raise ValueError(
                f"Unknown sensitivity '{preset}'. "
                f"Available: {', '.join(SENSITIVITY_PRESETS)}"
            )
        return replace(self, **SENSITIVITY_PRESETS[key])


# Higher sensitivity lowers the noise floor and the note gate
SENSITIVITY_PRESETS = {
    "low": {
        "noise_floor_multiplier": 15.0,
        "min_note_magnitude": 40.0,
    },
    "medium": {
        "noise_floor_multiplier": 10.0,
        "min_note_magnitude": 20.0,
    },
    "high": {
        "noise_floor_multiplier": 5.0,
        "min_note_magnitude": 10.0,
    },
}

DEFAULT_CONFIG = AnalysisConfig()
