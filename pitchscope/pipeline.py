"""Per-tick analysis pipeline.

Pipeline: spectrum -> peaks -> harmonics -> notes -> key

A caller (typically an audio capture loop polling every ~60 ms) hands in one
dB spectrum at a time and receives an AnalysisResult. Chord detection is not
part of the tick; call ChordDetector on demand with whatever notes you hold.
"""

import logging
from typing import Optional, Sequence

from .analysis.peaks import SpectralPeakExtractor, Spectrum
from .core import AnalysisConfig, AnalysisResult, DEFAULT_CONFIG, FrequencyCandidate, Note
from .inference.key import KeyDetector
from .inference.notes import NoteMapper

logger = logging.getLogger(__name__)


def is_likely_instrument(
    frequencies: Sequence[FrequencyCandidate],
    notes: Sequence[Note],
    config: Optional[AnalysisConfig] = None,
) -> bool:
    """
    Guess whether the sound comes from an instrument rather than a voice.

    Instruments tend to show a clean harmonic series, so the strongest
    fundamental must carry several harmonics.
    """
    config = config or DEFAULT_CONFIG
    if len(frequencies) < 3:
        return False

    fundamentals = [f for f in frequencies if f.is_fundamental]
    return bool(fundamentals) and (
        fundamentals[0].harmonic_count >= config.instrument_min_harmonics
    )


class SpectrumAnalyzer:
    """Runs the full analysis for one spectrum at a time.

    Holds only configuration and immutable tables; every call is
    independent.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_CONFIG
        self.peak_extractor = SpectralPeakExtractor(self.config)
        self.note_mapper = NoteMapper(self.config)
        self.key_detector = KeyDetector(self.config)

    def analyze(
        self,
        spectrum: Spectrum,
        sample_rate: float,
        fft_size: int,
    ) -> AnalysisResult:
        """
        Analyze one magnitude spectrum.

        Args:
            spectrum: Per-bin dB values
            sample_rate: Sample rate in Hz
            fft_size: FFT size that produced the spectrum

        Returns:
            AnalysisResult (empty lists and no key for silent input)
        """
        frequencies = self.peak_extractor.extract(spectrum, sample_rate, fft_size)
        notes = self.note_mapper.detect_notes(frequencies)

        key = None
        if notes:
            key = self.key_detector.analyze(notes)

        result = AnalysisResult(
            frequencies=frequencies,
            notes=notes,
            key=key,
            is_instrument=is_likely_instrument(frequencies, notes, self.config),
        )
        logger.debug(
            "tick: %d peaks, notes=%s, key=%s",
            len(frequencies),
            [n.full_name for n in notes],
            key.name if key else None,
        )
        return result


class AnalysisSession:
    """A capture-loop companion that remembers the last detected key.

    Single ticks often carry too few notes for key detection; the session
    reports the most recent key until a new one is found.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.analyzer = SpectrumAnalyzer(config)
        self.last_key = None
        self.ticks = 0

    def process(
        self,
        spectrum: Spectrum,
        sample_rate: float,
        fft_size: int,
    ) -> AnalysisResult:
        """Analyze one tick, falling back to the last known key."""
        result = self.analyzer.analyze(spectrum, sample_rate, fft_size)
        self.ticks += 1

        if result.key is not None:
            self.last_key = result.key
        else:
            result.key = self.last_key

        return result

    def reset(self) -> None:
        """Forget the last key, e.g. when capture stops."""
        self.last_key = None
        self.ticks = 0


def analyze_spectrum(
    spectrum: Spectrum,
    sample_rate: float,
    fft_size: int,
    config: Optional[AnalysisConfig] = None,
) -> AnalysisResult:
    """Convenience wrapper around SpectrumAnalyzer.analyze."""
    return SpectrumAnalyzer(config).analyze(spectrum, sample_rate, fft_size)
