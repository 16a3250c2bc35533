"""Spectral peak extraction with sub-bin interpolation."""

import logging
import math
from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..core import AnalysisConfig, DEFAULT_CONFIG, FrequencyCandidate
from .harmonics import HarmonicAnalyzer

logger = logging.getLogger(__name__)

Spectrum = Union[Sequence[float], np.ndarray]


class SpectralPeakExtractor:
    """Finds the dominant musical frequencies in one magnitude spectrum.

    Techniques:
    - Dynamic noise floor proportional to the energy in the musical band
    - Local maxima detection
    - Parabolic interpolation for sub-bin frequency precision
    - Harmonic analysis to promote fundamentals
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize SpectralPeakExtractor.

        Args:
            config: Analysis thresholds (default: AnalysisConfig())
        """
        self.config = config or DEFAULT_CONFIG
        self.harmonic_analyzer = HarmonicAnalyzer(self.config)

    def band_bins(self, n_bins: int, resolution: float) -> Tuple[int, int]:
        """Bin range [min_bin, max_bin) covering the musical band."""
        min_bin = int(math.floor(self.config.min_frequency / resolution))
        max_bin = min(
            int(math.ceil(self.config.max_frequency / resolution)), n_bins
        )
        return min_bin, max_bin

    def noise_threshold(self, band_db: np.ndarray) -> float:
        """Mean linear power of the band times the noise floor multiplier."""
        power = np.power(10.0, band_db / 20.0)
        return float(np.mean(power)) * self.config.noise_floor_multiplier

    def extract(
        self,
        spectrum: Spectrum,
        sample_rate: float,
        fft_size: int,
    ) -> List[FrequencyCandidate]:
        """
        Extract ranked frequency candidates from a dB spectrum.

        Args:
            spectrum: Per-bin magnitudes in dB (bin i at i * sr / fft_size)
            sample_rate: Sample rate used to produce the spectrum (Hz)
            fft_size: FFT size used to produce the spectrum

        Returns:
            Up to max_peaks candidates, highest magnitude first. Silent or
            empty input gives an empty list.

        Raises:
            ValueError: If sample_rate or fft_size is not positive
        """
        if sample_rate <= 0 or fft_size <= 0:
            raise ValueError(
                f"sample_rate and fft_size must be positive, "
                f"got {sample_rate} and {fft_size}"
            )

        data = np.asarray(spectrum, dtype=np.float64)
        if data.size == 0:
            return []
        data = np.where(np.isnan(data), -np.inf, data)

        resolution = sample_rate / fft_size
        min_bin, max_bin = self.band_bins(len(data), resolution)
        if max_bin - min_bin < 3:
            return []

        threshold = self.noise_threshold(data[min_bin:max_bin])
        power = np.power(10.0, data / 20.0)

        candidates = []
        for i in range(min_bin + 1, max_bin - 1):
            if (
                power[i] < threshold
                or power[i] <= power[i - 1]
                or power[i] <= power[i + 1]
            ):
                continue

            offset = self._interpolate(data[i - 1], data[i], data[i + 1])
            candidates.append(FrequencyCandidate(
                frequency=(i + offset) * resolution,
                magnitude=self._normalize_magnitude(data[i]),
                source_bin=i,
            ))

        candidates.sort(key=lambda c: c.magnitude, reverse=True)

        if len(candidates) > 1:
            candidates = self.harmonic_analyzer.analyze(candidates)

        logger.debug(
            "%d peaks above %.3g (bins %d-%d)",
            len(candidates), threshold, min_bin, max_bin,
        )
        return candidates[: self.config.max_peaks]

    def _interpolate(self, left: float, center: float, right: float) -> float:
        """Vertex offset of the parabola through three dB values."""
        denominator = 2 * (left - 2 * center + right)
        if denominator == 0 or not np.isfinite(denominator):
            return 0.0
        offset = (left - right) / denominator
        return float(offset) if np.isfinite(offset) else 0.0

    def _normalize_magnitude(self, db: float) -> float:
        """Map dB to the 0-255 range."""
        cfg = self.config
        value = (db + cfg.magnitude_offset_db) * cfg.magnitude_scale
        return float(min(255.0, max(0.0, value)))


def extract_peaks(
    spectrum: Spectrum,
    sample_rate: float,
    fft_size: int,
    config: Optional[AnalysisConfig] = None,
) -> List[FrequencyCandidate]:
    """Convenience wrapper around SpectralPeakExtractor.extract."""
    return SpectralPeakExtractor(config).extract(spectrum, sample_rate, fft_size)
