"""Analysis layer - Spectrum-level signal analysis.

This layer turns magnitude spectra into ranked frequency candidates:
- Spectral peak extraction with a dynamic noise floor
- Harmonic relationship scoring (fundamental vs. overtone)
- Audio file -> per-frame dB spectra
"""

from .peaks import SpectralPeakExtractor, extract_peaks
from .harmonics import HarmonicAnalyzer, analyze_harmonics
from .spectrum import SpectrumFrames

__all__ = [
    "SpectralPeakExtractor",
    "extract_peaks",
    "HarmonicAnalyzer",
    "analyze_harmonics",
    "SpectrumFrames",
]
