"""Shared fixtures: synthetic dB spectra shaped like analyser-node output."""

import sys
from pathlib import Path

import numpy as np
import pytest

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from pitchscope.core import DEFAULT_SR  # noqa: E402

SAMPLE_RATE = DEFAULT_SR
FFT_SIZE = 8192
BASELINE_DB = -100.0


def bin_frequency(bin_index: int, sample_rate: int = SAMPLE_RATE, fft_size: int = FFT_SIZE) -> float:
    """Center frequency of a bin."""
    return bin_index * sample_rate / fft_size


def nearest_bin(frequency: float, sample_rate: int = SAMPLE_RATE, fft_size: int = FFT_SIZE) -> int:
    """Bin closest to a frequency."""
    return int(round(frequency * fft_size / sample_rate))


def make_spectrum(
    peaks: dict,
    fft_size: int = FFT_SIZE,
    baseline_db: float = BASELINE_DB,
    skirt_db: float = 6.0,
) -> np.ndarray:
    """
    Build a dB spectrum with symmetric peaks.

    Args:
        peaks: {bin index: peak level in dB}
        fft_size: FFT size (spectrum has fft_size // 2 bins)
        baseline_db: Level of every other bin
        skirt_db: Drop of the two neighbouring bins below the peak

    Returns:
        Array of dB values
    """
    spectrum = np.full(fft_size // 2, baseline_db)
    for bin_index, level in peaks.items():
        spectrum[bin_index] = level
        spectrum[bin_index - 1] = max(spectrum[bin_index - 1], level - skirt_db)
        spectrum[bin_index + 1] = max(spectrum[bin_index + 1], level - skirt_db)
    return spectrum


@pytest.fixture
def harmonic_spectrum():
    """A4-ish tone (bin 82) with three harmonics at exact multiples."""
    return make_spectrum({82: -20.0, 164: -26.0, 246: -30.0, 328: -34.0})


@pytest.fixture
def c_major_spectrum():
    """C4 D4 E4 F4 G4, with C loudest."""
    levels = {"C4": -20.0, "G4": -22.0, "E4": -24.0, "D4": -28.0, "F4": -30.0}
    frequencies = {"C4": 261.63, "D4": 293.66, "E4": 329.63, "F4": 349.23, "G4": 392.00}
    return make_spectrum({nearest_bin(frequencies[n]): db for n, db in levels.items()})


@pytest.fixture
def silent_spectrum():
    return np.full(FFT_SIZE // 2, BASELINE_DB)
