"""Audio loading and conversion to per-frame dB magnitude spectra.

Frames are shaped like a browser analyser node's float frequency data:
Blackman window, fft_size // 2 bins, and amplitude normalised so that a
full-scale sine reads 0 dB. They can be fed straight into the peak
extractor.
"""

import logging
from pathlib import Path
from typing import Iterator, Tuple, Union

import librosa
import numpy as np

from ..core.constants import DEFAULT_FFT_SIZE

logger = logging.getLogger(__name__)


class SpectrumFrames:
    """Computes magnitude spectra (dB) from audio."""

    SUPPORTED_FORMATS = {".wav", ".mp3", ".flac", ".ogg", ".m4a"}

    def __init__(
        self,
        fft_size: int = DEFAULT_FFT_SIZE,
        hop_length: int = 2048,
        window: str = "blackman",
        min_db: float = -200.0,
    ):
        """
        Initialize SpectrumFrames.

        Args:
            fft_size: FFT window size
            hop_length: Samples between frames
            window: Window function name understood by librosa
            min_db: Floor applied to silent bins
        """
        if fft_size <= 0 or hop_length <= 0:
            raise ValueError("fft_size and hop_length must be positive")
        self.fft_size = fft_size
        self.hop_length = hop_length
        self.window = window
        self.min_db = min_db

    def load(self, path: Union[str, Path]) -> Tuple[np.ndarray, int]:
        """
        Load an audio file as mono at its native sample rate.

        Raises:
            ValueError: If file format not supported or the file cannot be decoded
            FileNotFoundError: If file doesn't exist
        """
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        if path.suffix.lower() not in self.SUPPORTED_FORMATS:
            raise ValueError(
                f"Unsupported format: {path.suffix}. "
                f"Supported: {self.SUPPORTED_FORMATS}"
            )

        try:
            audio, sr = librosa.load(str(path), sr=None, mono=True)
        except Exception as e:
            # Decoder backends (soundfile, audioread) raise their own error types
            raise ValueError(f"Could not read audio file {path}: {e}") from e
        logger.debug("Loaded %s: %d samples at %d Hz", path.name, len(audio), sr)
        return audio, int(sr)

    def compute(self, audio: np.ndarray) -> np.ndarray:
        """
        Compute dB spectra for every frame.

        Returns:
            Array [time_frames, fft_size // 2] of dB values
        """
        if len(audio) < self.fft_size:
            audio = np.pad(audio, (0, self.fft_size - len(audio)))

        stft = librosa.stft(
            audio,
            n_fft=self.fft_size,
            hop_length=self.hop_length,
            window=self.window,
            center=False,
        )
        window_sum = librosa.filters.get_window(
            self.window, self.fft_size, fftbins=True
        ).sum()

        # Full-scale sine -> amplitude 1.0 -> 0 dB
        amplitude = np.abs(stft[: self.fft_size // 2]) * (2.0 / window_sum)
        amin = 10 ** (self.min_db / 20.0)
        db = librosa.amplitude_to_db(amplitude, ref=1.0, amin=amin, top_db=None)
        return db.T

    def frame_times(self, n_frames: int, sr: int) -> np.ndarray:
        """Start time of each frame in seconds."""
        return librosa.frames_to_time(
            np.arange(n_frames), sr=sr, hop_length=self.hop_length
        )

    def iter_file(
        self, path: Union[str, Path]
    ) -> Tuple[int, Iterator[Tuple[float, np.ndarray]]]:
        """
        Load a file and iterate its spectra.

        Returns:
            Tuple of (sample rate, iterator of (time, dB spectrum))
        """
        audio, sr = self.load(path)
        spectra = self.compute(audio)
        times = self.frame_times(len(spectra), sr)
        return sr, zip((float(t) for t in times), spectra)
