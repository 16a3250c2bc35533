"""Guitar tuner - compare a frequency with standard-tuning strings."""

import math
from typing import Optional

from ..core import GuitarStringReading
from ..core.constants import GUITAR_STRINGS

MIN_FREQUENCY = 75.0
MAX_FREQUENCY = 350.0
MAX_CENTS = 100.0  # One semitone
IN_TUNE_CENTS = 5.0


def analyze_guitar_string(frequency: float) -> Optional[GuitarStringReading]:
    """
    Find the closest open string and how far the frequency is from it.

    Args:
        frequency: Detected frequency in Hz

    Returns:
        GuitarStringReading, or None outside 75-350 Hz or when no string is
        within a semitone
    """
    if not (MIN_FREQUENCY <= frequency <= MAX_FREQUENCY):
        return None

    string_name, target = min(GUITAR_STRINGS, key=lambda s: abs(s[1] - frequency))
    cents = 1200 * math.log2(frequency / target)

    if abs(cents) > MAX_CENTS:
        return None

    return GuitarStringReading(
        string_name=string_name,
        target_frequency=target,
        actual_frequency=frequency,
        cents_deviation=int(round(cents)),
        # Flat strings need tightening
        tuning_direction="tune up" if cents < 0 else "tune down",
        in_tune=abs(cents) <= IN_TUNE_CENTS,
        confidence=1 - abs(cents) / MAX_CENTS,
    )
