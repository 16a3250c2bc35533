"""Harmonic relationship analysis between spectral peaks.

A peak whose integer multiples are also present is likely the fundamental
of a pitched sound. Fundamentals collect evidence from their harmonics and
get a magnitude boost so they rank above isolated peaks of similar level.
"""

from dataclasses import replace
from typing import List, Optional, Sequence

from ..core import AnalysisConfig, DEFAULT_CONFIG, FrequencyCandidate


class HarmonicAnalyzer:
    """Classify frequency candidates as fundamentals and/or harmonics."""

    def __init__(self, config: Optional[AnalysisConfig] = None):
        self.config = config or DEFAULT_CONFIG

    def tolerance_for(self, frequency: float) -> float:
        """Relative ratio tolerance for a potential fundamental."""
        if frequency < self.config.low_frequency_cutoff:
            return self.config.low_harmonic_tolerance
        return self.config.high_harmonic_tolerance

    def analyze(
        self, candidates: Sequence[FrequencyCandidate]
    ) -> List[FrequencyCandidate]:
        """
        Score harmonic relationships and re-rank candidates.

        The input is left untouched; updated copies are returned sorted by
        (possibly boosted) magnitude, highest first. Evidence is always
        gathered from the incoming magnitudes, so the result does not
        depend on candidate order.

        Args:
            candidates: Spectral peaks from one spectrum

        Returns:
            New list of candidates with harmonic flags and scores set
        """
        cfg = self.config
        h_lo, h_hi = cfg.harmonic_range
        s_lo, s_hi = cfg.subharmonic_range

        updated = []
        for i, potential in enumerate(candidates):
            tolerance = self.tolerance_for(potential.frequency)
            harmonic_count = 0
            harmonic_score = 0.0
            is_harmonic = potential.is_harmonic

            for j, other in enumerate(candidates):
                if i == j or potential.frequency <= 0 or other.frequency <= 0:
                    continue

                ratio = other.frequency / potential.frequency
                for harmonic in range(h_lo, h_hi + 1):
                    if abs(ratio - harmonic) < tolerance * harmonic:
                        harmonic_count += 1
                        harmonic_score += other.magnitude / harmonic
                        break

                # A candidate may be both a fundamental and a harmonic
                inverse = potential.frequency / other.frequency
                for harmonic in range(s_lo, s_hi + 1):
                    if abs(inverse - harmonic) < tolerance * harmonic:
                        is_harmonic = True
                        break

            if harmonic_count >= 1:
                boost = 1 + (harmonic_score / 255) * cfg.harmonic_boost
                updated.append(replace(
                    potential,
                    is_fundamental=True,
                    is_harmonic=is_harmonic,
                    harmonic_score=harmonic_score,
                    harmonic_count=harmonic_count,
                    magnitude=min(255.0, potential.magnitude * boost),
                ))
            else:
                updated.append(replace(potential, is_harmonic=is_harmonic))

        updated.sort(key=lambda c: c.magnitude, reverse=True)
        return updated


def analyze_harmonics(
    candidates: Sequence[FrequencyCandidate],
    config: Optional[AnalysisConfig] = None,
) -> List[FrequencyCandidate]:
    """Convenience wrapper around HarmonicAnalyzer.analyze."""
    return HarmonicAnalyzer(config).analyze(candidates)
