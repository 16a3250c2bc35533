"""Key detection - Identify the tonal center from a weighted note histogram.

Each candidate key is scored by the weight of its scale degrees present in
the histogram, emphasising tonic and dominant, minus a penalty for notes
outside the scale. Confidence reflects how far the winner is ahead of the
runner-up rather than the raw score.
"""

import logging
import numbers
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple, Union

from ..core import AnalysisConfig, DEFAULT_CONFIG, KeyResult, Note
from ..core.constants import KEY_SIGNATURES, KEY_TONIC_WEIGHTS
from ..core.note import normalize_pitch_name

logger = logging.getLogger(__name__)

WeightedNote = Union[Note, Tuple[str, float], Mapping[str, Any], str]


def _weighted_pitch(note: Any) -> Optional[Tuple[str, float]]:
    """(pitch class, weight) for one weighted note, or None if malformed."""
    if isinstance(note, Note):
        name, weight = note.name, note.magnitude
    elif isinstance(note, str):
        name, weight = note, 1.0
    elif isinstance(note, Mapping):
        name = note.get("name")
        weight = note.get("weight", note.get("magnitude", 1.0))
    elif isinstance(note, (tuple, list)) and len(note) == 2:
        name, weight = note
    else:
        return None

    if not isinstance(name, str) or isinstance(weight, bool):
        return None
    if not isinstance(weight, numbers.Real):
        return None

    pitch = normalize_pitch_name(name)
    if pitch is None:
        return None
    return pitch, float(weight)


class KeyDetector:
    """Detect musical key from weighted notes.

    Notes may be given as Note objects (weighted by magnitude),
    (name, weight) pairs, mappings with "name" and "weight" or
    "magnitude", or bare names (weight 1).
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize KeyDetector.

        Args:
            config: Analysis thresholds (default: AnalysisConfig())
        """
        self.config = config or DEFAULT_CONFIG

    def build_histogram(self, notes: Iterable[WeightedNote]) -> Dict[str, float]:
        """
        Accumulate weight per pitch class.

        Unknown pitch names and malformed items are ignored.
        """
        histogram: Dict[str, float] = {}

        for note in notes:
            entry = _weighted_pitch(note)
            if entry is None:
                continue
            pitch, weight = entry
            histogram[pitch] = histogram.get(pitch, 0.0) + weight

        return histogram

    def analyze(self, notes: Iterable[WeightedNote]) -> Optional[KeyResult]:
        """
        Infer the most likely key from weighted notes.

        Returns:
            KeyResult, or None when fewer than key_min_notes distinct pitch
            classes are present or no key scores above zero
        """
        return self.analyze_histogram(self.build_histogram(notes))

    def analyze_histogram(self, histogram: Mapping[str, float]) -> Optional[KeyResult]:
        """
        Infer the most likely key from a pitch-class -> weight mapping.
        """
        weights: Dict[str, float] = {}
        for name, weight in histogram.items():
            pitch = normalize_pitch_name(name)
            if pitch is not None:
                weights[pitch] = weights.get(pitch, 0.0) + float(weight)

        if len(weights) < self.config.key_min_notes:
            return None

        scores = self.score_keys(weights)

        best_key = None
        best_score = 0.0
        for key_name, score in scores.items():
            if score > best_score:
                best_score = score
                best_key = key_name

        if best_key is None:
            logger.debug("No key scored above zero for %s", dict(weights))
            return None

        second_score = 0.0
        for score in scores.values():
            if second_score < score < best_score:
                second_score = score

        confidence = 0.5
        if second_score > 0:
            separation = (best_score - second_score) / best_score
            confidence = min(self.config.key_max_confidence, 0.5 + separation * 0.5)

        return KeyResult(
            name=best_key,
            confidence=confidence,
            notes=list(KEY_SIGNATURES[best_key]),
        )

    def score_keys(self, weights: Mapping[str, float]) -> Dict[str, float]:
        """Score every key signature against a pitch-class histogram."""
        penalty = self.config.key_out_of_scale_penalty
        scores: Dict[str, float] = {}

        for key_name, scale in KEY_SIGNATURES.items():
            tonic_weights = KEY_TONIC_WEIGHTS[
                "major" if key_name.endswith("Major") else "minor"
            ]
            scale_pitches = [normalize_pitch_name(n) for n in scale]

            score = 0.0
            for degree, pitch in enumerate(scale_pitches):
                if pitch in weights:
                    score += weights[pitch] * tonic_weights[degree]

            # Penalize notes outside the key
            for pitch, weight in weights.items():
                if pitch not in scale_pitches:
                    score -= weight * penalty

            scores[key_name] = score

        return scores


def analyze_musical_key(
    notes: Iterable[WeightedNote],
    config: Optional[AnalysisConfig] = None,
) -> Optional[KeyResult]:
    """Convenience wrapper around KeyDetector.analyze."""
    return KeyDetector(config).analyze(notes)
