"""Chord detection - Identify chord name, root and inversion from notes.

Implements template matching with:
- Every present pitch class tried as the root, so inversions are found
- Scoring that tolerates missing or extra tones
- Inversion detection via the bass note
- A "Notes" fallback instead of failure when nothing matches
- Progression detection over timed note events
"""

import logging
import numbers
from collections import defaultdict
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from ..core import (
    AnalysisConfig,
    ChordResult,
    ChordSegment,
    DEFAULT_CONFIG,
    Note,
    NoteEvent,
    PITCH_NAMES,
)
from ..core.constants import CHORD_TEMPLATES
from ..core.note import note_name_to_midi, parse_note_name

logger = logging.getLogger(__name__)

FALLBACK_NAME = "Notes"


@dataclass
class ChordCandidate:
    """A (root, template) combination that cleared the acceptance threshold."""
    root_pc: int
    quality: str
    score: int
    matched: int
    missing: int
    extra: int
    inversion: int = 0


def _as_int(value: Any) -> Optional[int]:
    """Integral numbers (Python or numpy) as int; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        value = float(value)
        return int(value) if value.is_integer() else None
    return None


def to_midi(note: Any) -> Optional[int]:
    """
    Normalise one note description to a MIDI number.

    Accepts MIDI numbers (including numpy scalars), Note / NoteEvent
    objects, "C#4" strings, (name, octave) pairs and mappings with "midi",
    "note_number" or "name" + "octave". Returns None for anything malformed.
    """
    if isinstance(note, numbers.Number):
        return _as_int(note)
    if isinstance(note, NoteEvent):
        return note.pitch
    if isinstance(note, Note):
        return note.midi
    if isinstance(note, str):
        parsed = parse_note_name(note)
        return note_name_to_midi(*parsed) if parsed else None
    if isinstance(note, Mapping):
        for key in ("midi", "note_number"):
            if note.get(key) is not None:
                return to_midi(note[key])
        name, octave = note.get("name"), _as_int(note.get("octave"))
        if isinstance(name, str) and octave is not None:
            return note_name_to_midi(name, octave)
        return None
    if isinstance(note, (tuple, list)) and len(note) == 2:
        name, octave = note[0], _as_int(note[1])
        if isinstance(name, str) and octave is not None:
            return note_name_to_midi(name, octave)
    return None


class ChordDetector:
    """Detect chords from arbitrary note sets.

    Score per (root, template):
        matched * 10 - missing * 5 - extra * 2
    where template intervals include the root itself.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None):
        """
        Initialize ChordDetector.

        Args:
            config: Analysis thresholds (default: AnalysisConfig())
        """
        self.config = config or DEFAULT_CONFIG

    def detect(self, notes: Iterable[Any]) -> ChordResult:
        """
        Detect the best-matching chord.

        Args:
            notes: Note descriptions (see to_midi)

        Returns:
            ChordResult; the "Notes" fallback when fewer than two distinct
            pitches remain or no template clears the threshold
        """
        pitches = sorted({p for p in (to_midi(n) for n in notes) if p is not None})
        names = self._pitch_class_names(pitches)

        if len(pitches) < 2:
            return self._fallback(names)

        bass_pc = pitches[0] % 12
        best: Optional[ChordCandidate] = None

        for root_pc in self._unique_pitch_classes(pitches):
            intervals = {(p - root_pc) % 12 for p in pitches}

            for quality, template in CHORD_TEMPLATES.items():
                candidate = self._score(intervals, root_pc, quality, template, bass_pc)
                if candidate is None:
                    continue
                if best is None or (
                    candidate.score > best.score
                    or (candidate.score == best.score
                        and candidate.inversion < best.inversion)
                ):
                    best = candidate

        if best is None:
            logger.debug("No chord template matched %s", names)
            return self._fallback(names)

        root = PITCH_NAMES[best.root_pc]
        bass = PITCH_NAMES[bass_pc]
        name = f"{root}{best.quality}"
        if best.inversion > 0:
            name += f"/{bass}"

        template_size = len(CHORD_TEMPLATES[best.quality]) + 1
        return ChordResult(
            name=name,
            root=root,
            type=best.quality,
            notes=names,
            inversion=best.inversion,
            confidence=best.score / (template_size * self.config.chord_match_weight),
            bass=bass if best.inversion > 0 else None,
        )

    def _score(
        self,
        intervals: set,
        root_pc: int,
        quality: str,
        template: Sequence[int],
        bass_pc: int,
    ) -> Optional[ChordCandidate]:
        """Score one (root, template) pair; None if below threshold."""
        cfg = self.config
        chord_tones = [0] + sorted(template)
        template_pcs = {t % 12 for t in chord_tones}

        matched = len(intervals & template_pcs)
        missing = len(template_pcs - intervals)
        extra = len(intervals - template_pcs)

        score = (
            matched * cfg.chord_match_weight
            - missing * cfg.chord_missing_penalty
            - extra * cfg.chord_extra_penalty
        )
        if score < cfg.chord_min_score or matched < cfg.chord_min_matched:
            return None

        inversion = 0
        if matched >= cfg.chord_inversion_min_matched and bass_pc != root_pc:
            bass_interval = (bass_pc - root_pc) % 12
            for position, tone in enumerate(chord_tones):
                if tone % 12 == bass_interval:
                    inversion = position
                    break

        return ChordCandidate(
            root_pc=root_pc,
            quality=quality,
            score=score,
            matched=matched,
            missing=missing,
            extra=extra,
            inversion=inversion,
        )

    def _fallback(self, names: List[str]) -> ChordResult:
        return ChordResult(
            name=FALLBACK_NAME,
            notes=names,
            confidence=self.config.chord_fallback_confidence,
        )

    @staticmethod
    def _unique_pitch_classes(pitches: Sequence[int]) -> List[int]:
        """Pitch classes in order of first (lowest) appearance."""
        seen: List[int] = []
        for p in pitches:
            if p % 12 not in seen:
                seen.append(p % 12)
        return seen

    def _pitch_class_names(self, pitches: Sequence[int]) -> List[str]:
        return [PITCH_NAMES[pc] for pc in self._unique_pitch_classes(pitches)]

    def detect_progression(
        self,
        events: Sequence[NoteEvent],
        onset_resolution: float = 0.05,
    ) -> List[ChordSegment]:
        """
        Detect a chord sequence from timed note events.

        Notes whose onsets round to the same multiple of onset_resolution
        form one group. Groups of two or more notes that match a chord
        become segments; consecutive segments with the same chord merge.

        Args:
            events: Timed notes (e.g. from a score)
            onset_resolution: Onset grouping grid in seconds

        Returns:
            List of ChordSegment ordered by onset

        Raises:
            ValueError: If onset_resolution is not positive
        """
        if onset_resolution <= 0:
            raise ValueError(
                f"onset_resolution must be positive, got {onset_resolution}"
            )
        if not events:
            return []

        groups = defaultdict(list)
        for event in events:
            slot = round(event.onset / onset_resolution) * onset_resolution
            groups[round(slot, 6)].append(event)

        segments: List[ChordSegment] = []
        for onset in sorted(groups):
            group = groups[onset]
            if len(group) < 2:
                continue

            chord = self.detect(group)
            if not chord.is_chord:
                continue

            offset = onset + max(e.duration for e in group)
            previous = segments[-1] if segments else None
            if (
                previous is not None
                and previous.chord.name == chord.name
                and onset - previous.offset < onset_resolution * 2
            ):
                previous.offset = max(previous.offset, offset)
                continue

            segments.append(ChordSegment(chord=chord, onset=onset, offset=offset))

        return segments


def detect_chord(
    notes: Iterable[Any], config: Optional[AnalysisConfig] = None
) -> ChordResult:
    """Convenience wrapper around ChordDetector.detect."""
    return ChordDetector(config).detect(notes)

