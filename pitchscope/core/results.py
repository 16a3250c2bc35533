"""Result records handed back to callers."""

from dataclasses import asdict, dataclass, field
from typing import List, Optional

from .note import FrequencyCandidate, Note


@dataclass
class KeyResult:
    """Container for key detection results."""

    name: str  # e.g. "G Major"
    confidence: float  # 0.0 - 1.0
    notes: List[str] = field(default_factory=list)  # The 7 scale notes

    @property
    def root(self) -> str:
        return self.name.split(" ")[0]

    @property
    def mode(self) -> str:
        return self.name.split(" ")[1].lower()


@dataclass
class ChordResult:
    """A detected chord, or the "Notes" fallback when nothing matched."""

    name: str  # Root + type + optional "/bass"
    root: Optional[str] = None
    type: str = ""
    notes: List[str] = field(default_factory=list)  # Pitch classes present
    inversion: int = 0  # 0 = root position
    confidence: float = 0.0
    bass: Optional[str] = None

    @property
    def is_chord(self) -> bool:
        """False for the fallback result."""
        return bool(self.type)


@dataclass
class ChordSegment:
    """A chord spanning a stretch of time."""

    chord: ChordResult
    onset: float
    offset: float

    @property
    def duration(self) -> float:
        return self.offset - self.onset


@dataclass
class GuitarStringReading:
    """Tuner reading against the closest standard-tuning string."""

    string_name: str
    target_frequency: float
    actual_frequency: float
    cents_deviation: int
    tuning_direction: str
    in_tune: bool
    confidence: float


@dataclass
class AnalysisResult:
    """Everything produced by one analysis tick."""

    frequencies: List[FrequencyCandidate] = field(default_factory=list)
    notes: List[Note] = field(default_factory=list)
    key: Optional[KeyResult] = None
    is_instrument: bool = False

    def to_dict(self) -> dict:
        """Convert to a JSON-friendly dictionary."""
        return {
            "frequencies": [asdict(f) for f in self.frequencies],
            "notes": [asdict(n) for n in self.notes],
            "key": asdict(self.key) if self.key else None,
            "is_instrument": self.is_instrument,
        }
