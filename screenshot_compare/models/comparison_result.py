from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import math


class ComparisonMethod(str, Enum):
    PIXEL = "pixel"
    HISTOGRAM = "histogram"
    ROBUST = "robust"


def clamp_percent(value: float) -> float:
    value = float(value)
    if not math.isfinite(value):
        raise ValueError(f"Similarity must be a finite number, got {value}")
    return max(0.0, min(100.0, value))


@dataclass(frozen=True)
class ComparisonResult:
    """
    Similarity percentage produced by one comparison method.
    value     : reported similarity, always within [0, 100]
    raw_score : metric before clamping (signed for histogram correlation)
    """
    value: float
    method: ComparisonMethod
    raw_score: float | None = None
    artifact_path: Path | None = None  # Diff image written alongside the score.

    def __post_init__(self):
        raw = float(self.value if self.raw_score is None else self.raw_score)
        if not math.isfinite(raw):
            raise ValueError(f"{self.method.value} score must be a finite number, got {raw}")
        object.__setattr__(self, "raw_score", raw)
        object.__setattr__(self, "value", clamp_percent(self.value))

    def __float__(self) -> float:
        return self.value

    def within(self, min_percent: float, max_percent: float) -> bool:
        return min_percent <= self.value <= max_percent


@dataclass(frozen=True)
class ComparisonBreakdown:
    """All three scores of one image pair, computed from a single load."""
    pixel: ComparisonResult
    histogram: ComparisonResult
    robust: ComparisonResult
