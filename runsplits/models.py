from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from runsplits.analysis.heart_rate import HeartRateAnalysis
    from runsplits.analysis.window import Window


@dataclass(frozen=True)
class Sample:
    lat: float
    lon: float
    timestamp_s: float
    elevation_m: Optional[float] = None
    heart_rate: Optional[int] = None


@dataclass
class RunSummary:
    """Totals from one pass over a run's samples."""

    name: Optional[str] = None
    date: Optional[datetime] = None
    sample_count: int = 0
    distance_m: float = 0.0
    duration_s: float = 0.0
    cumulative_elevation_gain_m: float = 0.0
    min_heart_rate: Optional[int] = None
    max_heart_rate: Optional[int] = None
    average_heart_rate: Optional[float] = None
    splits: list[Window] = field(default_factory=list)
    heart_rate_analysis: Optional[HeartRateAnalysis] = None

    @property
    def speed_kmh(self) -> Optional[float]:
        if self.duration_s <= 0:
            return None
        return self.distance_m / self.duration_s * 3.6

    @property
    def pace_s_per_km(self) -> Optional[float]:
        if self.distance_m <= 0 or self.duration_s <= 0:
            return None
        return self.duration_s / (self.distance_m / 1000.0)
