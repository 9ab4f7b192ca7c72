"""Growable window over a contiguous run of samples.

A window is anchored at an index, accumulates distance as samples are
appended, and is finalized exactly once into frozen summary stats. Both the
fixed split segmenter and the fastest-interval discovery build on it.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from runsplits.analysis.metrics import GEODESIC, PairwiseMetrics
from runsplits.models import Sample


class InvalidStateError(RuntimeError):
    """A window was used in a way its lifecycle state does not allow."""


class WindowState(Enum):
    GROWING = "growing"
    FINALIZED = "finalized"


@dataclass(frozen=True)
class WindowStats:
    distance_m: float
    duration_s: float
    elevation_gain_m: float
    avg_pace_s_per_km: Optional[float] = None
    speed_kmh: Optional[float] = None
    avg_hr: Optional[float] = None
    start_timestamp_s: Optional[float] = None
    end_timestamp_s: Optional[float] = None


class Window:
    def __init__(self, start_index: int, metrics: PairwiseMetrics = GEODESIC):
        self.start_index = start_index
        self.metrics = metrics
        self.state = WindowState.GROWING
        self.distance_m = 0.0
        self._samples: list[Sample] = []
        self._stats: WindowStats | None = None

    def __repr__(self) -> str:
        return (f"Window(start_index={self.start_index}, state={self.state.value}, "
                f"samples={len(self._samples)}, distance_m={self.distance_m:.1f})")

    # Identity is the anchor index, never the derived stats.
    def __eq__(self, other) -> bool:
        if not isinstance(other, Window):
            return NotImplemented
        return self.start_index == other.start_index

    def __hash__(self) -> int:
        return hash(self.start_index)

    def __len__(self) -> int:
        return len(self._samples)

    @property
    def samples(self) -> tuple[Sample, ...]:
        return tuple(self._samples)

    @property
    def is_finalized(self) -> bool:
        return self.state is WindowState.FINALIZED

    def extend(self, sample: Sample, preceding: Optional[Sample] = None) -> None:
        """Append a sample, adding the step distance unless it is the first.

        *preceding* defaults to the window's own last member.
        """
        if self.is_finalized:
            raise InvalidStateError(f"cannot extend finalized window {self.start_index}")

        if self._samples:
            prev = preceding if preceding is not None else self._samples[-1]
            self.distance_m += self.metrics.distance(prev, sample)
        self._samples.append(sample)

    def finalize(self) -> Window:
        """Freeze derived stats. Returns self for chaining."""
        if self.is_finalized:
            raise InvalidStateError(f"window {self.start_index} already finalized")

        duration = 0.0
        gain = 0.0
        for prev, cur in zip(self._samples, self._samples[1:]):
            duration += self.metrics.duration(prev, cur)
            delta = self.metrics.elevation_delta(prev, cur)
            if delta > 0:
                gain += delta

        hr_values = [s.heart_rate for s in self._samples if s.heart_rate is not None]

        self._stats = WindowStats(
            distance_m=self.distance_m,
            duration_s=duration,
            elevation_gain_m=gain,
            avg_pace_s_per_km=duration / (self.distance_m / 1000.0) if self.distance_m > 0 else None,
            speed_kmh=self.distance_m / duration * 3.6 if duration > 0 else None,
            avg_hr=round(sum(hr_values) / len(hr_values), 2) if hr_values else None,
            start_timestamp_s=self._samples[0].timestamp_s if self._samples else None,
            end_timestamp_s=self._samples[-1].timestamp_s if self._samples else None,
        )
        self.state = WindowState.FINALIZED
        return self

    @property
    def stats(self) -> WindowStats:
        if self._stats is None:
            raise InvalidStateError(f"window {self.start_index} is not finalized")
        return self._stats

    @property
    def duration_s(self) -> float:
        return self.stats.duration_s

    @property
    def elevation_gain_m(self) -> float:
        return self.stats.elevation_gain_m

    @property
    def avg_pace_s_per_km(self) -> Optional[float]:
        return self.stats.avg_pace_s_per_km

    @property
    def speed_kmh(self) -> Optional[float]:
        return self.stats.speed_kmh

    @property
    def avg_hr(self) -> Optional[float]:
        return self.stats.avg_hr

    @property
    def start_timestamp_s(self) -> Optional[float]:
        return self.stats.start_timestamp_s

    @property
    def end_timestamp_s(self) -> Optional[float]:
        return self.stats.end_timestamp_s

    def sort_key(self) -> tuple[float, int]:
        return (self.duration_s, self.start_index)


def fastest(windows: Iterable[Window]) -> Window | None:
    """Shortest-duration window; ties go to the earliest start index."""
    return min(windows, key=Window.sort_key, default=None)
