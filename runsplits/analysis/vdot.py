"""VDOT estimate using the Daniels-Gilbert formula.

A run is scored by its fastest effort at the longest standard race distance
it covers: the effort comes from fastest-interval discovery and the VDOT
from the race formula.
"""

from __future__ import annotations

import math
from concurrent.futures import Executor
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Sequence

from runsplits.analysis.fastest import DiscoveryJob, discover_windows_async, fastest_interval
from runsplits.analysis.metrics import GEODESIC, PairwiseMetrics
from runsplits.analysis.window import fastest
from runsplits.models import RunSummary, Sample

METERS_PER_MILE = 1609.344


class StandardDistance(Enum):
    M1500 = 1_500.0
    MILE = METERS_PER_MILE
    K3 = 3_000.0
    K5 = 5_000.0
    K10 = 10_000.0
    K15 = 15_000.0
    HALF_MARATHON = 21_097.5
    MARATHON = 42_195.0


@dataclass
class VdotEstimate:
    distance: StandardDistance
    duration_s: float
    vdot: float
    date: Optional[datetime] = None


def race_to_vdot(distance_m: float, time_s: float) -> float:
    """Calculate VDOT from race performance using Daniels-Gilbert formula.

    Args:
        distance_m: Race distance in meters.
        time_s: Race time in seconds.

    Returns:
        VDOT value.
    """
    if time_s <= 0:
        raise ValueError(f"race time must be positive, got {time_s}")

    time_min = time_s / 60.0
    velocity = distance_m / time_min  # m/min

    vo2 = -4.60 + 0.182258 * velocity + 0.000104 * velocity ** 2
    pct_vo2max = (0.8 + 0.1894393 * math.exp(-0.012778 * time_min)
                  + 0.2989558 * math.exp(-0.1932605 * time_min))

    return round(vo2 / pct_vo2max, 2)


def nearest_standard_distance(distance_m: float) -> StandardDistance | None:
    """Longest standard distance not exceeding *distance_m*, or None."""
    covered = [d for d in StandardDistance if d.value <= distance_m]
    if not covered:
        return None
    return max(covered, key=lambda d: d.value)


def format_pace(seconds_per_km: float) -> str:
    """Format pace as M:SS per km (e.g. '4:05')."""
    minutes = int(seconds_per_km // 60)
    secs = int(seconds_per_km % 60)
    return f"{minutes}:{secs:02d}"


def estimate_vdot(samples: Sequence[Sample], summary: RunSummary,
                  metrics: PairwiseMetrics = GEODESIC) -> VdotEstimate | None:
    """Score the run from its fastest effort at the nearest standard distance."""
    standard = nearest_standard_distance(summary.distance_m)
    if standard is None:
        return None

    best = fastest_interval(samples, standard.value, metrics=metrics)
    return _estimate_from(standard, best, summary)


def estimate_vdot_async(samples: Sequence[Sample], summary: RunSummary,
                        on_complete: Callable[[VdotEstimate | None], None],
                        executor: Executor | None = None,
                        metrics: PairwiseMetrics = GEODESIC) -> DiscoveryJob | None:
    """Background form of ``estimate_vdot``.

    Returns None (after calling *on_complete* with None) when the run is
    shorter than every standard distance.
    """
    standard = nearest_standard_distance(summary.distance_m)
    if standard is None:
        on_complete(None)
        return None

    def _done(windows):
        on_complete(_estimate_from(standard, fastest(windows), summary))

    return discover_windows_async(samples, standard.value, on_complete=_done,
                                  executor=executor, metrics=metrics)


def _estimate_from(standard: StandardDistance, best, summary: RunSummary) -> VdotEstimate | None:
    if best is None or best.duration_s <= 0:
        return None
    return VdotEstimate(
        distance=standard,
        duration_s=best.duration_s,
        vdot=race_to_vdot(standard.value, best.duration_s),
        date=summary.date,
    )
