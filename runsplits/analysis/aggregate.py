"""Run totals in a single pass over the samples."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from runsplits.analysis.heart_rate import HeartRateAnalysis
from runsplits.analysis.metrics import GEODESIC, PairwiseMetrics
from runsplits.analysis.splits import fixed_splits
from runsplits.config import DEFAULT_SPLIT_DISTANCE_M, AnalysisSettings
from runsplits.models import RunSummary, Sample

logger = logging.getLogger(__name__)


def aggregate(samples: Sequence[Sample], *,
              name: Optional[str] = None,
              date: Optional[datetime] = None,
              max_heart_rate: Optional[int] = None,
              split_distance_m: float = DEFAULT_SPLIT_DISTANCE_M,
              metrics: PairwiseMetrics = GEODESIC) -> RunSummary:
    """Compute distance, duration, elevation gain, heart-rate stats and splits.

    Duration is the sum of consecutive sample time deltas. Elevation gain
    counts positive deltas only. Heart-rate min/max/average are None when no
    sample carries a reading.
    """
    hr_analysis = HeartRateAnalysis(max_heart_rate=max_heart_rate)

    total_distance = 0.0
    total_duration = 0.0
    elevation_gain = 0.0
    non_monotonic = 0

    min_hr: Optional[int] = None
    max_hr: Optional[int] = None

    def _track_hr(heart_rate):
        nonlocal min_hr, max_hr
        if min_hr is None or heart_rate < min_hr:
            min_hr = heart_rate
        if max_hr is None or heart_rate > max_hr:
            max_hr = heart_rate

    first_hr = samples[0].heart_rate if samples else None
    if first_hr is not None:
        _track_hr(first_hr)

    for i in range(1, len(samples)):
        previous_point = samples[i - 1]
        current_point = samples[i]

        total_distance += metrics.distance(previous_point, current_point)

        dt = metrics.duration(previous_point, current_point)
        total_duration += dt
        if dt < 0:
            non_monotonic += 1

        elevation = metrics.elevation_delta(previous_point, current_point)
        if elevation > 0:
            elevation_gain += elevation

        if current_point.heart_rate is not None:
            _track_hr(current_point.heart_rate)
            hr_analysis.add_heart_rate(current_point.heart_rate, max(dt, 0.0))

    if non_monotonic:
        logger.warning("%d sample pairs go back in time; durations summed as-is",
                       non_monotonic)

    # A lone first reading never gets a pair; count it with zero weight.
    if first_hr is not None and hr_analysis.readings == 0:
        hr_analysis.add_heart_rate(first_hr, 0.0)

    splits = fixed_splits(samples, split_distance_m=split_distance_m, metrics=metrics)
    logger.debug("Aggregated %d samples: %.1f m, %.1f s, %d splits",
                 len(samples), total_distance, total_duration, len(splits))

    return RunSummary(
        name=name,
        date=date,
        sample_count=len(samples),
        distance_m=total_distance,
        duration_s=total_duration,
        cumulative_elevation_gain_m=elevation_gain,
        min_heart_rate=min_hr,
        max_heart_rate=max_hr,
        average_heart_rate=hr_analysis.average_heart_rate,
        splits=splits,
        heart_rate_analysis=hr_analysis if max_heart_rate is not None else None,
    )


def aggregate_with_settings(samples: Sequence[Sample], settings: AnalysisSettings, *,
                            name: Optional[str] = None,
                            date: Optional[datetime] = None,
                            metrics: PairwiseMetrics = GEODESIC) -> RunSummary:
    """``aggregate`` with max heart rate and split length taken from *settings*."""
    return aggregate(
        samples,
        name=name,
        date=date,
        max_heart_rate=settings.max_heart_rate,
        split_distance_m=settings.split_distance_m,
        metrics=metrics,
    )
