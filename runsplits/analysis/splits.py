"""Fixed-distance splits (1 km by default) in a single forward pass.

Consecutive splits share their boundary sample: the last sample of split k
is also the first sample of split k+1, so the splits hold
``len(samples) + len(splits) - 1`` members in total.
"""

from __future__ import annotations

from typing import Sequence

from runsplits.analysis.metrics import GEODESIC, PairwiseMetrics
from runsplits.analysis.window import Window
from runsplits.config import DEFAULT_SPLIT_DISTANCE_M
from runsplits.models import Sample


def fixed_splits(samples: Sequence[Sample],
                 split_distance_m: float = DEFAULT_SPLIT_DISTANCE_M,
                 metrics: PairwiseMetrics = GEODESIC) -> list[Window]:
    """Cut the track into consecutive finalized windows of *split_distance_m*.

    The final split is whatever remains and may be shorter. Tracks with
    fewer than two samples have no splits.
    """
    if split_distance_m <= 0:
        raise ValueError(f"split_distance_m must be positive, got {split_distance_m}")

    splits: list[Window] = []
    current: Window | None = None
    last = len(samples) - 1

    for i in range(1, len(samples)):
        previous_point = samples[i - 1]
        current_point = samples[i]

        if current is None:
            current = Window(len(splits), metrics=metrics)

        if len(current) == 0:
            current.extend(previous_point)
        current.extend(current_point, previous_point)

        if current.distance_m >= split_distance_m or i == last:
            splits.append(current.finalize())
            current = None

    return splits
