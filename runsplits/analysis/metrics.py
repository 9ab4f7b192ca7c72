"""Pairwise sample metrics: distance, elevation delta and elapsed time.

Every engine in runsplits.analysis takes a ``metrics`` bundle so the
geodesic defaults can be swapped for planar ones.
"""

import math
from dataclasses import dataclass
from typing import Callable

from runsplits.models import Sample

EARTH_RADIUS_M = 6371000


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Compute distance in meters between two lat/lon points."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlam = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlam / 2) ** 2
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_m(a: Sample, b: Sample) -> float:
    return haversine_m(a.lat, a.lon, b.lat, b.lon)


def elevation_delta_m(a: Sample, b: Sample) -> float:
    """Elevation change from a to b; 0 when either sample has no elevation."""
    if a.elevation_m is None or b.elevation_m is None:
        return 0.0
    return b.elevation_m - a.elevation_m


def duration_s(a: Sample, b: Sample) -> float:
    return b.timestamp_s - a.timestamp_s


@dataclass(frozen=True)
class PairwiseMetrics:
    distance: Callable[[Sample, Sample], float]
    elevation_delta: Callable[[Sample, Sample], float]
    duration: Callable[[Sample, Sample], float]


GEODESIC = PairwiseMetrics(
    distance=distance_m,
    elevation_delta=elevation_delta_m,
    duration=duration_s,
)
