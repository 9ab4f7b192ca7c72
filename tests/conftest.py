import math

import pytest

from runsplits.analysis.metrics import PairwiseMetrics, duration_s, elevation_delta_m
from runsplits.models import Sample


def _planar_distance(a, b):
    # lat/lon read as plain x/y meters
    return math.hypot(b.lat - a.lat, b.lon - a.lon)


PLANAR = PairwiseMetrics(
    distance=_planar_distance,
    elevation_delta=elevation_delta_m,
    duration=duration_s,
)


@pytest.fixture
def planar():
    return PLANAR


@pytest.fixture
def line_track():
    """Build a straight track: n points, step_m apart in space, step_s apart in time."""
    def _build(n, step_m=100.0, step_s=10.0, heart_rate=None, elevations=None):
        samples = []
        for i in range(n):
            samples.append(Sample(
                lat=0.0,
                lon=i * step_m,
                timestamp_s=i * step_s,
                elevation_m=elevations[i] if elevations is not None else None,
                heart_rate=heart_rate,
            ))
        return samples

    return _build


@pytest.fixture
def track_from_steps():
    """Build a straight track from per-step (distance_m, seconds) pairs."""
    def _build(steps, heart_rates=None):
        lon = 0.0
        t = 0.0
        samples = [Sample(lat=0.0, lon=lon, timestamp_s=t,
                          heart_rate=heart_rates[0] if heart_rates else None)]
        for i, (dist, secs) in enumerate(steps, start=1):
            lon += dist
            t += secs
            samples.append(Sample(lat=0.0, lon=lon, timestamp_s=t,
                                  heart_rate=heart_rates[i] if heart_rates else None))
        return samples

    return _build
