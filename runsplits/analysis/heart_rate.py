"""Heart-rate accumulation: time-weighted average and time in zone.

Zones are fractions of the athlete's maximum heart rate, which is passed in
explicitly. Without a max heart rate only the average is tracked.
"""

from __future__ import annotations

from typing import Optional

# Lower bound of each zone as a fraction of max HR. Anything below Z1 is "rest".
DEFAULT_ZONE_BOUNDS = {
    "Z1": 0.50,
    "Z2": 0.60,
    "Z3": 0.70,
    "Z4": 0.80,
    "Z5": 0.90,
}

REST_ZONE = "rest"


class HeartRateAnalysis:
    def __init__(self, max_heart_rate: Optional[int] = None,
                 zone_bounds: dict[str, float] | None = None):
        if max_heart_rate is not None and max_heart_rate <= 0:
            raise ValueError(f"max_heart_rate must be positive, got {max_heart_rate}")

        self.max_heart_rate = max_heart_rate
        bounds = zone_bounds or DEFAULT_ZONE_BOUNDS
        # Highest threshold first so zone_for() can stop at the first match.
        self._zones = sorted(bounds.items(), key=lambda kv: kv[1], reverse=True)

        self.readings = 0
        self.total_time_s = 0.0
        self._weighted_sum = 0.0
        self._plain_sum = 0.0
        self._time_in_zones = {name: 0.0 for name in bounds}
        self._time_in_zones[REST_ZONE] = 0.0

    def zone_for(self, heart_rate: float) -> str | None:
        """Zone name for a reading, or None without a max heart rate."""
        if self.max_heart_rate is None:
            return None
        fraction = heart_rate / self.max_heart_rate
        for name, lower in self._zones:
            if fraction >= lower:
                return name
        return REST_ZONE

    def add_heart_rate(self, heart_rate: float, dt: float) -> None:
        """Record a reading held for *dt* seconds."""
        if dt < 0:
            raise ValueError(f"dt must be non-negative, got {dt}")

        self.readings += 1
        self._plain_sum += heart_rate
        self._weighted_sum += heart_rate * dt
        self.total_time_s += dt

        zone = self.zone_for(heart_rate)
        if zone is not None:
            self._time_in_zones[zone] += dt

    @property
    def average_heart_rate(self) -> Optional[float]:
        """Time-weighted mean; plain mean when no time has elapsed."""
        if self.readings == 0:
            return None
        if self.total_time_s > 0:
            return round(self._weighted_sum / self.total_time_s, 2)
        return round(self._plain_sum / self.readings, 2)

    @property
    def time_in_zones(self) -> dict[str, float]:
        return dict(self._time_in_zones)

    @property
    def zone_percentages(self) -> Optional[dict[str, float]]:
        if self.max_heart_rate is None or self.total_time_s <= 0:
            return None
        return {
            name: round(100.0 * secs / self.total_time_s, 1)
            for name, secs in self._time_in_zones.items()
        }
