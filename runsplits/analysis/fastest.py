"""Fastest-interval discovery: multi-window scan of a GPS track.

Every sample may start the eventual fastest interval, so the scan keeps one
growing window per start index and extends all of them with each new
sample. A window is finalized the moment its distance reaches the target,
which makes it the shortest (by sample count) interval from that start.
The caller picks the winner with ``fastest()``.

Cost is O(n^2) in the number of samples, fine for single runs of a few
thousand points. ``discover_windows_async`` runs the same pass on a worker
thread for callers that should not block.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from typing import Callable, Optional, Sequence

from runsplits.analysis.metrics import GEODESIC, PairwiseMetrics
from runsplits.analysis.window import Window, fastest
from runsplits.config import DEFAULT_MAX_WORKERS, AnalysisSettings
from runsplits.models import Sample

logger = logging.getLogger(__name__)

FASTEST_EFFORTS = {
    "1k": 1_000.0,
    "5k": 5_000.0,
    "10k": 10_000.0,
    "half_marathon": 21_097.5,
    "marathon": 42_195.0,
}

_executor: ThreadPoolExecutor | None = None
_executor_lock = threading.Lock()


class DiscoveryCancelled(CancelledError):
    """Raised inside a pass whose stop event was set."""


def total_distance_m(samples: Sequence[Sample],
                     metrics: PairwiseMetrics = GEODESIC) -> float:
    # Plain += as in Window.extend; sum() rounds differently from 3.12 on.
    total = 0.0
    for a, b in zip(samples, samples[1:]):
        total += metrics.distance(a, b)
    return total


def discover_windows(samples: Sequence[Sample], target_m: float,
                     metrics: PairwiseMetrics = GEODESIC,
                     stop_event: threading.Event | None = None) -> set[Window]:
    """Find, for every feasible start index, the first window reaching *target_m*.

    Returns a set of finalized windows, one per start index whose remaining
    track covers the target. Empty when the whole track is shorter than the
    target.
    """
    if target_m <= 0:
        raise ValueError(f"target distance must be positive, got {target_m}")

    if total_distance_m(samples, metrics) < target_m:
        logger.debug("Track shorter than %.1f m, no intervals", target_m)
        return set()

    uncompleted: dict[int, Window] = {}
    completed: set[Window] = set()

    for index, point in enumerate(samples):
        if stop_event is not None and stop_event.is_set():
            raise DiscoveryCancelled(f"discovery for {target_m} m stopped at sample {index}")

        uncompleted[index] = Window(index, metrics=metrics)

        done = []
        for start, window in uncompleted.items():
            window.extend(point)
            if window.distance_m >= target_m:
                done.append(start)

        for start in done:
            completed.add(uncompleted.pop(start).finalize())

    logger.debug("Discovered %d windows of %.1f m over %d samples (%d unreachable)",
                 len(completed), target_m, len(samples), len(uncompleted))
    return completed


def fastest_interval(samples: Sequence[Sample], target_m: float,
                     metrics: PairwiseMetrics = GEODESIC) -> Window | None:
    """The quickest contiguous interval covering *target_m*, or None."""
    return fastest(discover_windows(samples, target_m, metrics=metrics))


def fastest_efforts(samples: Sequence[Sample],
                    metrics: PairwiseMetrics = GEODESIC) -> dict[str, Optional[float]]:
    """Fastest duration in seconds for each named distance in FASTEST_EFFORTS."""
    efforts = {}
    for name, target_m in FASTEST_EFFORTS.items():
        best = fastest_interval(samples, target_m, metrics=metrics)
        efforts[name] = best.duration_s if best is not None else None
    return efforts


# ------------------------------------------------------------------
# Background execution
# ------------------------------------------------------------------


def make_executor(settings: AnalysisSettings | None = None) -> ThreadPoolExecutor:
    """Worker pool sized from ``analysis.max_workers``."""
    workers = settings.max_workers if settings else DEFAULT_MAX_WORKERS
    return ThreadPoolExecutor(max_workers=workers, thread_name_prefix="runsplits-discovery")


def _default_executor() -> ThreadPoolExecutor:
    global _executor
    with _executor_lock:
        if _executor is None:
            _executor = make_executor()
        return _executor


class DiscoveryJob:
    """Handle on a background discovery pass."""

    def __init__(self, future: Future, stop_event: threading.Event):
        self.future = future
        self._stop_event = stop_event

    def result(self, timeout: float | None = None) -> set[Window]:
        return self.future.result(timeout=timeout)

    def cancel(self) -> bool:
        """Stop the pass. The completion callback will not fire.

        True unless the pass had already finished.
        """
        was_done = self.future.done()
        self._stop_event.set()
        return self.future.cancel() or not was_done

    def cancelled(self) -> bool:
        if self.future.cancelled():
            return True
        return self.future.done() and isinstance(self.future.exception(), CancelledError)

    def done(self) -> bool:
        return self.future.done()


def discover_windows_async(samples: Sequence[Sample], target_m: float,
                           on_complete: Callable[[set[Window]], None] | None = None,
                           executor: Executor | None = None,
                           metrics: PairwiseMetrics = GEODESIC) -> DiscoveryJob:
    """Run ``discover_windows`` off the caller's thread.

    *on_complete* receives exactly what the synchronous call returns. It is
    called from the worker thread, and never for a cancelled or failed pass.
    """
    if target_m <= 0:
        raise ValueError(f"target distance must be positive, got {target_m}")

    samples = tuple(samples)
    stop_event = threading.Event()
    pool = executor or _default_executor()
    future = pool.submit(discover_windows, samples, target_m, metrics, stop_event)

    if on_complete is not None:
        def _deliver(fut: Future) -> None:
            if fut.cancelled():
                return
            exc = fut.exception()
            if exc is not None:
                if not isinstance(exc, CancelledError):
                    logger.error("Discovery for %.1f m failed: %s", target_m, exc)
                return
            on_complete(fut.result())

        future.add_done_callback(_deliver)

    return DiscoveryJob(future, stop_event)
