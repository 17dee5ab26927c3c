#!/usr/bin/env python3
"""
Track data model: a route whose stops carry arrival and departure times.
"""

from typing import Any, Dict, Iterator, Tuple

from .document import TRACK_CONTAINER, LoadedDocument
from .geometry import Position, path_length
from .ingestion import Ingested, IngestionLog, ingest_track
from .route import Route


class Track(Route):
    """
    A recorded GPX track.

    Time values are seconds elapsed since the first recorded timestamp.
    Time spent at a merged stop counts as resting time, so
    total_time() == resting_time() + travelling_time() always holds.
    """

    CONTAINER = TRACK_CONTAINER
    DEFAULT_NAME = "Unnamed Track"

    def _ingest(self, document: LoadedDocument, log: IngestionLog) -> Ingested:
        return ingest_track(document, self._merger, log)

    @property
    def arrived(self) -> Tuple[float, ...]:
        return tuple(wp.arrived for wp in self._waypoints)

    @property
    def departed(self) -> Tuple[float, ...]:
        return tuple(wp.departed for wp in self._waypoints)

    def _legs(self) -> Iterator[Tuple[Position, Position, float]]:
        """
        Yield (start, end, seconds travelling) for each pair of stops.

        Legs with no elapsed time are skipped; ingestion already warned about them.
        """
        self._require_positions()
        for prev, curr in zip(self._waypoints, self._waypoints[1:]):
            elapsed = curr.arrived - prev.departed
            if elapsed > 0:
                yield prev.position, curr.position, elapsed

    def total_time(self) -> float:
        self._require_positions()
        return self._waypoints[-1].departed

    def resting_time(self) -> float:
        self._require_positions()
        return sum(wp.departed - wp.arrived for wp in self._waypoints)

    def travelling_time(self) -> float:
        return self.total_time() - self.resting_time()

    def max_speed(self) -> float:
        """Highest speed between successive stops, in meters per second."""
        return max(
            (path_length(p1, p2) / elapsed for p1, p2, elapsed in self._legs()),
            default=0.0,
        )

    def average_speed(self, include_rests: bool = True) -> float:
        """
        Average speed over the track in meters per second.

        Args:
            include_rests: Divide by total time if True, else by travelling time

        Returns:
            Average speed, or 0 if no time elapsed
        """
        time = self.total_time() if include_rests else self.travelling_time()
        if time == 0:
            return 0.0
        return self.total_length() / time

    def _max_rate(self, climbing: bool) -> float:
        sign = 1.0 if climbing else -1.0
        rates = (
            sign * (p2.elevation - p1.elevation) / elapsed
            for p1, p2, elapsed in self._legs()
        )
        # A descent never counts as a negative ascent rate, and vice versa
        return max(0.0, max(rates, default=0.0))

    def max_rate_of_ascent(self) -> float:
        """Highest climb rate between successive stops, in meters per second."""
        return self._max_rate(climbing=True)

    def max_rate_of_descent(self) -> float:
        """Highest descent rate between successive stops, in meters per second."""
        return self._max_rate(climbing=False)

    def summary(self) -> Dict[str, Any]:
        """Return all route and track metrics keyed by name."""
        result = super().summary()
        result.update(
            {
                "total_time": self.total_time(),
                "resting_time": self.resting_time(),
                "travelling_time": self.travelling_time(),
                "max_speed": self.max_speed(),
                "average_speed": self.average_speed(include_rests=True),
                "average_moving_speed": self.average_speed(include_rests=False),
                "max_rate_of_ascent": self.max_rate_of_ascent(),
                "max_rate_of_descent": self.max_rate_of_descent(),
            }
        )
        return result
