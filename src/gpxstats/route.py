#!/usr/bin/env python3
"""
Route data model and route metrics.
"""

from typing import Any, Callable, Dict, Iterator, List, Tuple, Union
import logging

from .document import ROUTE_CONTAINER, LoadedDocument, load_gpx, read_source
from .exceptions import NotFound, PreconditionViolated
from .geometry import Position, distance_between, gradient, path_length
from .ingestion import Ingested, IngestionLog, LogEntry, Waypoint, ingest_route
from .merger import ProximityMerger

logger = logging.getLogger(__name__)


class Route:
    """A GPX route reduced to its distinct stops, with metrics over them."""

    CONTAINER = ROUTE_CONTAINER
    DEFAULT_NAME = "Unnamed Route"

    def __init__(self, source: str, is_path: bool, granularity: float):
        """
        Initializes a Route from GPX text or a GPX file.

        Args:
            source: GPX text, or a file path if is_path is True
            is_path: Whether source is a file path
            granularity: Distance in meters below which consecutive way-points
                are the same location

        Raises:
            SourceUnavailable: If the file cannot be read
            MalformedDocument: If a required GPX element or attribute is missing
            ValueError: If granularity is negative
        """
        self._merger = ProximityMerger(granularity)

        log = IngestionLog()
        text = read_source(source, is_path)
        if is_path:
            log.record(f"Source file '{source}' opened okay.")

        ingested = self._ingest(load_gpx(text, self.CONTAINER), log)

        self._name = ingested.name
        self._waypoints: Tuple[Waypoint, ...] = ingested.waypoints
        self._positions: Tuple[Position, ...] = tuple(
            wp.position for wp in self._waypoints
        )
        self._log: Tuple[LogEntry, ...] = ingested.log
        self._length = self._calculate_length()

        logger.debug(
            f"Loaded {type(self).__name__.lower()} '{self.name}' with "
            f"{len(self._positions)} positions, {self._length:.1f}m long"
        )

    @classmethod
    def from_file(cls, filename: str, granularity: float) -> "Route":
        """Load and parse a GPX file."""
        return cls(filename, is_path=True, granularity=granularity)

    def _ingest(self, document: LoadedDocument, log: IngestionLog) -> Ingested:
        return ingest_route(document, self._merger, log)

    def _calculate_length(self) -> float:
        return sum(
            (path_length(p1, p2) for p1, p2 in zip(self._positions, self._positions[1:])),
            0.0,
        )

    def _require_positions(self) -> Tuple[Position, ...]:
        if not self._positions:
            raise PreconditionViolated(f"{type(self).__name__} has no positions")
        return self._positions

    def _pairs(self) -> List[Tuple[Position, Position]]:
        positions = self._require_positions()
        return list(zip(positions, positions[1:]))

    @property
    def name(self) -> str:
        return self._name or self.DEFAULT_NAME

    @property
    def granularity(self) -> float:
        return self._merger.granularity

    @property
    def waypoints(self) -> Tuple[Waypoint, ...]:
        return self._waypoints

    @property
    def positions(self) -> Tuple[Position, ...]:
        return self._positions

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(wp.name for wp in self._waypoints)

    @property
    def report_entries(self) -> Tuple[LogEntry, ...]:
        return self._log

    def num_positions(self) -> int:
        return len(self._positions)

    def __len__(self) -> int:
        """Return number of positions in the route."""
        return len(self._positions)

    def __getitem__(self, index: int) -> Position:
        """Return the position at index; raises IndexError when out of range."""
        return self._positions[index]

    def __iter__(self) -> Iterator[Position]:
        return iter(self._positions)

    def is_same_location(self, pos1: Position, pos2: Position) -> bool:
        return self._merger.is_same_location(pos1, pos2)

    def total_length(self) -> float:
        """Sum of the 3D distances between successive positions, in meters."""
        self._require_positions()
        return self._length

    def net_length(self) -> float:
        """Surface distance between the first and last positions, in meters."""
        positions = self._require_positions()
        first, last = positions[0], positions[-1]
        if self.is_same_location(first, last):
            return 0.0
        return distance_between(first, last)

    def total_height_gain(self) -> float:
        """Sum of all climbs between successive positions; descents are ignored."""
        return sum(
            (max(0.0, p2.elevation - p1.elevation) for p1, p2 in self._pairs()), 0.0
        )

    def net_height_gain(self) -> float:
        positions = self._require_positions()
        return max(0.0, positions[-1].elevation - positions[0].elevation)

    def _extreme(self, pick: Callable, attribute: str) -> float:
        return pick(getattr(pos, attribute) for pos in self._require_positions())

    def min_latitude(self) -> float:
        return self._extreme(min, "latitude")

    def max_latitude(self) -> float:
        return self._extreme(max, "latitude")

    def min_longitude(self) -> float:
        return self._extreme(min, "longitude")

    def max_longitude(self) -> float:
        return self._extreme(max, "longitude")

    def min_elevation(self) -> float:
        return self._extreme(min, "elevation")

    def max_elevation(self) -> float:
        return self._extreme(max, "elevation")

    def _gradients(self) -> List[float]:
        return [gradient(p1, p2) for p1, p2 in self._pairs()]

    def max_gradient(self) -> float:
        """Steepest uphill gradient in degrees (0 for a single position)."""
        return max(self._gradients(), default=0.0)

    def min_gradient(self) -> float:
        """Steepest downhill gradient in degrees (0 for a single position)."""
        return min(self._gradients(), default=0.0)

    def steepest_gradient(self) -> float:
        """Largest absolute gradient in degrees (0 for a single position)."""
        return max((abs(g) for g in self._gradients()), default=0.0)

    def find_position(self, name: str) -> Position:
        """
        Find the first position with the given name.

        Raises:
            NotFound: If no way-point carries that name
        """
        for wp in self._waypoints:
            if wp.name == name:
                return wp.position
        raise NotFound(f"No position named '{name}' in {self.name}")

    def find_name_of(self, position: Position) -> str:
        """
        Find the name of the first way-point at the same location as position.

        Raises:
            NotFound: If no way-point is at that location
        """
        for wp in self._waypoints:
            if self.is_same_location(wp.position, position):
                return wp.name
        raise NotFound(f"Position {position} not found in {self.name}")

    def times_visited(self, target: Union[str, Position]) -> int:
        """
        Count the positions at the same location as target.

        Args:
            target: A way-point name or a Position

        Returns:
            Number of visits; 0 if target is a name that does not occur
        """
        if isinstance(target, str):
            try:
                target = self.find_position(target)
            except NotFound:
                return 0
        return sum(1 for pos in self._positions if self.is_same_location(pos, target))

    def build_report(self) -> str:
        """Return the ingestion log recorded while the route was loaded."""
        return "".join(f"{entry.message}\n" for entry in self._log)

    def summary(self) -> Dict[str, Any]:
        """Return all route metrics keyed by name."""
        return {
            "name": self.name,
            "positions": self.num_positions(),
            "total_length": self.total_length(),
            "net_length": self.net_length(),
            "total_height_gain": self.total_height_gain(),
            "net_height_gain": self.net_height_gain(),
            "min_latitude": self.min_latitude(),
            "max_latitude": self.max_latitude(),
            "min_longitude": self.min_longitude(),
            "max_longitude": self.max_longitude(),
            "min_elevation": self.min_elevation(),
            "max_elevation": self.max_elevation(),
            "max_gradient": self.max_gradient(),
            "min_gradient": self.min_gradient(),
            "steepest_gradient": self.steepest_gradient(),
        }
