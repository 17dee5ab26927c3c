#!/usr/bin/env python3
"""
Turns parsed GPX routes and tracks into deduplicated way-point sequences.
"""

from datetime import datetime, timezone
from typing import Any, List, NamedTuple, Optional, Tuple
import logging
import re

import gpxpy.gpx

from .document import LoadedDocument
from .exceptions import MalformedDocument
from .geometry import Position
from .merger import ProximityMerger

logger = logging.getLogger(__name__)

_INTEGER_TIME = re.compile(r"[+-]?\d+")


class Waypoint(NamedTuple):
    """A retained stop: its position, name and elapsed arrival/departure times."""

    position: Position
    name: str = ""
    arrived: float = 0.0  # seconds since the first timestamp
    departed: float = 0.0  # seconds since the first timestamp


class LogEntry(NamedTuple):
    """A single line of the ingestion log."""

    message: str


class Ingested(NamedTuple):
    """Result of ingesting one GPX route or track."""

    name: Optional[str]
    waypoints: Tuple[Waypoint, ...]
    log: Tuple[LogEntry, ...]


class IngestionLog:
    """Collects log entries for a single ingestion run."""

    def __init__(self) -> None:
        self._entries: List[LogEntry] = []

    def record(self, message: str, level: int = logging.DEBUG) -> None:
        self._entries.append(LogEntry(message))
        logger.log(level, message)

    @property
    def entries(self) -> Tuple[LogEntry, ...]:
        return tuple(self._entries)


def _to_position(point: gpxpy.gpx.GPXRoutePoint) -> Position:
    elevation = point.elevation if point.elevation is not None else 0.0
    return Position(
        latitude=point.latitude, longitude=point.longitude, elevation=elevation
    )


def _first(containers: List[Any], label: str, log: IngestionLog) -> Any:
    if len(containers) > 1:
        log.record(
            f"{len(containers)} {label} elements found, only the first is used.",
            logging.WARNING,
        )
    return containers[0]


def _clock_seconds(raw: str, parsed: Optional[datetime]) -> float:
    """
    Absolute clock value of a track point time, in seconds.

    An integer time is a count of seconds; anything else must be an
    xsd:dateTime that gpxpy could read. Naive datetimes are taken as UTC.
    """
    if _INTEGER_TIME.fullmatch(raw):
        return float(int(raw))
    if parsed is None:
        raise MalformedDocument(f"Unreadable 'time' value '{raw}'.")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.timestamp()


def ingest_route(
    document: LoadedDocument,
    merger: ProximityMerger,
    log: Optional[IngestionLog] = None,
) -> Ingested:
    """
    Extract the way-points of the first route in a checked GPX document.

    Consecutive points at the same location as the last retained point are
    dropped, names included.

    Args:
        document: Document checked and parsed by load_gpx
        merger: Proximity merger for the document's granularity
        log: Log to append to (a new one is started if omitted)

    Returns:
        Ingested route name, way-points and log entries
    """
    log = log or IngestionLog()
    route = _first(document.gpx.routes, "'rte'", log)

    if route.name:
        log.record(f"Route name is: {route.name}")

    waypoints: List[Waypoint] = []
    for point in route.points:
        position = _to_position(point)
        if waypoints and merger.should_merge(waypoints[-1].position, position):
            log.record(f"Position ignored: {position}")
            continue
        waypoints.append(Waypoint(position, point.name or ""))
        log.record(f"Position added: {position}")

    log.record(f"{len(waypoints)} positions added.")
    return Ingested(route.name or None, tuple(waypoints), log.entries)


def ingest_track(
    document: LoadedDocument,
    merger: ProximityMerger,
    log: Optional[IngestionLog] = None,
) -> Ingested:
    """
    Extract the timed way-points of the first track in a checked GPX document.

    All segments are read as one stream. A point at the same location as the
    last retained stop extends that stop's departure time instead of being
    added, which is what accumulates resting time.

    Args:
        document: Document checked and parsed by load_gpx
        merger: Proximity merger for the document's granularity
        log: Log to append to (a new one is started if omitted)

    Returns:
        Ingested track name, way-points and log entries

    Raises:
        MalformedDocument: If a point's time value cannot be read
    """
    log = log or IngestionLog()
    track = _first(document.gpx.tracks, "'trk'", log)

    if track.name:
        log.record(f"Track name is: {track.name}")

    points = [point for segment in track.segments for point in segment.points]

    waypoints: List[Waypoint] = []
    start_time = None
    for point, raw_time in zip(points, document.times):
        clock = _clock_seconds(raw_time, point.time)
        if start_time is None:
            start_time = clock
        elapsed = clock - start_time

        position = _to_position(point)
        if waypoints and merger.should_merge(waypoints[-1].position, position):
            # Still at the same stop, so it has not been departed yet
            waypoints[-1] = waypoints[-1]._replace(departed=elapsed)
            log.record(f"Position ignored: {position}")
            continue

        if waypoints and elapsed <= waypoints[-1].departed:
            log.record(
                f"No time elapsed between {waypoints[-1].position} and {position}, "
                f"leg ignored for speeds and rates.",
                logging.WARNING,
            )
        waypoints.append(Waypoint(position, point.name or "", elapsed, elapsed))
        log.record(f"Position added: {position} at time: {elapsed:g}")

    log.record(f"{len(waypoints)} positions added.")
    return Ingested(track.name or None, tuple(waypoints), log.entries)
