#!/usr/bin/env python3
"""
gpxstats - statistics for GPX routes and tracks.

This package reads GPX route plans and recorded tracks, merges way-points
that are closer together than a chosen granularity, and derives length,
elevation, gradient, time and speed metrics from the result.
"""
import importlib.metadata

__version__ = importlib.metadata.version("gpxstats")

# Import main classes for public API
from .exceptions import (
    GpxStatsError,
    MalformedDocument,
    NotFound,
    PreconditionViolated,
    SourceUnavailable,
)
from .geometry import Position, distance_between
from .ingestion import LogEntry, Waypoint
from .merger import ProximityMerger
from .route import Route
from .track import Track

__all__ = [
    "GpxStatsError",
    "MalformedDocument",
    "NotFound",
    "PreconditionViolated",
    "SourceUnavailable",
    "Position",
    "distance_between",
    "LogEntry",
    "Waypoint",
    "ProximityMerger",
    "Route",
    "Track",
]
