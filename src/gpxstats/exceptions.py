#!/usr/bin/env python3
"""
Exception types raised while loading GPX documents and querying their metrics.
"""


class GpxStatsError(Exception):
    """Base class for all gpxstats errors."""


class SourceUnavailable(GpxStatsError, OSError):
    """The GPX source file could not be opened or read."""


class MalformedDocument(GpxStatsError, ValueError):
    """A required GPX element or attribute is missing or invalid."""


class NotFound(GpxStatsError, LookupError):
    """A name or position lookup matched no way-point."""


class PreconditionViolated(GpxStatsError, RuntimeError):
    """A metric was requested on an empty way-point sequence."""
