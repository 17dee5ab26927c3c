from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional, Sequence, Tuple

import pytest

GPX_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<gpx version="1.1" creator="gpxstats-tests" '
    'xmlns="http://www.topografix.com/GPX/1/1">\n'
)

EPOCH = datetime(2024, 5, 1, 9, 0, 0, tzinfo=timezone.utc)


def _point(tag: str, lat, lon, ele=None, name=None, time=None) -> str:
    body = ""
    if ele is not None:
        body += f"<ele>{ele}</ele>"
    if time is not None:
        body += f"<time>{time}</time>"
    if name is not None:
        body += f"<name>{name}</name>"
    return f'<{tag} lat="{lat}" lon="{lon}">{body}</{tag}>\n'


def timestamp(seconds: float) -> str:
    """ISO-8601 timestamp the given number of seconds after EPOCH."""
    return (EPOCH + timedelta(seconds=seconds)).strftime("%Y-%m-%dT%H:%M:%SZ")


def route_gpx(points: Iterable[Tuple], name: Optional[str] = None) -> str:
    """
    Build a GPX route document.

    Each point is (lat, lon), (lat, lon, ele) or (lat, lon, ele, name).
    """
    parts = [GPX_HEADER, "<rte>\n"]
    if name is not None:
        parts.append(f"<name>{name}</name>\n")
    for point in points:
        lat, lon, ele, pname = (tuple(point) + (None, None))[:4]
        parts.append(_point("rtept", lat, lon, ele, pname))
    parts.append("</rte>\n</gpx>\n")
    return "".join(parts)


def track_gpx(
    segments: Sequence[Iterable[Tuple]],
    name: Optional[str] = None,
    segment_names: bool = False,
    integer_times: bool = False,
) -> str:
    """
    Build a GPX track document.

    Each point is (lat, lon, ele, seconds) or (lat, lon, ele, seconds, name);
    seconds are offsets from EPOCH, or written verbatim as whole seconds when
    integer_times is set.
    """
    parts = [GPX_HEADER, "<trk>\n"]
    if name is not None:
        parts.append(f"<name>{name}</name>\n")
    for index, segment in enumerate(segments):
        parts.append("<trkseg>\n")
        if segment_names:
            parts.append(f"<name>Segment {index}</name>\n")
        for point in segment:
            lat, lon, ele, seconds, pname = (tuple(point) + (None,))[:5]
            time = str(int(seconds)) if integer_times else timestamp(seconds)
            parts.append(_point("trkpt", lat, lon, ele, pname, time))
        parts.append("</trkseg>\n")
    parts.append("</trk>\n</gpx>\n")
    return "".join(parts)


@pytest.fixture
def abc_route_text() -> str:
    """A at the origin, B on top of A, C one degree of longitude east."""
    return route_gpx(
        [(0.0, 0.0, 0.0, "A"), (0.0, 0.0, 0.0, "B"), (0.0, 1.0, 0.0, "C")],
        name="ABC",
    )


@pytest.fixture
def resting_track_text() -> str:
    """Arrive at A at t=0, still at A at t=5, reach C at t=65."""
    return track_gpx(
        [[(0.0, 0.0, 0.0, 0, "A"), (0.0, 0.0, 0.0, 5), (0.0, 1.0, 0.0, 65, "C")]],
        name="Resting",
    )
