#!/usr/bin/env python3
"""
Reading GPX sources and checking the structure the ingestion pipeline needs.

The element tree is walked once to confirm that the required containers,
way-points and attributes exist, so that failures name the missing piece.
The document itself is then parsed into a gpxpy model.
"""

from typing import Iterator, List, NamedTuple, Tuple
import logging
import xml.etree.ElementTree as ET

import gpxpy
import gpxpy.gpx

from .exceptions import MalformedDocument, SourceUnavailable

logger = logging.getLogger(__name__)

ROUTE_CONTAINER = "rte"
TRACK_CONTAINER = "trk"

_POINT_TAGS = {ROUTE_CONTAINER: "rtept", TRACK_CONTAINER: "trkpt"}


def read_source(source: str, is_path: bool) -> str:
    """
    Return the GPX text for a source.

    Args:
        source: GPX text, or a path to a GPX file if is_path is True
        is_path: Whether source is a file path

    Returns:
        The whole document as a string

    Raises:
        SourceUnavailable: If the file cannot be opened or decoded
    """
    if not is_path:
        return source

    logger.debug(f"Reading GPX file: {source}")
    try:
        with open(source, "r", encoding="utf-8") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailable(f"Error opening source file '{source}': {e}") from e


def _local_name(tag: str) -> str:
    """Strip an XML namespace from a tag name."""
    return tag.rsplit("}", 1)[-1]


def _children(element: ET.Element, name: str) -> List[ET.Element]:
    return [child for child in element if _local_name(child.tag) == name]


def _parse_tree(text: str) -> ET.Element:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise MalformedDocument(f"No 'gpx' element: document is not valid XML ({e})") from e

    if _local_name(root.tag) != "gpx":
        raise MalformedDocument(
            f"No 'gpx' element: root element is '{_local_name(root.tag)}'"
        )
    return root


def _container_points(container: ET.Element, kind: str) -> Iterator[ET.Element]:
    if kind == TRACK_CONTAINER:
        for segment in _children(container, "trkseg"):
            yield from _children(segment, "trkpt")
    else:
        yield from _children(container, "rtept")


def detect_kind(text: str) -> str:
    """
    Guess whether a document holds a track or a route.

    Returns:
        TRACK_CONTAINER if the root holds a 'trk' element, else ROUTE_CONTAINER

    Raises:
        MalformedDocument: If the text is not a GPX document
    """
    root = _parse_tree(text)
    if _children(root, TRACK_CONTAINER):
        return TRACK_CONTAINER
    return ROUTE_CONTAINER


def check_structure(text: str, kind: str) -> Tuple[str, ...]:
    """
    Check that a document holds everything needed to ingest it.

    Args:
        text: GPX document text
        kind: ROUTE_CONTAINER or TRACK_CONTAINER

    Returns:
        The raw text of each track point's 'time' element, in document
        order (empty for routes)

    Raises:
        MalformedDocument: Naming the first missing element or attribute
    """
    point_tag = _POINT_TAGS[kind]
    root = _parse_tree(text)

    containers = _children(root, kind)
    if not containers:
        raise MalformedDocument(f"No '{kind}' element.")

    points = list(_container_points(containers[0], kind))
    if not points:
        raise MalformedDocument(f"No '{point_tag}' element.")

    times: List[str] = []
    for index, point in enumerate(points):
        for attribute in ("lat", "lon"):
            if point.get(attribute) is None:
                raise MalformedDocument(
                    f"No '{attribute}' attribute in '{point_tag}' {index}."
                )
        if kind == TRACK_CONTAINER:
            time_elements = _children(point, "time")
            if not time_elements:
                raise MalformedDocument(f"No 'time' element in '{point_tag}' {index}.")
            times.append((time_elements[0].text or "").strip())
    return tuple(times)


class LoadedDocument(NamedTuple):
    """A checked GPX document: the gpxpy model plus the raw track point times."""

    gpx: gpxpy.gpx.GPX
    times: Tuple[str, ...]


def load_gpx(text: str, kind: str) -> LoadedDocument:
    """
    Check and parse a GPX document.

    Args:
        text: GPX document text
        kind: ROUTE_CONTAINER or TRACK_CONTAINER

    Returns:
        Parsed gpxpy model and the raw track point times

    Raises:
        MalformedDocument: If the structure is incomplete or gpxpy rejects it
    """
    times = check_structure(text, kind)
    try:
        gpx = gpxpy.parse(text)
    except gpxpy.gpx.GPXException as e:
        raise MalformedDocument(f"Invalid GPX document: {e}") from e
    return LoadedDocument(gpx, times)
