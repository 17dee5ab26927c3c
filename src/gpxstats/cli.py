#!/usr/bin/env python3
"""
GPX statistics tool.
This script loads a GPX route or track, merges way-points closer than the
chosen granularity, and prints the derived metrics.
"""

from typing import Any, Dict, List, Optional
import argparse
import logging
import sys

from . import __version__
from .config import GpxStatsConfig
from .document import TRACK_CONTAINER, detect_kind, read_source
from .exceptions import MalformedDocument, SourceUnavailable
from .route import Route
from .track import Track

# Configure logging
logger = logging.getLogger("gpxstats")

_UNITS = {
    "length": "m",
    "height_gain": "m",
    "elevation": "m",
    "latitude": "°",
    "longitude": "°",
    "gradient": "°",
    "time": "s",
    "speed": "m/s",
    "rate_of": "m/s",
}


def create_argument_parser() -> argparse.ArgumentParser:
    """
    Create and configure the command-line argument parser.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        description="Route and track statistics for GPX files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "filename",
        type=str,
        nargs="?",
        help="GPX file to process",
    )
    kind = parser.add_mutually_exclusive_group()
    kind.add_argument(
        "--route",
        dest="kind",
        action="store_const",
        const="route",
        help="Read the file as a route (rte/rtept)",
    )
    kind.add_argument(
        "--track",
        dest="kind",
        action="store_const",
        const="track",
        help="Read the file as a track (trk/trkseg/trkpt)",
    )
    parser.set_defaults(kind="auto")
    parser.add_argument(
        "--granularity",
        type=float,
        default=5.0,
        help="Merge consecutive way-points closer than this many meters (default: 5)",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print the ingestion log after the metrics",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set logging level (default: WARNING)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"gpxstats {__version__}",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> GpxStatsConfig:
    return GpxStatsConfig(
        granularity=args.granularity,
        kind=args.kind,
        report=args.report,
        log_level=args.log_level,
    )


def setup_logging(config: GpxStatsConfig) -> None:
    """Setup logging configuration."""
    level = getattr(logging, config.log_level)

    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%H:%M:%S"
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    # Configure the root logger so all modules inherit the configuration
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(console_handler)


def load_document(filename: str, config: GpxStatsConfig) -> Route:
    """
    Load a GPX file as a Route or Track.

    With kind "auto" the file is read as a track if it holds a 'trk'
    element, else as a route.

    Raises:
        SourceUnavailable: If the file cannot be read
        MalformedDocument: If the file is not a usable GPX document
    """
    kind = config.kind
    if kind != "auto":
        cls = Track if kind == "track" else Route
        return cls.from_file(filename, granularity=config.granularity)

    text = read_source(filename, is_path=True)
    cls = Track if detect_kind(text) == TRACK_CONTAINER else Route
    logger.debug(f"Detected document kind: {cls.__name__.lower()}")
    return cls(text, is_path=False, granularity=config.granularity)


def _unit(key: str) -> str:
    for fragment, unit in _UNITS.items():
        if fragment in key:
            return unit
    return ""


def format_summary(summary: Dict[str, Any]) -> List[str]:
    """Render a metrics summary as aligned 'label: value unit' lines."""
    lines = [f"{summary['name']} ({summary['positions']} positions)"]
    metrics = {k: v for k, v in summary.items() if k not in ("name", "positions")}
    width = max((len(k) for k in metrics), default=0)
    for key, value in metrics.items():
        label = key.replace("_", " ")
        unit = _unit(key)
        lines.append(f"  {label:<{width}} : {value:.3f} {unit}".rstrip())
    return lines


def main(argv: Optional[List[str]] = None) -> int:
    """
    Parses command-line arguments, loads the GPX file and prints its metrics.

    Returns:
        Process exit status
    """
    parser = create_argument_parser()
    args = parser.parse_args(argv)

    if not args.filename:
        parser.print_help()
        return 1

    config = config_from_args(args)
    setup_logging(config)

    try:
        document = load_document(args.filename, config)
    except SourceUnavailable as e:
        logger.error(f"Cannot read GPX file: {e}")
        return 1
    except MalformedDocument as e:
        logger.error(f"Invalid GPX file: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Invalid option: {e}")
        return 1

    logger.info(f"Loaded {args.filename} with {len(document)} positions")

    for line in format_summary(document.summary()):
        print(line)

    if config.report:
        print()
        print(document.build_report(), end="")

    return 0


if __name__ == "__main__":
    sys.exit(main())
