from dataclasses import dataclass


@dataclass
class GpxStatsConfig:
    """Configuration for the gpxstats CLI."""

    granularity: float = 5.0
    kind: str = "auto"
    report: bool = False
    log_level: str = "WARNING"
