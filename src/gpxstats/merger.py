#!/usr/bin/env python3
"""
Proximity merging of consecutive way-points.
"""

import logging

from .geometry import Position, distance_between

logger = logging.getLogger(__name__)


class ProximityMerger:
    """Decides whether two positions are the same location for a fixed granularity."""

    def __init__(self, granularity: float):
        """
        Args:
            granularity: Distance threshold in meters. Positions strictly
                closer than this are the same location.

        Raises:
            ValueError: If granularity is negative
        """
        if granularity < 0:
            raise ValueError(f"Granularity must not be negative, got {granularity}")
        self._granularity = float(granularity)

    @property
    def granularity(self) -> float:
        return self._granularity

    def is_same_location(self, pos1: Position, pos2: Position) -> bool:
        """Return True if the surface distance is strictly below the granularity."""
        return distance_between(pos1, pos2) < self._granularity

    def should_merge(self, retained: Position, candidate: Position) -> bool:
        """
        Decide whether a raw way-point folds into the last retained one.

        Args:
            retained: The last position kept in the sequence
            candidate: The next raw position read from the document

        Returns:
            True if the candidate is a duplicate of the retained position
        """
        merge = self.is_same_location(retained, candidate)
        if merge:
            logger.debug(
                f"Merging {candidate} into {retained} "
                f"(granularity: {self._granularity}m)"
            )
        return merge
