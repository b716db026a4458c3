"""
Adaptive match quality filtering.

A fixed absolute distance threshold does not survive changes in lighting and
texture, so the threshold is scaled by the best match of the current frame.
A small floor keeps it from collapsing when all matches are near-identical.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from planetrack.config import MatchFilterConfig
from planetrack.tracking.results import Correspondence

logger = logging.getLogger(__name__)


def distance_stats(correspondences: Sequence[Correspondence]) -> Tuple[float, float]:
    """
    Scan the correspondences once and return `(min_dist, max_dist)`.

    An empty sequence yields `(0.0, 0.0)`.
    """
    if len(correspondences) == 0:
        return 0.0, 0.0

    min_dist = max_dist = correspondences[0].distance
    for match in correspondences:
        if match.distance < min_dist:
            min_dist = match.distance
        if match.distance > max_dist:
            max_dist = match.distance
    return min_dist, max_dist


def adaptive_threshold(min_dist: float,
                       multiplier: Optional[float] = None,
                       floor: Optional[float] = None) -> float:
    """
    Distance threshold for one frame: `max(multiplier * min_dist, floor)`.

    Args:
        min_dist (float): Smallest match distance of the frame
        multiplier (float): Scale applied to `min_dist` (config default if None)
        floor (float): Lower bound of the threshold (config default if None)
    """
    if multiplier is None:
        multiplier = MatchFilterConfig.DISTANCE_MULTIPLIER
    if floor is None:
        floor = MatchFilterConfig.DISTANCE_FLOOR
    return max(multiplier * min_dist, floor)


def filter_matches(correspondences: Sequence[Correspondence],
                   multiplier: Optional[float] = None,
                   floor: Optional[float] = None) -> List[Correspondence]:
    """
    Keep the correspondences whose distance is within the adaptive threshold.

    Args:
        correspondences: Every correspondence of the frame, one per reference descriptor
        multiplier (float): Scale applied to the best distance (config default if None)
        floor (float): Lower bound of the threshold (config default if None)

    Returns:
        list: The good correspondences, in input order. May be empty.
    """
    min_dist, max_dist = distance_stats(correspondences)
    threshold = adaptive_threshold(min_dist, multiplier, floor)

    good = [m for m in correspondences if m.distance <= threshold]

    logger.debug(f"Match distances: min={min_dist:.4f} max={max_dist:.4f} "
                 f"threshold={threshold:.4f} kept={len(good)}/{len(correspondences)}")
    return good
