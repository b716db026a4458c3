import logging
from typing import Optional

from planetrack.config import MatchFilterConfig

logger = logging.getLogger(__name__)


class PresenceGate:
    """
    Decides from the good match count whether the target is present in a frame.

    The count must be strictly above `min_matches`. Below that the point set
    is too small or too noisy to hand to the robust estimator.
    """

    def __init__(self, min_matches: Optional[int] = None) -> None:
        self.min_matches = (min_matches if min_matches is not None
                            else MatchFilterConfig.MIN_GOOD_MATCHES)
        self.last_count = 0
        """ Good match count of the most recent frame, for the status overlay """

    def passes(self, count: int) -> bool:
        """
        Return True if `count` good matches are enough to attempt a homography.
        """
        self.last_count = count
        logger.debug(f"Good matches: {count}")
        return count > self.min_matches
