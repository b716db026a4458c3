import logging
from typing import Optional

import cv2 as cv
import numpy as np
import numpy.typing as npt

from planetrack.tracking.homography import is_usable_homography
from planetrack.tracking.results import TrackingResult, found, not_found

logger = logging.getLogger(__name__)


def project_boundary(
    corners: npt.NDArray[np.float32],
    homography: Optional[npt.NDArray[np.float64]],
    good_matches: int = 0,
) -> TrackingResult:
    """
    Project the reference corners into the frame through `homography`.
    The corner order is kept, so consecutive points remain adjacent edges of the outline.
    A missing or degenerate homography, or a failing projection, gives `NOT_FOUND`.
    """
    try:
        if not is_usable_homography(homography):
            return not_found(good_matches)
        pts = np.asarray(corners, dtype=np.float32).reshape(-1, 1, 2)
        projected = cv.perspectiveTransform(pts, np.asarray(homography, dtype=np.float64))
    except (cv.error, ValueError, TypeError, FloatingPointError, OverflowError,
            np.linalg.LinAlgError) as e:
        logger.debug(f"Could not project target boundary: {e}")
        return not_found(good_matches)

    if projected is None:
        return not_found(good_matches)

    projected = projected.reshape(-1, 2)
    if not np.all(np.isfinite(projected)):
        return not_found(good_matches)

    return found(projected, good_matches)
