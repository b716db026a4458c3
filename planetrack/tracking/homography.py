"""
Robust homography estimation between the reference image and a frame.

The fit itself is RANSAC from OpenCV. This module only guards its inputs and
outputs: too few pairs, a failed fit or a singular matrix all come back as
None so the caller can report the frame as not found.
"""

import logging
from typing import Optional

import cv2 as cv
import numpy as np
import numpy.typing as npt

from planetrack.config import HomographyConfig

logger = logging.getLogger(__name__)


def is_usable_homography(H: Optional[npt.NDArray[np.float64]]) -> bool:
    """
    Check that `H` is a finite, invertible 3x3 matrix.
    """
    if H is None:
        return False
    H = np.asarray(H, dtype=np.float64)
    if H.shape != (3, 3) or not np.all(np.isfinite(H)):
        return False
    return abs(float(np.linalg.det(H))) > HomographyConfig.SINGULAR_DET_EPS


class RansacHomographyEstimator:
    """
    Fits a reference -> scene homography that tolerates outlier pairs.
    """

    def __init__(self, reproj_threshold=None, confidence=None, max_iters=None):
        """
        Initialize the estimator.

        Args:
            reproj_threshold (float): Max reprojection error (px) for an inlier
            confidence (float): RANSAC confidence level
            max_iters (int): RANSAC iteration limit
        """
        self.reproj_threshold = (reproj_threshold if reproj_threshold is not None
                                 else HomographyConfig.RANSAC_REPROJ_THRESHOLD)
        self.confidence = (confidence if confidence is not None
                           else HomographyConfig.RANSAC_CONFIDENCE)
        self.max_iters = (max_iters if max_iters is not None
                          else HomographyConfig.RANSAC_MAX_ITERS)
        self.last_inlier_count = 0

    def fit(self, points_ref, points_scene):
        """
        Fit a homography mapping `points_ref` onto `points_scene`.

        Args:
            points_ref (numpy.ndarray): Nx2 reference points
            points_scene (numpy.ndarray): Nx2 scene points, same order

        Returns:
            numpy.ndarray or None: 3x3 homography, or None if no usable fit exists
        """
        self.last_inlier_count = 0
        points_ref = np.asarray(points_ref, dtype=np.float32).reshape(-1, 2)
        points_scene = np.asarray(points_scene, dtype=np.float32).reshape(-1, 2)

        if len(points_ref) != len(points_scene):
            raise ValueError(f"Point count mismatch: {len(points_ref)} vs {len(points_scene)}")
        if len(points_ref) < HomographyConfig.MIN_POINT_PAIRS:
            return None

        try:
            H, mask = cv.findHomography(
                points_ref, points_scene, cv.RANSAC,
                ransacReprojThreshold=self.reproj_threshold,
                maxIters=self.max_iters,
                confidence=self.confidence
            )
        except cv.error as e:
            logger.debug(f"findHomography failed: {e}")
            return None

        if not is_usable_homography(H):
            logger.debug("Discarding unusable homography")
            return None

        if mask is not None:
            self.last_inlier_count = int(np.count_nonzero(mask))
        logger.debug(f"Homography inliers: {self.last_inlier_count}/{len(points_ref)}")
        return H
