"""
Nearest-neighbour descriptor matching for PlaneTrack.

Matchers return one `Correspondence` per reference descriptor, unfiltered.
Filtering is left to `planetrack.tracking.match_filter`.
"""

import logging

import cv2 as cv

from planetrack.config import FeatureConfig
from planetrack.tracking.results import Correspondence

logger = logging.getLogger(__name__)


class DescriptorMatcher:
    """
    Wraps an OpenCV `DescriptorMatcher` and converts its `DMatch` output.
    """

    def __init__(self, matcher):
        self.matcher = matcher

    def match(self, ref_descriptors, scene_descriptors):
        """
        Find the best scene descriptor for every reference descriptor.

        Args:
            ref_descriptors (numpy.ndarray): Reference descriptors (query set)
            scene_descriptors (numpy.ndarray): Scene descriptors (train set)

        Returns:
            list: Correspondences in reference order
        """
        if ref_descriptors is None or scene_descriptors is None:
            return []
        if len(ref_descriptors) == 0 or len(scene_descriptors) == 0:
            return []
        matches = self.matcher.match(ref_descriptors, scene_descriptors)
        return [Correspondence.from_dmatch(m) for m in matches]


class FlannMatcher(DescriptorMatcher):
    """KD-tree FLANN matcher for float descriptors (SURF, SIFT)."""

    def __init__(self, trees=None, checks=None):
        index_params = dict(algorithm=FeatureConfig.FLANN_INDEX_KDTREE,
                            trees=trees if trees is not None else FeatureConfig.FLANN_TREES)
        search_params = dict(checks=checks if checks is not None else FeatureConfig.FLANN_CHECKS)
        super().__init__(cv.FlannBasedMatcher(index_params, search_params))


class BruteForceMatcher(DescriptorMatcher):
    """Exhaustive matcher, used for binary descriptors (ORB)."""

    def __init__(self, norm=cv.NORM_HAMMING):
        super().__init__(cv.BFMatcher(norm, crossCheck=False))


def create_matcher(provider):
    """
    Pick the matcher suited to the provider's descriptor norm.
    """
    if provider.norm == cv.NORM_HAMMING:
        logger.info("Using brute-force Hamming matcher")
        return BruteForceMatcher(cv.NORM_HAMMING)
    logger.info("Using FLANN matcher")
    return FlannMatcher()
