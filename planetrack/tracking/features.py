"""
Keypoint detection and descriptor extraction for PlaneTrack.

Each provider wraps one OpenCV feature algorithm behind the same `extract`
call. The algorithm is chosen once at startup with `create_provider`.
"""

import logging
from abc import ABC, abstractmethod

import cv2 as cv

from planetrack.config import FeatureConfig
from planetrack.exceptions import SetupError

logger = logging.getLogger(__name__)


class DescriptorProvider(ABC):
    """
    Produces keypoints and index-aligned descriptors for an image.
    """

    name = "base"

    norm = cv.NORM_L2
    """ Distance norm of the descriptors, used to pick a matcher """

    def __init__(self, detector):
        self.detector = detector

    def extract(self, image):
        """
        Detect keypoints and compute their descriptors.

        Args:
            image (numpy.ndarray): Grayscale image

        Returns:
            tuple: (keypoints, descriptors). `descriptors` is None when no keypoint was found.
        """
        keypoints, descriptors = self.detector.detectAndCompute(image, None)
        return list(keypoints), descriptors

    @classmethod
    @abstractmethod
    def create(cls) -> "DescriptorProvider":
        """Build the provider with its configured parameters."""


class SurfProvider(DescriptorProvider):
    """SURF features. Needs an opencv-contrib build with the nonfree modules enabled."""

    name = "surf"

    @classmethod
    def create(cls):
        xfeatures2d = getattr(cv, "xfeatures2d", None)
        if xfeatures2d is None:
            raise SetupError("SURF needs opencv-contrib-python (cv2.xfeatures2d is missing)")
        try:
            detector = xfeatures2d.SURF_create(FeatureConfig.SURF_HESSIAN_THRESHOLD)
        except cv.error as e:
            raise SetupError(f"SURF is not available in this OpenCV build: {e}") from e
        return cls(detector)


class SiftProvider(DescriptorProvider):
    """SIFT features."""

    name = "sift"

    @classmethod
    def create(cls):
        detector = cv.SIFT_create(
            nfeatures=FeatureConfig.SIFT_N_FEATURES,
            contrastThreshold=FeatureConfig.SIFT_CONTRAST_THRESHOLD,
            edgeThreshold=FeatureConfig.SIFT_EDGE_THRESHOLD
        )
        return cls(detector)


class OrbProvider(DescriptorProvider):
    """ORB features with binary descriptors."""

    name = "orb"
    norm = cv.NORM_HAMMING

    @classmethod
    def create(cls):
        detector = cv.ORB_create(
            nfeatures=FeatureConfig.ORB_N_FEATURES,
            scaleFactor=FeatureConfig.ORB_SCALE_FACTOR,
            nlevels=FeatureConfig.ORB_N_LEVELS
        )
        return cls(detector)


PROVIDERS = {
    SurfProvider.name: SurfProvider,
    SiftProvider.name: SiftProvider,
    OrbProvider.name: OrbProvider,
}


def create_provider(name=None):
    """
    Create the descriptor provider registered under `name`.

    Args:
        name (str): One of `PROVIDERS` (config default if None)

    Raises:
        ValueError: If the name is unknown
        SetupError: If the algorithm is not available in the installed OpenCV
    """
    if name is None:
        name = FeatureConfig.DEFAULT_DETECTOR
    try:
        provider_cls = PROVIDERS[name.lower()]
    except KeyError:
        raise ValueError(f"Unknown detector '{name}', expected one of {sorted(PROVIDERS)}")

    provider = provider_cls.create()
    logger.info(f"Using {provider.name.upper()} descriptors")
    return provider
