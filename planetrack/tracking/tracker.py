"""
Planar target tracking for PlaneTrack.

This module ties the descriptor provider, matcher, match filter, presence
gate, homography estimator and boundary projector together into a single
per-frame call. Nothing is carried over from one frame to the next.
"""

import logging

import cv2 as cv
import numpy as np

from planetrack.exceptions import SetupError
from planetrack.tracking.match_filter import filter_matches
from planetrack.tracking.presence_gate import PresenceGate
from planetrack.tracking.projector import project_boundary
from planetrack.tracking.results import NOT_FOUND, ReferenceTarget, not_found, reference_corners

logger = logging.getLogger(__name__)


def to_gray(image):
    """
    Convert a BGR or BGRA image to grayscale. Grayscale input is returned as is.
    """
    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv.cvtColor(image, cv.COLOR_BGRA2GRAY)
    return cv.cvtColor(image, cv.COLOR_BGR2GRAY)


def matched_points(correspondences, ref_keypoints, scene_keypoints):
    """
    Collect the reference and scene positions of `correspondences`, in matching order.

    Returns:
        tuple: (points_ref, points_scene), both Nx2 float32 arrays
    """
    points_ref = np.empty((len(correspondences), 2), dtype=np.float32)
    points_scene = np.empty((len(correspondences), 2), dtype=np.float32)

    for i, match in enumerate(correspondences):
        points_ref[i] = ref_keypoints[match.ref_index].pt
        points_scene[i] = scene_keypoints[match.scene_index].pt

    return points_ref, points_scene


class PlanarTracker:
    """
    Locates a planar reference image in camera frames.

    The reference is prepared once with `set_reference`. Every call to `track`
    then works on that frame alone and returns a fresh `TrackingResult`.
    """

    def __init__(self, provider, matcher, estimator, gate=None, match_filter=filter_matches):
        """
        Initialize the tracker.

        Args:
            provider: Descriptor provider (`extract(image) -> (keypoints, descriptors)`)
            matcher: Correspondence matcher (`match(ref, scene) -> [Correspondence]`)
            estimator: Robust transform estimator (`fit(ref_pts, scene_pts) -> H or None`)
            gate (PresenceGate): Presence gate (default minimum if None)
            match_filter (callable): Filter applied to the raw correspondences
        """
        self.provider = provider
        self.matcher = matcher
        self.estimator = estimator
        self.gate = gate if gate is not None else PresenceGate()
        self.match_filter = match_filter
        self.reference = None

    def set_reference(self, image):
        """
        Compute the reference target from the reference image.

        Args:
            image (numpy.ndarray): Reference image, color or grayscale

        Returns:
            ReferenceTarget: The immutable reference target

        Raises:
            SetupError: If the image is empty or yields no descriptors
        """
        if image is None or image.size == 0:
            raise SetupError("Reference image is empty or could not be read")

        gray = to_gray(image)
        keypoints, descriptors = self.provider.extract(gray)
        if descriptors is None or len(keypoints) == 0 or len(descriptors) == 0:
            raise SetupError("Reference image yields no descriptors")

        h, w = gray.shape[:2]
        self.reference = ReferenceTarget(
            corners=reference_corners(w, h),
            keypoints=tuple(keypoints),
            descriptors=descriptors,
            width=w,
            height=h
        )
        logger.info(f"Reference target {w}x{h} with {self.reference.size} descriptors")
        return self.reference

    def track(self, frame):
        """
        Locate the reference target in a frame.

        Args:
            frame (numpy.ndarray): Camera frame, color or grayscale

        Returns:
            TrackingResult: `FOUND` with the projected outline, or `NOT_FOUND`
        """
        if self.reference is None:
            raise RuntimeError("set_reference() must be called before track()")

        try:
            gray = to_gray(frame)
            keypoints, descriptors = self.provider.extract(gray)
            if descriptors is None or len(keypoints) == 0:
                self.gate.passes(0)
                return NOT_FOUND
            correspondences = self.matcher.match(self.reference.descriptors, descriptors)
        except cv.error as e:
            logger.warning(f"Feature matching failed for this frame: {e}")
            return NOT_FOUND

        good_matches = self.match_filter(correspondences)
        count = len(good_matches)
        if not self.gate.passes(count):
            return not_found(count)

        points_ref, points_scene = matched_points(
            good_matches, self.reference.keypoints, keypoints
        )
        H = self.estimator.fit(points_ref, points_scene)
        if H is None:
            return not_found(count)

        return project_boundary(self.reference.corners, H, count)
