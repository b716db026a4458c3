from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Sequence

import numpy as np
import numpy.typing as npt


@dataclass(frozen=True)
class Correspondence:
    """
    A hypothesized pairing of one reference keypoint with one scene keypoint.
    """

    ref_index: int
    """Index into the reference keypoints / descriptors."""

    scene_index: int
    """Index into the scene keypoints / descriptors of the same frame."""

    distance: float
    """Descriptor distance, non-negative. Smaller is more similar."""

    @classmethod
    def from_dmatch(cls, match: Any) -> "Correspondence":
        """
        Build a correspondence from an OpenCV `DMatch` (query = reference, train = scene).
        """
        return cls(int(match.queryIdx), int(match.trainIdx), float(match.distance))


def reference_corners(width: float, height: float) -> npt.NDArray[np.float32]:
    """
    Return the corner quadrilateral of a `width` x `height` image:
    top-left, top-right, bottom-right, bottom-left.
    """
    return np.array(
        [[0, 0], [width, 0], [width, height], [0, height]], dtype=np.float32
    )


@dataclass(frozen=True, eq=False)
class ReferenceTarget:
    """
    The planar target being tracked. Built once from the reference image and never modified.
    """

    corners: npt.NDArray[np.float32] = field(repr=False)
    """Corner quadrilateral (4x2) in reference pixel coordinates."""

    keypoints: Sequence[Any] = field(repr=False)
    """Reference keypoints, index-aligned with `descriptors`."""

    descriptors: npt.NDArray[Any] = field(repr=False)
    """Reference descriptors, one row per keypoint."""

    width: int = 0
    height: int = 0

    def __post_init__(self) -> None:
        self.corners.setflags(write=False)

    @property
    def size(self) -> int:
        """
        Number of reference descriptors.
        """
        return len(self.keypoints)


@dataclass(frozen=True, eq=False)
class TrackingResult:
    """
    This class represents the outcome of tracking the target in a single frame.
    """

    class Status(Enum):
        """
        This class represents the possible statuses of a tracking attempt.
        """

        NOT_FOUND = 0
        """The target is not visible, or there is not enough evidence for it."""

        FOUND = 1
        """The target outline was projected into the frame."""

    status: Status
    """The status of the tracking attempt."""

    corners: Optional[npt.NDArray[np.float32]] = field(default=None, repr=False)
    """
    The projected target outline (4x2) in frame coordinates, in reference corner order.
    This field is not None only when the status is `FOUND`.
    """

    good_matches: int = 0
    """Number of correspondences that passed the match filter."""

    @property
    def is_found(self) -> bool:
        return self.status is TrackingResult.Status.FOUND


NOT_FOUND = TrackingResult(TrackingResult.Status.NOT_FOUND)
"""This constant represents a frame where the target was not found."""


def not_found(good_matches: int = 0) -> TrackingResult:
    """
    Build a `NOT_FOUND` result that still reports the frame's good match count.
    """
    if good_matches == 0:
        return NOT_FOUND
    return TrackingResult(TrackingResult.Status.NOT_FOUND, None, good_matches)


def found(corners: npt.NDArray[np.float32], good_matches: int = 0) -> TrackingResult:
    """
    Build a `FOUND` result for the given projected corners.
    """
    return TrackingResult(TrackingResult.Status.FOUND, corners, good_matches)
