"""
Exception hierarchy for PlaneTrack.

Only setup, capture and display problems are raised as exceptions. Per-frame
tracking failures are reported as a `NOT_FOUND` tracking result instead.
"""


class PlaneTrackError(Exception):
    """Base class for all PlaneTrack errors."""


class SetupError(PlaneTrackError):
    """The reference target could not be prepared (unreadable image, no descriptors, missing detector)."""


class CaptureError(PlaneTrackError):
    """The capture device stopped delivering frames."""


class DisplayError(PlaneTrackError):
    """The display window could not be updated."""
