"""
Camera capture for PlaneTrack.

Frames are read synchronously: `next_frame` blocks until the device delivers
a frame and raises `CaptureError` when it stops doing so.
"""

import logging

import cv2 as cv

from planetrack.config import CameraConfig
from planetrack.exceptions import CaptureError, SetupError

logger = logging.getLogger(__name__)


class Camera:
    """
    Blocking frame source around an OpenCV `VideoCapture`.
    """

    def __init__(self, cap):
        """
        Initialize the camera wrapper.

        Args:
            cap: OpenCV VideoCapture object (or anything with `read`, `isOpened` and `release`)
        """
        self.cap = cap
        self.frames_read = 0

    def next_frame(self):
        """
        Read the next frame (blocking).

        Returns:
            numpy.ndarray: BGR frame

        Raises:
            CaptureError: If the device is closed or returned no frame
        """
        if not self.cap.isOpened():
            raise CaptureError("Capture device is not open")
        ret, frame = self.cap.read()
        if not ret or frame is None:
            raise CaptureError(f"No camera image returned after {self.frames_read} frames")
        self.frames_read += 1
        return frame

    def release(self):
        """Release the underlying capture device."""
        self.cap.release()
        logger.info("Camera released")


def setup_camera(source=None):
    """
    Open and configure the capture source.

    Args:
        source (int or str): Camera index or video file path (config default if None)

    Returns:
        Camera: Opened camera

    Raises:
        SetupError: If the source cannot be opened
    """
    if source is None:
        source = CameraConfig.DEFAULT_SOURCE
    logger.info(f"Setting up capture source {source}")

    if CameraConfig.BACKEND is not None and isinstance(source, int):
        cap = cv.VideoCapture(source, CameraConfig.BACKEND)
    else:
        cap = cv.VideoCapture(source)

    if not cap.isOpened():
        raise SetupError(f"Could not open capture source {source}")

    # Only live devices take capture properties
    if isinstance(source, int):
        cap.set(cv.CAP_PROP_BUFFERSIZE, CameraConfig.BUFFER_SIZE)
        if CameraConfig.DEFAULT_WIDTH and CameraConfig.DEFAULT_HEIGHT:
            cap.set(cv.CAP_PROP_FRAME_WIDTH, CameraConfig.DEFAULT_WIDTH)
            cap.set(cv.CAP_PROP_FRAME_HEIGHT, CameraConfig.DEFAULT_HEIGHT)

    actual_width = cap.get(cv.CAP_PROP_FRAME_WIDTH)
    actual_height = cap.get(cv.CAP_PROP_FRAME_HEIGHT)
    actual_fps = cap.get(cv.CAP_PROP_FPS)
    logger.info(f"Camera configured: {actual_width:.0f}x{actual_height:.0f} @ {actual_fps:.1f}fps")

    return Camera(cap)
