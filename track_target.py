"""
PlaneTrack - Planar target tracking in a live video stream.

This is the main entry point: it loads the reference image, opens the camera
and outlines the reference target on every frame until ESC or 'q' is pressed.
"""

import logging
import signal
import sys

import cv2 as cv

from planetrack.config import LoopConfig, get_args
from planetrack.core.camera import setup_camera
from planetrack.core.display import Renderer
from planetrack.core.frame_loop import FrameLoop
from planetrack.exceptions import PlaneTrackError, SetupError
from planetrack.tracking.features import create_provider
from planetrack.tracking.homography import RansacHomographyEstimator
from planetrack.tracking.matching import create_matcher
from planetrack.tracking.tracker import PlanarTracker

logger = logging.getLogger(__name__)


def configure_logging(debug=False):
    """Configure root logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format=LoopConfig.LOG_FORMAT
    )


def load_reference_image(path):
    """
    Read the reference image from disk.

    Raises:
        SetupError: If the file is missing or not an image
    """
    image = cv.imread(path, cv.IMREAD_GRAYSCALE)
    if image is None:
        raise SetupError(f"Could not read reference image {path}")
    logger.info(f"Loaded reference image {path} ({image.shape[1]}x{image.shape[0]})")
    return image


def build_tracker(detector):
    """
    Create the tracker with the chosen descriptor provider and a matching matcher.
    """
    provider = create_provider(detector)
    return PlanarTracker(provider, create_matcher(provider), RansacHomographyEstimator())


def setup_signal_handler(frame_loop):
    """
    Setup signal handler for graceful shutdown.

    Args:
        frame_loop (FrameLoop): Loop to stop on interrupt
    """
    def signal_handler(sig, frame):
        logger.info("Signal received, shutting down...")
        frame_loop.stop()

    signal.signal(signal.SIGINT, signal_handler)


def main(argv=None):
    """
    Run the tracker.

    Returns:
        int: Process exit code (0 on normal stop, 1 on setup failure)
    """
    args = get_args(argv)
    configure_logging(args.debug)

    logger.info("Initializing PlaneTrack...")
    try:
        reference = load_reference_image(args.reference)
        tracker = build_tracker(args.detector)
        camera = setup_camera(args.source)
    except SetupError as e:
        logger.error(f"Setup failed: {e}")
        return 1

    frame_loop = FrameLoop(camera, tracker, Renderer(headless=args.headless))
    try:
        frame_loop.initialize(reference)
    except SetupError as e:
        logger.error(f"Setup failed: {e}")
        frame_loop.release()
        return 1

    setup_signal_handler(frame_loop)

    try:
        frame_loop.run(max_frames=args.max_frames)
    except PlaneTrackError as e:
        logger.error(f"Tracking stopped: {e}")
        return 1

    logger.info(f"Stopped after {frame_loop.frames_processed} frames")
    return 0


if __name__ == "__main__":
    sys.exit(main())
