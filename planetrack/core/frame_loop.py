"""
Main processing loop for PlaneTrack.

The loop is single-threaded and blocking: one frame is captured, tracked and
rendered before the next one is read, and cancellation is checked between
frames. All collaborator handles are owned by the `FrameLoop` instance.
"""

import logging
import threading
import time
from enum import Enum

from planetrack.core.stats import FrameStats
from planetrack.exceptions import CaptureError, SetupError

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """Lifecycle of the frame loop."""

    INITIALIZING = 0
    """The reference target is not prepared yet."""

    RUNNING = 1
    """Frames are being processed."""

    STOPPED = 2
    """The loop ended and its collaborators were released."""


class FrameLoop:
    """
    Drives capture -> tracking -> rendering once per frame.
    """

    def __init__(self, capture, tracker, renderer, stats=None, stop_event=None):
        """
        Initialize the loop.

        Args:
            capture: Frame source with `next_frame()` and `release()`
            tracker (PlanarTracker): Tracker for the reference target
            renderer: Render collaborator with `render`, `poll_key` and `close`
            stats (FrameStats): Performance counters (new instance if None)
            stop_event (threading.Event): Event to request a stop from outside the loop
        """
        self.capture = capture
        self.tracker = tracker
        self.renderer = renderer
        self.stats = stats if stats is not None else FrameStats()
        self.stop_event = stop_event if stop_event is not None else threading.Event()
        self.state = LoopState.INITIALIZING
        self.frames_processed = 0

    def initialize(self, reference_image):
        """
        Prepare the reference target. Must succeed before `run`.

        Raises:
            SetupError: If the reference image is unusable
        """
        if self.state is not LoopState.INITIALIZING:
            raise RuntimeError(f"Cannot initialize a loop in state {self.state.name}")
        return self.tracker.set_reference(reference_image)

    def step(self):
        """
        Process a single frame.

        Returns:
            TrackingResult: Outcome for the frame

        Raises:
            CaptureError: If no frame could be read
            DisplayError: If the frame could not be shown
        """
        t = time.time()
        frame = self.capture.next_frame()
        self.stats.add_time('capture', time.time() - t)

        t = time.time()
        result = self.tracker.track(frame)
        self.stats.add_time('track', time.time() - t)

        t = time.time()
        self.renderer.render(frame, result, result.good_matches, self.stats.fps)
        self.stats.add_time('render', time.time() - t)

        self.frames_processed += 1
        self.stats.update(result.is_found)
        return result

    def stop(self):
        """Request the loop to stop after the current frame."""
        self.stop_event.set()

    def run(self, max_frames=None):
        """
        Process frames until cancelled, out of frames, or `max_frames` is reached.

        Args:
            max_frames (int): Optional frame limit

        Returns:
            int: Number of frames processed
        """
        if self.tracker.reference is None:
            raise SetupError("Reference target not initialized")

        self.state = LoopState.RUNNING
        logger.info("Starting main loop")
        try:
            while not self.stop_event.is_set():
                try:
                    self.step()
                except CaptureError as e:
                    logger.warning(f"Capture ended: {e}")
                    break

                if self.renderer.poll_key():
                    logger.info('Exiting...')
                    break

                if max_frames is not None and self.frames_processed >= max_frames:
                    logger.info(f"Processed {self.frames_processed} frames, stopping")
                    break
        finally:
            self.release()
        return self.frames_processed

    def release(self):
        """Release the display and capture handles."""
        if self.state is LoopState.STOPPED:
            return
        logger.info("Cleaning up resources...")
        try:
            self.renderer.close()
        finally:
            self.capture.release()
            self.state = LoopState.STOPPED
