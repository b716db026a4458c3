"""
Display Module - Drawing and window handling for PlaneTrack.

This module draws the tracked target outline and a status line onto frames,
shows them in an OpenCV window and polls the keyboard for cancellation.
"""

import logging

import cv2 as cv
import numpy as np

from planetrack.config import UIConfig
from planetrack.exceptions import DisplayError

logger = logging.getLogger(__name__)


def draw_polygon(image, pts, color=UIConfig.COLOR_GREEN, thickness=UIConfig.OUTLINE_THICKNESS):
    """
    Draw a closed polygon through `pts`, edge i joining point i to point (i + 1) % n.

    Args:
        image (numpy.ndarray): Image to draw on
        pts (numpy.ndarray): Nx2 points in image coordinates
        color (tuple): BGR color
        thickness (int): Line thickness

    Returns:
        numpy.ndarray: Image with the polygon drawn
    """
    if pts is None:
        return image

    pts_int = np.round(np.asarray(pts, dtype=np.float64)).astype(np.int32).reshape(-1, 1, 2)
    cv.polylines(image, [pts_int], isClosed=True, color=color, thickness=thickness)
    return image


def tracking_status(result, good_matches):
    """Status line for the overlay."""
    if result.is_found:
        return f"TRACKING (matches: {good_matches})"
    return f"SEARCHING FOR TARGET (matches: {good_matches})"


class Renderer:
    """
    Render collaborator: shows frames with the optional target outline and reports quit keys.
    """

    def __init__(self, window_name=None, headless=False, show_status=None):
        """
        Initialize the renderer.

        Args:
            window_name (str): Name of the OpenCV window
            headless (bool): Skip all window operations
            show_status (bool): Draw status text and FPS (config default if None)
        """
        self.window_name = window_name or UIConfig.WINDOW_NAME
        self.headless = headless
        self.show_status = UIConfig.SHOW_STATUS if show_status is None else show_status
        self.window_open = False

    def render(self, frame, result, good_matches=0, fps=0.0):
        """
        Draw the tracking result on `frame` and show it.

        Args:
            frame (numpy.ndarray): BGR frame, drawn on in place
            result (TrackingResult): Outcome for this frame
            good_matches (int): Good match count for the status line
            fps (float): Processing rate for the status line

        Raises:
            DisplayError: If the window cannot be updated
        """
        if result.is_found:
            draw_polygon(frame, result.corners)

        if self.headless:
            return frame

        if self.show_status:
            color = UIConfig.COLOR_GREEN if result.is_found else UIConfig.COLOR_YELLOW
            cv.putText(frame, tracking_status(result, good_matches), (10, 30),
                       cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
                       color, UIConfig.FONT_THICKNESS)
            if fps > 0:
                cv.putText(frame, f"Processing: {fps:.1f} FPS", (10, 60),
                           cv.FONT_HERSHEY_SIMPLEX, UIConfig.FONT_SCALE,
                           UIConfig.COLOR_GREEN, UIConfig.FONT_THICKNESS)

        try:
            if not self.window_open:
                cv.namedWindow(self.window_name, cv.WINDOW_NORMAL)
                self.window_open = True
            cv.imshow(self.window_name, frame)
        except cv.error as e:
            raise DisplayError(f"Could not show frame: {e}") from e
        return frame

    def poll_key(self, timeout_ms=None):
        """
        Wait briefly for a key press.

        Returns:
            bool: True if a quit key (ESC or 'q') was pressed
        """
        if self.headless:
            return False
        if timeout_ms is None:
            timeout_ms = UIConfig.KEY_POLL_MS
        key = cv.waitKey(timeout_ms) & 0xFF
        if key in UIConfig.QUIT_KEYS:
            logger.info('Quit key pressed')
            return True
        return False

    def close(self):
        """Close the window if it was opened."""
        if self.window_open:
            try:
                cv.destroyWindow(self.window_name)
            except cv.error as e:
                logger.debug(f"Error closing window: {e}")
            self.window_open = False
