"""
Tests for the frame loop, camera wrapper, renderer and statistics.
"""

import numpy as np
import pytest

from planetrack.core.camera import Camera
from planetrack.core.display import Renderer, draw_polygon, tracking_status
from planetrack.core.frame_loop import FrameLoop, LoopState
from planetrack.core.stats import FrameStats
from planetrack.exceptions import CaptureError, DisplayError, SetupError
from planetrack.tracking.results import NOT_FOUND, found, not_found, reference_corners


FRAME = np.zeros((120, 160, 3), dtype=np.uint8)


class FakeCapture:
    def __init__(self, frames=3):
        self.remaining = frames
        self.released = False

    def next_frame(self):
        if self.remaining == 0:
            raise CaptureError("no more frames")
        self.remaining -= 1
        return FRAME.copy()

    def release(self):
        self.released = True


class FakeTracker:
    def __init__(self, results):
        self.results = list(results)
        self.reference = None
        self.frames = 0

    def set_reference(self, image):
        if image is None:
            raise SetupError("no image")
        self.reference = object()
        return self.reference

    def track(self, frame):
        result = self.results[self.frames % len(self.results)]
        self.frames += 1
        return result


class FakeRenderer:
    def __init__(self, quit_after=None, fail=False):
        self.rendered = []
        self.counts = []
        self.quit_after = quit_after
        self.fail = fail
        self.closed = False

    def render(self, frame, result, good_matches=0, fps=0.0):
        if self.fail:
            raise DisplayError("window gone")
        self.rendered.append(result)
        self.counts.append(good_matches)

    def poll_key(self, timeout_ms=None):
        return self.quit_after is not None and len(self.rendered) >= self.quit_after

    def close(self):
        self.closed = True


FOUND = found(reference_corners(10, 10), 12)


def make_loop(frames=3, results=(FOUND,), renderer=None):
    capture = FakeCapture(frames)
    loop = FrameLoop(capture, FakeTracker(results), renderer or FakeRenderer())
    loop.initialize(FRAME)
    return loop, capture


def test_loop_runs_until_capture_ends():
    loop, capture = make_loop(frames=4)

    assert loop.state is LoopState.INITIALIZING
    assert loop.run() == 4
    assert loop.state is LoopState.STOPPED
    assert capture.released
    assert loop.renderer.closed


def test_loop_stops_on_quit_key():
    loop, capture = make_loop(frames=100, renderer=FakeRenderer(quit_after=2))

    assert loop.run() == 2
    assert capture.released


def test_loop_stops_at_frame_limit():
    loop, _ = make_loop(frames=100)
    assert loop.run(max_frames=5) == 5


def test_loop_stops_when_stop_requested():
    loop, _ = make_loop(frames=100)
    loop.stop()
    assert loop.run() == 0
    assert loop.state is LoopState.STOPPED


def test_loop_renders_each_frame_result():
    loop, _ = make_loop(frames=4, results=(FOUND, NOT_FOUND))
    loop.run()
    assert loop.renderer.rendered == [FOUND, NOT_FOUND, FOUND, NOT_FOUND]


def test_status_count_comes_from_each_frame_result():
    loop, _ = make_loop(frames=3, results=(FOUND, not_found(5), NOT_FOUND))
    loop.run()
    assert loop.renderer.counts == [12, 5, 0]


def test_display_failure_stops_loop_and_releases():
    loop, capture = make_loop(renderer=FakeRenderer(fail=True))

    with pytest.raises(DisplayError):
        loop.run()
    assert capture.released
    assert loop.state is LoopState.STOPPED


def test_run_without_reference_is_setup_error():
    loop = FrameLoop(FakeCapture(), FakeTracker([FOUND]), FakeRenderer())
    with pytest.raises(SetupError):
        loop.run()


def test_initialize_propagates_setup_error():
    loop = FrameLoop(FakeCapture(), FakeTracker([FOUND]), FakeRenderer())
    with pytest.raises(SetupError):
        loop.initialize(None)
    assert loop.state is LoopState.INITIALIZING


class FakeCap:
    def __init__(self, frames):
        self.frames = list(frames)
        self.released = False

    def isOpened(self):
        return not self.released

    def read(self):
        if not self.frames:
            return False, None
        return True, self.frames.pop(0)

    def release(self):
        self.released = True


def test_camera_reads_until_empty():
    camera = Camera(FakeCap([FRAME, FRAME]))

    camera.next_frame()
    camera.next_frame()
    with pytest.raises(CaptureError):
        camera.next_frame()
    assert camera.frames_read == 2


def test_camera_release():
    cap = FakeCap([FRAME])
    camera = Camera(cap)
    camera.release()

    assert cap.released
    with pytest.raises(CaptureError):
        camera.next_frame()


def test_draw_polygon_outlines_target():
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    corners = np.array([[10, 10], [90, 10], [90, 90], [10, 90]], dtype=np.float32)

    draw_polygon(image, corners)

    assert tuple(image[10, 50]) == (0, 255, 0)
    assert tuple(image[50, 50]) == (0, 0, 0)


def test_headless_renderer_never_opens_window():
    renderer = Renderer(headless=True)
    frame = FRAME.copy()

    renderer.render(frame, FOUND, good_matches=12)

    assert not renderer.window_open
    assert not renderer.poll_key()
    assert frame.any()


def test_tracking_status():
    assert tracking_status(FOUND, 12) == "TRACKING (matches: 12)"
    assert tracking_status(NOT_FOUND, 3) == "SEARCHING FOR TARGET (matches: 3)"


def test_stats_compute_fps_per_interval():
    now = [0.0]
    stats = FrameStats(interval=1.0, clock=lambda: now[0])

    for _ in range(7):
        now[0] += 0.125
        stats.update(found=True)
    assert stats.fps == 0.0

    now[0] += 0.125
    stats.update(found=False)
    assert stats.fps == pytest.approx(8.0)
    assert stats.frame_count == 0
