import logging
import time

from planetrack.config import LoopConfig

logger = logging.getLogger(__name__)


class FrameStats:
    """
    Per-interval performance counters: frame rate, found ratio and stage timings.
    """

    def __init__(self, interval=None, clock=time.time):
        self.interval = interval if interval is not None else LoopConfig.STATS_INTERVAL
        self.clock = clock
        self.fps = 0.0
        self._reset(self.clock())

    def _reset(self, now):
        self.start = now
        self.frame_count = 0
        self.found_count = 0
        self.times = {'capture': 0.0, 'track': 0.0, 'render': 0.0}

    def add_time(self, stage, seconds):
        self.times[stage] = self.times.get(stage, 0.0) + seconds

    def update(self, found):
        """
        Count one processed frame and log the statistics once per interval.

        Args:
            found (bool): Whether the target was found in the frame
        """
        self.frame_count += 1
        if found:
            self.found_count += 1

        now = self.clock()
        elapsed = now - self.start
        if elapsed < self.interval or elapsed <= 0:
            return

        self.fps = self.frame_count / elapsed
        found_pct = 100 * self.found_count / self.frame_count
        logger.info(f"=== Performance (last {self.frame_count} frames, {elapsed:.1f}s, "
                    f"{self.fps:.1f} FPS, target found {found_pct:.0f}%) ===")
        for key, val in self.times.items():
            pct = 100 * val / elapsed
            logger.info(f"  {key:10s}: {val*1000:.1f}ms ({pct:.1f}%)")

        self._reset(now)
