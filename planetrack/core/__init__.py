"""
Core Module - Capture, display and the main loop.

This module contains the collaborators around the tracker:
- Camera capture (camera.py)
- Window rendering and key polling (display.py)
- Performance counters (stats.py)
- The per-frame loop (frame_loop.py)
"""

from .camera import Camera, setup_camera
from .display import Renderer, draw_polygon
from .stats import FrameStats
from .frame_loop import FrameLoop, LoopState

__all__ = [
    'Camera',
    'setup_camera',
    'Renderer',
    'draw_polygon',
    'FrameStats',
    'FrameLoop',
    'LoopState',
]
