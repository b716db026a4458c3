"""
PlaneTrack - Planar Target Tracking

Locates a known planar reference image in a live video stream and overlays
its estimated outline on every frame.

Main components:
- config: Centralized configuration and command line parsing
- tracking: Match filtering, presence gating, homography and boundary projection
- core: Camera capture, display and the per-frame loop
"""

__version__ = "1.0.0"
