"""
Tracking Module - Per-frame planar target tracking.

This module provides:
- Descriptor providers and matchers (features.py, matching.py)
- Adaptive match filtering and presence gating (match_filter.py, presence_gate.py)
- Robust homography estimation and boundary projection (homography.py, projector.py)
- The tracker tying them together (tracker.py)
"""

from .results import (
    Correspondence,
    ReferenceTarget,
    TrackingResult,
    NOT_FOUND,
    found,
    not_found,
    reference_corners
)
from .match_filter import distance_stats, adaptive_threshold, filter_matches
from .presence_gate import PresenceGate
from .homography import RansacHomographyEstimator, is_usable_homography
from .projector import project_boundary
from .features import DescriptorProvider, SurfProvider, SiftProvider, OrbProvider, create_provider
from .matching import FlannMatcher, BruteForceMatcher, create_matcher
from .tracker import PlanarTracker

__all__ = [
    # Results
    'Correspondence',
    'ReferenceTarget',
    'TrackingResult',
    'NOT_FOUND',
    'found',
    'not_found',
    'reference_corners',
    # Core logic
    'distance_stats',
    'adaptive_threshold',
    'filter_matches',
    'PresenceGate',
    'RansacHomographyEstimator',
    'is_usable_homography',
    'project_boundary',
    # Collaborators
    'DescriptorProvider',
    'SurfProvider',
    'SiftProvider',
    'OrbProvider',
    'create_provider',
    'FlannMatcher',
    'BruteForceMatcher',
    'create_matcher',
    # Tracker
    'PlanarTracker',
]
