"""
Config Module - Tunable constants and command line parsing.
"""

from .settings import (
    CameraConfig,
    FeatureConfig,
    MatchFilterConfig,
    HomographyConfig,
    UIConfig,
    LoopConfig
)

from .args_parser import planetrack_parser, get_args

__all__ = [
    'CameraConfig',
    'FeatureConfig',
    'MatchFilterConfig',
    'HomographyConfig',
    'UIConfig',
    'LoopConfig',
    'planetrack_parser',
    'get_args',
]
