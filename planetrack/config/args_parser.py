import argparse
from typing import Union

from .settings import CameraConfig, FeatureConfig


def capture_source(value: str) -> Union[int, str]:
    """
    Interpret a capture source: integers are device indices, anything else a video file path.
    """
    try:
        return int(value)
    except ValueError:
        return value


def positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


planetrack_parser = argparse.ArgumentParser(
    description="Track a planar reference image in a live video stream."
)

planetrack_parser.add_argument("reference", help="Path to the reference image.")

planetrack_parser.add_argument(
    "--source",
    help="Camera index or video file to read frames from.",
    type=capture_source,
    default=CameraConfig.DEFAULT_SOURCE,
)
planetrack_parser.add_argument(
    "--detector",
    help="Keypoint detector / descriptor extractor.",
    choices=FeatureConfig.DETECTORS,
    default=FeatureConfig.DEFAULT_DETECTOR,
)
planetrack_parser.add_argument(
    "--max-frames",
    help="Stop after this many frames.",
    type=positive_int,
    default=None,
)

planetrack_parser.add_argument(
    "--headless",
    help="Run without a display window.",
    action="store_true",
    default=False,
)
planetrack_parser.add_argument(
    "--debug",
    help="Enable debug logging.",
    action="store_true",
    default=False,
)

get_args = planetrack_parser.parse_args
