"""
Configuration module for PlaneTrack.

This module contains all configuration parameters and constants used throughout the application.
Centralizing configuration makes it easier to tune parameters and understand system behavior.

PERFORMANCE TUNING:
- For best FPS: Set DEFAULT_WIDTH=640, DEFAULT_HEIGHT=480 and use the ORB detector
- For robustness: use SURF (needs an opencv-contrib build with nonfree modules) or SIFT
"""

# ==================== Camera Configuration ====================
class CameraConfig:
    """Camera capture configuration parameters."""

    # Default capture source (device index)
    DEFAULT_SOURCE = 0

    # Requested camera resolution (None keeps the driver default)
    DEFAULT_WIDTH = None
    DEFAULT_HEIGHT = None

    # Camera buffer size (reduce latency)
    BUFFER_SIZE = 1

    # Camera backend to use (None lets OpenCV choose)
    BACKEND = None


# ==================== Feature Detection Configuration ====================
class FeatureConfig:
    """Configuration for keypoint detection and descriptor extraction."""

    # Detector used when none is given on the command line
    DEFAULT_DETECTOR = "sift"
    DETECTORS = ("surf", "sift", "orb")

    # SURF parameters
    SURF_HESSIAN_THRESHOLD = 700

    # SIFT parameters
    SIFT_N_FEATURES = 0                 # 0 keeps every keypoint
    SIFT_CONTRAST_THRESHOLD = 0.04
    SIFT_EDGE_THRESHOLD = 10

    # ORB parameters
    ORB_N_FEATURES = 2000
    ORB_SCALE_FACTOR = 1.2
    ORB_N_LEVELS = 8

    # FLANN matcher parameters (float descriptors)
    FLANN_INDEX_KDTREE = 1
    FLANN_TREES = 5
    FLANN_CHECKS = 50


# ==================== Match Filtering Configuration ====================
class MatchFilterConfig:
    """Configuration for the adaptive match distance filter and presence gate."""

    # Threshold T = max(DISTANCE_MULTIPLIER * min_dist, DISTANCE_FLOOR)
    DISTANCE_MULTIPLIER = 2.0
    DISTANCE_FLOOR = 0.02

    # Target is present when the good match count is strictly above this
    MIN_GOOD_MATCHES = 8


# ==================== Homography Configuration ====================
class HomographyConfig:
    """Configuration for robust homography estimation."""

    RANSAC_REPROJ_THRESHOLD = 3.0
    RANSAC_CONFIDENCE = 0.995
    RANSAC_MAX_ITERS = 2000

    # Minimum point pairs for a homography
    MIN_POINT_PAIRS = 4

    # Determinant magnitude below which a homography is treated as singular
    SINGULAR_DET_EPS = 1e-12


# ==================== UI Configuration ====================
class UIConfig:
    """Configuration for user interface elements."""

    WINDOW_NAME = "Matches"

    # Colors (BGR format)
    COLOR_GREEN = (0, 255, 0)
    COLOR_YELLOW = (0, 255, 255)

    # Target outline
    OUTLINE_THICKNESS = 4

    # Text display
    SHOW_STATUS = True
    FONT_SCALE = 0.6
    FONT_THICKNESS = 2

    # Keys that stop the loop
    QUIT_KEYS = (27, ord('q'))

    # cv.waitKey timeout (ms)
    KEY_POLL_MS = 1


# ==================== Frame Loop Configuration ====================
class LoopConfig:
    """Configuration for the main processing loop."""

    # Log performance every N seconds
    STATS_INTERVAL = 15.0

    LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
