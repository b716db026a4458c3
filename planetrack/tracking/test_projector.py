"""
Tests for projecting the reference boundary through a homography.
"""

import numpy as np

from planetrack.tracking.projector import project_boundary
from planetrack.tracking.results import NOT_FOUND, TrackingResult, reference_corners


CORNERS = reference_corners(320, 240)


def test_identity_keeps_corners_and_order():
    result = project_boundary(CORNERS, np.eye(3))

    assert result.is_found
    assert result.status is TrackingResult.Status.FOUND
    np.testing.assert_allclose(result.corners, CORNERS, atol=1e-4)


def test_translation_moves_every_corner():
    H = np.array([[1, 0, 15], [0, 1, -7], [0, 0, 1]], dtype=np.float64)
    result = project_boundary(CORNERS, H, good_matches=12)

    np.testing.assert_allclose(result.corners, CORNERS + [15, -7], atol=1e-4)
    assert result.good_matches == 12


def test_projective_transform_matches_homogeneous_division():
    H = np.array([[0.9, 0.1, 30.0], [-0.05, 1.1, 12.0], [1e-4, 2e-4, 1.0]])
    result = project_boundary(CORNERS, H)

    homogeneous = np.hstack([CORNERS, np.ones((4, 1))]) @ H.T
    expected = homogeneous[:, :2] / homogeneous[:, 2:]
    np.testing.assert_allclose(result.corners, expected, rtol=1e-4)


def test_zero_matrix_is_not_found():
    assert project_boundary(CORNERS, np.zeros((3, 3))) is NOT_FOUND


def test_missing_homography_is_not_found():
    assert project_boundary(CORNERS, None) is NOT_FOUND


def test_non_finite_homography_is_not_found():
    H = np.eye(3)
    H[0, 2] = np.nan
    assert project_boundary(CORNERS, H) is NOT_FOUND


def test_wrong_shape_is_not_found():
    assert project_boundary(CORNERS, np.eye(2)) is NOT_FOUND


def test_unconvertible_homography_is_not_found():
    assert project_boundary(CORNERS, "not a matrix") is NOT_FOUND
    assert project_boundary(CORNERS, [[1, 0], [0, 1, 0]]) is NOT_FOUND


def test_failed_projection_keeps_match_count():
    result = project_boundary(CORNERS, np.zeros((3, 3)), good_matches=14)

    assert not result.is_found
    assert result.corners is None
    assert result.good_matches == 14
