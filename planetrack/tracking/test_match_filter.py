"""
Tests for the adaptive match quality filter.
"""

import numpy as np
import pytest

from planetrack.tracking.match_filter import adaptive_threshold, distance_stats, filter_matches
from planetrack.tracking.results import Correspondence


def make_matches(distances):
    return [Correspondence(i, i, float(d)) for i, d in enumerate(distances)]


def test_threshold_uses_floor_for_zero_min_distance():
    assert adaptive_threshold(0.0) == pytest.approx(0.02)


def test_threshold_scales_with_min_distance():
    assert adaptive_threshold(0.03) == pytest.approx(0.06)


def test_threshold_custom_parameters():
    assert adaptive_threshold(0.1, multiplier=3.0, floor=0.0) == pytest.approx(0.3)
    assert adaptive_threshold(0.001, multiplier=3.0, floor=0.5) == pytest.approx(0.5)


def test_distance_stats():
    min_dist, max_dist = distance_stats(make_matches([0.4, 0.05, 0.9, 0.2]))
    assert min_dist == pytest.approx(0.05)
    assert max_dist == pytest.approx(0.9)


def test_distance_stats_empty():
    assert distance_stats([]) == (0.0, 0.0)


def test_distance_stats_uses_true_minimum_for_large_distances():
    min_dist, max_dist = distance_stats(make_matches([150, 250, 290, 400]))
    assert min_dist == pytest.approx(150.0)
    assert max_dist == pytest.approx(400.0)


def test_filter_scales_with_large_descriptor_distances():
    # SIFT-sized distances: T = 2 * 150 = 300
    good = filter_matches(make_matches([150, 250, 290, 400]))
    assert [m.distance for m in good] == [150, 250, 290]


def test_filter_keeps_matches_within_threshold():
    matches = make_matches([0.03, 0.06, 0.061, 0.5, 0.04])
    good = filter_matches(matches)

    # T = max(2 * 0.03, 0.02) = 0.06, inclusive
    assert [m.ref_index for m in good] == [0, 1, 4]


def test_filter_uses_floor_when_best_match_is_perfect():
    matches = make_matches([0.0, 0.01, 0.02, 0.021, 0.3])
    good = filter_matches(matches)
    assert [m.ref_index for m in good] == [0, 1, 2]


def test_filter_empty_input():
    assert filter_matches([]) == []


def test_good_set_is_subset_of_input():
    rng = np.random.default_rng(7)
    matches = make_matches(rng.uniform(0.0, 1.0, size=200))
    good = filter_matches(matches)
    assert set(good) <= set(matches)


def test_good_set_shrinks_as_multiplier_decreases():
    rng = np.random.default_rng(0)
    matches = make_matches(rng.uniform(0.01, 0.5, size=300))

    sizes = [len(filter_matches(matches, multiplier=k))
             for k in (10.0, 5.0, 3.0, 2.0, 1.5, 1.0, 0.5)]
    assert all(a >= b for a, b in zip(sizes, sizes[1:]))
    assert sizes[0] > sizes[-1]
