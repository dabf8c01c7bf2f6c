import numpy as np
import pytest
from scipy.spatial import cKDTree

from tilemosaic.distance import distance_squared, smaller_dim_val
from tilemosaic.errors import DimensionMismatchError, EmptyTreeError
from tilemosaic.kdtree import KDTree, build, nearest_neighbor
from tilemosaic.point import Point


def _random_points(rng, n, dim=3, high=256):
	return [Point(*(int(c) for c in row)) for row in rng.integers(0, high, size=(n, dim))]


def _brute_force(points, query):
	return min(points, key=lambda p: (distance_squared(query, p), p))


def _check_ranges(tree, low, high, dim):
	if low > high:
		return
	points = tree.points
	median = (low + high) // 2
	for p in points[low:median]:
		assert not smaller_dim_val(points[median], p, dim)
	for p in points[median + 1:high + 1]:
		assert not smaller_dim_val(p, points[median], dim)
	next_dim = (dim + 1) % tree.dimension
	_check_ranges(tree, low, median - 1, next_dim)
	_check_ranges(tree, median + 1, high, next_dim)


def test_nearest_on_a_line():
	tree = build([Point(0, 0, 0), Point(10, 10, 10), Point(5, 5, 5)])
	assert nearest_neighbor(tree, Point(4, 4, 4)) == Point(5, 5, 5)


def test_nearest_primary_colors():
	tree = build([Point(255, 0, 0), Point(0, 255, 0), Point(0, 0, 255)])
	assert nearest_neighbor(tree, Point(200, 50, 10)) == Point(255, 0, 0)


def test_single_point():
	tree = build([Point(1, 2, 3)])
	for query in [Point(0, 0, 0), Point(1, 2, 3), Point(-100, 500, 7)]:
		assert tree.find_nearest_neighbor(query) == Point(1, 2, 3)


def test_empty_tree():
	tree = build([])
	assert len(tree) == 0
	with pytest.raises(EmptyTreeError):
		nearest_neighbor(tree, Point(1, 2, 3))


def test_empty_tree_with_dimension():
	tree = KDTree([], dimension=3)
	assert tree.dimension == 3
	with pytest.raises(EmptyTreeError):
		tree.find_nearest_neighbor((0, 0, 0))


def test_array_layout():
	tree = build([Point(0, 0, 0), Point(10, 10, 10), Point(5, 5, 5)])
	assert tree.points == (Point(0, 0, 0), Point(5, 5, 5), Point(10, 10, 10))


def test_accepts_plain_sequences():
	tree = build([(1, 2), [3, 4]])
	assert tree.dimension == 2
	assert nearest_neighbor(tree, (3, 3)) == Point(3, 4)


def test_input_not_mutated():
	points = [Point(3, 0), Point(1, 0), Point(2, 0)]
	build(points)
	assert points == [Point(3, 0), Point(1, 0), Point(2, 0)]


def test_mixed_dimensions_rejected():
	with pytest.raises(DimensionMismatchError):
		build([Point(1, 2, 3), Point(1, 2)])


def test_wrong_dimension_rejected():
	with pytest.raises(DimensionMismatchError):
		KDTree([Point(1, 2)], dimension=3)


def test_query_dimension_mismatch():
	tree = build([Point(1, 2, 3)])
	with pytest.raises(DimensionMismatchError):
		tree.find_nearest_neighbor(Point(1, 2))


def test_permutation_of_input():
	rng = np.random.default_rng(0)
	for n in [1, 2, 3, 10, 100, 257]:
		points = _random_points(rng, n, high=16)
		tree = build(points)
		assert sorted(tree) == sorted(points)


def test_partition_invariant_holds_for_every_range():
	rng = np.random.default_rng(1)
	for n in [2, 5, 31, 64, 200]:
		for dim in [1, 2, 3, 4]:
			tree = build(_random_points(rng, n, dim=dim, high=10))
			_check_ranges(tree, 0, len(tree) - 1, 0)


def test_matches_brute_force():
	rng = np.random.default_rng(2)
	for dim in [1, 2, 3, 5]:
		points = _random_points(rng, 300, dim=dim)
		tree = build(points)
		for query in _random_points(rng, 100, dim=dim):
			assert tree.find_nearest_neighbor(query) == _brute_force(points, query)


def test_matches_brute_force_with_many_ties():
	rng = np.random.default_rng(3)
	# Small coordinate range forces duplicate points and equal distances
	points = _random_points(rng, 200, high=4)
	tree = build(points)
	for query in _random_points(rng, 200, high=5):
		assert tree.find_nearest_neighbor(query) == _brute_force(points, query)


def test_tie_goes_to_lexicographically_smaller():
	tree = build([Point(2, 0), Point(0, 2), Point(-2, 0), Point(0, -2)])
	assert tree.find_nearest_neighbor(Point(0, 0)) == Point(-2, 0)


def test_float_coordinates():
	rng = np.random.default_rng(4)
	points = [Point(*row) for row in rng.random((150, 3)).tolist()]
	tree = build(points)
	for query in [Point(*row) for row in rng.random((50, 3)).tolist()]:
		assert tree.find_nearest_neighbor(query) == _brute_force(points, query)


def test_distance_agrees_with_scipy():
	rng = np.random.default_rng(5)
	data = rng.integers(0, 256, size=(500, 3))
	queries = rng.integers(0, 256, size=(100, 3))
	tree = build(data.tolist())
	reference = cKDTree(data)
	distances, _ = reference.query(queries)
	for query, expected in zip(queries.tolist(), distances):
		found = tree.find_nearest_neighbor(query)
		assert distance_squared(query, found) == pytest.approx(expected ** 2)


def test_self_query_returns_point():
	rng = np.random.default_rng(6)
	points = _random_points(rng, 200)
	tree = build(points)
	for p in points:
		assert tree.find_nearest_neighbor(p) == p


def test_query_far_outside():
	tree = build([Point(0, 0, 0), Point(255, 255, 255)])
	assert tree.find_nearest_neighbor(Point(10 ** 9, 10 ** 9, 10 ** 9)) == Point(255, 255, 255)
	assert tree.find_nearest_neighbor(Point(-10 ** 9, 0, 0)) == Point(0, 0, 0)


def test_deterministic_layout_and_results():
	rng = np.random.default_rng(7)
	points = _random_points(rng, 120, high=8)
	first = build(points)
	second = build(points)
	assert first.points == second.points
	query = Point(3, 3, 3)
	assert first.find_nearest_neighbor(query) == first.find_nearest_neighbor(query)


def test_sorted_input():
	points = [Point(i, i, i) for i in range(2000)]
	tree = build(points)
	assert tree.find_nearest_neighbor(Point(1234, 1234, 1235)) == Point(1234, 1234, 1234)


def test_points_are_read_only():
	tree = build([Point(1), Point(2)])
	assert isinstance(tree.points, tuple)
	assert repr(tree) == "KDTree(dimension=1, size=2)"


def test_uint8_coordinates_do_not_wrap():
	colors = np.array([[0, 0, 0], [250, 250, 250]], dtype=np.uint8)
	tree = build(list(colors))
	assert tree.find_nearest_neighbor(np.array([240, 240, 240], dtype=np.uint8)) == Point(250, 250, 250)


def test_int64_coordinates_do_not_overflow():
	big = 2 ** 40
	tree = build(np.array([[0], [big]], dtype=np.int64))
	assert tree.find_nearest_neighbor(np.array([big - 1], dtype=np.int64)) == Point(big)


def test_far_side_searched_when_median_beats_near_side():
	tree = build([Point(-100, 0), Point(5, 3), Point(6, 0)])
	# root (5, 3) splits on x; the query goes left, the median beats (-100, 0),
	# and the closer (6, 0) sits on the right
	assert tree.points == (Point(-100, 0), Point(5, 3), Point(6, 0))
	assert tree.find_nearest_neighbor(Point(4.9, 0)) == Point(6, 0)
