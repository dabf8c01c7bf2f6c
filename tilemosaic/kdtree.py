"""
Static KD-tree for nearest neighbor lookups.

The tree is stored as a single list of points. The midpoint of any index
range [low, high] is the root of that range's subtree, its children are the
midpoints of [low, mid - 1] and [mid + 1, high], and the splitting dimension
at depth d is d % dimension. No node objects are allocated.
"""

from tilemosaic.distance import distance_squared, should_replace, smaller_dim_val
from tilemosaic.errors import DimensionMismatchError, EmptyTreeError
from tilemosaic.partition import select
from tilemosaic.point import Point


class KDTree:
	"""
	Immutable KD-tree built once from a fixed set of points.

	Args:
	    points: Iterable of points (Point or any coordinate sequence). The
	        input is copied; the caller's sequence is never reordered.
	    dimension: Number of coordinates per point. Defaults to the
	        dimension of the first point. Required to be positive.

	Raises:
	    DimensionMismatchError: if a point does not have `dimension` coordinates
	"""

	def __init__(self, points, dimension=None):
		points = [p if isinstance(p, Point) else Point.from_iterable(p) for p in points]

		if dimension is None and points:
			dimension = points[0].dim
		if dimension is not None and dimension < 1:
			raise DimensionMismatchError(f"dimension must be positive, got {dimension}")

		for point in points:
			if point.dim != dimension:
				raise DimensionMismatchError(
					f"expected {dimension}-dimensional point, got {point!r}"
				)

		self._dimension = dimension
		self._points = points

		if points:
			low, high = 0, len(points) - 1
			self._construct(low, high, (low + high) // 2, 0)

	@property
	def dimension(self):
		"""Dimensionality of the tree, or None for an empty tree built without one."""
		return self._dimension

	@property
	def points(self):
		"""Points in tree (array) order."""
		return tuple(self._points)

	def __len__(self):
		return len(self._points)

	def __iter__(self):
		return iter(self._points)

	def __repr__(self):
		return f"KDTree(dimension={self._dimension}, size={len(self._points)})"

	def _construct(self, low, high, median, dim):
		if low >= high:
			return

		select(self._points, low, high, median, dim)

		next_dim = (dim + 1) % self._dimension
		self._construct(low, median - 1, (low + median - 1) // 2, next_dim)
		self._construct(median + 1, high, (median + 1 + high) // 2, next_dim)

	def find_nearest_neighbor(self, query):
		"""
		Find the point closest to `query`.

		Ties at equal distance go to the lexicographically smallest point.

		Args:
		    query: Point (or coordinate sequence) of the tree's dimension

		Returns:
		    The closest Point from the input set

		Raises:
		    EmptyTreeError: if the tree holds no points
		    DimensionMismatchError: if `query` has the wrong dimension
		"""
		if not self._points:
			raise EmptyTreeError("cannot search an empty KDTree")

		if not isinstance(query, Point):
			query = Point.from_iterable(query)
		if query.dim != self._dimension:
			raise DimensionMismatchError(
				f"expected {self._dimension}-dimensional query, got {query!r}"
			)

		return self._points[self._nearest_index(query, 0, len(self._points) - 1, 0)]

	def _nearest_index(self, query, low, high, dim):
		# None marks an empty range
		if low > high:
			return None

		points = self._points
		median = (low + high) // 2
		next_dim = (dim + 1) % self._dimension

		if smaller_dim_val(query, points[median], dim):
			near, far = (low, median - 1), (median + 1, high)
		else:
			near, far = (median + 1, high), (low, median - 1)

		best = self._nearest_index(query, near[0], near[1], next_dim)
		if best is None or should_replace(query, points[best], points[median]):
			best = median

		# The far side can only hold a closer point if the splitting plane
		# is within the current best radius.
		split_diff = (points[median][dim] - query[dim]) ** 2
		if split_diff <= distance_squared(query, points[best]):
			candidate = self._nearest_index(query, far[0], far[1], next_dim)
			if candidate is not None and should_replace(query, points[best], points[candidate]):
				best = candidate

		return best


def build(points, dimension=None):
	"""Build a KDTree from `points`. Empty input gives a tree whose queries fail."""
	return KDTree(points, dimension=dimension)


def nearest_neighbor(tree, query):
	"""Nearest point to `query` in `tree`; raises EmptyTreeError on an empty tree."""
	return tree.find_nearest_neighbor(query)
