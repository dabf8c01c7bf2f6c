"""Distance and comparison policy shared by tree construction and search."""

from tilemosaic.errors import InvalidDimensionError


def smaller_dim_val(first, second, dim):
	"""
	Check whether `first` precedes `second` along dimension `dim`.

	Equal coordinates fall back to the full lexicographic point order, so
	the comparison is a strict weak ordering even with duplicate values.

	Args:
	    first: Point to test
	    second: Point to compare against
	    dim: Dimension index, 0 <= dim < D

	Returns:
	    True if `first` precedes `second`

	Raises:
	    InvalidDimensionError: if `dim` is not a valid dimension
	"""
	if not 0 <= dim < len(first):
		raise InvalidDimensionError(
			f"dimension {dim} out of range for {len(first)}-dimensional points"
		)

	if first[dim] < second[dim]:
		return True
	if first[dim] == second[dim]:
		return first < second
	return False


def distance_squared(a, b):
	"""Sum of squared per-dimension differences between two points."""
	return sum((x - y) ** 2 for x, y in zip(a, b))


def should_replace(target, current_best, potential):
	"""
	Decide whether `potential` is a better neighbor of `target` than `current_best`.

	The closer point wins; on an exact distance tie the lexicographically
	smaller point wins. Identical points always replace.

	Args:
	    target: Query point
	    current_best: Closest point found so far
	    potential: Candidate point

	Returns:
	    True if `potential` should become the current best
	"""
	if current_best == potential:
		return True

	current_distance = distance_squared(target, current_best)
	potential_distance = distance_squared(target, potential)

	if potential_distance < current_distance:
		return True
	if potential_distance == current_distance:
		return potential < current_best
	return False
