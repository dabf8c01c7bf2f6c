"""QuickSelect partitioning used to place subtree medians in place."""

from tilemosaic.distance import smaller_dim_val


def partition(points, low, high, pivot_index, dim):
	"""
	Lomuto partition of points[low:high + 1] around points[pivot_index].

	Args:
	    points: Mutable list of points, reordered in place
	    low, high: Inclusive index range to partition
	    pivot_index: Index of the pivot element, low <= pivot_index <= high
	    dim: Dimension to compare on

	Returns:
	    Final index of the pivot. Everything before it in the range precedes
	    the pivot along `dim`; nothing after it does.
	"""
	pivot_value = points[pivot_index]
	points[pivot_index], points[high] = points[high], points[pivot_index]

	store_index = low
	for i in range(low, high):
		if smaller_dim_val(points[i], pivot_value, dim):
			points[i], points[store_index] = points[store_index], points[i]
			store_index += 1

	points[high], points[store_index] = points[store_index], points[high]
	return store_index


def select(points, low, high, n, dim):
	"""
	Move the n-th smallest point of points[low:high + 1] (along `dim`) to index n.

	Always pivots at index n. This keeps the output order deterministic but
	adversarial inputs can still drive it to quadratic time.
	"""
	while low < high:
		pivot_index = partition(points, low, high, n, dim)
		if n == pivot_index:
			return
		if n < pivot_index:
			high = pivot_index - 1
		else:
			low = pivot_index + 1
