"""Exceptions raised by the KD-tree core."""


class KDTreeError(Exception):
	"""Base class for KD-tree errors."""


class InvalidDimensionError(KDTreeError, IndexError):
	"""A splitting dimension outside [0, D) reached the comparison policy."""


class EmptyTreeError(KDTreeError, LookupError):
	"""Nearest neighbor requested from a tree built with no points."""


class DimensionMismatchError(KDTreeError, ValueError):
	"""A point does not have the tree's dimensionality."""
