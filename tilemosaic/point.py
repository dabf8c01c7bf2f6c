"""Fixed-dimension coordinate points."""


class Point(tuple):
	"""
	Immutable coordinate tuple.

	Equality and ordering are the tuple ones: all coordinates equal, and
	lexicographic comparison starting at dimension 0.

	    >>> Point(255, 0, 0) < Point(255, 1, 0)
	    True
	"""

	__slots__ = ()

	def __new__(cls, *coords):
		# numpy scalars become Python numbers so distance math cannot wrap around
		return super().__new__(cls, (c.item() if hasattr(c, "item") else c for c in coords))

	def __getnewargs__(self):
		return tuple(self)

	@classmethod
	def from_iterable(cls, coords):
		return cls(*coords)

	@property
	def dim(self):
		return len(self)

	def __repr__(self):
		return f"Point({', '.join(repr(c) for c in self)})"
