"""Tile images used as mosaic cells."""

import numpy as np
from PIL import Image

from tilemosaic.point import Point


def average_color(img):
	"""
	Average RGB color of a Pillow image.

	Args:
	    img: PIL Image in any mode

	Returns:
	    Point(r, g, b) of the channel means rounded to ints
	"""
	np_array = np.array(img.convert("RGB"))
	avg_color = np.mean(np_array, axis=(0, 1))
	return Point(*(int(round(c)) for c in avg_color))


class TileImage:
	"""
	A single tile of the mosaic.

	Args:
	    image: PIL Image
	    name: Optional identifier, usually the source filename
	    average_rgb: Precomputed average color (e.g. from TILES_INFO.json)
	"""

	def __init__(self, image, name=None, average_rgb=None):
		self.image = image
		self.name = name
		self._average_color = Point(*average_rgb) if average_rgb is not None else None

	def get_average_color(self):
		if self._average_color is None:
			self._average_color = average_color(self.image)
		return self._average_color

	def paste(self, canvas, x, y, size):
		"""Draw this tile onto `canvas` as a `size` x `size` square at (x, y)."""
		img = self.image
		if img.size != (size, size):
			img = img.resize((size, size), Image.Resampling.LANCZOS)
		canvas.paste(img.convert("RGB"), (x, y))

	def __repr__(self):
		return f"TileImage(name={self.name!r}, size={self.image.size})"
