"""Source image analysis: the grid of region colors a mosaic has to match."""

import numpy as np

from tilemosaic.point import Point


class SourceImage:
	"""
	Split an image into square regions and expose their average colors.

	Args:
	    image: PIL Image to recreate
	    resolution: Side of each region in pixels

	The grid has height // resolution rows and width // resolution columns
	(at least one of each); pixels past the last full region are ignored.
	"""

	def __init__(self, image, resolution):
		if resolution < 1:
			raise ValueError(f"resolution must be positive, got {resolution}")

		if image.width == 0 or image.height == 0:
			raise ValueError(f"cannot split an empty {image.width}x{image.height} image")

		self.image = image.convert("RGB")
		self.resolution = resolution
		self._pixels = np.array(self.image)

		width, height = self.image.size
		self._rows = max(1, height // resolution)
		self._columns = max(1, width // resolution)

	def get_rows(self):
		return self._rows

	def get_columns(self):
		return self._columns

	def get_region_color(self, row, col):
		"""
		Average color of one region.

		Args:
		    row, col: Region coordinates inside the grid

		Returns:
		    Point(r, g, b) with each channel mean truncated to int

		Raises:
		    IndexError: if (row, col) is outside the grid
		"""
		if not (0 <= row < self._rows and 0 <= col < self._columns):
			raise IndexError(f"region ({row}, {col}) outside {self._rows}x{self._columns} grid")

		height, width = self._pixels.shape[:2]
		y_start = row * self.resolution
		y_end = min((row + 1) * self.resolution, height)
		x_start = col * self.resolution
		x_end = min((col + 1) * self.resolution, width)

		region = self._pixels[y_start:y_end, x_start:x_end]
		avg_color = np.mean(region, axis=(0, 1))
		return Point(*(int(c) for c in avg_color))
