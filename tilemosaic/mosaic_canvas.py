"""Grid of tiles and its rendering."""

from PIL import Image
from tqdm import tqdm


class MosaicCanvas:
	"""
	A rows x columns grid holding one tile per cell.

	Args:
	    rows: Number of rows (> 0)
	    columns: Number of columns (> 0)
	"""

	def __init__(self, rows, columns):
		if rows < 1 or columns < 1:
			raise ValueError(f"canvas must be at least 1x1, got {rows}x{columns}")

		self._rows = rows
		self._columns = columns
		self._tiles = [[None] * columns for _ in range(rows)]

	def get_rows(self):
		return self._rows

	def get_columns(self):
		return self._columns

	def _check_bounds(self, row, col):
		if not (0 <= row < self._rows and 0 <= col < self._columns):
			raise IndexError(f"cell ({row}, {col}) outside {self._rows}x{self._columns} canvas")

	def set_tile(self, row, col, tile):
		self._check_bounds(row, col)
		self._tiles[row][col] = tile

	def get_tile(self, row, col):
		self._check_bounds(row, col)
		return self._tiles[row][col]

	def draw(self, pixels_per_tile, show_progress=False):
		"""
		Render the mosaic.

		Args:
		    pixels_per_tile: Side of each drawn tile in pixels
		    show_progress: Show a tqdm bar per row

		Returns:
		    PIL Image of size (columns * pixels_per_tile, rows * pixels_per_tile)

		Raises:
		    ValueError: if a cell has no tile or pixels_per_tile is not positive
		"""
		if pixels_per_tile < 1:
			raise ValueError(f"pixels_per_tile must be positive, got {pixels_per_tile}")

		canvas = Image.new(
			"RGB", (self._columns * pixels_per_tile, self._rows * pixels_per_tile), (0, 0, 0)
		)

		for row in tqdm(range(self._rows), desc="Drawing mosaic", disable=not show_progress):
			for col in range(self._columns):
				tile = self._tiles[row][col]
				if tile is None:
					raise ValueError(f"no tile set at ({row}, {col})")
				tile.paste(canvas, col * pixels_per_tile, row * pixels_per_tile, pixels_per_tile)

		return canvas
