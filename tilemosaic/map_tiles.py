"""Match source image regions to tiles by average color."""

from tqdm import tqdm

from tilemosaic.kdtree import KDTree
from tilemosaic.mosaic_canvas import MosaicCanvas


def build_color_tree(tiles):
	"""
	Build a k-d tree over tile average colors.

	Args:
	    tiles: List of TileImage objects

	Returns:
	    Tuple of (KDTree of colors, dict mapping color Point -> TileImage).
	    Tiles sharing an average color collapse to the last one in `tiles`.
	"""
	tiles_by_color = {}
	tile_colors = []

	for tile in tiles:
		color = tile.get_average_color()
		tile_colors.append(color)
		tiles_by_color[color] = tile

	return KDTree(tile_colors, dimension=3), tiles_by_color


def map_tiles(source, tiles, show_progress=True):
	"""
	Pick the closest-colored tile for every region of `source`.

	Args:
	    source: SourceImage to recreate
	    tiles: List of TileImage objects
	    show_progress: Show a tqdm progress bar over rows

	Returns:
	    MosaicCanvas with the source's rows and columns filled in

	Raises:
	    EmptyTreeError: if `tiles` is empty
	"""
	mosaic = MosaicCanvas(source.get_rows(), source.get_columns())
	tree, tiles_by_color = build_color_tree(tiles)

	for row in tqdm(range(mosaic.get_rows()), desc="Matching tiles", disable=not show_progress):
		for col in range(mosaic.get_columns()):
			region_color = source.get_region_color(row, col)
			nearest = tree.find_nearest_neighbor(region_color)
			mosaic.set_tile(row, col, tiles_by_color[nearest])

	return mosaic
