"""
Mosaic Maker - Recreate an image out of a folder of tile images

Every region of the target image is replaced by the tile whose average
color is closest to the region's average color.
"""

from tilemosaic.image_loader import analyze_images_in_folder, load_image, load_tiles
from tilemosaic.map_tiles import map_tiles
from tilemosaic.source_image import SourceImage

# ==================== CONFIGURATION ====================

# Target image - the image you want to recreate as a mosaic
TARGET_IMAGE = "target.jpg"

# Folder containing the images used as tiles
TILE_FOLDER = "tiles"

# Size in pixels of each target image region (smaller = more tiles)
REGION_SIZE = 20

# Size in pixels of each tile in the output image
PIXELS_PER_TILE = 40

# Output filename
OUTPUT_FILE = "mosaic_output.png"

# ======================================================


def make_mosaic(
	target_file,
	tile_folder="tiles",
	region_size=20,
	pixels_per_tile=40,
	output_file="mosaic_output.png",
	info_file="TILES_INFO.json",
	show_progress=True,
):
	"""
	Build and save a tile mosaic of `target_file`.

	Returns:
	    PIL Image of the mosaic, or None if nothing could be built
	"""
	images_info = analyze_images_in_folder(tile_folder, output_file=info_file, show_progress=show_progress)
	tiles = load_tiles(tile_folder, images_info, show_progress=show_progress)
	if not tiles:
		print("No tiles to process. Exiting.")
		return None
	print(f"Loaded {len(tiles)} tiles")

	target_img = load_image(target_file)
	if target_img is None:
		return None

	source = SourceImage(target_img, region_size)
	print(f"Grid: {source.get_rows()} rows x {source.get_columns()} cols")

	mosaic = map_tiles(source, tiles, show_progress=show_progress)
	canvas = mosaic.draw(pixels_per_tile, show_progress=show_progress)

	print(f"\nSaving mosaic to {output_file}...")
	canvas.save(output_file)
	print("[OK] Mosaic saved successfully!")
	return canvas


if __name__ == "__main__":
	print("=" * 60)
	print("MOSAIC MAKER")
	print("=" * 60)

	result = make_mosaic(
		TARGET_IMAGE,
		tile_folder=TILE_FOLDER,
		region_size=REGION_SIZE,
		pixels_per_tile=PIXELS_PER_TILE,
		output_file=OUTPUT_FILE,
	)

	if result is not None:
		print("\n" + "=" * 60)
		print(f"✓ Mosaic saved to: {OUTPUT_FILE}")
		print("=" * 60)
