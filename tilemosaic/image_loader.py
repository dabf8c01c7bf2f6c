"""Tile folder analysis and image loading utilities."""

import json
import multiprocessing
import os
from pathlib import Path

from PIL import Image
from tqdm import tqdm

from tilemosaic.tile_image import TileImage, average_color

SUPPORTED_FORMATS = (".jpg", ".jpeg", ".png")


def save_to_json(data, output_file):
	"""Saves a dictionary to a JSON file."""
	try:
		with open(output_file, "w") as f:
			json.dump(data, f, indent=4, sort_keys=True)
		print(f"\nSuccessfully saved tile data to {output_file}")
	except OSError as e:
		print(f"\nError saving data to JSON file. Reason: {e}")


def analyze_image(file_path):
	"""Analyzes a single image and returns its information."""
	filename = os.path.basename(file_path)
	try:
		with Image.open(file_path) as img:
			width, height = img.size
			return filename, {
				"dimensions": f"{width}x{height}",
				"area": width * height,
				"average_rgb": list(average_color(img)),
			}
	except OSError as e:
		print(f"  [ERROR] Could not process {filename}. Reason: {e}")
		return None, None


def list_images(folder_path):
	"""Sorted paths of the supported image files in `folder_path`."""
	return sorted(
		os.path.join(folder_path, fn)
		for fn in os.listdir(folder_path)
		if fn.lower().endswith(SUPPORTED_FORMATS)
	)


def analyze_images_in_folder(folder_path, output_file="TILES_INFO.json", processes=None, show_progress=True):
	"""
	Compute the average color of every tile image in a folder.

	The result is cached in `output_file`. If the cache already exists it is
	loaded instead; delete it to rerun the analysis.

	Args:
	    folder_path: Folder containing tile images
	    output_file: JSON cache path
	    processes: Worker processes for the pool (None = CPU count)
	    show_progress: Show a tqdm progress bar

	Returns:
	    Dict of filename -> {"dimensions", "area", "average_rgb"}
	"""
	if Path(output_file).exists():
		print(f"{output_file} already exists! If you want to rerun analysis please delete it first!")
		return load_images_info(output_file)

	print(f"Scanning folder: {folder_path}")
	image_paths = list_images(folder_path)

	images_info = {}

	# Use multiprocessing to analyze images in parallel
	with multiprocessing.Pool(processes) as pool:
		with tqdm(total=len(image_paths), desc="Analyzing Tiles", disable=not show_progress) as pbar:
			for filename, info in pool.imap_unordered(analyze_image, image_paths):
				if filename:
					images_info[filename] = info
				pbar.update()

	print(f"Generating a {output_file}")
	save_to_json(images_info, output_file)
	return images_info


def load_images_info(json_file="TILES_INFO.json"):
	"""Load preprocessed tile information from JSON file."""
	with open(json_file, "r") as f:
		return json.load(f)


def load_image(image_path):
	"""
	Open an image and read its pixels.

	Returns:
	    PIL Image object, or None if loading fails
	"""
	try:
		img = Image.open(image_path)
		img.load()
		return img
	except OSError as e:
		print(f"\n[ERROR] Could not load {image_path}: {e}")
		return None


def load_tiles(folder_path, images_info, show_progress=True):
	"""
	Load tile images listed in `images_info`.

	Args:
	    folder_path: Folder containing the tile images
	    images_info: Dict from analyze_images_in_folder / load_images_info
	    show_progress: Show a tqdm progress bar

	Returns:
	    List of TileImage objects in filename order. Unreadable files are skipped.
	"""
	tiles = []
	for filename in tqdm(sorted(images_info), desc="Loading tiles", disable=not show_progress):
		img = load_image(os.path.join(folder_path, filename))
		if img is None:
			continue
		tiles.append(TileImage(img, name=filename, average_rgb=images_info[filename]["average_rgb"]))

	return tiles
