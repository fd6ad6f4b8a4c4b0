"""Sample a module grid from a rendered (upright, unrotated) QR image."""

import cv2
import numpy as np

from qr_grid import to_bit_grid
from qr_tables import MAX_VERSION, MIN_VERSION, symbol_size

FINDER = np.array([[1,1,1,1,1,1,1],[1,0,0,0,0,0,1],[1,0,1,1,1,0,1],[1,0,1,1,1,0,1],[1,0,1,1,1,0,1],[1,0,0,0,0,0,1],[1,1,1,1,1,1,1]], dtype=np.uint8)


def load_image(path):
    image = cv2.imread(path)
    if image is None:
        raise ValueError(f"Cannot load {path}")
    return image


def dark_mask(image):
    """Boolean image, True where Otsu binarisation says dark."""
    gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY) if len(image.shape) == 3 else image
    if gray.dtype != np.uint8:
        gray = cv2.normalize(gray, None, 0, 255, cv2.NORM_MINMAX).astype(np.uint8)
    _, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
    return binary < 128


def finder_score(m):
    size = m.shape[0]
    return int(np.sum(m[0:7, 0:7] == FINDER) + np.sum(m[0:7, size-7:size] == FINDER) + np.sum(m[size-7:size, 0:7] == FINDER))


def grid_from_image(image):
    """Symbol bounds come from the dark bounding box (the three finders touch every edge),
    module pitch from the width of the top-left finder."""
    dark = dark_mask(image)
    rows, cols = np.where(dark)
    if len(rows) == 0:
        raise ValueError("No dark modules found")
    top, bottom, left, right = rows.min(), rows.max(), cols.min(), cols.max()
    width, height = right - left + 1, bottom - top + 1

    # Length of the first dark run on the top edge = 7 modules
    run = int(np.argmin(dark[top, left:right+1])) or width
    pitch = run / 7.0
    version = int(np.clip(round((width / pitch - 17) / 4), MIN_VERSION, MAX_VERSION))
    size = symbol_size(version)

    coords_c = (left + (np.arange(size) + 0.5) * width / size).astype(int)
    coords_r = (top + (np.arange(size) + 0.5) * height / size).astype(int)
    coords_c = np.clip(coords_c, 0, dark.shape[1] - 1)
    coords_r = np.clip(coords_r, 0, dark.shape[0] - 1)
    m = dark[coords_r][:, coords_c].astype(np.uint8)

    if finder_score(m) < 100:  # At least ~68% correct
        raise ValueError(f"Image does not look like an upright version {version} QR code")
    return to_bit_grid(m)
