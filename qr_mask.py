"""The eight data masks, indexed by the mask bits of the format codeword."""

import numpy as np

# Indexed as read from the format codeword; ISO reference number = index ^ 0b101.
# Each predicate works on ints and on numpy index arrays alike.
MASK_PATTERNS = (
    lambda i, j: (i * j % 2 + i * j % 3) == 0,
    lambda i, j: (i // 2 + j // 3) % 2 == 0,
    lambda i, j: (i * j % 3 + i + j) % 2 == 0,
    lambda i, j: (i * j % 3 + i * j) % 2 == 0,
    lambda i, j: i % 2 == 0,
    lambda i, j: (i + j) % 2 == 0,
    lambda i, j: (i + j) % 3 == 0,
    lambda i, j: j % 3 == 0,
)


def reference_mask(mask_index: int) -> int:
    return mask_index ^ 0b101


def mask_bit(mask_index: int, row: int, col: int) -> int:
    return int(MASK_PATTERNS[mask_index](row, col))


def mask_pattern(mask_index: int, size: int) -> np.ndarray:
    rows, cols = np.indices((size, size))
    return np.asarray(MASK_PATTERNS[mask_index](rows, cols), dtype=bool)


def mask_tile(mask_index: int) -> np.ndarray:
    """12x6 tile. Columns repeat within 6 modules, rows within 6 except mask 1 (period 4)."""
    rows, cols = np.indices((12, 6))
    return np.asarray(MASK_PATTERNS[mask_index](rows, cols), dtype=np.uint8)


def apply_mask(grid: np.ndarray, mask_index: int, data_areas: np.ndarray) -> np.ndarray:
    """XOR the mask into data modules only. Applying it twice restores the grid."""
    if not 0 <= mask_index < len(MASK_PATTERNS):
        raise ValueError(f"Unknown mask {mask_index}")
    flip = mask_pattern(mask_index, grid.shape[0]) & data_areas
    result = np.where(flip, 1 - grid, grid).astype(np.uint8)
    result.flags.writeable = False
    return result
