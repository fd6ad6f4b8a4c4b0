"""Function patterns vs data area, and the zigzag order of data modules."""

from functools import lru_cache
from typing import NamedTuple, Tuple

import numpy as np

from qr_grid import Coordinate, FormatCoordinates, format_coordinates
from qr_tables import alignment_coordinates, check_version, raw_data_modules, symbol_size


class SymbolLayout(NamedTuple):
    version: int
    size: int
    format_coordinates: FormatCoordinates
    data_areas: np.ndarray
    data_coordinates: Tuple[Coordinate, ...]


@lru_cache(maxsize=None)
def compute_data_areas(size: int, version: int, coords: FormatCoordinates) -> np.ndarray:
    """True where a module carries data or EC bits."""
    areas = np.ones((size, size), dtype=bool)

    # Finder patterns and separators
    areas[:8, :8] = False
    areas[:8, size-8:] = False
    areas[size-8:, :8] = False

    # Alignment patterns; centres already cleared overlap a finder
    centers = alignment_coordinates(version)
    for r in centers:
        for c in centers:
            if areas[r, c]:
                areas[r-2:r+3, c-2:c+3] = False

    # Timing patterns
    areas[6, 8:size-8] = False
    areas[8:size-8, 6] = False

    for r, c in coords.horizontal + coords.vertical:
        areas[r, c] = False

    # Dark module
    areas[size-8, 8] = False

    # Version info (v >= 7): 6x3 blocks near top-right and bottom-left
    if version >= 7:
        areas[:6, size-11:size-8] = False
        areas[size-11:size-8, :6] = False

    areas.flags.writeable = False
    return areas


def data_coordinates(size: int, data_areas: np.ndarray) -> Tuple[Coordinate, ...]:
    """Data modules in placement order: column pairs right to left, alternating up/down."""
    coords, col, up = [], size - 1, True
    while col >= 0:
        if col == 6: col -= 1; continue
        for row in (range(size-1, -1, -1) if up else range(size)):
            if data_areas[row, col]: coords.append((row, col))
            if col > 0 and data_areas[row, col-1]: coords.append((row, col-1))
        col -= 2
        up = not up
    return tuple(coords)


@lru_cache(maxsize=None)
def symbol_layout(version: int) -> SymbolLayout:
    check_version(version)
    size = symbol_size(version)
    coords = format_coordinates(size)
    areas = compute_data_areas(size, version, coords)
    sequence = data_coordinates(size, areas)
    expected = raw_data_modules(version)
    if len(sequence) != expected:
        raise RuntimeError(f"Version {version}: zigzag yields {len(sequence)} modules, expected {expected}")
    return SymbolLayout(version, size, coords, areas, sequence)
