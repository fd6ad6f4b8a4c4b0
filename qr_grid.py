"""Module matrix validation, format-information geometry and grid files."""

import json
import os
from enum import Enum
from functools import lru_cache
from typing import List, NamedTuple, Tuple

import numpy as np

Coordinate = Tuple[int, int]


class GridValidationError(ValueError):
    """Input is not a square 0/1 matrix of a valid QR size."""


class ErrorCorrectionLevel(Enum):
    # value = the 2-bit field as read from the (masked) format codeword
    H = 0
    Q = 1
    M = 2
    L = 3

    @property
    def description(self):
        return {'H': 'HIGH', 'Q': 'QUARTILE', 'M': 'MEDIUM', 'L': 'LOW'}[self.name]


class FormatCoordinates(NamedTuple):
    horizontal: Tuple[Coordinate, ...]
    vertical: Tuple[Coordinate, ...]


@lru_cache(maxsize=None)
def format_coordinates(size: int) -> FormatCoordinates:
    """Both 15-module copies of the format information, MSB first."""
    L = size
    cols = [0, 1, 2, 3, 4, 5, 7, L-8, L-7, L-6, L-5, L-4, L-3, L-2, L-1]
    rows = [L-1, L-2, L-3, L-4, L-5, L-6, L-7, 8, 7, 5, 4, 3, 2, 1, 0]
    return FormatCoordinates(tuple((8, c) for c in cols), tuple((r, 8) for r in rows))


def version_for_size(size: int) -> int:
    if size < 21 or size > 177 or size % 4 != 1:
        raise GridValidationError(f"Invalid QR code size {size} (need 21..177 with size % 4 == 1)")
    return (size - 17) // 4


def to_bit_grid(rows) -> np.ndarray:
    """Validate a module matrix and return it as a read-only uint8 array (1 = dark)."""
    try:
        grid = np.array(rows)
    except ValueError as e:
        raise GridValidationError(f"QR code must be a square: {e}") from e
    if grid.dtype == object or grid.ndim != 2:
        raise GridValidationError("QR code must be a square")
    size = grid.shape[0]
    if grid.shape[1] != size:
        raise GridValidationError(f"QR code must be a square, got {grid.shape[0]}x{grid.shape[1]}")
    version_for_size(size)
    if grid.dtype != bool and not np.isin(grid, (0, 1)).all():
        raise GridValidationError("Modules must be 0 (light) or 1 (dark)")
    grid = grid.astype(np.uint8)
    grid.flags.writeable = False
    return grid


def parse_grid_text(text: str) -> List[List[int]]:
    rows = []
    for line in text.splitlines():
        line = ''.join(line.split())
        if not line or line.startswith('#'):
            continue
        if set(line) - {'0', '1'}:
            raise GridValidationError(f"Unexpected characters in grid row: {line[:40]!r}")
        rows.append([int(ch) for ch in line])
    return rows


def load_grid(path: str) -> np.ndarray:
    """Read a grid from a .json (list of rows) or plain-text (rows of 0/1) file."""
    with open(path, encoding='utf-8') as f:
        text = f.read()
    if os.path.splitext(path)[1].lower() == '.json':
        data = json.loads(text)
        if isinstance(data, dict):
            data = data.get('grid')
        return to_bit_grid(data)
    return to_bit_grid(parse_grid_text(text))
