"""Codeword assembly and block de-interleaving."""

from functools import lru_cache
from typing import List, Sequence, Tuple

from qr_grid import Coordinate, ErrorCorrectionLevel
from qr_tables import num_codewords_list


def assemble_codewords(grid, coordinates: Sequence[Coordinate], count: int) -> List[int]:
    """Read `count` codewords, 8 modules each in scan order, MSB first."""
    if len(coordinates) < 8 * count:
        raise RuntimeError(f"Need {8 * count} data modules for {count} codewords, have {len(coordinates)}")
    bits = [int(grid[r, c]) for r, c in coordinates[:8 * count]]
    return [sum(bits[i+j] << (7-j) for j in range(8)) for i in range(0, len(bits), 8)]


@lru_cache(maxsize=None)
def interleaving(version: int, level: ErrorCorrectionLevel) -> Tuple[int, ...]:
    """Physical stream position of every data codeword, in block-major order."""
    lists, index = [], 0
    for num in num_codewords_list(version)[level.name]:
        lists.append(list(range(index, index + num)))
        index += num

    order, slot = [0] * index, 0
    while any(lists):
        for lst in lists:
            if lst:
                order[lst.pop(0)] = slot
                slot += 1
    return tuple(order)


def deinterleave_codewords(codewords: Sequence[int], level: ErrorCorrectionLevel, version: int) -> List[int]:
    """Data codewords back in block order; the EC codewords that follow are dropped."""
    order = interleaving(version, level)
    if len(codewords) < len(order):
        raise RuntimeError(f"Need {len(order)} codewords, have {len(codewords)}")
    return [codewords[p] for p in order]


def interleave_codewords(data: Sequence[int], level: ErrorCorrectionLevel, version: int) -> List[int]:
    """Encoder-side order of data codewords (inverse of `deinterleave_codewords`)."""
    order = interleaving(version, level)
    if len(data) != len(order):
        raise ValueError(f"Expected {len(order)} data codewords, got {len(data)}")
    result = [0] * len(order)
    for logical, physical in enumerate(order):
        result[physical] = data[logical]
    return result
