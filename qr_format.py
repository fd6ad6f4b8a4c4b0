"""Format information: BCH(15,5) codewords and nearest-codeword decoding."""

from typing import Iterable, Tuple

from qr_grid import ErrorCorrectionLevel, FormatCoordinates

GENERATOR = 0b10100110111  # x^10 + x^8 + x^5 + x^4 + x^2 + x + 1
FORMAT_MASK = 0b101010000010010


def bch_format_codeword(value: int) -> int:
    """5 data bits + 10 BCH check bits, XORed with the fixed format mask."""
    encoded = value << 10
    for i in range(14, 9, -1):
        if (encoded >> i) & 1:
            encoded ^= GENERATOR << (i - 10)
    return ((value << 10) | encoded) ^ FORMAT_MASK


FORMAT_CODEWORDS = tuple(bch_format_codeword(v) for v in range(32))


def bits_to_int(bits: Iterable[int]) -> int:
    val = 0
    for b in bits:
        val = (val << 1) | int(b)
    return val


def nearest_format_codeword(horizontal: int, vertical: int) -> Tuple[int, int]:
    """Index of the codeword closest to both copies, and its total Hamming distance.

    Ties go to the lowest index.
    """
    distances = [bin(horizontal ^ cw).count('1') + bin(vertical ^ cw).count('1')
                 for cw in FORMAT_CODEWORDS]
    best = distances.index(min(distances))
    return best, distances[best]


def split_format_codeword(codeword: int) -> Tuple[ErrorCorrectionLevel, int]:
    return ErrorCorrectionLevel((codeword >> 13) & 0b11), (codeword >> 10) & 0b111


def read_format_bits(grid, coords: FormatCoordinates) -> Tuple[int, int]:
    """Raw 15-bit values of the horizontal and vertical copies (never masked)."""
    horizontal = bits_to_int(grid[r, c] for r, c in coords.horizontal)
    vertical = bits_to_int(grid[r, c] for r, c in coords.vertical)
    return horizontal, vertical


def decode_format(grid, coords: FormatCoordinates) -> Tuple[ErrorCorrectionLevel, int]:
    """Read EC level and mask index."""
    best, _ = nearest_format_codeword(*read_format_bits(grid, coords))
    return split_format_codeword(FORMAT_CODEWORDS[best])
