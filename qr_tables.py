"""Per-version QR constants: alignment geometry and error-correction block layout."""

from functools import lru_cache
from typing import Dict, List, Tuple

MIN_VERSION, MAX_VERSION = 1, 40

# Second alignment coordinate per version (index 0 unused). The first is always 6,
# the last is size - 7, the rest are spread evenly in between.
ALIGNMENT_SECOND = (
    -1, 6, 18, 22, 26, 30, 34, 22, 24, 26, 28, 30, 32, 34, 26, 26, 26, 30, 30, 30, 34,
    28, 26, 30, 28, 32, 30, 34, 26, 30, 26, 30, 34, 30, 34, 30, 24, 28, 32, 26, 30,
)

LEVEL_ORDER = ('L', 'M', 'Q', 'H')

# Total EC codewords per version, columns L, M, Q, H
EC_CODEWORDS = (
    (7, 10, 13, 17), (10, 16, 22, 28), (15, 26, 36, 44), (20, 36, 52, 64),
    (26, 48, 72, 88), (36, 64, 96, 112), (40, 72, 108, 130), (48, 88, 132, 156),
    (60, 110, 160, 192), (72, 130, 192, 224), (80, 150, 224, 264), (96, 176, 260, 308),
    (104, 198, 288, 352), (120, 216, 320, 384), (132, 240, 360, 432), (144, 280, 408, 480),
    (168, 308, 448, 532), (180, 338, 504, 588), (196, 364, 546, 650), (224, 416, 600, 700),
    (224, 442, 644, 750), (252, 476, 690, 816), (270, 504, 750, 900), (300, 560, 810, 960),
    (312, 588, 870, 1050), (336, 644, 952, 1110), (360, 700, 1020, 1200), (390, 728, 1050, 1260),
    (420, 784, 1140, 1350), (450, 812, 1200, 1440), (480, 868, 1290, 1530), (510, 924, 1350, 1620),
    (540, 980, 1440, 1710), (570, 1036, 1530, 1800), (570, 1064, 1590, 1890), (600, 1120, 1680, 1980),
    (630, 1204, 1770, 2100), (660, 1260, 1860, 2220), (720, 1316, 1950, 2310), (750, 1372, 2040, 2430),
)

# Number of EC blocks per version, columns L, M, Q, H
EC_BLOCKS = (
    (1, 1, 1, 1), (1, 1, 1, 1), (1, 1, 2, 2), (1, 2, 2, 4), (1, 2, 4, 4),
    (2, 4, 4, 4), (2, 4, 6, 5), (2, 4, 6, 6), (2, 5, 8, 8), (4, 5, 8, 8),
    (4, 5, 8, 11), (4, 8, 10, 11), (4, 9, 12, 16), (4, 9, 16, 16), (6, 10, 12, 18),
    (6, 10, 17, 16), (6, 11, 16, 19), (6, 13, 18, 21), (7, 14, 21, 25), (8, 16, 20, 25),
    (8, 17, 23, 25), (9, 17, 23, 34), (9, 18, 25, 30), (10, 20, 27, 32), (12, 21, 29, 35),
    (12, 23, 34, 37), (12, 25, 34, 40), (13, 26, 35, 42), (14, 28, 38, 45), (15, 29, 40, 48),
    (16, 31, 43, 51), (17, 33, 45, 54), (18, 35, 48, 57), (19, 37, 51, 60), (19, 38, 53, 63),
    (20, 40, 56, 66), (21, 43, 59, 70), (22, 45, 62, 74), (24, 47, 65, 77), (25, 49, 68, 81),
)


def check_version(version: int) -> None:
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise ValueError(f"Unsupported version {version}")


def symbol_size(version: int) -> int:
    return version * 4 + 17


@lru_cache(maxsize=None)
def alignment_coordinates(version: int) -> Tuple[int, ...]:
    """Row/column coordinates of alignment pattern centres, ascending.

    Version 1 yields (6,), whose only centre lies inside the top-left finder.
    """
    check_version(version)
    num = 1 if version == 1 else version // 7 + 2
    second = ALIGNMENT_SECOND[version]
    last = symbol_size(version) - 7
    coords = {6, second}
    for i in range(num - 2):
        coords.add((second * i + last * (num - 2 - i)) // (num - 2))
    return tuple(sorted(coords))


def raw_data_modules(version: int) -> int:
    """Modules left for codewords and remainder bits once function patterns are removed."""
    check_version(version)
    result = (16 * version + 128) * version + 64
    if version >= 2:
        num_align = version // 7 + 2
        result -= (25 * num_align - 10) * num_align - 55
        if version >= 7:
            result -= 36
    return result


def total_codewords(version: int) -> int:
    return raw_data_modules(version) // 8


def remainder_bits(version: int) -> int:
    return raw_data_modules(version) % 8


@lru_cache(maxsize=None)
def num_codewords_list(version: int) -> Dict[str, Tuple[int, ...]]:
    """Data codewords of each block, per level letter, short blocks first."""
    total = total_codewords(version)
    result = {}
    for i, name in enumerate(LEVEL_ORDER):
        num_blocks = EC_BLOCKS[version - 1][i]
        ec_per_block = EC_CODEWORDS[version - 1][i] // num_blocks
        short_len, num_long = divmod(total, num_blocks)
        result[name] = tuple(short_len - ec_per_block + (1 if b >= num_blocks - num_long else 0)
                             for b in range(num_blocks))
    return result


def ec_codewords_per_block(version: int, level_name: str) -> int:
    i = LEVEL_ORDER.index(level_name)
    return EC_CODEWORDS[version - 1][i] // EC_BLOCKS[version - 1][i]


def data_codewords(version: int, level_name: str) -> int:
    return sum(num_codewords_list(version)[level_name])


def block_layout(version: int, level_name: str) -> List[Tuple[int, int]]:
    """(data, total) codewords per block."""
    ec = ec_codewords_per_block(version, level_name)
    return [(n, n + ec) for n in num_codewords_list(version)[level_name]]
