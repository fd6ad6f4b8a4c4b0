import numpy as np
import pytest

from qr_layout import symbol_layout
from qr_mask import MASK_PATTERNS, apply_mask, mask_bit, mask_pattern, mask_tile, reference_mask

# ISO/IEC 18004 mask conditions by reference number
ISO_MASKS = {
    0: lambda i, j: (i + j) % 2 == 0,
    1: lambda i, j: i % 2 == 0,
    2: lambda i, j: j % 3 == 0,
    3: lambda i, j: (i + j) % 3 == 0,
    4: lambda i, j: (i // 2 + j // 3) % 2 == 0,
    5: lambda i, j: (i * j) % 2 + (i * j) % 3 == 0,
    6: lambda i, j: ((i * j) % 2 + (i * j) % 3) % 2 == 0,
    7: lambda i, j: ((i + j) % 2 + (i * j) % 3) % 2 == 0,
}


@pytest.mark.parametrize('index', range(8))
def test_matches_iso_reference_numbering(index):
    iso = ISO_MASKS[reference_mask(index)]
    for i in range(12):
        for j in range(12):
            assert mask_bit(index, i, j) == int(iso(i, j))


def test_reference_mask_is_a_permutation():
    assert sorted(reference_mask(i) for i in range(8)) == list(range(8))
    assert reference_mask(0) == 5


@pytest.mark.parametrize('index', range(8))
def test_tile_repeats_over_the_symbol(index):
    tile = mask_tile(index)
    assert tile.shape == (12, 6)
    assert (mask_pattern(index, 24) == np.tile(tile, (2, 4)).astype(bool)).all()


@pytest.mark.parametrize('index,row_period', [(i, 4 if i == 1 else 6) for i in range(8)])
def test_row_period(index, row_period):
    pattern = mask_pattern(index, 24)
    assert (pattern[row_period:] == pattern[:-row_period]).all()
    assert (pattern[:, 6:] == pattern[:, :-6]).all()


def test_mask_1_does_not_repeat_every_6_rows():
    pattern = mask_pattern(1, 12)
    assert not (pattern[6] == pattern[0]).all()


def test_known_tile():
    assert mask_tile(0).tolist()[:2] == [[1, 1, 1, 1, 1, 1], [1, 0, 0, 0, 0, 0]]
    assert mask_tile(7).tolist()[0] == [1, 0, 0, 1, 0, 0]


@pytest.mark.parametrize('index', range(8))
def test_vectorised_pattern_agrees_with_predicate(index):
    pattern = mask_pattern(index, 25)
    assert all(pattern[i, j] == bool(MASK_PATTERNS[index](i, j)) for i in range(25) for j in range(25))


@pytest.mark.parametrize('index', range(8))
def test_apply_mask_is_an_involution_on_data_modules(index, encode):
    grid = encode('MASK TEST', 3, 'Q', 2)
    areas = symbol_layout(3).data_areas
    once = apply_mask(grid, index, areas)
    assert not once.flags.writeable
    assert (apply_mask(once, index, areas) == grid).all()
    # function patterns are never touched
    assert (once[~areas] == grid[~areas]).all()
    assert (once[areas] != grid[areas]).sum() == mask_pattern(index, grid.shape[0])[areas].sum()


def test_unknown_mask_rejected(hello_world):
    with pytest.raises(ValueError):
        apply_mask(hello_world, 8, symbol_layout(1).data_areas)
