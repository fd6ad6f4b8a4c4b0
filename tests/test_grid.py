import json

import numpy as np
import pytest

from qr_grid import (ErrorCorrectionLevel, GridValidationError, format_coordinates, load_grid,
                     parse_grid_text, to_bit_grid, version_for_size)


def test_accepts_valid_grid_and_freezes_it():
    grid = to_bit_grid([[0] * 21 for _ in range(21)])
    assert grid.shape == (21, 21)
    assert grid.dtype == np.uint8
    assert not grid.flags.writeable


def test_accepts_bool_grid():
    grid = to_bit_grid(np.ones((25, 25), dtype=bool))
    assert grid.sum() == 25 * 25


@pytest.mark.parametrize('rows', [
    [[0] * 21 for _ in range(20)],            # not square
    [[0] * 20 for _ in range(20)],            # too small
    [[0] * 23 for _ in range(23)],            # wrong parity
    [[0] * 181 for _ in range(181)],          # too large
    [[0] * 21 for _ in range(20)] + [[0] * 5],  # ragged
    [[2] * 21 for _ in range(21)],            # not binary
    [0] * 21,                                 # not 2-D
])
def test_rejects_invalid_grids(rows):
    with pytest.raises(GridValidationError):
        to_bit_grid(rows)


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        to_bit_grid([[0]])


@pytest.mark.parametrize('size,version', [(21, 1), (25, 2), (57, 10), (177, 40)])
def test_version_for_size(size, version):
    assert version_for_size(size) == version


def test_format_coordinates_version_1():
    coords = format_coordinates(21)
    assert len(coords.horizontal) == len(coords.vertical) == 15
    assert coords.horizontal[:7] == ((8, 0), (8, 1), (8, 2), (8, 3), (8, 4), (8, 5), (8, 7))
    assert coords.horizontal[7:] == tuple((8, c) for c in range(13, 21))
    assert coords.vertical[:8] == ((20, 8), (19, 8), (18, 8), (17, 8), (16, 8), (15, 8), (14, 8), (8, 8))
    assert coords.vertical[8:] == ((7, 8), (5, 8), (4, 8), (3, 8), (2, 8), (1, 8), (0, 8))
    assert len(set(coords.horizontal + coords.vertical)) == 30


def test_level_field_values():
    assert [level.name for level in sorted(ErrorCorrectionLevel, key=lambda l: l.value)] == ['H', 'Q', 'M', 'L']
    assert ErrorCorrectionLevel(2) is ErrorCorrectionLevel.M
    assert ErrorCorrectionLevel.Q.description == 'QUARTILE'


def test_load_grid_json_and_text(tmp_path, hello_world):
    rows = hello_world.tolist()
    json_path = tmp_path / 'grid.json'
    json_path.write_text(json.dumps(rows))
    txt_path = tmp_path / 'grid.txt'
    txt_path.write_text('# hello\n' + '\n'.join(''.join(map(str, r)) for r in rows) + '\n')

    assert (load_grid(str(json_path)) == hello_world).all()
    assert (load_grid(str(txt_path)) == hello_world).all()


def test_load_grid_json_object(tmp_path, hello_world):
    path = tmp_path / 'grid.json'
    path.write_text(json.dumps({'grid': hello_world.tolist()}))
    assert (load_grid(str(path)) == hello_world).all()


def test_parse_grid_text_rejects_other_characters():
    with pytest.raises(GridValidationError):
        parse_grid_text('0101x\n')


def test_parse_grid_text_ignores_whitespace():
    assert parse_grid_text('0 1 1\n\n1 0 0\n') == [[0, 1, 1], [1, 0, 0]]
