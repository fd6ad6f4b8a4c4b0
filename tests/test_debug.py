import numpy as np
import pytest

from qr_debug import draw_codewords, draw_colored_matrix, module_type_map, save_debug_all
from qr_decode import decode_grid, unmask_grid
from qr_grid import format_coordinates
from qr_layout import symbol_layout
from qr_tables import raw_data_modules, symbol_size, total_codewords


@pytest.mark.parametrize('version', [1, 2, 6, 7, 14, 32, 40])
def test_type_map_leaves_exactly_the_data_modules(version):
    tmap = module_type_map(version, format_coordinates(symbol_size(version)))
    assert int((tmap == 0).sum()) == raw_data_modules(version)
    layout = symbol_layout(version)
    assert ((tmap == 0) == layout.data_areas.astype(bool)).all()


def test_type_map_version_info_only_from_7():
    assert not (module_type_map(6, format_coordinates(41)) == 6).any()
    assert int((module_type_map(7, format_coordinates(45)) == 6).sum()) == 36


def test_drawings_have_expected_shape(hello_world):
    layout, _, _, unmasked = unmask_grid(hello_world)
    assert draw_colored_matrix(hello_world, layout, scale=10).shape == (210, 210, 3)
    assert draw_codewords(unmasked, layout, total_codewords(1), scale=10).shape == (210, 210, 3)


def test_save_debug_all(tmp_path, hello_world):
    layout, _, _, unmasked = unmask_grid(hello_world)
    result = decode_grid(hello_world)
    save_debug_all(str(tmp_path), np.asarray(hello_world), unmasked, layout, result)
    assert sorted(p.name for p in tmp_path.iterdir()) == [
        '1_matrix.png', '2_unmasked.png', '3_codewords.png', '4_info.txt']
    info = (tmp_path / '4_info.txt').read_text(encoding='utf-8')
    assert 'Version: 1' in info
    assert 'Mask: 0 (reference 5)' in info
    assert info.rstrip().endswith('HELLO WORLD')


def test_save_debug_all_without_dir_is_noop(hello_world):
    layout, _, _, unmasked = unmask_grid(hello_world)
    save_debug_all(None, hello_world, unmasked, layout, decode_grid(hello_world))
