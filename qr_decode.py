#!/usr/bin/env python3.11
"""
QR Code structural decoder - module matrix to message
Usage: python3.11 qr_decode.py <grid.json|grid.txt|image> [--debug] [--json] [--allow-truncated]
"""

import json
import os
from dataclasses import dataclass
from typing import Tuple

from qr_codewords import assemble_codewords, deinterleave_codewords
from qr_format import decode_format
from qr_grid import ErrorCorrectionLevel, load_grid, to_bit_grid, version_for_size
from qr_layout import symbol_layout
from qr_mask import apply_mask, reference_mask
from qr_segments import EncodingMode, InsufficientDataError, decode_segment
from qr_tables import total_codewords

# Global debug output directory (None = disabled)
DEBUG_DIR = None

GRID_SUFFIXES = ('.json', '.txt')


@dataclass(frozen=True)
class DecodeResult:
    version: int
    size: int
    level: ErrorCorrectionLevel
    mask_index: int
    codewords: Tuple[int, ...]
    mode: EncodingMode
    length: int
    groups: Tuple[int, ...]
    message: str
    truncated: bool = False

    @property
    def reference_mask(self) -> int:
        return reference_mask(self.mask_index)

    def as_dict(self):
        return {
            'version': self.version,
            'size': self.size,
            'level': self.level.name,
            'mask_index': self.mask_index,
            'reference_mask': self.reference_mask,
            'codewords': list(self.codewords),
            'mode': self.mode.label,
            'length': self.length,
            'groups': list(self.groups),
            'message': self.message,
            'truncated': self.truncated,
        }


# ============================================================================
# DECODING
# ============================================================================

def unmask_grid(grid):
    """Validate, read format info and remove the mask. Returns (layout, level, mask, unmasked)."""
    grid = to_bit_grid(grid)
    layout = symbol_layout(version_for_size(grid.shape[0]))
    level, mask = decode_format(grid, layout.format_coordinates)
    return layout, level, mask, apply_mask(grid, mask, layout.data_areas)


def decode_grid(grid, allow_truncated=False) -> DecodeResult:
    """Decode a square 0/1 module matrix.

    Raises GridValidationError for a malformed grid and InsufficientDataError
    when the payload runs past the data codewords, unless `allow_truncated`
    is set, in which case the partial message comes back with truncated=True.
    """
    layout, level, mask, unmasked = unmask_grid(grid)
    version = layout.version
    codewords = assemble_codewords(unmasked, layout.data_coordinates, total_codewords(version))
    data = deinterleave_codewords(codewords, level, version)

    truncated = False
    try:
        segment = decode_segment(data, version)
    except InsufficientDataError as e:
        if not allow_truncated or e.partial is None:
            raise
        segment, truncated = e.partial, True

    return DecodeResult(version, layout.size, level, mask, tuple(data), segment.mode,
                        segment.length, segment.groups, segment.text, truncated)


def load_input(path):
    """Grid files are read directly; anything else goes through the image sampler."""
    if os.path.splitext(path)[1].lower() in GRID_SUFFIXES:
        return load_grid(path)
    from qr_sample import grid_from_image, load_image
    return grid_from_image(load_image(path))


def decode_file(path, allow_truncated=False) -> DecodeResult:
    print("Loading grid...")
    grid = load_input(path)
    size = grid.shape[0]
    print(f"  Size: {size}x{size}")

    print("Decoding...")
    result = decode_grid(grid, allow_truncated=allow_truncated)
    print(f"  Version: {result.version}, EC level: {result.level.name} (mask {result.mask_index})")
    print(f"  Mode: {result.mode.label}, length {result.length}")
    if result.truncated:
        print("  Warning: codeword stream ended early, message is partial")

    if DEBUG_DIR:
        from qr_debug import save_debug_all
        layout, _, _, unmasked = unmask_grid(grid)
        save_debug_all(DEBUG_DIR, grid, unmasked, layout, result)
    return result


# ============================================================================
# MAIN
# ============================================================================

def main(argv=None):
    import sys
    global DEBUG_DIR
    argv = sys.argv[1:] if argv is None else argv
    args = [a for a in argv if not a.startswith('--')]
    flags = [a for a in argv if a.startswith('--')]
    if not args:
        print(__doc__.strip())
        return 2
    path = args[0]

    DEBUG_DIR = None
    if '--debug' in flags:
        base = os.path.splitext(os.path.basename(path))[0]
        DEBUG_DIR = os.path.join(os.path.dirname(path) or '.', f"{base}_debug")
        os.makedirs(DEBUG_DIR, exist_ok=True)
        print(f"Debug output -> {DEBUG_DIR}/")

    try:
        result = decode_file(path, allow_truncated='--allow-truncated' in flags)
    except Exception as e:
        print(f"Error: {e}")
        return 1

    if '--json' in flags:
        print(json.dumps(result.as_dict(), ensure_ascii=False))
    else:
        print(result.message)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
