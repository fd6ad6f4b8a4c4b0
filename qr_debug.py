"""QR decode debug visualization - saves intermediate results to disk."""

import os

import cv2
import numpy as np

from qr_tables import alignment_coordinates, symbol_size, total_codewords

# BGR palette for codeword colouring, cycled as (3 * i) % 10
CODEWORD_COLORS = [
    (80, 80, 230), (80, 160, 240), (60, 210, 230), (90, 200, 120), (200, 190, 80),
    (220, 130, 70), (200, 90, 150), (150, 90, 200), (140, 140, 140), (60, 110, 170),
]

MODULE_COLORS = {
    1: (0, 0, 200),     # finder: red
    2: (0, 140, 255),   # separator: orange
    3: (0, 200, 200),   # timing: yellow
    4: (200, 100, 0),   # alignment: blue
    5: (200, 0, 200),   # format info: magenta
    6: (200, 200, 0),   # version info: cyan
    7: (100, 100, 100), # dark module: gray
}


def _save_img(debug_dir, name, data, scale=None):
    """Save image to debug_dir."""
    path = os.path.join(debug_dir, name)
    if data.ndim == 2 and data.dtype == np.uint8 and data.max() <= 1:
        s = scale or 10
        img = ((1 - data) * 255).astype(np.uint8)
        img = cv2.resize(img, (img.shape[1]*s, img.shape[0]*s), interpolation=cv2.INTER_NEAREST)
        cv2.imwrite(path, img)
    else:
        cv2.imwrite(path, data)


def module_type_map(version, format_coordinates):
    """Classify every module into its functional type. Returns size x size array.
    0=data, 1=finder, 2=separator, 3=timing, 4=alignment, 5=format_info, 6=version_info, 7=dark_module
    """
    size = symbol_size(version)
    t = np.zeros((size, size), dtype=np.uint8)

    for (r0, c0) in [(0, 0), (0, size-8), (size-8, 0)]:
        t[r0:r0+8, c0:c0+8] = 2
    for (r0, c0) in [(0, 0), (0, size-7), (size-7, 0)]:
        t[r0:r0+7, c0:c0+7] = 1

    centers = alignment_coordinates(version)
    for ar in centers:
        for ac in centers:
            if t[ar, ac] == 0:
                t[ar-2:ar+3, ac-2:ac+3] = 4

    for i in range(8, size-8):
        if t[6, i] == 0: t[6, i] = 3
        if t[i, 6] == 0: t[i, 6] = 3

    for r, c in format_coordinates.horizontal + format_coordinates.vertical:
        t[r, c] = 5
    t[size-8, 8] = 7

    if version >= 7:
        t[0:6, size-11:size-8] = 6
        t[size-11:size-8, 0:6] = 6

    return t


def _draw_module(vis, r, c, scale, color):
    vis[r*scale:(r+1)*scale, c*scale:(c+1)*scale] = color
    vis[r*scale, c*scale:(c+1)*scale] = (60, 60, 60)
    vis[r*scale:(r+1)*scale, c*scale] = (60, 60, 60)


def draw_colored_matrix(grid, layout, scale=20):
    """Draw QR matrix with different colors for each functional region, plus the zigzag path."""
    size = grid.shape[0]
    tmap = module_type_map(layout.version, layout.format_coordinates)

    vis = np.zeros((size * scale, size * scale, 3), dtype=np.uint8)
    for r in range(size):
        for c in range(size):
            mt = tmap[r, c]
            if mt == 0:
                color = (0, 0, 0) if grid[r, c] else (255, 255, 255)
            else:
                color = MODULE_COLORS[mt]
                if not grid[r, c]:
                    color = tuple(min(255, int(v * 0.4 + 255 * 0.6)) for v in color)
            _draw_module(vis, r, c, scale, color)

    half = scale // 2
    path = layout.data_coordinates
    for i in range(len(path) - 1):
        r1, c1 = path[i]
        r2, c2 = path[i + 1]
        t = i / max(len(path) - 1, 1)
        color = (0, int(200 * (1 - t)), int(200 * t))
        cv2.line(vis, (c1*scale + half, r1*scale + half), (c2*scale + half, r2*scale + half), color, 2, cv2.LINE_AA)

    if path:
        sr, sc = path[0]
        cv2.circle(vis, (sc * scale + half, sr * scale + half), 4, (0, 255, 0), -1)
        er, ec = path[-1]
        cv2.circle(vis, (ec * scale + half, er * scale + half), 4, (0, 0, 255), -1)

    return vis


def draw_codewords(unmasked, layout, num_codewords, scale=20):
    """Data modules tinted by the physical codeword they belong to; the rest greyed out."""
    size = unmasked.shape[0]
    vis = np.zeros((size * scale, size * scale, 3), dtype=np.uint8)
    for r in range(size):
        for c in range(size):
            _draw_module(vis, r, c, scale, (200, 200, 200))
    for n, (r, c) in enumerate(layout.data_coordinates):
        i = n // 8
        if i >= num_codewords:
            color = (230, 230, 230)
        else:
            color = CODEWORD_COLORS[(3 * i) % 10]
        if unmasked[r, c]:
            color = tuple(int(v * 0.45) for v in color)
        _draw_module(vis, r, c, scale, color)
    return vis


def save_debug_all(debug_dir, grid, unmasked, layout, result):
    """Save all intermediate results to debug_dir."""
    if not debug_dir:
        return

    _save_img(debug_dir, "1_matrix.png", draw_colored_matrix(grid, layout))
    _save_img(debug_dir, "2_unmasked.png", np.asarray(unmasked, dtype=np.uint8))
    _save_img(debug_dir, "3_codewords.png", draw_codewords(unmasked, layout, total_codewords(layout.version)))

    size = layout.size
    info = (f"Version: {result.version}\nEC level: {result.level.name} ({result.level.description})\n"
            f"Mask: {result.mask_index} (reference {result.reference_mask})\n"
            f"Size: {size}x{size}\nData modules: {len(layout.data_coordinates)}\n"
            f"Data codewords: {len(result.codewords)}\n"
            f"Codewords: {' '.join(f'{cw:02x}' for cw in result.codewords)}\n"
            f"Mode: {result.mode.label}\nLength: {result.length}\n"
            f"Truncated: {result.truncated}\n"
            f"\nResult:\n{result.message}\n")
    with open(os.path.join(debug_dir, "4_info.txt"), 'w', encoding='utf-8') as f:
        f.write(info)
