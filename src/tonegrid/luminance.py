import logging

import numpy as np
from PIL import Image

from .bitmap import ALPHA_CUTOFF

# Rec. 709 luma weights
REC709 = np.array([0.2126, 0.7152, 0.0722], dtype=np.float64)

CONTRAST_PIVOT = 0.5
CONTRAST_GAIN = 1.7


def pixel_luminance(rgba: np.ndarray) -> np.ndarray:
    """
    rgba: HxWx4 uint8
    returns HxW float64 in [0,1]
    """
    rgb = rgba[..., :3].astype(np.float64) / 255.0
    return rgb @ REC709


def apply_high_contrast(luma: np.ndarray) -> np.ndarray:
    """Fixed-pivot contrast stretch, clamped back into [0,1]."""
    return np.clip((luma - CONTRAST_PIVOT) * CONTRAST_GAIN + CONTRAST_PIVOT, 0.0, 1.0)


def _cell_edges(length: int, count: int, step: int | None = None) -> list[int]:
    # fixed step, never short of covering the image; the last cell is
    # truncated at the edge and cells past it are empty
    step = max(step or 0, 1, -(-length // count))
    return [min(i * step, length) for i in range(count + 1)]


def sample_luminance(
    bitmap: Image.Image,
    cols: int,
    rows: int,
    high_contrast: bool = False,
    cell_px: tuple[int, int] | None = None,
) -> np.ndarray:
    """
    Average luminance per grid cell.

    The bitmap is split into rows x cols non-overlapping rectangles of
    ceil(W/cols) x ceil(H/rows) pixels, or the nominal `cell_px` (w, h)
    when that is larger. The last row and column may be smaller, and cells
    past the image edge are empty.
    Nearly transparent pixels are ignored; a cell with no remaining
    pixels is black (0.0).
    """
    rgba = np.asarray(bitmap.convert("RGBA"), dtype=np.uint8)
    luma = pixel_luminance(rgba)
    opaque = rgba[..., 3] >= ALPHA_CUTOFF

    H, W = luma.shape
    step_w, step_h = cell_px or (None, None)
    ys = _cell_edges(H, rows, step_h)
    xs = _cell_edges(W, cols, step_w)

    grid = np.zeros((rows, cols), dtype=np.float64)
    for r in range(rows):
        y0, y1 = ys[r], ys[r + 1]
        for c in range(cols):
            x0, x1 = xs[c], xs[c + 1]

            cell_mask = opaque[y0:y1, x0:x1]
            n = int(np.count_nonzero(cell_mask))
            if n == 0:
                continue
            grid[r, c] = float(luma[y0:y1, x0:x1][cell_mask].sum()) / n

    if high_contrast:
        grid = apply_high_contrast(grid)

    logging.getLogger(__name__).debug(
        "Sampled %dx%d cells (min=%.3f max=%.3f high_contrast=%s)",
        cols,
        rows,
        float(grid.min()),
        float(grid.max()),
        high_contrast,
    )
    # mean of values in [0,1] can drift past 1.0 by an ulp
    return np.clip(grid, 0.0, 1.0)
