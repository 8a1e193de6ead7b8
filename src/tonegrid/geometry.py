import math
from dataclasses import dataclass

# Used when a cell extent would truncate to zero.
FALLBACK_CELL_W = 8
FALLBACK_CELL_H = 16


@dataclass(frozen=True)
class GridGeometry:
    cols: int
    rows: int
    cell_width_px: int
    cell_height_px: int


def compute_geometry(
    width: int, height: int, cell_size: int, cell_aspect: float
) -> GridGeometry:
    """
    Derive the glyph grid for a width x height image.

    Never raises: counts are floored to 1 and zero-sized cells are
    replaced by the 8x16 fallback.
    """
    cols = max(1, math.ceil(width / cell_size))
    rows = max(1, math.ceil(height / (cell_size * cell_aspect)))

    cell_w = width // cols
    cell_h = height // rows
    if cell_w <= 0 or cell_h <= 0:
        cell_w, cell_h = FALLBACK_CELL_W, FALLBACK_CELL_H

    return GridGeometry(cols=cols, rows=rows, cell_width_px=cell_w, cell_height_px=cell_h)


def nominal_cell(cell_size: int, cell_aspect: float) -> tuple[int, int]:
    """Pixel step between cell origins, before edge truncation."""
    cell_w = int(cell_size)
    cell_h = int(cell_size * cell_aspect)
    if cell_w <= 0:
        cell_w = FALLBACK_CELL_W
    if cell_h <= 0:
        cell_h = FALLBACK_CELL_H
    return cell_w, cell_h
