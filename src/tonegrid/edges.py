import logging
import math
from dataclasses import dataclass

import numpy as np

from .geometry import GridGeometry

DEFAULT_SIGMA = 0.5
MIN_NORMALIZER = 0.01


@dataclass(frozen=True)
class EdgeGrid:
    magnitude: np.ndarray  # rows x cols, normalized to [0,1]
    angle: np.ndarray  # rows x cols, radians in (-pi, pi]


# -----------------------------
# Gaussian smoothing
# -----------------------------
def gaussian_kernel(sigma: float) -> np.ndarray:
    """1-D kernel of size 2*ceil(3*sigma)+1, weights summing to 1."""
    radius = int(math.ceil(3.0 * sigma))
    x = np.arange(-radius, radius + 1, dtype=np.float64)
    weights = np.exp(-(x * x) / (2.0 * sigma * sigma))
    return weights / weights.sum()


def _convolve_axis(grid: np.ndarray, kernel: np.ndarray, axis: int) -> np.ndarray:
    radius = len(kernel) // 2
    pad = [(0, 0), (0, 0)]
    pad[axis] = (radius, radius)
    # border clamp: out-of-range taps read the nearest edge value
    padded = np.pad(grid, pad, mode="edge")

    n = grid.shape[axis]
    out = np.zeros_like(grid, dtype=np.float64)
    for k, w in enumerate(kernel):
        if axis == 1:
            out += w * padded[:, k : k + n]
        else:
            out += w * padded[k : k + n, :]
    return out


def gaussian_blur(grid: np.ndarray, sigma: float) -> np.ndarray:
    """Separable blur: full horizontal pass, then vertical pass."""
    kernel = gaussian_kernel(sigma)
    horizontal = _convolve_axis(grid, kernel, axis=1)
    return _convolve_axis(horizontal, kernel, axis=0)


def difference_of_gaussians(
    grid: np.ndarray, sigma1: float = DEFAULT_SIGMA, sigma2: float | None = None
) -> np.ndarray:
    if sigma2 is None:
        sigma2 = max(sigma1 * 2.0, sigma1)
    return gaussian_blur(grid, sigma1) - gaussian_blur(grid, sigma2)


# -----------------------------
# Sobel on the interior cells
# -----------------------------
def sobel_edges(
    grid: np.ndarray, cell_width_px: int = 1, cell_height_px: int = 1
) -> EdgeGrid:
    """
    Gradient magnitude/angle for every interior cell of `grid`.

    Gx and Gy are divided by the cell's pixel extent so tall cells do
    not exaggerate vertical change. Magnitudes are divided by the grid
    maximum (at least 0.01). The outer ring stays zero.
    """
    rows, cols = grid.shape
    mag = np.zeros((rows, cols), dtype=np.float64)
    ang = np.zeros((rows, cols), dtype=np.float64)
    if rows < 3 or cols < 3:
        return EdgeGrid(magnitude=mag, angle=ang)

    g = grid.astype(np.float64)

    # Sobel X
    gx = (
        -1 * g[:-2, :-2]
        + 1 * g[:-2, 2:]
        + -2 * g[1:-1, :-2]
        + 2 * g[1:-1, 2:]
        + -1 * g[2:, :-2]
        + 1 * g[2:, 2:]
    )

    # Sobel Y
    gy = (
        -1 * g[:-2, :-2]
        + -2 * g[:-2, 1:-1]
        + -1 * g[:-2, 2:]
        + 1 * g[2:, :-2]
        + 2 * g[2:, 1:-1]
        + 1 * g[2:, 2:]
    )

    gx = gx / float(cell_width_px)
    gy = gy / float(cell_height_px)

    inner_ang = np.arctan2(gy, gx)
    inner_ang[inner_ang <= -math.pi] = math.pi

    mag[1:-1, 1:-1] = np.sqrt(gx * gx + gy * gy)
    ang[1:-1, 1:-1] = inner_ang

    peak = float(mag.max())
    mag /= max(peak, MIN_NORMALIZER)

    logging.getLogger(__name__).debug(
        "Sobel peak magnitude %.5f over %dx%d interior cells", peak, cols - 2, rows - 2
    )
    return EdgeGrid(magnitude=mag, angle=ang)


def detect_edges(
    luma: np.ndarray,
    geometry: GridGeometry,
    sigma1: float = DEFAULT_SIGMA,
    sigma2: float | None = None,
) -> EdgeGrid:
    """DoG-filter the luminance grid and run Sobel over the result."""
    if luma.size == 0:
        empty = np.zeros(luma.shape, dtype=np.float64)
        return EdgeGrid(magnitude=empty, angle=empty.copy())

    dog = difference_of_gaussians(luma, sigma1, sigma2)
    return sobel_edges(dog, geometry.cell_width_px, geometry.cell_height_px)
