"""Map luminance and edge orientation to glyphs."""

import logging
import math

import numpy as np

from .edges import EdgeGrid
from .options import RenderOptions
from .ramps import directional_glyphs_for, ramp_for

SECTOR_WIDTH = math.pi / 4

GlyphGrid = tuple[tuple[str, ...], ...]


def luminance_index(luma: float, ramp_len: int) -> int:
    """floor(L * (n-1)), clamped into the ramp."""
    idx = int(math.floor(luma * (ramp_len - 1)))
    return min(max(idx, 0), ramp_len - 1)


def luminance_glyph(luma: float, ramp: str) -> str:
    return ramp[luminance_index(luma, len(ramp))]


def edge_sector(angle: float) -> int:
    """
    Bucket a gradient angle into 0=horizontal, 1=diagonal-down,
    2=vertical, 3=diagonal-up.

    The edge runs perpendicular to the gradient. Lines are symmetric
    under a half turn, so the orientation is folded into [0, pi) and
    split into four pi/4 sectors centred on 0, pi/4, pi/2 and 3pi/4.
    Image y grows downwards, so pi/4 points down-right.
    """
    orientation = (angle + math.pi / 2) % math.pi
    return int((orientation + SECTOR_WIDTH / 2) // SECTOR_WIDTH) % 4


def directional_glyph(angle: float, glyphs: str) -> str:
    return glyphs[edge_sector(angle)]


def map_glyphs(
    luma: np.ndarray, edges: EdgeGrid | None, options: RenderOptions
) -> GlyphGrid:
    """
    Pick one glyph per cell.

    Cells whose normalized edge magnitude is strictly above the
    threshold get a directional glyph when `directional_render` is on;
    all others (and any directional pick that would be blank) use the
    luminance ramp.
    """
    ramp = ramp_for(options.ramp_mode, reverse=options.reverse_polarity)
    line_glyphs = directional_glyphs_for(options.ramp_mode)
    use_edges = options.directional_render and edges is not None

    logging.getLogger(__name__).debug(
        "Mapping with ramp %s (len=%d reverse=%s directional=%s threshold=%.3f)",
        options.ramp_mode.value,
        len(ramp),
        options.reverse_polarity,
        use_edges,
        options.edge_threshold,
    )

    rows, cols = luma.shape
    out = []
    for r in range(rows):
        line = []
        for c in range(cols):
            glyph = None
            if use_edges and edges.magnitude[r, c] > options.edge_threshold:
                glyph = directional_glyph(float(edges.angle[r, c]), line_glyphs)
                if not glyph.strip():
                    glyph = None
            if glyph is None:
                glyph = luminance_glyph(float(luma[r, c]), ramp)
            line.append(glyph)
        out.append(tuple(line))
    return tuple(out)
