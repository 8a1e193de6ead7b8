#!/usr/bin/env python3
import argparse
import logging
import sys
from dataclasses import dataclass

from PIL import Image

from .bitmap import DecodeFailure, load_bitmap
from .edges import detect_edges
from .geometry import GridGeometry, compute_geometry, nominal_cell
from .glyphs import GlyphGrid, map_glyphs
from .luminance import sample_luminance
from .options import InvalidOptionsError, RampMode, RenderOptions

LOG = logging.getLogger("tonegrid")


# -----------------------------
# Assembly
# -----------------------------
def grid_to_string(grid) -> str:
    """One line per row, each terminated by a newline (the last one too)."""
    return "".join("".join(row) + "\n" for row in grid)


@dataclass(frozen=True)
class Conversion:
    geometry: GridGeometry
    glyphs: GlyphGrid

    @property
    def text(self) -> str:
        return grid_to_string(self.glyphs)


# -----------------------------
# Pipeline
# -----------------------------
def convert_bitmap(bitmap: Image.Image, options: RenderOptions) -> Conversion:
    """Geometry -> luminance -> (edges) -> glyphs. Reads `bitmap` only."""
    logger = logging.getLogger(__name__)

    W, H = bitmap.size
    geometry = compute_geometry(W, H, options.cell_size, options.cell_aspect)
    logger.debug(
        "Image %dx%d -> grid %dx%d (cell %dx%d px)",
        W,
        H,
        geometry.cols,
        geometry.rows,
        geometry.cell_width_px,
        geometry.cell_height_px,
    )

    luma = sample_luminance(
        bitmap,
        geometry.cols,
        geometry.rows,
        high_contrast=options.high_contrast,
        cell_px=nominal_cell(options.cell_size, options.cell_aspect),
    )

    edges = None
    if options.directional_render:
        edges = detect_edges(luma, geometry)

    glyphs = map_glyphs(luma, edges, options)
    logger.info("Converted %dx%d image into %d rows", W, H, geometry.rows)
    return Conversion(geometry=geometry, glyphs=glyphs)


def convert_image(source, options: RenderOptions) -> Conversion:
    """Decode a path, bytes or binary stream, then convert it."""
    return convert_bitmap(load_bitmap(source), options)


# -----------------------------
# Logging
# -----------------------------
def setup_logging(debug: bool, log_path: str | None = None) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    LOG.setLevel(logging.DEBUG if log_path else level)

    handlers: list[logging.Handler] = []

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(level)
    sh.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    handlers.append(sh)

    if log_path:
        fh = logging.FileHandler(log_path, encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s: %(message)s"))
        handlers.append(fh)

    LOG.handlers[:] = handlers
    LOG.propagate = False  # prevent double logging via root logger


# -----------------------------
# CLI
# -----------------------------
def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="tonegrid image",
        description="Render an image as a grid of text glyphs",
    )
    ap.add_argument("input", help="Input image path ('-' reads stdin)")
    ap.add_argument(
        "-o", "--output", default=None, help="Output text file (default: stdout)"
    )

    ap.add_argument(
        "--cell-size",
        type=int,
        default=RenderOptions.cell_size,
        help="Pixels per glyph column",
    )
    ap.add_argument(
        "--cell-aspect",
        type=float,
        default=RenderOptions.cell_aspect,
        help="Glyph cell height/width ratio of your terminal font",
    )
    ap.add_argument(
        "--ramp",
        choices=[m.value.lower() for m in RampMode],
        default=RenderOptions.ramp_mode.value.lower(),
        help="Glyph ramp",
    )
    ap.add_argument(
        "--reverse",
        action="store_true",
        help="Flip the ramp (for dark text on a light background)",
    )
    ap.add_argument(
        "--high-contrast", action="store_true", help="Stretch luminance around mid-grey"
    )

    # Edge overlay
    ap.add_argument(
        "--directional",
        action="store_true",
        help="Draw line glyphs along strong edges",
    )
    ap.add_argument(
        "--edge-threshold",
        type=float,
        default=RenderOptions.edge_threshold,
        help="Directional: normalized edge magnitude cutoff in [0,1] (higher = fewer lines)",
    )

    ap.add_argument("--debug", action="store_true", help="Enable debug logging")
    ap.add_argument("--log", default=None, help="Also write debug log to FILE")
    return ap


def main(argv=None):
    ap = build_parser()
    args = ap.parse_args(argv)
    setup_logging(args.debug, args.log)

    try:
        options = RenderOptions(
            cell_size=args.cell_size,
            cell_aspect=args.cell_aspect,
            directional_render=args.directional,
            edge_threshold=args.edge_threshold,
            reverse_polarity=args.reverse,
            high_contrast=args.high_contrast,
            ramp_mode=args.ramp,
        )
        source = sys.stdin.buffer.read() if args.input == "-" else args.input
        art = convert_image(source, options).text
    except (InvalidOptionsError, DecodeFailure) as e:
        LOG.debug("Conversion failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(art)
    else:
        sys.stdout.write(art)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
