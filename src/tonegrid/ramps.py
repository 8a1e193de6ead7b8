#!/usr/bin/env python3
"""Glyph ramps for every ramp mode, plus a command that lists them."""

import argparse

from .options import RampMode

# -----------------------------
# Ramps (dark -> bright)
# -----------------------------
# Index 0 is drawn for luminance 0. On a dark terminal background the
# blank glyph reads as black, so every ramp starts with a space.
RAMPS = {
    RampMode.ASCII: (
        " .`^,:;Il!i><~+_-?][}{1)(|\\/"
        "tfjrxnuvczXYUJCLQ0OZmwqpdbkhao*#MW&8%B@$"
    ),
    RampMode.UNICODE: " '`^.\",!;:~-=+*#$%&@□■░▒▓▏▎▍▌▋▊▉█",
    RampMode.DOTS: " ·∙•●",
    RampMode.RECTANGLES: " ░▒▓█",
    RampMode.BARS: " ▁▂▃▄▅▆▇█",
    RampMode.LOADING: " ⡀⣀⣄⣤⣦⣶⣷⣿",
}

# horizontal, diagonal-down, vertical, diagonal-up
DIRECTIONAL_ASCII = "-\\|/"
DIRECTIONAL_BOX = "─╲│╱"


def ramp_for(mode: RampMode, reverse: bool = False) -> str:
    ramp = RAMPS[RampMode.parse(mode)]
    return ramp[::-1] if reverse else ramp


def directional_glyphs_for(mode: RampMode) -> str:
    """Plain-text slashes for ASCII, box-drawing lines for everything else."""
    if RampMode.parse(mode) is RampMode.ASCII:
        return DIRECTIONAL_ASCII
    return DIRECTIONAL_BOX


def describe_ramps(reverse: bool = False) -> str:
    width = max(len(m.value) for m in RampMode)
    lines = []
    for mode in RampMode:
        ramp = ramp_for(mode, reverse=reverse)
        lines.append(
            f"{mode.value.lower():<{width}}  [{ramp}]  "
            f"({len(ramp)} glyphs, edges {directional_glyphs_for(mode)})"
        )
    return "\n".join(lines)


# -----------------------------
# CLI
# -----------------------------
def main(argv=None):
    ap = argparse.ArgumentParser(
        prog="tonegrid ramps", description="List the glyph ramps for each ramp mode"
    )
    ap.add_argument(
        "--reverse",
        action="store_true",
        help="Show the ramps as used with reversed polarity",
    )
    args = ap.parse_args(argv)

    print(describe_ramps(reverse=args.reverse))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
