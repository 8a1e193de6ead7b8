"""
`tonegrid <command> [args...]`: picks a command and hands the rest of the
arguments to that command's own parser.
"""

import argparse
import importlib
import sys
from typing import Optional, Sequence

from . import __version__

# command -> (module with main(argv), help line)
COMMANDS = {
    "image": ("tonegrid.image_to_glyphs", "render an image as a grid of text glyphs"),
    "ramps": ("tonegrid.ramps", "list the glyph ramps and directional sets"),
}

EXIT_IMPORT = 3


def build_parser() -> argparse.ArgumentParser:
    listing = "\n".join(f"  {name:<8}{text}" for name, (_, text) in sorted(COMMANDS.items()))
    ap = argparse.ArgumentParser(
        prog="tonegrid",
        description="Render raster images as text glyphs",
        epilog=f"commands:\n{listing}\n\nSee 'tonegrid <command> -h' for command options.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    ap.add_argument("command", choices=sorted(COMMANDS), help="command to run")
    ap.add_argument("args", nargs=argparse.REMAINDER, help="arguments for the command")
    return ap


def _exit_code(exc: SystemExit) -> int:
    return exc.code if isinstance(exc.code, int) else 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else list(argv)
    ap = build_parser()
    if not argv:
        ap.print_help()
        return 0

    try:
        ns = ap.parse_args(argv)
    except SystemExit as exc:
        # -h, --version, or an unknown command
        return _exit_code(exc)

    module_path, _ = COMMANDS[ns.command]
    try:
        module = importlib.import_module(module_path)
    except ImportError as exc:
        print(f"tonegrid {ns.command}: cannot load {module_path}: {exc}", file=sys.stderr)
        return EXIT_IMPORT

    try:
        return module.main(ns.args)
    except SystemExit as exc:
        # the command's own argparse usage errors
        return _exit_code(exc)


if __name__ == "__main__":
    raise SystemExit(main())
