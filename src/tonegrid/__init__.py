"""tonegrid - render images as grids of text glyphs."""

__version__ = "0.1.0"

"""
The conversion API is exposed through lazy wrappers so that running a
submodule with `-m` does not find it already imported by the package.
"""


def convert_image(*args, **kwargs):
    from .image_to_glyphs import convert_image as _f

    return _f(*args, **kwargs)


def convert_bitmap(*args, **kwargs):
    from .image_to_glyphs import convert_bitmap as _f

    return _f(*args, **kwargs)


def image_main(*args, **kwargs):
    from .image_to_glyphs import main as _m

    return _m(*args, **kwargs)


def ramps_main(*args, **kwargs):
    from .ramps import main as _m

    return _m(*args, **kwargs)


__all__ = [
    "convert_bitmap",
    "convert_image",
    "image_main",
    "ramps_main",
]
