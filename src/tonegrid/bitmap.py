"""Decode image files into RGBA bitmaps using Pillow."""

import io
import logging
import os

from PIL import Image

# Pixels with alpha below this do not contribute to a cell's luminance.
ALPHA_CUTOFF = 10


class DecodeFailure(Exception):
    """The source could not be read or decoded as an image."""


def load_bitmap(source) -> Image.Image:
    """
    Decode `source` into an RGBA image.

    Args:
        source: a filesystem path, raw bytes, or a binary stream

    Raises:
        DecodeFailure: missing file, unsupported or corrupt data. The
            underlying Pillow/OS error is chained as ``__cause__``.
    """
    logger = logging.getLogger(__name__)

    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(source))
        label = "<bytes>"
    elif isinstance(source, (str, os.PathLike)):
        label = os.fspath(source)
    else:
        label = getattr(source, "name", "<stream>")

    try:
        with Image.open(source) as img:
            img.load()
            fmt = img.format
            bitmap = img.convert("RGBA")
    except (
        OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError
    ) as exc:
        # UnidentifiedImageError and FileNotFoundError are OSErrors
        raise DecodeFailure(f"cannot decode {label}: {exc}") from exc

    logger.debug("Loaded %s (format=%s size=%dx%d)", label, fmt, *bitmap.size)
    return bitmap
