"""Shared fixtures: a generated scenario image and a corrupt file."""

import logging

import numpy as np
import pytest
from PIL import Image


def make_scenario_image(width: int = 160, height: int = 96) -> Image.Image:
    """Gradient background with a black block, a white block and a red diagonal."""
    x = np.arange(width)[None, :]
    y = np.arange(height)[:, None]
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[..., 0] = (x * 255) // (width - 1)
    arr[..., 1] = (y * 255) // (height - 1)
    arr[..., 2] = ((x + y) * 255) // (width + height - 2)
    arr[..., 3] = 255

    arr[12:46, 16:70, :3] = 0
    arr[50:86, 95:150, :3] = 255
    for i in range(96):
        px, py = 20 + i, 95 - i
        if 0 <= px < width and 0 <= py < height:
            arr[py, px] = (255, 0, 0, 255)

    return Image.fromarray(arr)


@pytest.fixture
def scenario_image():
    return make_scenario_image()


@pytest.fixture
def scenario_path(tmp_path, scenario_image):
    path = tmp_path / "gradient_edges.png"
    scenario_image.save(path)
    return path


@pytest.fixture
def corrupt_path(tmp_path):
    path = tmp_path / "corrupt_image.png"
    path.write_bytes(b"this-is-not-a-valid-png")
    return path


@pytest.fixture(autouse=True)
def reset_tonegrid_logger():
    """CLI entry points install handlers on the package logger; drop them."""
    yield
    logger = logging.getLogger("tonegrid")
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = []
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
