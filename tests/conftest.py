import logging

import numpy as np
import pytest

from filtermaker.core import ImageGrid
from filtermaker.oiio import OiioAdapter


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    """Keep every test away from the user's ~/.filtermaker/settings.ini."""
    settings_file = tmp_path / "settings" / "settings.ini"
    monkeypatch.setenv("FILTERMAKER_SETTINGS", str(settings_file))
    yield settings_file


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they don't outlive captured streams."""
    yield
    logger = logging.getLogger("filtermaker")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def gradient_image():
    """5x4 image with distinct values in every channel."""
    height, width = 4, 5
    ys, xs = np.mgrid[0:height, 0:width]
    pixels = np.stack([xs * 50, ys * 60, (xs + ys) * 20 + 5], axis=-1)
    return ImageGrid(pixels.astype(np.uint8))


@pytest.fixture
def source_png(tmp_path, gradient_image):
    path = tmp_path / "photo.png"
    OiioAdapter.write_image(gradient_image, str(path))
    return path
