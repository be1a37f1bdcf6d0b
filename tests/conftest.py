import logging

import cv2
import pytest

from screenshot_compare.models.comparison_engine import reset_engine

# Show module loggers when a test fails
root = logging.getLogger()
root.setLevel(logging.DEBUG)
logging.getLogger('PIL').setLevel(logging.WARNING)

CONFIG_VARS = (
    "IMAGE_RESIZE_POLICY",
    "IMAGE_RESIZE_INTERPOLATION",
    "HIST_H_BINS",
    "HIST_S_BINS",
    "OPENCV_NUM_THREADS",
)


@pytest.fixture(autouse=True)
def fresh_engine(monkeypatch):
    """Every test starts from an uninitialized engine and a clean config environment."""
    for name in CONFIG_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_engine()
    yield
    reset_engine()


@pytest.fixture
def write_image(tmp_path):
    """Write a BGR array to tmp_path/<name> and return the path."""
    def _write(name, pixels):
        path = tmp_path / name
        assert cv2.imwrite(str(path), pixels)
        return path
    return _write
