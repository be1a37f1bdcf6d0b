from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
import numpy as np


class ColorSpace(str, Enum):
    BGR = "bgr"
    GRAY = "gray"
    HSV = "hsv"


@dataclass
class RasterImage:
    """
    Decoded pixel buffer plus its color-space tag.
    No OpenCV logic in this file.
    """
    pixels: np.ndarray  # Shape (H, W, C) or (H, W), dtype uint8.
    color_space: ColorSpace = ColorSpace.BGR
    path: Path | None = None  # Source file, when decoded from disk.

    def __post_init__(self):
        if self.pixels is None or self.pixels.size == 0:
            raise ValueError("RasterImage cannot hold an empty buffer")
        if self.pixels.ndim not in (2, 3):
            raise ValueError(f"Expected a 2-D or 3-D pixel array, got ndim={self.pixels.ndim}")
        expected = 1 if self.color_space is ColorSpace.GRAY else 3
        if self.channels != expected:
            raise ValueError(
                f"{self.color_space.value} image needs {expected} channel(s), got {self.channels}"
            )

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def channels(self) -> int:
        return 1 if self.pixels.ndim == 2 else int(self.pixels.shape[2])

    @property
    def size(self) -> tuple[int, int]:
        """(width, height), the order cv2.resize expects."""
        return self.width, self.height

    def same_size_as(self, other: RasterImage) -> bool:
        return self.size == other.size
