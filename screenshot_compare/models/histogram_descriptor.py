from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass
class HistogramDescriptor:
    """
    Hue × saturation frequency grid, min-max normalized to [0, 1].
    Built on demand from an HSV RasterImage; never cached.
    """
    bins: np.ndarray  # Shape (h_bins, s_bins), dtype float32.

    @property
    def shape(self) -> tuple[int, int]:
        return int(self.bins.shape[0]), int(self.bins.shape[1])
