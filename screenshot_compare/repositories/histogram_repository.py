import cv2
import numpy as np

from ..models.histogram_descriptor import HistogramDescriptor
from ..models.raster_image import RasterImage, ColorSpace

# OpenCV 8-bit HSV: hue in [0, 180), saturation in [0, 256).
HUE_RANGE = (0, 180)
SAT_RANGE = (0, 256)


class HistogramRepository:
    """
    Raw histogram operations on HSV images.

    • calcHist over the hue and saturation channels (value is ignored).
    • Min-max normalization to [0, 1].
    • Correlation between two descriptors.
    """

    @staticmethod
    def compute(hsv: RasterImage, h_bins: int, s_bins: int) -> HistogramDescriptor:
        if hsv.color_space is not ColorSpace.HSV:
            raise ValueError(f"Histogram needs an HSV image, got {hsv.color_space.value}")
        hist = cv2.calcHist(
            [hsv.pixels], [0, 1], None, [h_bins, s_bins], [*HUE_RANGE, *SAT_RANGE]
        )
        hist = cv2.normalize(hist, None, 0, 1, cv2.NORM_MINMAX)
        return HistogramDescriptor(bins=hist.astype(np.float32, copy=False))

    @staticmethod
    def correlate(a: HistogramDescriptor, b: HistogramDescriptor) -> float:
        """Pearson correlation in [-1, 1]."""
        if a.shape != b.shape:
            raise ValueError(f"Histogram grids differ: {a.shape} vs {b.shape}")
        return float(cv2.compareHist(a.bins, b.bins, cv2.HISTCMP_CORREL))
