import logging
import os

from dotenv import load_dotenv

from ..models.comparison_engine import ensure_engine_initialized
from ..models.comparison_result import ComparisonResult, ComparisonMethod
from ..models.histogram_descriptor import HistogramDescriptor
from ..models.raster_image import RasterImage
from ..repositories.histogram_repository import HistogramRepository
from .image_service import ImageService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class HistogramSimilarityService:
    """
    Compares the hue/saturation distribution of two images.

    Brightness (the V channel) is discarded to reduce lighting sensitivity, and
    spatial layout is ignored entirely, so images of different size or crop can
    still score high.
    """

    def __init__(self, image_service: ImageService = None, h_bins: int = None, s_bins: int = None):
        self.h_bins = self._bin_count("HIST_H_BINS", h_bins, "50")
        self.s_bins = self._bin_count("HIST_S_BINS", s_bins, "60")
        self.image_service = image_service or ImageService()
        self.histogram_repository = HistogramRepository()

    @staticmethod
    def _bin_count(name: str, value: int | None, default: str) -> int:
        raw = os.getenv(name, default) if value is None else value
        try:
            count = int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"{name}={raw!r} is not an integer") from None
        if count < 1:
            raise ValueError(f"{name}={raw!r} must be at least 1")
        return count

    def describe(self, img: RasterImage) -> HistogramDescriptor:
        hsv = self.image_service.to_hsv(img)
        return self.histogram_repository.compute(hsv, self.h_bins, self.s_bins)

    def score(self, img_a: RasterImage, img_b: RasterImage) -> ComparisonResult:
        """
        Returns:
            ComparisonResult whose raw_score is the signed correlation × 100 and whose
            value clamps anti-correlated distributions to 0.
        """
        ensure_engine_initialized()
        correlation = self.histogram_repository.correlate(self.describe(img_a), self.describe(img_b))
        similarity = correlation * 100

        if similarity < 0:
            logger.info(f"Histogram comparison result: {similarity:.2f}% (anti-correlated, reported as 0%)")
        else:
            logger.info(f"Histogram comparison result: {similarity:.2f}% similarity")
        return ComparisonResult(similarity, ComparisonMethod.HISTOGRAM, raw_score=similarity)
