import logging

from ..errors import DimensionMismatch
from ..models.comparison_engine import ensure_engine_initialized
from ..models.comparison_result import ComparisonResult, ComparisonMethod
from ..models.raster_image import RasterImage
from .image_service import ImageService

logger = logging.getLogger(__name__)


class PixelSimilarityService:
    """
    Strict per-pixel comparison of two aligned images.

    A pixel matches only if its grayscale intensity is identical in both images;
    there is no blur or tolerance band, so compression noise lowers the score.
    """

    def __init__(self, image_service: ImageService = None):
        self.image_service = image_service or ImageService()

    def score(self, img_a: RasterImage, img_b: RasterImage) -> ComparisonResult:
        """
        Args:
            img_a (RasterImage): First image.
            img_b (RasterImage): Second image, already the same size as img_a.

        Returns:
            ComparisonResult: (total - differing) / total × 100.
        """
        ensure_engine_initialized()
        if not img_a.same_size_as(img_b):
            logger.error(f"Pixel comparison needs aligned images: {img_a.size} vs {img_b.size}")
            raise DimensionMismatch(img_a.pixels.shape, img_b.pixels.shape)

        gray_a = self.image_service.to_grayscale(img_a)
        gray_b = self.image_service.to_grayscale(img_b)
        diff = self.image_service.absolute_difference(gray_a, gray_b)

        total = diff.width * diff.height
        differing = self.image_service.count_nonzero(diff)
        similarity = (total - differing) / total * 100

        logger.info(f"Image comparison result: {similarity:.2f}% similarity")
        return ComparisonResult(similarity, ComparisonMethod.PIXEL)
