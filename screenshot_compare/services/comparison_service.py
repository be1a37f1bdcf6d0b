from pathlib import Path
from typing import Union
import logging

from ..models.comparison_result import ComparisonResult, ComparisonMethod, ComparisonBreakdown
from ..models.raster_image import RasterImage
from .image_service import ImageService
from .pixel_similarity_service import PixelSimilarityService
from .histogram_similarity_service import HistogramSimilarityService

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class ComparisonService:
    """
    Path-level comparisons built on the pixel and histogram scorers.
    Each call loads its own images; nothing is shared between calls.
    """

    def __init__(self,
                 image_service: ImageService = None,
                 pixel_service: PixelSimilarityService = None,
                 histogram_service: HistogramSimilarityService = None):
        self.image_service = image_service or ImageService()
        self.pixel_service = pixel_service or PixelSimilarityService(self.image_service)
        self.histogram_service = histogram_service or HistogramSimilarityService(self.image_service)

    def pixel_similarity(self, path_a: PathLike, path_b: PathLike) -> ComparisonResult:
        img_a, img_b = self.image_service.load_and_align(path_a, path_b)
        return self.pixel_service.score(img_a, img_b)

    def histogram_similarity(self, path_a: PathLike, path_b: PathLike) -> ComparisonResult:
        img_a, img_b = self.image_service.load_pair(path_a, path_b)
        return self.histogram_service.score(img_a, img_b)

    def score_images(self, original_a: RasterImage, original_b: RasterImage) -> ComparisonBreakdown:
        """
        Pixel, histogram and robust scores of an already loaded pair.

        The histogram runs on the originals to avoid resampling bias; only the
        pixel score works on the aligned pair.
        """
        histogram = self.histogram_service.score(original_a, original_b)
        pixel = self.pixel_service.score(*self.image_service.align(original_a, original_b))

        final = max(pixel.value, histogram.value)
        logger.info(
            f"Robust comparison - Pixel: {pixel.value:.2f}%, "
            f"Histogram: {histogram.value:.2f}%, Final: {final:.2f}%"
        )
        return ComparisonBreakdown(
            pixel=pixel,
            histogram=histogram,
            robust=ComparisonResult(final, ComparisonMethod.ROBUST),
        )

    def breakdown(self, path_a: PathLike, path_b: PathLike) -> ComparisonBreakdown:
        return self.score_images(*self.image_service.load_pair(path_a, path_b))

    def robust_similarity(self, path_a: PathLike, path_b: PathLike) -> ComparisonResult:
        """
        Higher of the pixel and histogram scores.

        Pixel scoring penalizes legitimate scale differences and histogram scoring
        ignores layout, so the more forgiving of the two is taken. Use
        pixel_similarity() when strict equality is required.
        """
        return self.breakdown(path_a, path_b).robust

    def write_difference(self, img_a: RasterImage, img_b: RasterImage, output_path: PathLike) -> Path:
        """
        Align the pair and write the full-color |a - b| image to *output_path*.
        The parent directory of *output_path* must already exist.
        """
        aligned_a, aligned_b = self.image_service.align(img_a, img_b)
        diff = self.image_service.absolute_difference(aligned_a, aligned_b)
        saved = self.image_service.save(diff, output_path)
        logger.info(f"Comparison report saved to: {saved}")
        return saved

    def save_comparison_report(self, path_a: PathLike, path_b: PathLike, output_path: PathLike) -> ComparisonResult:
        """
        Write the difference image and return the grayscale pixel similarity
        of the aligned pair.
        """
        img_a, img_b = self.image_service.load_and_align(path_a, path_b)
        saved = self.write_difference(img_a, img_b, output_path)

        pixel = self.pixel_service.score(img_a, img_b)
        return ComparisonResult(pixel.value, ComparisonMethod.PIXEL, artifact_path=saved)
