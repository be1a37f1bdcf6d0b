"""
Function-level entry points for the step layer.

    path_a, path_b ─► load_and_align ─► pixel_similarity ─┐
                  └─► (originals) ──► histogram_similarity ┴─► robust_similarity

Every function raises a ComparisonError subclass on failure instead of
returning 0.0.
"""
from pathlib import Path
from typing import Tuple, Union

from .models.comparison_result import ComparisonResult
from .models.raster_image import RasterImage
from .services.comparison_service import ComparisonService
from .services.histogram_similarity_service import HistogramSimilarityService
from .services.image_service import ImageService
from .services.pixel_similarity_service import PixelSimilarityService

PathLike = Union[str, Path]


def load_and_align(
    path_a: PathLike,
    path_b: PathLike,
    *,
    image_service: ImageService = None,
) -> Tuple[RasterImage, RasterImage]:
    """Decode both paths; the second image is resized to the first unless configured otherwise."""
    return (image_service or ImageService()).load_and_align(path_a, path_b)


def pixel_similarity(
    img_a: RasterImage,
    img_b: RasterImage,
    *,
    pixel_service: PixelSimilarityService = None,
) -> ComparisonResult:
    return (pixel_service or PixelSimilarityService()).score(img_a, img_b)


def histogram_similarity(
    img_a: RasterImage,
    img_b: RasterImage,
    *,
    histogram_service: HistogramSimilarityService = None,
) -> ComparisonResult:
    return (histogram_service or HistogramSimilarityService()).score(img_a, img_b)


def robust_similarity(
    path_a: PathLike,
    path_b: PathLike,
    *,
    comparison_service: ComparisonService = None,
) -> ComparisonResult:
    return (comparison_service or ComparisonService()).robust_similarity(path_a, path_b)


def save_comparison_report(
    path_a: PathLike,
    path_b: PathLike,
    output_path: PathLike,
    *,
    comparison_service: ComparisonService = None,
) -> ComparisonResult:
    return (comparison_service or ComparisonService()).save_comparison_report(path_a, path_b, output_path)
