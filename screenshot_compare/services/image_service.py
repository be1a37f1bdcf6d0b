from pathlib import Path
from typing import Tuple, Union
import logging
import os

from dotenv import load_dotenv

from ..errors import DimensionMismatch
from ..models.comparison_engine import ensure_engine_initialized
from ..models.raster_image import RasterImage, ColorSpace
from ..models.resize_policy import ResizePolicy
from ..repositories.image_repository import ImageRepository, INTERPOLATIONS

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ImageService:
    """I/O and normalization helpers.  No scoring logic here."""

    def __init__(self,
                 resize_policy: Union[str, ResizePolicy] = None,
                 interpolation: str = None):
        """
        Args:
            resize_policy: How mismatched sizes are aligned (defaults to env var)
            interpolation: Resampling filter name: nearest, linear, area, cubic (defaults to env var)
        """
        self.resize_policy = ResizePolicy.parse(
            resize_policy or os.getenv("IMAGE_RESIZE_POLICY", ResizePolicy.RESIZE_SECOND_TO_FIRST.value)
        )
        interpolation = (interpolation or os.getenv("IMAGE_RESIZE_INTERPOLATION", "linear")).strip().lower()
        if interpolation not in INTERPOLATIONS:
            raise ValueError(
                f"IMAGE_RESIZE_INTERPOLATION={interpolation!r} is not one of: {', '.join(INTERPOLATIONS)}"
            )
        self.interpolation = interpolation
        self.image_repository = ImageRepository()

    def load(self, path: Union[str, Path]) -> RasterImage:
        """Load a single image from disk as BGR."""
        ensure_engine_initialized()
        return self.image_repository.load(path)

    def load_pair(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> Tuple[RasterImage, RasterImage]:
        """Load both images at their original size."""
        return self.load(path_a), self.load(path_b)

    def align(self, img_a: RasterImage, img_b: RasterImage) -> Tuple[RasterImage, RasterImage]:
        """
        Bring both images to one size according to the resize policy.
        With the default policy the first image is the reference and only the second is resampled.
        """
        if img_a.same_size_as(img_b):
            return img_a, img_b

        if self.resize_policy is ResizePolicy.REJECT_MISMATCH:
            logger.error(f"Refusing to align {img_a.size} and {img_b.size}")
            raise DimensionMismatch(img_a.pixels.shape, img_b.pixels.shape)

        flag = INTERPOLATIONS[self.interpolation]
        if self.resize_policy is ResizePolicy.RESIZE_FIRST_TO_SECOND:
            logger.debug(f"Resizing first image {img_a.size} -> {img_b.size}")
            return self.image_repository.resize(img_a, img_b.size, flag), img_b

        logger.debug(f"Resizing second image {img_b.size} -> {img_a.size}")
        return img_a, self.image_repository.resize(img_b, img_a.size, flag)

    def load_and_align(self, path_a: Union[str, Path], path_b: Union[str, Path]) -> Tuple[RasterImage, RasterImage]:
        return self.align(*self.load_pair(path_a, path_b))

    def to_grayscale(self, img: RasterImage) -> RasterImage:
        return self.image_repository.convert(img, ColorSpace.GRAY)

    def to_hsv(self, img: RasterImage) -> RasterImage:
        return self.image_repository.convert(img, ColorSpace.HSV)

    def absolute_difference(self, img_a: RasterImage, img_b: RasterImage) -> RasterImage:
        """Per-channel |a - b| of two aligned images."""
        return self.image_repository.absolute_difference(img_a, img_b)

    def count_nonzero(self, img: RasterImage) -> int:
        return self.image_repository.count_nonzero(img)

    def save(self, img: RasterImage, path: Union[str, Path]) -> Path:
        """
        Business-level method to save the image to a specific path.
        """
        return self.image_repository.save(img, path)
