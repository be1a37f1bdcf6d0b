from pathlib import Path
from typing import Union
import logging

import numpy as np
import cv2
from PIL import Image as PILImage

from ..errors import LoadFailure, WriteFailure, DimensionMismatch
from ..models.raster_image import RasterImage, ColorSpace

logger = logging.getLogger(__name__)

_CONVERSIONS = {
    (ColorSpace.BGR, ColorSpace.GRAY): cv2.COLOR_BGR2GRAY,
    (ColorSpace.BGR, ColorSpace.HSV): cv2.COLOR_BGR2HSV,
    (ColorSpace.GRAY, ColorSpace.BGR): cv2.COLOR_GRAY2BGR,
    (ColorSpace.HSV, ColorSpace.BGR): cv2.COLOR_HSV2BGR,
}

INTERPOLATIONS = {
    "nearest": cv2.INTER_NEAREST,
    "linear": cv2.INTER_LINEAR,
    "area": cv2.INTER_AREA,
    "cubic": cv2.INTER_CUBIC,
}


class ImageRepository:
    """
    Handles file I/O and raw pixel operations for RasterImage entities.
    """

    @staticmethod
    def load(path: Union[str, Path]) -> RasterImage:
        path = Path(path)
        if not path.exists():
            logger.error(f"Image not found: {path}")
            raise LoadFailure(path, "file does not exist")
        if not path.is_file():
            logger.error(f"Image path is not a regular file: {path}")
            raise LoadFailure(path, "not a regular file")

        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None or arr_bgr.size == 0:
            logger.error(f"Image unreadable or empty: {path}")
            raise LoadFailure(path, "file could not be decoded")

        return RasterImage(pixels=arr_bgr, color_space=ColorSpace.BGR, path=path)

    @staticmethod
    def save(image: RasterImage, path: Union[str, Path]) -> Path:
        """
        Write *image* to *path*; the format follows the file extension.
        Parent directories are not created.
        """
        path = Path(path)
        if image.color_space is ColorSpace.HSV:
            image = ImageRepository.convert(image, ColorSpace.BGR)

        np_img = image.pixels if image.color_space is ColorSpace.GRAY else image.pixels[:, :, ::-1]
        if not np_img.flags['C_CONTIGUOUS']:
            np_img = np.ascontiguousarray(np_img)

        try:
            PILImage.fromarray(np_img).save(path)
        except (OSError, ValueError) as err:
            logger.error(f"Failed to write image {path}: {err}")
            raise WriteFailure(path, str(err)) from err
        return path

    @staticmethod
    def convert(image: RasterImage, target: ColorSpace) -> RasterImage:
        if image.color_space is target:
            return image
        code = _CONVERSIONS.get((image.color_space, target))
        if code is None:
            # HSV → GRAY has no direct code; go through BGR.
            return ImageRepository.convert(ImageRepository.convert(image, ColorSpace.BGR), target)
        return RasterImage(cv2.cvtColor(image.pixels, code), color_space=target, path=image.path)

    @staticmethod
    def resize(image: RasterImage, size: tuple[int, int], interpolation: int = cv2.INTER_LINEAR) -> RasterImage:
        """size is (width, height)."""
        resized = cv2.resize(image.pixels, size, interpolation=interpolation)
        return RasterImage(resized, color_space=image.color_space, path=image.path)

    @staticmethod
    def absolute_difference(a: RasterImage, b: RasterImage) -> RasterImage:
        if a.pixels.shape != b.pixels.shape:
            raise DimensionMismatch(a.pixels.shape, b.pixels.shape)
        return RasterImage(cv2.absdiff(a.pixels, b.pixels), color_space=a.color_space)

    @staticmethod
    def count_nonzero(image: RasterImage) -> int:
        """Non-zero pixels of a single-channel image."""
        return int(cv2.countNonZero(image.pixels))
