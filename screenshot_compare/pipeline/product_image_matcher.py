# pipeline/product_image_matcher.py
from __future__ import annotations
from pathlib import Path
from typing import Tuple, Union
import logging
import os
import time

from dotenv import load_dotenv

from ..errors import WriteFailure
from ..services.comparison_service import ComparisonService

# env‑vars
load_dotenv()
DIFF_REPORT_DIR = os.getenv("DIFF_REPORT_DIR", "target/screenshots")

# Default thresholds
MATCH_MIN_PERCENT = float(os.getenv("MATCH_MIN_PERCENT", "80.0"))
MATCH_MAX_PERCENT = float(os.getenv("MATCH_MAX_PERCENT", "100.0"))
DIFFERENT_MAX_PERCENT = float(os.getenv("DIFFERENT_MAX_PERCENT", "90.0"))

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def match_product_images(
    search_result_path: PathLike,
    product_detail_path: PathLike,
    *,
    min_percent: float = MATCH_MIN_PERCENT,
    max_percent: float = MATCH_MAX_PERCENT,
    diff_dir: PathLike | None = DIFF_REPORT_DIR,
    save_diff: bool = True,
    comparison_service: ComparisonService = None,
) -> Tuple[bool, dict]:
    """
    Decides whether a search-result thumbnail and a product-detail image show
    the same product:
      - Robust similarity within [min_percent, max_percent]
      - Pixel and histogram scores recorded for the log
      - Diff image saved into *diff_dir* when requested

    Returns:
        Tuple[bool, dict]:
            - True if the robust score falls inside the range, False otherwise.
            - A dictionary with every score, the thresholds and the diff path or error.
    """
    if not 0 <= min_percent <= max_percent <= 100:
        raise ValueError(f"Invalid similarity range {min_percent}-{max_percent}%")

    comparison_service = comparison_service or ComparisonService()
    logger.info(f"Comparing product images with {min_percent:g}-{max_percent:g}% threshold")

    originals = comparison_service.image_service.load_pair(search_result_path, product_detail_path)
    scores = comparison_service.score_images(*originals)
    robust, pixel, histogram = scores.robust, scores.pixel, scores.histogram

    details: dict[str, float | str] = {
        "robust": robust.value,
        "pixel": pixel.value,
        "histogram": histogram.value,
        "min_percent": min_percent,
        "max_percent": max_percent,
    }

    if save_diff and diff_dir is not None:
        try:
            diff_path = _prepare_diff_path(Path(diff_dir))
            saved = comparison_service.write_difference(*originals, diff_path)
            details["diff_path"] = str(saved)
        except WriteFailure as err:
            logger.warning(f"Could not save comparison report: {err}")
            details["diff_error"] = str(err)

    is_match = robust.within(min_percent, max_percent)
    logger.info(
        f"Image similarity: {robust.value:.2f}% (threshold: {min_percent:g}-{max_percent:g}%) "
        f"- Pixel-based: {pixel.value:.2f}%, Histogram-based: {histogram.value:.2f}%"
    )
    return is_match, details


def images_differ(
    path_a: PathLike,
    path_b: PathLike,
    *,
    max_similarity: float = DIFFERENT_MAX_PERCENT,
    comparison_service: ComparisonService = None,
) -> Tuple[bool, dict]:
    """
    True when the strict pixel similarity is below *max_similarity*,
    e.g. two product screenshots captured before and after swiping a carousel.
    """
    comparison_service = comparison_service or ComparisonService()
    pixel = comparison_service.pixel_similarity(path_a, path_b)
    logger.info(f"Image similarity: {pixel.value:.2f}% (must be below {max_similarity:g}%)")
    return pixel.value < max_similarity, {"pixel": pixel.value, "max_similarity": max_similarity}


def _prepare_diff_path(diff_dir: Path) -> Path:
    """Create *diff_dir* if needed and return a timestamped diff file path inside it."""
    try:
        diff_dir.mkdir(parents=True, exist_ok=True)
    except OSError as err:
        raise WriteFailure(diff_dir, f"cannot create report directory: {err}") from err
    return diff_dir / f"diff_{int(time.time() * 1000)}.png"
