from .comparison import (
    load_and_align,
    pixel_similarity,
    histogram_similarity,
    robust_similarity,
    save_comparison_report,
)
from .errors import (
    ComparisonError,
    EngineUnavailable,
    LoadFailure,
    DimensionMismatch,
    WriteFailure,
)
from .models.comparison_engine import ensure_engine_initialized, reset_engine
from .models.comparison_result import ComparisonResult, ComparisonMethod, ComparisonBreakdown
from .models.histogram_descriptor import HistogramDescriptor
from .models.raster_image import RasterImage, ColorSpace
from .models.resize_policy import ResizePolicy
from .pipeline.product_image_matcher import match_product_images, images_differ

__all__ = [
    "load_and_align",
    "pixel_similarity",
    "histogram_similarity",
    "robust_similarity",
    "save_comparison_report",
    "ensure_engine_initialized",
    "reset_engine",
    "match_product_images",
    "images_differ",
    "ComparisonError",
    "EngineUnavailable",
    "LoadFailure",
    "DimensionMismatch",
    "WriteFailure",
    "ComparisonResult",
    "ComparisonMethod",
    "ComparisonBreakdown",
    "HistogramDescriptor",
    "RasterImage",
    "ColorSpace",
    "ResizePolicy",
]
