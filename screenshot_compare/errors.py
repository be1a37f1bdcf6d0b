"""
Failure kinds raised by the comparison engine.

Every failure is raised, never returned as a score, so a caller can always
tell "0% similar" apart from "could not compare".
"""
from __future__ import annotations
from pathlib import Path
from typing import Tuple


class ComparisonError(Exception):
    """Base class for everything the comparison engine raises."""


class EngineUnavailable(ComparisonError):
    """OpenCV support failed to initialize; no comparison can run in this process."""

    def __init__(self, cause: str):
        self.cause = cause
        super().__init__(f"Image comparison engine unavailable: {cause}")


class LoadFailure(ComparisonError):
    """An image path is missing, unreadable or decodes to an empty buffer."""

    def __init__(self, path: str | Path, cause: str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not load image {self.path}: {cause}")


class DimensionMismatch(ComparisonError):
    """Two images that must be aligned have different shapes."""

    def __init__(self, shape_a: Tuple[int, ...], shape_b: Tuple[int, ...]):
        self.shape_a = tuple(shape_a)
        self.shape_b = tuple(shape_b)
        super().__init__(f"Image dimensions differ: {self.shape_a} vs {self.shape_b}")


class WriteFailure(ComparisonError):
    """The diff artifact could not be written."""

    def __init__(self, path: str | Path, cause: str):
        self.path = Path(path)
        self.cause = cause
        super().__init__(f"Could not write image {self.path}: {cause}")
