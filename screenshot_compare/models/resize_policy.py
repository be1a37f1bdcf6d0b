from __future__ import annotations
from enum import Enum


class ResizePolicy(str, Enum):
    """
    How two images of different size are brought to a common size.
    The first argument of a comparison is the reference by default.
    """
    RESIZE_SECOND_TO_FIRST = "resize_second_to_first"
    RESIZE_FIRST_TO_SECOND = "resize_first_to_second"
    REJECT_MISMATCH = "reject_mismatch"

    @classmethod
    def parse(cls, value: str | ResizePolicy, source: str = "IMAGE_RESIZE_POLICY") -> ResizePolicy:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            allowed = ", ".join(p.value for p in cls)
            raise ValueError(f"{source}={value!r} is not one of: {allowed}") from None
