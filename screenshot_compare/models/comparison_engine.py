from __future__ import annotations
import logging
import os
import threading

import cv2
import numpy as np
from dotenv import load_dotenv

from ..errors import EngineUnavailable

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ComparisonEngine:
    """
    Singleton guarding the one-time OpenCV setup shared by every comparison.

    The first instantiation checks the codec and histogram support and records
    whether it worked. Later instantiations return the cached instance without
    checking again; a failed check stays failed until reset().
    """

    _instance: ComparisonEngine | None = None  # Class-level cache for singleton
    _lock = threading.Lock()

    def __new__(cls, *args, **kwargs):
        instance = cls._instance
        if instance is None:
            with cls._lock:
                if cls._instance is None:
                    engine = super().__new__(cls)
                    engine._init_engine(*args, **kwargs)
                    cls._instance = engine
                instance = cls._instance
        return instance

    def _init_engine(self, num_threads: int = None):
        """
        Args:
            num_threads (int): OpenCV worker threads. Defaults to env var, 1 keeps runs deterministic.
        """
        self.num_threads = num_threads
        self.ready = False
        self.failure: str | None = None

        # Any failure here is cached and re-raised as EngineUnavailable by ensure_ready().
        try:
            if self.num_threads is None:
                self.num_threads = self._threads_from_env()
            cv2.setNumThreads(self.num_threads)
            self._self_check()
        except Exception as err:
            self.failure = str(err) or err.__class__.__name__
            logger.exception(f"Failed to initialize OpenCV comparison engine: {self.failure}")
            return

        self.ready = True
        logger.info(f"OpenCV {cv2.__version__} loaded successfully (threads={self.num_threads})")

    @staticmethod
    def _threads_from_env() -> int:
        raw = os.getenv("OPENCV_NUM_THREADS", "1")
        try:
            num_threads = int(raw)
        except ValueError:
            raise ValueError(f"OPENCV_NUM_THREADS={raw!r} is not an integer") from None
        if num_threads < 0:
            raise ValueError(f"OPENCV_NUM_THREADS={raw!r} must be 0 or greater")
        return num_threads

    @staticmethod
    def _self_check() -> None:
        """Round-trip a tiny image through the PNG codec and the HSV histogram path."""
        sample = np.zeros((2, 2, 3), dtype=np.uint8)
        sample[0, 0] = (255, 0, 0)

        ok, encoded = cv2.imencode(".png", sample)
        if not ok:
            raise RuntimeError("PNG encoder unavailable")
        decoded = cv2.imdecode(encoded, cv2.IMREAD_COLOR)
        if decoded is None or not np.array_equal(decoded, sample):
            raise RuntimeError("PNG decoder unavailable")

        hsv = cv2.cvtColor(decoded, cv2.COLOR_BGR2HSV)
        hist = cv2.calcHist([hsv], [0, 1], None, [50, 60], [0, 180, 0, 256])
        if hist is None or hist.sum() != sample.shape[0] * sample.shape[1]:
            raise RuntimeError("Histogram support unavailable")

    def ensure_ready(self) -> None:
        if not self.ready:
            raise EngineUnavailable(self.failure or "initialization did not complete")

    @classmethod
    def reset(cls) -> None:
        """Drop the cached engine so the next instantiation initializes again."""
        with cls._lock:
            cls._instance = None


def ensure_engine_initialized() -> ComparisonEngine:
    """
    Initialize the engine on first use and return it.
    Raises EngineUnavailable when initialization failed, now or on an earlier call.
    """
    engine = ComparisonEngine()
    engine.ensure_ready()
    return engine


def reset_engine() -> None:
    ComparisonEngine.reset()
