"""
Image classifier interface for the security panel.

The classifier is an abstraction layer between the panel and whatever does
image recognition (a cloud vision API, a local model). The integration
layer provides a concrete implementation.

Design Principle:
    The panel only needs a yes/no answer. Bounding boxes, labels and scores
    stay inside the classifier; the confidence threshold is passed in so
    the panel decides how sure the classifier must be.
"""

from abc import ABC, abstractmethod
import random
from typing import Any, List, Optional, Tuple


class ImageService(ABC):
    """
    Abstract interface for cat detection.

    The image is opaque to the panel: whatever the camera integration
    produces (a PIL image, an array, encoded bytes) is passed through as is.
    """

    @abstractmethod
    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        """
        Decide whether an image shows a cat.

        Args:
            image: Camera image, in the integration's own format
            confidence_threshold: Minimum confidence (0-100) to report a cat

        Returns:
            True if a cat was found with at least the given confidence
        """
        pass


class FakeImageService(ImageService):
    """
    Development stand-in that flips a coin for every image.

    Pass a seeded random.Random to make runs repeatable.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        return self._rng.random() >= 0.5


class MockImageService(ImageService):
    """
    Mock classifier for testing.

    Returns a fixed verdict and tracks calls.
    """

    def __init__(self, verdict: bool = False) -> None:
        self._verdict = verdict
        self._calls: List[Tuple[Any, float]] = []

    def set_verdict(self, verdict: bool) -> None:
        """Set the verdict returned for the following images."""
        self._verdict = verdict

    def get_calls(self) -> List[Tuple[Any, float]]:
        """Get recorded (image, confidence_threshold) calls."""
        return self._calls.copy()

    def clear_calls(self) -> None:
        """Clear recorded calls."""
        self._calls.clear()

    # ImageService implementation

    def image_contains_cat(self, image: Any, confidence_threshold: float) -> bool:
        self._calls.append((image, confidence_threshold))
        return self._verdict
