"""
Image classification for the security panel.

Provides the classifier interface the SecurityService consumes, plus two
stand-in implementations:
- FakeImageService: random verdicts for development
- MockImageService: fixed verdicts with call tracking for tests
"""

from .service import ImageService, FakeImageService, MockImageService

__all__ = [
    "ImageService",
    "FakeImageService",
    "MockImageService",
]
