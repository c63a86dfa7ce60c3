"""Testing utilities and fakes for the image pipeline."""

from .fakes import FakeLogger, create_test_image, make_source

__all__ = [
    "FakeLogger",
    "create_test_image",
    "make_source",
]
