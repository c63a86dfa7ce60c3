"""Custom exceptions and error handling utilities for the image pipeline."""

from __future__ import annotations

from functools import wraps
from typing import Any, Callable, TypeVar

from .logging_config import get_logger


class ImagesPipelineError(Exception):
    """Base exception for all image pipeline errors."""


class ValidationError(ImagesPipelineError):
    """Error raised when an upload is rejected before decoding."""


class DecodeError(ImagesPipelineError):
    """Error raised when image bytes cannot be decoded."""


class ImageTooLargeError(DecodeError):
    """Error raised when a decoded source exceeds the pixel cap."""


class ImageProcessingError(ImagesPipelineError):
    """Error raised when resizing or encoding a variant fails."""


class ConfigurationError(ImagesPipelineError):
    """Error raised for invalid configuration options."""


F = TypeVar("F", bound=Callable[..., Any])


def with_error_handling(func: F) -> F:
    """Wrap a function with standardized error handling."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:  # type: ignore[override]
        logger = get_logger("processor")
        try:
            return func(*args, **kwargs)
        except ImagesPipelineError:
            logger.error("Pipeline error", exc_info=True)
            raise
        except Exception as exc:  # noqa: BLE001
            logger.error(f"Unhandled error in {func.__name__}: {exc}", exc_info=True)
            raise ImageProcessingError(str(exc)) from exc

    return wrapper  # type: ignore[return-value]
