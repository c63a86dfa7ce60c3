"""Protocol definitions for dependency injection and testability."""

from typing import Any, Callable, Dict, Optional, Protocol

from PIL import Image

from .config import ImageProfile
from .models import SizeVariant

ResizeStrategy = Callable[[Image.Image, ImageProfile, str], Dict[str, SizeVariant]]


class LoggerProtocol(Protocol):
    """Protocol for logging operations."""

    def debug(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log debug message."""
        ...

    def info(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log info message."""
        ...

    def warning(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log warning message."""
        ...

    def error(self, message: str, context: Optional[Any] = None, **kwargs: Any) -> None:
        """Log error message."""
        ...
