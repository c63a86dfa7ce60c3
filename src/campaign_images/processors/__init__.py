"""Strategies for producing the three variants of a decoded image."""

from .serial import resize_variants as serial_resize_variants
from .multithread import resize_variants as multithread_resize_variants
from .asyncio_processor import (
    resize_variants as asyncio_resize_variants,
    resize_variants_async,
)

RESIZE_STRATEGIES = {
    "serial": serial_resize_variants,
    "multithread": multithread_resize_variants,
    "asyncio": asyncio_resize_variants,
}

__all__ = [
    "RESIZE_STRATEGIES",
    "serial_resize_variants",
    "multithread_resize_variants",
    "asyncio_resize_variants",
    "resize_variants_async",
]
