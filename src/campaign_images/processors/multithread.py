"""Multithreaded processor implementation - uses a thread pool per upload."""

from concurrent.futures import ThreadPoolExecutor
from typing import Dict

from PIL import Image

from ..core.config import ImageProfile
from ..core.image_utils import resize_image
from ..core.models import SizeVariant


def resize_variants(
    image: Image.Image, profile: ImageProfile, source_mime: str
) -> Dict[str, SizeVariant]:
    """
    Resize the image to every variant of the profile using threads.

    Pillow releases the GIL while resampling and encoding, so the three
    variants make progress in parallel. The first failure is re-raised
    once all workers have finished.

    Args:
        image: Decoded source image (only read by the workers)
        profile: Presets to apply
        source_mime: Declared MIME type of the upload

    Returns:
        Variants keyed by name, largest first
    """
    presets = profile.items()

    with ThreadPoolExecutor(max_workers=len(presets)) as executor:
        futures = {
            name: executor.submit(resize_image, image, name, config, source_mime)
            for name, config in presets
        }

    # Leaving the executor block waits for every future
    return {name: future.result() for name, future in futures.items()}
