"""Serial processor implementation - resizes variants one by one."""

from typing import Dict

from PIL import Image

from ..core.config import ImageProfile
from ..core.image_utils import resize_image
from ..core.models import SizeVariant


def resize_variants(
    image: Image.Image, profile: ImageProfile, source_mime: str
) -> Dict[str, SizeVariant]:
    """
    Resizes the image to every variant of the profile in the current thread.

    Args:
        image: Decoded source image.
        profile: The `ImageProfile` whose presets to apply.
        source_mime: Declared MIME type of the upload.

    Returns:
        Variants keyed by name, largest first.
    """
    variants = {}

    for name, config in profile.items():
        variants[name] = resize_image(image, name, config, source_mime)

    return variants
