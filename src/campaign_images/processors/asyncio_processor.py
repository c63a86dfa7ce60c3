"""AsyncIO processor implementation - fans resizes out and gathers them."""

import asyncio
from concurrent.futures import ThreadPoolExecutor
from typing import Dict

from PIL import Image

from ..core.config import ImageProfile
from ..core.image_utils import resize_image
from ..core.models import SizeVariant


async def resize_variants_async(
    image: Image.Image, profile: ImageProfile, source_mime: str
) -> Dict[str, SizeVariant]:
    """Resize the image to every variant of the profile concurrently.

    Each resize runs in the default executor so the event loop stays free;
    the call returns once all of them have completed.
    """
    presets = profile.items()
    tasks = [
        asyncio.to_thread(resize_image, image, name, config, source_mime)
        for name, config in presets
    ]

    results = await asyncio.gather(*tasks, return_exceptions=True)

    # Every task has finished here; surface the first failure, if any
    for result in results:
        if isinstance(result, BaseException):
            raise result

    return {name: variant for (name, _), variant in zip(presets, results)}  # type: ignore[misc]


def _run_in_new_loop(
    image: Image.Image, profile: ImageProfile, source_mime: str
) -> Dict[str, SizeVariant]:
    return asyncio.run(resize_variants_async(image, profile, source_mime))


def resize_variants(
    image: Image.Image, profile: ImageProfile, source_mime: str
) -> Dict[str, SizeVariant]:
    """
    Resize the image to every variant of the profile using asyncio.

    This is the synchronous wrapper that runs the async function. When the
    calling thread already runs an event loop, the variants are produced on
    a fresh loop in a worker thread and this call blocks until they are done;
    async callers should prefer `resize_variants_async`.

    Args:
        image: Decoded source image
        profile: Presets to apply
        source_mime: Declared MIME type of the upload

    Returns:
        Variants keyed by name, largest first
    """
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return _run_in_new_loop(image, profile, source_mime)

    with ThreadPoolExecutor(max_workers=1) as executor:
        return executor.submit(_run_in_new_loop, image, profile, source_mime).result()
