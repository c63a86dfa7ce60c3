"""Decode, resize and encode helpers for the image pipeline."""

import io
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple

from PIL import Image, ImageOps, UnidentifiedImageError

from .config import ResizeConfig
from .exceptions import DecodeError, ImageTooLargeError, with_error_handling
from .models import SizeVariant

# Transparent pixels come out black when flattened for JPEG output.
JPEG_BACKGROUND = (0, 0, 0)

_DECODE_ERRORS = (
    UnidentifiedImageError,
    Image.DecompressionBombError,
    OSError,
    SyntaxError,
    ValueError,
    EOFError,
)


@contextmanager
def decode_image(data: bytes, max_pixels: Optional[int] = None) -> Iterator[Image.Image]:
    """
    Decode image bytes into a fully loaded PIL Image.

    The image handle is closed when the block exits, whether it exits
    normally or with an exception. EXIF orientation is applied so the
    yielded image has the dimensions a browser would display.

    Args:
        data: Raw image bytes
        max_pixels: Refuse sources with more pixels than this

    Yields:
        Loaded PIL Image

    Raises:
        DecodeError: If the bytes are corrupt, truncated or not an image
        ImageTooLargeError: If the source exceeds ``max_pixels``
    """
    try:
        image = Image.open(io.BytesIO(data))
    except _DECODE_ERRORS as exc:
        raise DecodeError(f"Failed to load image: {exc}") from exc

    oriented = image
    try:
        width, height = image.size
        if max_pixels is not None and width * height > max_pixels:
            raise ImageTooLargeError(
                f"Image dimensions {width}x{height} exceed the limit of {max_pixels} pixels"
            )

        try:
            image.load()
            oriented = ImageOps.exif_transpose(image)
        except _DECODE_ERRORS as exc:
            raise DecodeError(f"Failed to load image: {exc}") from exc

        yield oriented
    finally:
        if oriented is not image:
            oriented.close()
        image.close()


def calculate_dimensions(
    source_width: int,
    source_height: int,
    width: int,
    height: Optional[int] = None,
) -> Tuple[int, int]:
    """
    Calculate target dimensions that keep the source aspect ratio.

    With only a width the height follows from the aspect ratio. With both
    the result fits inside the width x height box without cropping.

    Args:
        source_width: Width of the decoded source
        source_height: Height of the decoded source
        width: Target width
        height: Optional target height bounding the result

    Returns:
        (width, height) rounded to whole pixels, at least 1x1
    """
    aspect_ratio = source_width / source_height

    target_width: float = width
    if height is None:
        target_height = width / aspect_ratio
    else:
        height_by_width = width / aspect_ratio
        if height_by_width <= height:
            target_height = height_by_width
        else:
            target_height = height
            target_width = height * aspect_ratio

    return max(1, round(target_width)), max(1, round(target_height))


def output_format_for(mime_type: str) -> Tuple[str, str]:
    """Return (PIL format, MIME type) used to encode variants of a source."""
    if mime_type == "image/png":
        return "PNG", "image/png"
    return "JPEG", "image/jpeg"


def _prepare_for_format(image: Image.Image, format_type: str) -> Image.Image:
    if format_type == "PNG":
        if image.mode in ("RGB", "RGBA", "L", "LA"):
            return image
        return image.convert("RGBA")

    has_alpha = image.mode in ("RGBA", "LA", "PA") or (
        image.mode == "P" and "transparency" in image.info
    )
    if has_alpha:
        rgba = image.convert("RGBA")
        flattened = Image.new("RGB", rgba.size, JPEG_BACKGROUND)
        flattened.paste(rgba, mask=rgba.getchannel("A"))
        return flattened
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


@with_error_handling
def resize_image(
    image: Image.Image, name: str, config: ResizeConfig, source_mime: str
) -> SizeVariant:
    """
    Produce one encoded variant of a decoded image.

    PNG sources stay PNG so transparency survives; everything else is
    re-encoded as JPEG at the configured quality. Resampling uses the
    Lanczos filter.

    Args:
        image: Decoded source image, not modified
        name: Variant name ("large", "medium" or "small")
        config: Target box and quality for this variant
        source_mime: Declared MIME type of the upload

    Returns:
        SizeVariant holding the encoded bytes and their dimensions
    """
    width, height = calculate_dimensions(
        image.width, image.height, config.width, config.height
    )
    format_type, mime_type = output_format_for(source_mime)

    working = _prepare_for_format(image, format_type)
    resized = working.resize((width, height), Image.Resampling.LANCZOS)

    output_stream = io.BytesIO()
    if format_type == "PNG":
        # Lossless; quality has no meaning here
        resized.save(output_stream, format="PNG")
        quality = 1.0
    else:
        resized.save(output_stream, format="JPEG", quality=round(config.quality * 100))
        quality = config.quality

    data = output_stream.getvalue()
    return SizeVariant(
        name=name,
        width=width,
        height=height,
        mime_type=mime_type,
        quality=quality,
        data=data,
        size=len(data),
    )
