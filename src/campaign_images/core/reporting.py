"""Size reporting and content-record helpers for processed images."""

from typing import Any, Dict, List, Mapping, Optional

from .models import ImageMetadata, ProcessedImageSet, SizeSavings

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")

RESPONSIVE_SIZES = "(max-width: 640px) 100vw, (max-width: 1024px) 50vw, 33vw"


def format_file_size(size: float) -> str:
    """
    Format a byte count in human readable base-1024 units.

    Args:
        size: Number of bytes; negative values keep their sign

    Returns:
        String such as "0 Bytes", "1 KB" or "1.5 MB"
    """
    if size == 0:
        return "0 Bytes"
    if size < 0:
        return f"-{format_file_size(-size)}"

    k = 1024
    exponent = 0
    while exponent < len(SIZE_UNITS) - 1 and size >= k ** (exponent + 1):
        exponent += 1

    value = f"{size / k ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {SIZE_UNITS[exponent]}"


def calculate_size_savings(metadata: ImageMetadata) -> SizeSavings:
    """
    Compare the original upload size with the combined size of its variants.

    Savings may be negative when the variants together outweigh the
    original; that is reported, not treated as an error.

    Args:
        metadata: Metadata of a processed image set

    Returns:
        SizeSavings with humanized sizes and a one-decimal percentage
    """
    original_size = metadata.original_size
    processed_size = metadata.total_processed_size
    savings = original_size - processed_size

    percent = (savings / original_size) * 100 if original_size else 0.0

    return SizeSavings(
        original=format_file_size(original_size),
        processed=format_file_size(processed_size),
        savings=format_file_size(savings),
        savings_percent=f"{percent:.1f}%",
    )


def get_responsive_image_sources(processed: ProcessedImageSet) -> Dict[str, str]:
    """Build srcSet/sizes/src attributes for an <img> tag."""
    candidates = [processed.small, processed.medium, processed.large]
    return {
        "srcSet": ", ".join(f"{v.data_uri} {v.width}w" for v in candidates),
        "sizes": RESPONSIVE_SIZES,
        "src": processed.large.data_uri,
    }


def to_content_fields(processed: ProcessedImageSet, alt_text: str = "") -> Dict[str, Any]:
    """Map a processed image set onto the photo fields of a content record."""
    return {
        "photo_large": processed.large.data_uri,
        "photo_medium": processed.medium.data_uri,
        "photo_small": processed.small.data_uri,
        "photo_alt": alt_text,
        "photo_metadata": processed.metadata.model_dump(mode="json", by_alias=True),
    }


def parse_photo_metadata(record: Mapping[str, Any]) -> Optional[ImageMetadata]:
    """Read photo metadata from a content record.

    Returns None for a content slot that never received an upload.
    """
    raw = record.get("photo_metadata")
    if not raw:
        return None
    return ImageMetadata.model_validate(raw)


def describe_variants(metadata: ImageMetadata) -> List[str]:
    """One summary line per variant plus the savings line."""
    lines = []
    for name in ("large", "medium", "small"):
        dims = getattr(metadata.processed_sizes, name)
        lines.append(
            f"{name.title()}: {dims.width}x{dims.height} ({format_file_size(dims.size)})"
        )

    savings = calculate_size_savings(metadata)
    lines.append(
        f"Size Savings: {savings.savings_percent} ({savings.savings} saved, "
        f"{savings.original} -> {savings.processed})"
    )
    return lines
