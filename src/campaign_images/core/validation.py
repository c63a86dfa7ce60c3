"""Upload checks run before any pixel data is decoded."""

from .exceptions import ValidationError
from .models import SourceImage, ValidationResult

MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
SUPPORTED_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")


def validate_image_file(mime_type: str, size: int) -> ValidationResult:
    """
    Check an upload's declared MIME type and byte length.

    Rules are applied in order and the first failing rule wins.

    Args:
        mime_type: Declared MIME type of the upload
        size: Declared byte length of the upload

    Returns:
        ValidationResult with ``valid`` set and, on failure, the reason
    """
    if not mime_type.startswith("image/"):
        return ValidationResult(valid=False, error="File must be an image")

    if size > MAX_FILE_SIZE:
        return ValidationResult(valid=False, error="File size must be less than 10MB")

    if mime_type not in SUPPORTED_TYPES:
        return ValidationResult(
            valid=False,
            error="File type not supported. Please use JPEG, PNG, WebP, or GIF.",
        )

    return ValidationResult(valid=True)


def validate_source(source: SourceImage) -> ValidationResult:
    return validate_image_file(source.mime_type, source.size)


def ensure_valid(source: SourceImage) -> None:
    """Raise ValidationError if the upload does not pass validation."""
    result = validate_source(source)
    if not result.valid:
        raise ValidationError(result.error)
