"""Tests for upload validation."""

import pytest

from campaign_images.core.exceptions import ValidationError
from campaign_images.core.models import SourceImage
from campaign_images.core.validation import (
    MAX_FILE_SIZE,
    SUPPORTED_TYPES,
    ensure_valid,
    validate_image_file,
    validate_source,
)

SIZE_MESSAGE = "File size must be less than 10MB"
TYPE_MESSAGE = "File type not supported. Please use JPEG, PNG, WebP, or GIF."


def test_max_file_size_is_ten_mebibytes():
    assert MAX_FILE_SIZE == 10_485_760


@pytest.mark.parametrize("mime_type", SUPPORTED_TYPES)
@pytest.mark.parametrize("size", [0, 1, 512_000, MAX_FILE_SIZE])
def test_supported_types_within_limit_pass(mime_type, size):
    result = validate_image_file(mime_type, size)
    assert result.valid is True
    assert result.error is None


@pytest.mark.parametrize(
    "mime_type", ["image/jpeg", "image/png", "image/webp", "image/gif", "image/bmp"]
)
def test_oversized_image_fails_with_size_message(mime_type):
    result = validate_image_file(mime_type, MAX_FILE_SIZE + 1)
    assert result.valid is False
    assert result.error == SIZE_MESSAGE


@pytest.mark.parametrize("mime_type", ["image/bmp", "image/tiff", "image/svg+xml"])
def test_unsupported_image_type_fails(mime_type):
    result = validate_image_file(mime_type, 1024)
    assert result.valid is False
    assert result.error == TYPE_MESSAGE


@pytest.mark.parametrize("mime_type", ["application/pdf", "text/plain", ""])
def test_non_image_fails_first(mime_type):
    result = validate_image_file(mime_type, MAX_FILE_SIZE * 2)
    assert result.valid is False
    assert result.error == "File must be an image"


def test_validate_source_uses_declared_size():
    source = SourceImage(
        name="big.jpg", mime_type="image/jpeg", data=b"x", size=MAX_FILE_SIZE + 1
    )
    assert validate_source(source).error == SIZE_MESSAGE


def test_ensure_valid_raises():
    source = SourceImage(name="doc.pdf", mime_type="application/pdf", data=b"%PDF")
    with pytest.raises(ValidationError, match="File must be an image"):
        ensure_valid(source)


def test_ensure_valid_accepts_supported_upload():
    source = SourceImage(name="a.png", mime_type="image/png", data=b"\x89PNG")
    ensure_valid(source)
