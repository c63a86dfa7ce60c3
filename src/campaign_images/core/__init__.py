"""Core utilities and shared components for the image pipeline."""

from .config import (
    IMAGE_CONFIGS,
    ImageProfile,
    PipelineConfig,
    ResizeConfig,
    get_profile,
)
from .exceptions import (
    ConfigurationError,
    DecodeError,
    ImageProcessingError,
    ImagesPipelineError,
    ImageTooLargeError,
    ValidationError,
    with_error_handling,
)
from .image_utils import (
    calculate_dimensions,
    decode_image,
    output_format_for,
    resize_image,
)
from .logging_config import get_logger, setup_logger
from .models import (
    ImageMetadata,
    ProcessedImageSet,
    ProcessedSizes,
    SizeSavings,
    SizeVariant,
    SourceImage,
    ValidationResult,
    VariantDimensions,
)
from .reporting import (
    calculate_size_savings,
    format_file_size,
    get_responsive_image_sources,
    parse_photo_metadata,
    to_content_fields,
)
from .validation import MAX_FILE_SIZE, SUPPORTED_TYPES, validate_image_file

__all__ = [
    "IMAGE_CONFIGS",
    "ImageProfile",
    "PipelineConfig",
    "ResizeConfig",
    "get_profile",
    "ConfigurationError",
    "DecodeError",
    "ImageProcessingError",
    "ImagesPipelineError",
    "ImageTooLargeError",
    "ValidationError",
    "with_error_handling",
    "calculate_dimensions",
    "decode_image",
    "output_format_for",
    "resize_image",
    "get_logger",
    "setup_logger",
    "ImageMetadata",
    "ProcessedImageSet",
    "ProcessedSizes",
    "SizeSavings",
    "SizeVariant",
    "SourceImage",
    "ValidationResult",
    "VariantDimensions",
    "calculate_size_savings",
    "format_file_size",
    "get_responsive_image_sources",
    "parse_photo_metadata",
    "to_content_fields",
    "MAX_FILE_SIZE",
    "SUPPORTED_TYPES",
    "validate_image_file",
]
