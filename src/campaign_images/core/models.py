"""Shared data models for the image pipeline."""

import base64
import mimetypes
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class SourceImage(BaseModel):
    """An uploaded image, held in memory for the duration of one upload."""

    name: str
    mime_type: str
    data: bytes = Field(repr=False)
    size: Optional[int] = None

    @model_validator(mode="after")
    def _default_size(self) -> "SourceImage":
        if self.size is None:
            self.size = len(self.data)
        return self

    @classmethod
    def from_path(
        cls, path: Union[str, Path], mime_type: Optional[str] = None
    ) -> "SourceImage":
        """Read an image file from disk, guessing its MIME type if not given."""
        path = Path(path)
        if mime_type is None:
            mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        return cls(name=path.name, mime_type=mime_type, data=path.read_bytes())


class ValidationResult(BaseModel):
    """Outcome of checking an upload's declared type and size."""

    valid: bool
    error: Optional[str] = None


class SizeVariant(BaseModel):
    """One resized rendition of a source image."""

    name: str
    width: int
    height: int
    mime_type: str
    quality: float
    data: bytes = Field(repr=False)
    size: int

    @property
    def data_uri(self) -> str:
        encoded = base64.b64encode(self.data).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class VariantDimensions(_CamelModel):
    """Stored dimensions and encoded size of a single variant."""

    width: int
    height: int
    size: int


class ProcessedSizes(_CamelModel):
    large: VariantDimensions
    medium: VariantDimensions
    small: VariantDimensions


class ImageMetadata(_CamelModel):
    """Metadata stored next to the variants of a content photo.

    Serializes with camelCase keys (``model_dump(by_alias=True)``) so the
    JSON matches what the content records already hold.
    """

    original_name: str
    original_size: int
    processed_sizes: ProcessedSizes
    processed_at: datetime

    @property
    def total_processed_size(self) -> int:
        sizes = self.processed_sizes
        return sizes.large.size + sizes.medium.size + sizes.small.size


class ProcessedImageSet(BaseModel):
    """The three encoded variants of an upload together with their metadata."""

    large: SizeVariant
    medium: SizeVariant
    small: SizeVariant
    metadata: ImageMetadata

    def variants(self) -> Dict[str, SizeVariant]:
        """Return the variants keyed by name, largest first."""
        return {"large": self.large, "medium": self.medium, "small": self.small}


class SizeSavings(BaseModel):
    """Human readable comparison of original and processed sizes."""

    original: str
    processed: str
    savings: str
    savings_percent: str
