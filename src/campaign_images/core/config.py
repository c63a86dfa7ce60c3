"""Resize presets and pipeline configuration."""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, Field, model_validator

from .exceptions import ConfigurationError

VARIANT_NAMES = ("large", "medium", "small")

# Sources above this many pixels are refused before their pixel data is loaded.
DEFAULT_MAX_PIXELS = 100_000_000

ProfileName = Literal["hero", "family"]
StrategyName = Literal["serial", "multithread", "asyncio"]


class ResizeConfig(BaseModel):
    """Target box and encoder quality for one variant."""

    width: int = Field(gt=0)
    height: Optional[int] = Field(default=None, gt=0)
    quality: float = Field(gt=0, le=1)


class ImageProfile(BaseModel):
    """The three variant presets used for one kind of content photo."""

    large: ResizeConfig
    medium: ResizeConfig
    small: ResizeConfig

    @model_validator(mode="after")
    def _check_width_order(self) -> "ImageProfile":
        if not self.large.width >= self.medium.width >= self.small.width:
            raise ValueError("variant widths must not increase from large to small")
        return self

    def items(self) -> List[Tuple[str, ResizeConfig]]:
        return [(name, getattr(self, name)) for name in VARIANT_NAMES]


IMAGE_CONFIGS: Dict[str, ImageProfile] = {
    "hero": ImageProfile(
        large=ResizeConfig(width=800, quality=0.85),
        medium=ResizeConfig(width=400, quality=0.8),
        small=ResizeConfig(width=150, quality=0.75),
    ),
    "family": ImageProfile(
        large=ResizeConfig(width=1200, quality=0.85),
        medium=ResizeConfig(width=600, quality=0.8),
        small=ResizeConfig(width=150, quality=0.75),
    ),
}


def get_profile(name: str) -> ImageProfile:
    """Look up a named profile."""
    try:
        return IMAGE_CONFIGS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown image profile: {name!r} (expected one of {sorted(IMAGE_CONFIGS)})"
        ) from None


class PipelineConfig(BaseModel):
    """Configuration for the image normalization pipeline."""

    profile: ProfileName = "hero"
    strategy: StrategyName = "asyncio"
    max_pixels: Optional[int] = Field(default=DEFAULT_MAX_PIXELS, gt=0)
    debug: bool = False
