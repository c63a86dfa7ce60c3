"""Pipeline orchestration: validate, decode, resize and assemble metadata."""

import asyncio
from contextlib import ExitStack
from datetime import datetime, timezone
from typing import Dict, Optional

from .config import PipelineConfig, get_profile
from .image_utils import decode_image
from .models import (
    ImageMetadata,
    ProcessedImageSet,
    ProcessedSizes,
    SizeVariant,
    SourceImage,
    VariantDimensions,
)
from .observability import LogContext, MetricsCollector, timed_operation
from .protocols import LoggerProtocol, ResizeStrategy
from .validation import ensure_valid
from ..processors import RESIZE_STRATEGIES, resize_variants_async


class ImageNormalizationPipeline:
    """Turns one uploaded image into large, medium and small variants.

    The pipeline performs no persistence; the caller owns the returned
    ProcessedImageSet. A failed call raises and returns nothing.
    """

    def __init__(
        self,
        config: PipelineConfig,
        logger: LoggerProtocol,
        metrics_collector: Optional[MetricsCollector] = None,
        resize_strategy: Optional[ResizeStrategy] = None,
    ):
        self._config = config
        self._logger = logger
        self._metrics_collector = metrics_collector
        self._resize_variants = resize_strategy or RESIZE_STRATEGIES[config.strategy]

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def _log_context(self, source: SourceImage, profile_name: str) -> LogContext:
        return LogContext(component="image_normalization_pipeline").with_metadata(
            source_name=source.name,
            mime_type=source.mime_type,
            profile=profile_name,
        )

    def process(
        self, source: SourceImage, profile: Optional[str] = None
    ) -> ProcessedImageSet:
        """
        Validate, decode and resize an upload into its three variants.

        Args:
            source: The uploaded image
            profile: Profile name overriding the configured one

        Returns:
            ProcessedImageSet with encoded variants and metadata

        Raises:
            ValidationError: If the upload's type or size is rejected
            DecodeError: If the bytes cannot be decoded
            ImageProcessingError: If resizing or encoding fails
        """
        profile_name = profile or self._config.profile
        image_profile = get_profile(profile_name)
        log_context = self._log_context(source, profile_name)

        @timed_operation(
            "process_image", self._logger, self._metrics_collector, log_context
        )
        def run() -> ProcessedImageSet:
            ensure_valid(source)

            with decode_image(source.data, self._config.max_pixels) as image:
                self._logger.debug(
                    f"Decoded {image.width}x{image.height} source",
                    log_context.with_operation("decode_image"),
                )
                variants = self._resize_variants(
                    image, image_profile, source.mime_type
                )

            return self._assemble(source, variants, log_context)

        return run()

    async def process_async(
        self, source: SourceImage, profile: Optional[str] = None
    ) -> ProcessedImageSet:
        """Same contract as `process`, awaitable from a running event loop.

        Decoding and each resize run in worker threads; the three resizes
        are gathered before the result is assembled.
        """
        profile_name = profile or self._config.profile
        image_profile = get_profile(profile_name)
        log_context = self._log_context(source, profile_name)

        @timed_operation(
            "process_image", self._logger, self._metrics_collector, log_context
        )
        async def run() -> ProcessedImageSet:
            ensure_valid(source)

            with ExitStack() as stack:
                image = await asyncio.to_thread(
                    stack.enter_context,
                    decode_image(source.data, self._config.max_pixels),
                )
                self._logger.debug(
                    f"Decoded {image.width}x{image.height} source",
                    log_context.with_operation("decode_image"),
                )
                variants = await resize_variants_async(
                    image, image_profile, source.mime_type
                )

            return self._assemble(source, variants, log_context)

        return await run()

    def _assemble(
        self,
        source: SourceImage,
        variants: Dict[str, SizeVariant],
        log_context: LogContext,
    ) -> ProcessedImageSet:
        processed_sizes = ProcessedSizes(
            **{
                name: VariantDimensions(
                    width=variant.width, height=variant.height, size=variant.size
                )
                for name, variant in variants.items()
            }
        )
        metadata = ImageMetadata(
            original_name=source.name,
            original_size=source.size,
            processed_sizes=processed_sizes,
            processed_at=datetime.now(timezone.utc),
        )

        for name, variant in variants.items():
            self._logger.debug(
                f"Encoded {name} variant",
                log_context.with_operation("resize_image"),
                width=variant.width,
                height=variant.height,
                size=variant.size,
            )

        return ProcessedImageSet(metadata=metadata, **variants)
