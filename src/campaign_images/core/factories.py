"""Factory classes for creating configured service instances."""

import logging
from typing import Any, Optional

from .config import PipelineConfig
from .logging_config import get_logger
from .observability import MetricsCollector, StructuredLogger
from .protocols import LoggerProtocol
from .services import ImageNormalizationPipeline


class LoggerFactory:
    """Factory for creating logger instances."""

    @staticmethod
    def create_logger(
        name: str = "pipeline", level: Optional[int] = None
    ) -> StructuredLogger:
        """Create a structured logger under the "campaign-images" hierarchy.

        The underlying logger is configured by ``get_logger``, so it writes
        to stdout in the LOG_FORMAT layout like the CLI. ``level`` defaults
        to LOG_LEVEL.
        """
        base = get_logger(name)
        return StructuredLogger(base.name, base.level if level is None else level)


class PipelineFactory:
    """Factory for creating the image normalization pipeline."""

    @staticmethod
    def create_pipeline(
        config: Optional[PipelineConfig] = None,
        logger: Optional[LoggerProtocol] = None,
        metrics_collector: Optional[MetricsCollector] = None,
        **config_overrides: Any,
    ) -> ImageNormalizationPipeline:
        """Create a fully configured pipeline.

        Keyword overrides are applied on top of ``config`` (or the defaults)
        and validated like any other PipelineConfig.
        """
        if config is None:
            config = PipelineConfig(**config_overrides)
        elif config_overrides:
            config = PipelineConfig(**{**config.model_dump(), **config_overrides})

        if logger is None:
            logger = LoggerFactory.create_logger(
                "pipeline", logging.DEBUG if config.debug else None
            )

        return ImageNormalizationPipeline(
            config=config,
            logger=logger,
            metrics_collector=metrics_collector,
        )
