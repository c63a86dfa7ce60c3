"""Image normalization pipeline for campaign site photo uploads."""

from .core.factories import PipelineFactory
from .core.services import ImageNormalizationPipeline

__all__ = ["ImageNormalizationPipeline", "PipelineFactory"]
