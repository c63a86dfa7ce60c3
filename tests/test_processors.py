"""Tests for processor modules."""

import asyncio
from unittest.mock import patch

import pytest

from campaign_images.core.config import get_profile
from campaign_images.core.exceptions import ImageProcessingError
from campaign_images.core.image_utils import decode_image, resize_image
from campaign_images.processors import (
    RESIZE_STRATEGIES,
    asyncio_resize_variants,
    multithread_resize_variants,
    resize_variants_async,
    serial_resize_variants,
)
from campaign_images.testing.fakes import create_test_image


def _fail_on_medium(image, name, config, source_mime):
    if name == "medium":
        raise ImageProcessingError("medium failed")
    return resize_image(image, name, config, source_mime)


def test_strategy_registry():
    assert RESIZE_STRATEGIES == {
        "serial": serial_resize_variants,
        "multithread": multithread_resize_variants,
        "asyncio": asyncio_resize_variants,
    }


@pytest.mark.parametrize("strategy", sorted(RESIZE_STRATEGIES))
def test_strategy_produces_all_variants(strategy):
    resize_variants = RESIZE_STRATEGIES[strategy]

    with decode_image(create_test_image(1000, 500)) as image:
        variants = resize_variants(image, get_profile("hero"), "image/jpeg")

    assert list(variants) == ["large", "medium", "small"]
    assert [v.width for v in variants.values()] == [800, 400, 150]
    assert [v.height for v in variants.values()] == [400, 200, 75]
    assert all(v.name == name for name, v in variants.items())


@pytest.mark.parametrize(
    "module_path, resize_variants",
    [
        ("campaign_images.processors.serial", serial_resize_variants),
        ("campaign_images.processors.multithread", multithread_resize_variants),
        ("campaign_images.processors.asyncio_processor", asyncio_resize_variants),
    ],
)
def test_strategy_propagates_failure(module_path, resize_variants):
    with decode_image(create_test_image(400, 300)) as image:
        with patch(f"{module_path}.resize_image", side_effect=_fail_on_medium):
            with pytest.raises(ImageProcessingError, match="medium failed"):
                resize_variants(image, get_profile("hero"), "image/jpeg")


def test_resize_variants_async_from_event_loop():
    async def run():
        with decode_image(create_test_image(1600, 1200, format="PNG")) as image:
            return await resize_variants_async(image, get_profile("family"), "image/png")

    variants = asyncio.run(run())

    assert [v.width for v in variants.values()] == [1200, 600, 150]
    assert all(v.mime_type == "image/png" for v in variants.values())


def test_resize_variants_async_waits_for_all_tasks():
    calls = []

    def record(image, name, config, source_mime):
        calls.append(name)
        return _fail_on_medium(image, name, config, source_mime)

    async def run():
        with decode_image(create_test_image(400, 300)) as image:
            await resize_variants_async(image, get_profile("hero"), "image/jpeg")

    with patch(
        "campaign_images.processors.asyncio_processor.resize_image", side_effect=record
    ):
        with pytest.raises(ImageProcessingError):
            asyncio.run(run())

    assert sorted(calls) == ["large", "medium", "small"]


def test_asyncio_wrapper_called_from_running_loop():
    async def handler():
        with decode_image(create_test_image(400, 300)) as image:
            return asyncio_resize_variants(image, get_profile("hero"), "image/jpeg")

    variants = asyncio.run(handler())

    assert [v.width for v in variants.values()] == [800, 400, 150]


def test_asyncio_wrapper_propagates_failure_from_running_loop():
    async def handler():
        with decode_image(create_test_image(400, 300)) as image:
            asyncio_resize_variants(image, get_profile("hero"), "image/jpeg")

    with patch(
        "campaign_images.processors.asyncio_processor.resize_image",
        side_effect=_fail_on_medium,
    ):
        with pytest.raises(ImageProcessingError, match="medium failed"):
            asyncio.run(handler())
