"""Test configuration and fixtures for cl_image_optimizer.

This module provides:
- Pytest configuration (markers, dependency checks)
- Factories for synthetic Pillow images, SourceImages and encoded bytes
- File-based fixtures for CLI tests
"""

from collections.abc import Callable, Iterator
from io import BytesIO
from pathlib import Path

import pytest
from loguru import logger
from PIL import Image, ImageDraw, features

from cl_image_optimizer.common.codec_registry import CodecRegistry, default_registry
from cl_image_optimizer.common.schemas import SourceImage

ImageFactory = Callable[..., Image.Image]
SourceFactory = Callable[..., SourceImage]
BytesFactory = Callable[..., bytes]


# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "requires_webp: requires Pillow built with WEBP support",
    )


def pytest_runtest_setup(item):
    """Check dependencies before running tests - FAIL if missing (not skip)."""
    if item.get_closest_marker("requires_webp") and not features.check("webp"):
        pytest.fail(
            "Pillow was built without WEBP support.\n"
            "Reinstall Pillow from the official wheels or install libwebp and rebuild.\n"
            "Or exclude with: pytest -m 'not requires_webp'",
            pytrace=False,
        )


@pytest.fixture(autouse=True)
def reset_logger() -> Iterator[None]:
    """Drop any sinks a test (e.g. the CLI) added to loguru."""
    yield
    logger.remove()


# ============================================================================
# Image Factories
# ============================================================================


def draw_pattern(img: Image.Image) -> Image.Image:
    """Draw a grid and a circle so encoders have real content to compress."""
    draw = ImageDraw.Draw(img)
    width, height = img.size

    for x in range(0, width, 10):
        draw.line([(x, 0), (x, height)], fill="white", width=1)
    for y in range(0, height, 10):
        draw.line([(0, y), (width, y)], fill="white", width=1)

    draw.ellipse(
        [width // 4, height // 4, 3 * width // 4, 3 * height // 4],
        fill="red" if img.mode != "L" else 128,
    )
    return img


@pytest.fixture
def make_image() -> ImageFactory:
    """Factory for synthetic in-memory images."""

    def _make(width: int = 200, height: int = 100, mode: str = "RGB") -> Image.Image:
        img = Image.new(mode, (width, height), color="steelblue" if mode != "L" else 90)
        if width > 0 and height > 0:
            _ = draw_pattern(img)
        return img

    return _make


@pytest.fixture
def make_source(make_image: ImageFactory) -> SourceFactory:
    """Factory for SourceImage objects wrapping synthetic images."""

    def _make(
        width: int = 200,
        height: int = 100,
        native_format: str = "JPEG",
        mode: str = "RGB",
    ) -> SourceImage:
        return SourceImage(image=make_image(width, height, mode), native_format=native_format)

    return _make


@pytest.fixture
def encoded_image(make_image: ImageFactory) -> BytesFactory:
    """Factory for encoded image bytes in a given Pillow format."""

    def _make(
        pil_format: str = "PNG",
        width: int = 200,
        height: int = 100,
        mode: str = "RGB",
    ) -> bytes:
        buffer = BytesIO()
        make_image(width, height, mode).save(buffer, format=pil_format)
        return buffer.getvalue()

    return _make


@pytest.fixture
def registry() -> CodecRegistry:
    return default_registry()


# ============================================================================
# File Fixtures
# ============================================================================


@pytest.fixture
def synthetic_image(tmp_path: Path) -> Path:
    """Generate synthetic test image using PIL."""
    output_path = tmp_path / "synthetic.jpg"

    # Create simple test image (800x600 with gradient)
    img = Image.new("RGB", (800, 600), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)

    for i in range(0, 800, 50):
        draw.line([(i, 0), (i, 600)], fill=(255, 255, 255), width=2)
    for i in range(0, 600, 50):
        draw.line([(0, i), (800, i)], fill=(255, 255, 255), width=2)

    draw.ellipse([300, 200, 500, 400], fill=(200, 100, 100))

    img.save(output_path, "JPEG", quality=85)

    return output_path


@pytest.fixture
def synthetic_png(tmp_path: Path, encoded_image: BytesFactory) -> Path:
    """Generate a 200x100 PNG on disk."""
    output_path = tmp_path / "synthetic.png"
    _ = output_path.write_bytes(encoded_image("PNG", 200, 100))
    return output_path
