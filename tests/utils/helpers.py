"""
Test Helpers
============

Helper functions for building and inspecting PNG fixtures.
"""

import base64
import io
from typing import Tuple

from PIL import Image

from carousel_renderer.models.schemas import PNGResult


def make_png(width: int, height: int, color: str = "#1d3557") -> bytes:
    """Create a solid-color PNG of the given pixel size."""
    image = Image.new("RGB", (width, height), color)
    output = io.BytesIO()
    image.save(output, format="PNG")
    return output.getvalue()


def png_size_from_base64(data: str) -> Tuple[int, int]:
    """Decode base64 PNG data and return its pixel size."""
    with Image.open(io.BytesIO(base64.b64decode(data, validate=True))) as image:
        assert image.format == "PNG"
        return image.size


def make_png_result(png_bytes: bytes, width: int = 1080, height: int = 1350) -> PNGResult:
    """Wrap PNG bytes in a PNGResult the way the generator does."""
    with Image.open(io.BytesIO(png_bytes)) as image:
        pixel_width, pixel_height = image.size
    return PNGResult(
        png_data=png_bytes,
        base64_data=base64.b64encode(png_bytes).decode("utf-8"),
        width=width,
        height=height,
        pixel_width=pixel_width,
        pixel_height=pixel_height,
        file_size=len(png_bytes),
        metadata={"test": True},
    )
