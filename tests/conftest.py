from __future__ import annotations

from io import BytesIO

import pytest
from PIL import Image


def png_bytes(width: int, height: int, color=(200, 30, 30, 255)) -> bytes:
    out = BytesIO()
    Image.new("RGBA", (width, height), color).save(out, format="PNG")
    return out.getvalue()


SVG = (
    b'<svg xmlns="http://www.w3.org/2000/svg" width="64" height="64" viewBox="0 0 64 64">'
    b'<rect width="64" height="64" fill="#0a0"/></svg>'
)


class FakeRasterizer:
    """Paints a solid square of the requested size and records each call."""

    def __init__(self) -> None:
        self.calls = []

    def rasterize(self, svg: bytes, width: int, height: int) -> bytes:
        self.calls.append((width, height))
        return png_bytes(width, height, (0, 170, 0, 255))


@pytest.fixture
def make_png():
    return png_bytes


@pytest.fixture
def svg_source() -> bytes:
    return SVG


@pytest.fixture
def rasterizer() -> FakeRasterizer:
    return FakeRasterizer()


def decode(data: bytes) -> Image.Image:
    img = Image.open(BytesIO(data))
    img.load()
    return img
