"""
Rasterizer and image codec capabilities used by the renderer and compositor.

Copyright 2025 Sean Whalen

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at

   http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing, software
distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
See the License for the specific language governing permissions and
limitations under the License.

The pipeline only talks to these through the Rasterizer and ImageCodec
protocols, so tests (or callers with other native libraries) can swap them.
"""

from __future__ import annotations

from io import BytesIO
from typing import Any, Protocol, Tuple

from PIL import Image, UnidentifiedImageError

from .errors import DecodeError, EncodeError, RasterizationError


class Rasterizer(Protocol):
    def rasterize(self, svg: bytes, width: int, height: int) -> bytes: ...


class ImageCodec(Protocol):
    def decode(self, data: bytes) -> Image.Image: ...

    def contain(self, img: Image.Image, box: Tuple[int, int]) -> Image.Image: ...

    def rotate(self, img: Image.Image, degrees: int) -> Image.Image: ...

    def encode(self, img: Image.Image, fmt: str = "PNG", **params: Any) -> bytes: ...


# ---------- Defaults ----------
class CairoRasterizer:
    """Render SVG bytes to PNG bytes with cairosvg."""

    def rasterize(self, svg: bytes, width: int, height: int) -> bytes:
        try:
            import cairosvg  # type: ignore
        except ImportError as exc:
            raise RasterizationError(
                "SVG input requires cairosvg. Install with: pip install cairosvg"
            ) from exc
        try:
            return cairosvg.svg2png(
                bytestring=svg, output_width=width, output_height=height
            )
        except Exception as exc:  # noqa: BLE001
            raise RasterizationError(f"Unable to rasterize SVG: {exc}") from exc


def center(inner: Tuple[int, int], outer: Tuple[int, int]) -> Tuple[int, int]:
    ix, iy = inner
    ox, oy = outer
    return (ox - ix) // 2, (oy - iy) // 2


class PillowCodec:
    def decode(self, data: bytes) -> Image.Image:
        try:
            img = Image.open(BytesIO(data))
            img.load()
        except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
            raise DecodeError(f"Unable to decode image: {exc}") from exc
        if img.mode != "RGBA":
            img = img.convert("RGBA")
        return img

    def contain(self, img: Image.Image, box: Tuple[int, int]) -> Image.Image:
        """Scale img to fit box and center it on a transparent box-sized canvas."""
        w, h = img.size
        bw, bh = box
        scale = min(bw / w, bh / h)
        nw, nh = max(1, int(round(w * scale))), max(1, int(round(h * scale)))
        icon = img.resize((nw, nh), Image.LANCZOS)  # pyright: ignore[reportAttributeAccessIssue]
        base = Image.new("RGBA", box, (0, 0, 0, 0))
        base.paste(icon, center(icon.size, box))
        return base

    def rotate(self, img: Image.Image, degrees: int) -> Image.Image:
        return img.rotate(degrees, expand=False)

    def encode(self, img: Image.Image, fmt: str = "PNG", **params: Any) -> bytes:
        out = BytesIO()
        try:
            img.save(out, format=fmt, **params)
        except (OSError, ValueError, KeyError) as exc:
            raise EncodeError(f"Unable to encode {fmt}: {exc}") from exc
        return out.getvalue()
