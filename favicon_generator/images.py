"""
Pick, render and composite one icon.

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

Every produced icon goes through the same three steps:
  create_canvas()   background canvas at the exact slot size
  render()          best-fit source scaled into the slot (minus offset)
  composite()       optional circle mask + ring overlay, icon pasted at
                    (offset, offset), encoded to PNG
"""

from __future__ import annotations

import asyncio
import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional, Sequence, Tuple

from PIL import Image, ImageChops, ImageColor, ImageDraw

from .backends import CairoRasterizer, ImageCodec, PillowCodec, Rasterizer
from .errors import CanvasAllocationError
from .sources import SourceDescriptor

logger = logging.getLogger(__name__)

DEFAULT_CODEC = PillowCodec()
DEFAULT_RASTERIZER = CairoRasterizer()

# Base resolution of the drawn mask/overlay; resized per icon.
ASSET_SIZE = 512


@dataclass(frozen=True)
class IconSpec:
    width: int
    height: int
    offset: int = 0
    rotate: bool = False
    mask: bool = False
    transparent: bool = False

    @property
    def longest_side(self) -> int:
        return max(self.width, self.height)


# ---------- Selection ----------
def select_source(
    sourceset: Sequence[SourceDescriptor], width: int, height: int
) -> SourceDescriptor:
    """Return the best source for a width x height slot.

    SVG sources always win. Otherwise the smallest raster whose longest side
    reaches the target is used, and if none does, the largest one.
    """
    for source in sourceset:
        if source.is_svg:
            return source

    side = max(width, height)
    nearest = sourceset[0]
    nearest_side = nearest.size.longest_side

    for source in sourceset:
        current = source.size.longest_side
        if current >= side:
            if nearest_side < side or current < nearest_side:
                nearest, nearest_side = source, current
        elif nearest_side < side and current > nearest_side:
            nearest, nearest_side = source, current

    return nearest


# ---------- Rendering ----------
async def render_source(
    source: SourceDescriptor,
    spec: IconSpec,
    offset: int,
    rasterizer: Optional[Rasterizer] = None,
    codec: Optional[ImageCodec] = None,
) -> Image.Image:
    codec = codec or DEFAULT_CODEC
    width = spec.width - offset * 2
    height = spec.height - offset * 2
    if width <= 0 or height <= 0:
        raise CanvasAllocationError(
            f"Offset {offset} leaves no room in a {spec.width}x{spec.height} icon"
        )

    if source.is_svg:
        logger.debug("Rendering SVG to %sx%s", width, height)
        png = await asyncio.to_thread(
            (rasterizer or DEFAULT_RASTERIZER).rasterize, source.file, width, height
        )
        image = await asyncio.to_thread(codec.decode, png)
    else:
        logger.debug("Resizing %s to %sx%s", source.size.type.upper(), width, height)
        decoded = await asyncio.to_thread(codec.decode, source.file)
        image = await asyncio.to_thread(codec.contain, decoded, (width, height))

    if spec.rotate:
        degrees = 90
        logger.debug("Rotating image by %s", degrees)
        image = await asyncio.to_thread(codec.rotate, image, degrees)

    return image


async def render(
    sourceset: Sequence[SourceDescriptor],
    spec: IconSpec,
    offset: int,
    rasterizer: Optional[Rasterizer] = None,
    codec: Optional[ImageCodec] = None,
) -> Image.Image:
    logger.debug(
        "Find nearest icon to %sx%s with offset %s", spec.width, spec.height, offset
    )
    source = select_source(
        sourceset, spec.width - offset * 2, spec.height - offset * 2
    )
    return await render_source(source, spec, offset, rasterizer, codec)


# ---------- Canvas ----------
def parse_color(value: Any) -> Tuple[int, int, int, int]:
    if value == "transparent":
        return (0, 0, 0, 0)
    try:
        return ImageColor.getcolor(value, "RGBA")  # type: ignore[return-value]
    except (ValueError, TypeError, AttributeError) as exc:
        raise CanvasAllocationError(f"Invalid background color: {value!r}") from exc


def create_canvas(width: int, height: int, background: Any, transparent: bool) -> Image.Image:
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise CanvasAllocationError(f"Invalid canvas size {width}x{height}")
    logger.debug(
        "Creating empty %sx%s canvas with %s background",
        width,
        height,
        "transparent" if transparent else background,
    )
    fill = (0, 0, 0, 0) if transparent else parse_color(background)
    return Image.new("RGBA", (width, height), fill)


# ---------- Mask & overlay ----------
# Drawn once on first use, then only read; masks run in worker threads.
_assets: Dict[str, Image.Image] = {}
_assets_lock = threading.Lock()


def _cached_asset(name: str, draw: Callable[[], Image.Image]) -> Image.Image:
    with _assets_lock:
        if name not in _assets:
            _assets[name] = draw()
        return _assets[name]


def mask_asset() -> Image.Image:
    """Full-size white circle on black, used as an alpha mask."""
    return _cached_asset("mask", _draw_mask)


def overlay_asset() -> Image.Image:
    """Soft ring drawn over the edge of masked icons."""
    return _cached_asset("overlay", _draw_overlay)


def _draw_mask() -> Image.Image:
    mask = Image.new("L", (ASSET_SIZE, ASSET_SIZE), 0)
    ImageDraw.Draw(mask).ellipse((0, 0, ASSET_SIZE - 1, ASSET_SIZE - 1), fill=255)
    return mask


def _draw_overlay() -> Image.Image:
    overlay = Image.new("RGBA", (ASSET_SIZE, ASSET_SIZE), (0, 0, 0, 0))
    draw = ImageDraw.Draw(overlay)
    width = ASSET_SIZE // 32
    draw.ellipse(
        (0, 0, ASSET_SIZE - 1, ASSET_SIZE - 1),
        outline=(0, 0, 0, 64),
        width=width,
    )
    draw.ellipse(
        (width, width, ASSET_SIZE - 1 - width, ASSET_SIZE - 1 - width),
        outline=(255, 255, 255, 48),
        width=max(1, width // 2),
    )
    return overlay


def _fit_width(asset: Image.Image, max_side: int) -> Image.Image:
    w, h = asset.size
    return asset.resize((max_side, max(1, int(round(h * max_side / w)))), Image.LANCZOS)  # pyright: ignore[reportAttributeAccessIssue]


def apply_mask(canvas: Image.Image, max_side: int) -> None:
    """Clip canvas to a circle and draw the ring overlay on it, in place."""
    mask = Image.new("L", canvas.size, 0)
    mask.paste(_fit_width(mask_asset(), max_side), (0, 0))
    canvas.putalpha(ImageChops.multiply(canvas.getchannel("A"), mask))

    overlay = _fit_width(overlay_asset(), max_side).crop((0, 0) + canvas.size)
    canvas.alpha_composite(overlay)


async def composite(
    canvas: Image.Image,
    image: Image.Image,
    spec: IconSpec,
    offset: int,
    max_side: int,
    codec: Optional[ImageCodec] = None,
) -> bytes:
    if spec.mask:
        logger.debug("Masking composite image on circle")
        await asyncio.to_thread(apply_mask, canvas, max_side)
        spec = replace(spec, mask=False)

    logger.debug(
        "Compositing favicon on %sx%s canvas with offset %s",
        spec.width,
        spec.height,
        offset,
    )
    await asyncio.to_thread(canvas.alpha_composite, image, (offset, offset))
    return await asyncio.to_thread((codec or DEFAULT_CODEC).encode, canvas, "PNG")
