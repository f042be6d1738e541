import asyncio

import pytest
from PIL import Image

from favicon_generator.backends import PillowCodec
from favicon_generator.errors import CanvasAllocationError, DecodeError
from favicon_generator.images import (
    IconSpec,
    apply_mask,
    composite,
    create_canvas,
    mask_asset,
    overlay_asset,
    render,
    render_source,
    select_source,
)
from favicon_generator.sources import SourceDescriptor, Size, describe

from .conftest import decode


def raster_set(*sides):
    return [SourceDescriptor(Size(s, s, "png"), b"") for s in sides]


# ---------- Selection ----------
def test_select_smallest_large_enough():
    sourceset = raster_set(16, 32, 256)
    assert select_source(sourceset, 48, 48).size.width == 256
    assert select_source(sourceset, 16, 16).size.width == 16
    assert select_source(sourceset, 20, 32).size.width == 32


def test_select_falls_back_to_largest():
    assert select_source(raster_set(16, 32, 256), 512, 512).size.width == 256
    assert select_source(raster_set(256, 16, 32), 512, 512).size.width == 256


def test_select_ignores_order_for_qualifying_sources():
    assert select_source(raster_set(512, 64, 1024, 128), 100, 100).size.width == 128


def test_select_prefers_svg():
    svg = SourceDescriptor(Size(10, 10, "svg"), b"<svg/>")
    sourceset = raster_set(16, 1024) + [svg]
    for side in (8, 64, 4096):
        assert select_source(sourceset, side, side) is svg


# ---------- Canvas ----------
def test_transparent_canvas():
    canvas = create_canvas(20, 10, "#fff", transparent=True)
    assert canvas.size == (20, 10)
    assert canvas.getpixel((0, 0)) == (0, 0, 0, 0)


def test_colored_canvas():
    canvas = create_canvas(4, 4, "#ff0000", transparent=False)
    assert canvas.getpixel((2, 2)) == (255, 0, 0, 255)


def test_transparent_keyword_canvas():
    canvas = create_canvas(4, 4, "transparent", transparent=False)
    assert canvas.getpixel((0, 0)) == (0, 0, 0, 0)


@pytest.mark.parametrize("width,height", [(0, 10), (10, -1), (1.5, 2)])
def test_canvas_invalid_size(width, height):
    with pytest.raises(CanvasAllocationError):
        create_canvas(width, height, "#fff", transparent=True)


def test_canvas_invalid_color():
    with pytest.raises(CanvasAllocationError):
        create_canvas(4, 4, "not-a-color", transparent=False)


# ---------- Rendering ----------
def test_render_raster_fits_box(make_png):
    sourceset = [describe(make_png(512, 512))]
    image = asyncio.run(render(sourceset, IconSpec(32, 32), 0))
    assert image.size == (32, 32)
    assert image.getpixel((16, 16))[3] == 255


def test_render_contains_without_cropping(make_png):
    sourceset = [describe(make_png(200, 100))]
    image = asyncio.run(render(sourceset, IconSpec(40, 40), 0))
    assert image.size == (40, 40)
    # centered vertically: top and bottom bands stay transparent
    assert image.getpixel((20, 2))[3] == 0
    assert image.getpixel((20, 20))[3] == 255
    assert image.getpixel((20, 37))[3] == 0


def test_render_applies_offset(make_png):
    sourceset = [describe(make_png(64, 64))]
    image = asyncio.run(render(sourceset, IconSpec(32, 32), 4))
    assert image.size == (24, 24)


def test_render_offset_too_large(make_png):
    sourceset = [describe(make_png(64, 64))]
    with pytest.raises(CanvasAllocationError):
        asyncio.run(render(sourceset, IconSpec(8, 8), 4))


def test_render_rotates_inside_same_box(make_png):
    # 64x32 fits the 30x50 box as a centered 30x15 band
    sourceset = [describe(make_png(64, 32))]
    image = asyncio.run(render(sourceset, IconSpec(30, 50, rotate=True), 0))
    assert image.size == (30, 50)
    # now a 15x30 band around the same center
    assert image.getpixel((15, 25))[3] == 255
    assert image.getpixel((15, 12))[3] == 255
    assert image.getpixel((2, 25))[3] == 0
    assert image.getpixel((15, 3))[3] == 0


def test_render_svg_uses_rasterizer(svg_source, rasterizer, make_png):
    sourceset = [describe(make_png(1024, 1024)), describe(svg_source)]
    image = asyncio.run(render(sourceset, IconSpec(48, 40), 2, rasterizer=rasterizer))
    assert rasterizer.calls == [(44, 36)]
    assert image.size == (44, 36)


def test_render_source_decode_error():
    broken = SourceDescriptor(Size(16, 16, "png"), b"\x89PNG broken")
    with pytest.raises(DecodeError):
        asyncio.run(render_source(broken, IconSpec(16, 16), 0))


# ---------- Compositing ----------
def test_composite_round_trip(make_png):
    canvas = create_canvas(48, 30, "#fff", transparent=False)
    icon = PillowCodec().decode(make_png(20, 20))
    data = asyncio.run(composite(canvas, icon, IconSpec(48, 30), 5, 48))
    result = decode(data)
    assert result.format == "PNG"
    assert result.size == (48, 30)
    assert result.convert("RGBA").getpixel((10, 10)) == (200, 30, 30, 255)
    assert result.convert("RGBA").getpixel((0, 0)) == (255, 255, 255, 255)


def test_mask_clears_corners(make_png):
    canvas = create_canvas(64, 64, "#00f", transparent=False)
    icon = PillowCodec().decode(make_png(32, 32))
    data = asyncio.run(composite(canvas, icon, IconSpec(64, 64, mask=True), 16, 64))
    result = decode(data).convert("RGBA")
    assert result.getpixel((0, 0))[3] == 0
    assert result.getpixel((32, 32))[3] == 255


def test_mask_applied_once(make_png):
    icon = PillowCodec().decode(make_png(32, 32))

    masked = create_canvas(64, 64, "#00f", transparent=False)
    once = asyncio.run(composite(masked, icon, IconSpec(64, 64, mask=True), 16, 64))

    manual = create_canvas(64, 64, "#00f", transparent=False)
    apply_mask(manual, 64)
    expected = asyncio.run(composite(manual, icon, IconSpec(64, 64), 16, 64))

    assert once == expected


def test_mask_assets_are_shared_and_untouched(make_png):
    before = mask_asset().tobytes(), overlay_asset().tobytes()
    canvas = create_canvas(30, 20, "#000", transparent=False)
    apply_mask(canvas, 30)
    assert mask_asset() is mask_asset()
    assert (mask_asset().tobytes(), overlay_asset().tobytes()) == before
    assert canvas.size == (30, 20)


def test_decode_rejects_oversized_images(make_png, monkeypatch):
    data = make_png(64, 64)
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 100)
    with pytest.raises(DecodeError):
        PillowCodec().decode(data)
