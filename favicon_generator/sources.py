"""
Turn caller input (bytes, paths, or a flat list of either) into a sourceset.

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
"""

from __future__ import annotations

import asyncio
import logging
import os
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import List, Optional, Union

from PIL import Image, UnidentifiedImageError

from .errors import EmptySourceError, InvalidImageError, InvalidSourceTypeError

logger = logging.getLogger(__name__)

Source = Union[bytes, bytearray, str, os.PathLike, list, tuple]

_LENGTH = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(px)?\s*$")
UTF8_BOM = b"\xef\xbb\xbf"


@dataclass(frozen=True)
class Size:
    width: int
    height: int
    type: str

    @property
    def longest_side(self) -> int:
        return max(self.width, self.height)


@dataclass(frozen=True)
class SourceDescriptor:
    size: Size
    file: bytes

    @property
    def is_svg(self) -> bool:
        return self.size.type == "svg"


# ---------- Size detection ----------
def _parse_length(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    match = _LENGTH.match(value)
    if not match:
        return None
    return int(round(float(match.group(1))))


def svg_size(data: bytes) -> Size:
    """Read the intrinsic size of an SVG document from width/height or viewBox."""
    try:
        root = ET.fromstring(data)
    except ET.ParseError as exc:
        raise InvalidImageError("Invalid image buffer") from exc
    if root.tag.rsplit("}", 1)[-1] != "svg":
        raise InvalidImageError("Invalid image buffer")

    width = _parse_length(root.get("width"))
    height = _parse_length(root.get("height"))
    if width and height:
        return Size(width, height, "svg")

    view_box = root.get("viewBox")
    if view_box:
        parts = view_box.replace(",", " ").split()
        if len(parts) == 4:
            try:
                vw, vh = float(parts[2]), float(parts[3])
            except ValueError as exc:
                raise InvalidImageError("Invalid SVG viewBox") from exc
            if vw > 0 and vh > 0:
                # scale the viewBox when only one side is given
                if width:
                    return Size(width, int(round(width * vh / vw)), "svg")
                if height:
                    return Size(int(round(height * vw / vh)), height, "svg")
                return Size(int(round(vw)), int(round(vh)), "svg")
    raise InvalidImageError("Unable to determine SVG dimensions")


def raster_size(data: bytes) -> Size:
    try:
        with Image.open(BytesIO(data)) as img:
            fmt = (img.format or "").lower()
            width, height = img.size
    except (UnidentifiedImageError, OSError, Image.DecompressionBombError) as exc:
        raise InvalidImageError("Invalid image buffer") from exc
    return Size(width, height, "jpg" if fmt == "jpeg" else fmt)


def describe(data: bytes) -> SourceDescriptor:
    """Build the descriptor for one in-memory image."""
    text = data[len(UTF8_BOM):] if data.startswith(UTF8_BOM) else data
    if text.lstrip()[:1] == b"<":
        size = svg_size(text)
    else:
        size = raster_size(data)
    return SourceDescriptor(size=size, file=data)


# ---------- Normalization ----------
def _is_flat_sequence(src: object) -> bool:
    return isinstance(src, (list, tuple)) and not any(
        isinstance(item, (list, tuple)) for item in src
    )


async def normalize(src: Source) -> List[SourceDescriptor]:
    """Return the sourceset for ``src``, preserving input order."""
    logger.debug("Source type is %s", type(src).__name__)

    if isinstance(src, (bytes, bytearray)):
        return [describe(bytes(src))]

    if isinstance(src, (str, os.PathLike)):
        data = await asyncio.to_thread(Path(src).read_bytes)
        return await normalize(data)

    if _is_flat_sequence(src):
        if not src:
            raise EmptySourceError()
        results = await asyncio.gather(*(normalize(item) for item in src))
        return [descriptor for result in results for descriptor in result]

    raise InvalidSourceTypeError(src)
