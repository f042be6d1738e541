"""
The full pipeline: sources in, named images/files/HTML fragments out.

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
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Union

from .backends import ImageCodec, Rasterizer
from .config import Config
from .files import OutputFile, create_file, parse_html
from .images import DEFAULT_CODEC, IconSpec, composite, create_canvas, render
from .options import resolve_platform_options
from .platforms import FILES, HTML, ICONS
from .sources import Source, SourceDescriptor, normalize

logger = logging.getLogger(__name__)


@dataclass
class FaviconsResponse:
    images: List[OutputFile] = field(default_factory=list)
    files: List[OutputFile] = field(default_factory=list)
    html: List[str] = field(default_factory=list)


def icon_spec(properties: Mapping[str, Any], options: Mapping[str, Any]) -> IconSpec:
    """Combine a declared icon slot with the platform's resolved options."""
    width, height = properties["width"], properties["height"]
    longest = max(width, height)
    offset = int(round(longest / 100 * (options.get("offset") or 0)))
    transparent = bool(properties.get("transparent"))
    if options.get("disableTransparency"):
        transparent = False
    return IconSpec(
        width=width,
        height=height,
        offset=offset,
        rotate=bool(properties.get("rotate")),
        mask=bool(properties.get("mask") or options.get("mask")),
        transparent=transparent,
    )


class Generator:
    def __init__(
        self,
        config: Config,
        rasterizer: Optional[Rasterizer] = None,
        codec: Optional[ImageCodec] = None,
    ) -> None:
        self.config = config
        self.rasterizer = rasterizer
        self.codec = codec or DEFAULT_CODEC

    async def create_favicon(
        self,
        sourceset: Sequence[SourceDescriptor],
        properties: Mapping[str, Any],
        options: Mapping[str, Any],
    ) -> bytes:
        spec = icon_spec(properties, options)
        canvas = await asyncio.to_thread(
            create_canvas, spec.width, spec.height, options.get("background"), spec.transparent
        )
        image = await render(sourceset, spec, spec.offset, self.rasterizer, self.codec)
        return await composite(canvas, image, spec, spec.offset, spec.longest_side, self.codec)

    async def create_ico(
        self,
        sourceset: Sequence[SourceDescriptor],
        properties: Mapping[str, Any],
        options: Mapping[str, Any],
    ) -> bytes:
        """Render every declared size and pack them into one .ico file."""
        images = []
        for size in properties["sizes"]:
            slot = dict(properties, width=size["width"], height=size["height"])
            png = await self.create_favicon(sourceset, slot, options)
            images.append(await asyncio.to_thread(self.codec.decode, png))
        images.sort(key=lambda img: img.size, reverse=True)
        logger.debug("Packing %s sizes into ICO", len(images))
        return await asyncio.to_thread(
            self.codec.encode,
            images[0],
            "ICO",
            sizes=[img.size for img in images],
            append_images=images[1:],
        )

    async def create_platform(
        self,
        sourceset: Sequence[SourceDescriptor],
        platform: str,
        options: Mapping[str, Any],
    ) -> FaviconsResponse:
        logger.info("Generating %s icons", platform)
        response = FaviconsResponse()

        for name, properties in ICONS.get(platform, {}).items():
            if name.endswith(".ico"):
                contents = await self.create_ico(sourceset, properties, options)
            else:
                contents = await self.create_favicon(sourceset, properties, options)
            response.images.append(OutputFile(name=name, contents=contents))

        for name, properties in FILES.get(platform, {}).items():
            response.files.append(create_file(name, properties, self.config))

        for fragment in HTML.get(platform, []):
            response.html.append(parse_html(fragment, self.config))

        return response

    async def run(self, source: Source) -> FaviconsResponse:
        platforms = self.config.enabled_platforms()
        # option errors must surface before any image work
        options = {
            platform: resolve_platform_options(platform, user_options, self.config.background)
            for platform, user_options in platforms.items()
        }

        sourceset = await normalize(source)
        results = await asyncio.gather(
            *(
                self.create_platform(sourceset, platform, platform_options)
                for platform, platform_options in options.items()
            )
        )

        response = FaviconsResponse()
        for result in results:
            response.images.extend(result.images)
            response.files.extend(result.files)
            response.html.extend(result.html)

        if self.config.html_file:
            response.files.append(create_file(self.config.html_file, response.html, self.config))

        logger.info(
            "Generated %s images and %s files", len(response.images), len(response.files)
        )
        return response


async def favicons(
    source: Source,
    configuration: Union[Config, Mapping[str, Any], None] = None,
    *,
    rasterizer: Optional[Rasterizer] = None,
    codec: Optional[ImageCodec] = None,
) -> FaviconsResponse:
    """Generate every enabled platform's icons, files and HTML from source."""
    config = configuration if isinstance(configuration, Config) else Config.from_mapping(configuration)
    return await Generator(config, rasterizer, codec).run(source)


def generate(
    source: Source,
    configuration: Union[Config, Mapping[str, Any], None] = None,
    **kwargs: Any,
) -> FaviconsResponse:
    return asyncio.run(favicons(source, configuration, **kwargs))
