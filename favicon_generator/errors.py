"""
Exception types raised by the favicon pipeline.

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


class FaviconsError(Exception):
    """Base class for every error raised by favicon_generator."""


class ConfigError(FaviconsError, ValueError):
    pass


# ---------- Source errors ----------
class InvalidSourceTypeError(FaviconsError, TypeError):
    def __init__(self, src: object) -> None:
        super().__init__(f"Invalid source type provided: {type(src).__name__}")


class EmptySourceError(FaviconsError, ValueError):
    def __init__(self) -> None:
        super().__init__("No source provided")


class InvalidImageError(FaviconsError, ValueError):
    pass


# ---------- Option errors ----------
class UnsupportedOptionError(FaviconsError, ValueError):
    def __init__(self, option: str, platform: str) -> None:
        super().__init__(f"Unsupported option '{option}' on platform '{platform}'")
        self.option = option
        self.platform = platform


# ---------- Image errors ----------
class RasterizationError(FaviconsError):
    pass


class DecodeError(FaviconsError):
    pass


class CanvasAllocationError(FaviconsError, ValueError):
    pass


class EncodeError(FaviconsError):
    pass
