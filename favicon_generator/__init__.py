"""
Generate favicons, app icons and their manifests from SVG or raster sources.

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

from .config import Config
from .errors import (
    CanvasAllocationError,
    ConfigError,
    DecodeError,
    EmptySourceError,
    EncodeError,
    FaviconsError,
    InvalidImageError,
    InvalidSourceTypeError,
    RasterizationError,
    UnsupportedOptionError,
)
from .files import OutputFile
from .generator import FaviconsResponse, favicons, generate
from .sources import SourceDescriptor, normalize

__version__ = "2.0.0"

__all__ = [
    "CanvasAllocationError",
    "Config",
    "ConfigError",
    "DecodeError",
    "EmptySourceError",
    "EncodeError",
    "FaviconsError",
    "FaviconsResponse",
    "InvalidImageError",
    "InvalidSourceTypeError",
    "OutputFile",
    "RasterizationError",
    "SourceDescriptor",
    "UnsupportedOptionError",
    "favicons",
    "generate",
    "normalize",
]
