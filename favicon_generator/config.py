"""
Generation settings: app metadata, colors, base URL and enabled platforms.

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

from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping, Optional, Union

from .errors import ConfigError
from .platforms import PLATFORMS

PlatformSetting = Union[bool, Dict[str, Any]]

DEFAULT_ICONS: Dict[str, PlatformSetting] = {
    "android": True,
    "appleIcon": True,
    "appleStartup": True,
    "coast": False,
    "favicons": True,
    "firefox": False,
    "windows": True,
    "yandex": False,
}

# Option names as documented (camelCase) -> Config attribute.
ALIASES = {
    "appName": "app_name",
    "shortName": "short_name",
    "appDescription": "app_description",
    "developerName": "developer_name",
    "developerURL": "developer_url",
    "html": "html_file",
}


@dataclass
class Config:
    path: Optional[str] = "/"
    app_name: Optional[str] = None
    short_name: Optional[str] = None
    app_description: Optional[str] = None
    developer_name: Optional[str] = None
    developer_url: Optional[str] = None
    dir: str = "auto"
    lang: str = "en-US"
    background: Any = "#fff"
    theme_color: str = "#fff"
    display: str = "standalone"
    orientation: str = "any"
    start_url: str = "/?homescreen=1"
    version: str = "1.0"
    logging: bool = False
    html_file: Optional[str] = None
    icons: Dict[str, PlatformSetting] = field(default_factory=lambda: dict(DEFAULT_ICONS))

    def __post_init__(self) -> None:
        icons = dict(DEFAULT_ICONS)
        for platform, setting in (self.icons or {}).items():
            if platform not in PLATFORMS:
                raise ConfigError(f"Unknown platform '{platform}'")
            if not isinstance(setting, (bool, dict)):
                raise ConfigError(
                    f"Platform '{platform}' must be true, false or an options object"
                )
            icons[platform] = setting
        self.icons = icons

    @classmethod
    def from_mapping(cls, options: Optional[Mapping[str, Any]] = None) -> "Config":
        """Build a Config from documented option names (camelCase or snake_case)."""
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in (options or {}).items():
            name = ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown configuration option '{key}'")
            kwargs[name] = value
        return cls(**kwargs)

    def enabled_platforms(self) -> Dict[str, Dict[str, Any]]:
        """Platforms to generate, each with its user-supplied options."""
        return {
            platform: setting if isinstance(setting, dict) else {}
            for platform, setting in self.icons.items()
            if setting is not False
        }
