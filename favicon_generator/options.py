"""
Per-platform option resolution against the platform capability table.

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

import logging
from typing import Any, Dict, Mapping, Optional

from .errors import ConfigError, UnsupportedOptionError
from .platforms import PLATFORMS, load_table

logger = logging.getLogger(__name__)


def load_platform_options(name: str = "platform-options.json") -> Dict[str, Dict[str, Any]]:
    """Load the capability table and check it against the known platforms."""
    table = load_table(name)
    for option, entry in table.items():
        if "platforms" not in entry or "defaultTo" not in entry:
            raise ConfigError(
                f"Platform option '{option}' needs both 'platforms' and 'defaultTo'"
            )
        unknown = [p for p in entry["platforms"] if p not in PLATFORMS]
        if unknown:
            raise ConfigError(
                f"Platform option '{option}' names unknown platforms: {', '.join(unknown)}"
            )
    return table


PLATFORM_OPTIONS = load_platform_options()


def resolve_platform_options(
    platform: str,
    user_options: Optional[Mapping[str, Any]],
    background: Any,
    table: Mapping[str, Mapping[str, Any]] = PLATFORM_OPTIONS,
) -> Dict[str, Any]:
    """Merge user options for one platform with the table defaults.

    ``background`` is the globally configured background color, used when
    the platform's own background option is a plain boolean.
    """
    parameters = dict(user_options or {})

    for key in parameters:
        if key not in table or platform not in table[key]["platforms"]:
            raise UnsupportedOptionError(key, platform)

    for key, entry in table.items():
        if key not in parameters and platform in entry["platforms"]:
            parameters[key] = entry["defaultTo"]

    # android keeps "false" as a transparent background, everything else
    # falls back to the configured color
    if isinstance(parameters.get("background"), bool):
        if platform == "android" and not parameters["background"]:
            parameters["background"] = "transparent"
        else:
            parameters["background"] = background

    if platform == "android" and parameters.get("background") != "transparent":
        parameters["disableTransparency"] = True

    logger.debug("Resolved options for %s: %s", platform, parameters)
    return parameters
