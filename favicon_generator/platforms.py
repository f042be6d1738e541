"""
Static per-platform declarations: which icons, files and HTML fragments
each platform produces.

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

The tables live in data/ as JSON:
  icons.json   platform -> {file name: {width, height, transparent, rotate, mask}}
               (.ico entries carry "sizes" instead of width/height)
  files.json   platform -> {file name: template properties}
  html.json    platform -> [HTML fragment, ...]
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

DATA_DIR = Path(__file__).parent / "data"

PLATFORMS = (
    "android",
    "appleIcon",
    "appleStartup",
    "coast",
    "favicons",
    "firefox",
    "windows",
    "yandex",
)


def load_table(name: str) -> Dict[str, Any]:
    return json.loads((DATA_DIR / name).read_text(encoding="utf-8"))


ICONS: Dict[str, Dict[str, Dict[str, Any]]] = load_table("icons.json")
FILES: Dict[str, Dict[str, Any]] = load_table("files.json")
HTML: Dict[str, List[str]] = load_table("html.json")
