#!/usr/bin/env python3
"""
Generate favicons and platform icons from one or more SVG or raster sources.

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

Every generated image and manifest is written to --output-dir; the HTML
<head> fragments are printed to stdout. A JSON --config file may carry any
library option (appName, background, icons, ...); flags override it.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from .config import Config
from .errors import FaviconsError
from .generator import generate
from .platforms import PLATFORMS


# ---------- Parsing helpers ----------
def parse_platforms(csv: str) -> List[str]:
    platforms = [p.strip() for p in csv.split(",") if p.strip()]
    if not platforms:
        raise SystemExit("At least one platform must be provided for --platforms")
    unknown = [p for p in platforms if p not in PLATFORMS]
    if unknown:
        raise SystemExit(
            f"Unknown platform(s) for --platforms: {', '.join(unknown)} "
            f"(choose from {', '.join(PLATFORMS)})"
        )
    return platforms


def load_config_file(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SystemExit(f"Config file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SystemExit(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise SystemExit(f"{path} must contain a JSON object")
    return data


FLAG_OPTIONS = {
    "path": "path",
    "app_name": "appName",
    "short_name": "shortName",
    "app_description": "appDescription",
    "developer_name": "developerName",
    "developer_url": "developerURL",
    "background": "background",
    "theme_color": "theme_color",
    "display": "display",
    "orientation": "orientation",
    "start_url": "start_url",
    "lang": "lang",
    "dir": "dir",
    "app_version": "version",
    "html_file": "html",
}


def build_config(args: argparse.Namespace) -> Config:
    options = load_config_file(args.config) if args.config else {}
    for attr, option in FLAG_OPTIONS.items():
        value = getattr(args, attr)
        if value is not None:
            options[option] = value
    if args.platforms:
        enabled = parse_platforms(args.platforms)
        icons = options.get("icons", {})
        options["icons"] = {
            p: (icons.get(p) if isinstance(icons.get(p), dict) else True)
            if p in enabled
            else False
            for p in PLATFORMS
        }
    if args.verbose:
        options["logging"] = True
    try:
        return Config.from_mapping(options)
    except FaviconsError as exc:
        raise SystemExit(str(exc)) from exc


# ---------- Main ----------
def main() -> None:
    p = argparse.ArgumentParser(description="Generate favicons and platform icons.")
    p.add_argument("source", type=Path, nargs="+", help="Source SVG or raster image(s).")
    p.add_argument("--config", type=Path, default=None, help="JSON file of options.")
    p.add_argument("--output-dir", type=Path, default=Path("static/icons"))
    p.add_argument("--path", default=None, help="Base URL for icon references, e.g. /static/icons/")
    p.add_argument("--app-name", default=None)
    p.add_argument("--short-name", default=None)
    p.add_argument("--app-description", default=None)
    p.add_argument("--developer-name", default=None)
    p.add_argument("--developer-url", default=None)
    p.add_argument("--background", default=None, help="Background color, e.g. #ffffff.")
    p.add_argument("--theme-color", default=None, help="Theme color for PWA meta.")
    p.add_argument("--display", default=None)
    p.add_argument("--orientation", default=None)
    p.add_argument("--start-url", default=None)
    p.add_argument("--lang", default=None)
    p.add_argument("--dir", default=None)
    p.add_argument("--app-version", default=None)
    p.add_argument(
        "--platforms",
        default=None,
        help=f"Comma-separated platforms to generate ({', '.join(PLATFORMS)}).",
    )
    p.add_argument("--html-file", default=None, help="Also write the HTML fragments to this file.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log each step.")
    args = p.parse_args()

    config = build_config(args)
    if config.logging:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else logging.INFO,
            format="%(asctime)s %(levelname)s: %(message)s",
        )

    try:
        response = generate([str(s) for s in args.source], config)
    except FaviconsError as exc:
        raise SystemExit(str(exc)) from exc

    args.output_dir.mkdir(parents=True, exist_ok=True)
    for image in response.images:
        (args.output_dir / image.name).write_bytes(image.contents)
    for file in response.files:
        (args.output_dir / file.name).write_text(file.contents, encoding="utf-8")

    lines: list[str] = []
    lines.append("<!-- === FAVICONS & PWA ICONS === -->")
    lines.extend(response.html)
    lines.append("<!-- === END FAVICONS & PWA ICONS === -->")
    print("\n".join(lines))


if __name__ == "__main__":
    main()
