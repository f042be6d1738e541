"""
Fill manifest/config templates and HTML fragments with configured values.

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

import copy
import json
import logging
import posixpath
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union
from urllib.parse import urljoin

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>'

# Unrecognized file names keep their template properties as-is.
TemplateProperties = Union[Dict[str, Any], List[Any]]


@dataclass(frozen=True)
class OutputFile:
    name: str
    contents: Union[bytes, str, TemplateProperties]


# ---------- URL helpers ----------
def directory(path: str) -> str:
    return path if path.endswith("/") else path + "/"


def relative(config: "Config", value: str) -> str:
    """Resolve an icon reference against the configured base path."""
    if not config.path:
        return value
    return urljoin(directory(config.path), value)


# ---------- Serializers ----------
def to_json(properties: Any) -> str:
    return json.dumps(properties, indent=2, ensure_ascii=False)


def _build_element(node: Dict[str, Any]) -> ET.Element:
    element = ET.Element(node["name"], {k: str(v) for k, v in node.get("attrs", {}).items()})
    if node.get("text") is not None:
        element.text = str(node["text"])
    for child in node.get("children", []):
        element.append(_build_element(child))
    return element


def to_xml(nodes: List[Dict[str, Any]]) -> str:
    """Serialize a {name, attrs, text, children} node tree as indented XML."""
    lines = [XML_HEADER]
    for node in nodes:
        element = _build_element(node)
        ET.indent(element, space="  ")
        lines.append(ET.tostring(element, encoding="unicode"))
    return "\n".join(lines) + "\n"


# ---------- Files ----------
def create_file(name: str, properties: Any, config: "Config") -> OutputFile:
    logger.debug("Creating file: %s", name)
    properties = copy.deepcopy(properties)

    if name == "manifest.json":
        properties["name"] = config.app_name
        properties["short_name"] = config.short_name or config.app_name
        properties["description"] = config.app_description
        properties["dir"] = config.dir
        properties["lang"] = config.lang
        properties["display"] = config.display
        properties["orientation"] = config.orientation
        properties["start_url"] = config.start_url
        properties["background_color"] = config.background
        properties["theme_color"] = config.theme_color
        for icon in properties["icons"]:
            icon["src"] = relative(config, icon["src"])
        contents = to_json(properties)
    elif name == "manifest.webapp":
        properties["version"] = config.version
        properties["name"] = config.app_name
        properties["description"] = config.app_description
        properties["developer"]["name"] = config.developer_name
        properties["developer"]["url"] = config.developer_url
        properties["icons"] = {
            key: relative(config, value) for key, value in properties["icons"].items()
        }
        contents = to_json(properties)
    elif name == "browserconfig.xml":
        tile = properties[0]["children"][0]["children"][0]
        for node in tile["children"]:
            if node["name"] == "TileColor":
                node["text"] = config.background
            else:
                node["attrs"]["src"] = relative(config, node["attrs"]["src"])
        contents = to_xml(properties)
    elif name == "yandex-browser-manifest.json":
        properties["version"] = config.version
        properties["api_version"] = 1
        properties["layout"]["logo"] = relative(config, properties["layout"]["logo"])
        properties["layout"]["color"] = config.background
        contents = to_json(properties)
    elif name.endswith(".html"):
        contents = "\n".join(properties)
    else:
        contents = properties

    return OutputFile(name=name, contents=contents)


# ---------- HTML ----------
class FirstTag(HTMLParser):
    """Record the name and attributes of the first start tag seen."""

    def __init__(self) -> None:
        super().__init__()
        self.tag: Optional[str] = None
        self.attrs: Dict[str, Optional[str]] = {}

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        if self.tag is None:
            self.tag = tag
            self.attrs = dict(attrs)

    handle_startendtag = handle_starttag


def _set_attribute(fragment: str, attribute: str, value: str) -> str:
    escaped = value.replace("&", "&amp;").replace('"', "&quot;")
    pattern = re.compile(r'(\s%s\s*=\s*)("[^"]*"|\'[^\']*\'|[^\s>]+)' % re.escape(attribute))
    if pattern.search(fragment):
        return pattern.sub(lambda m: f'{m.group(1)}"{escaped}"', fragment, count=1)
    # attribute missing: add it to the end of the first tag
    return re.sub(r"\s*/?>", lambda m: f' {attribute}="{escaped}"{m.group(0)}', fragment, count=1)


def parse_html(fragment: str, config: "Config") -> str:
    """Point the first tag of an HTML fragment at configured values."""
    logger.debug("HTML found, parsing and modifying source")
    parser = FirstTag()
    parser.feed(fragment)
    parser.close()
    if parser.tag is None:
        return fragment

    attribute = "href" if parser.tag == "link" else "content"
    value = parser.attrs.get(attribute) or ""

    if posixpath.splitext(value)[1]:
        return _set_attribute(fragment, attribute, relative(config, value))
    if value.startswith("#"):
        color = config.theme_color if parser.attrs.get("name") == "theme-color" else config.background
        return _set_attribute(fragment, attribute, color)
    if "application-name" in fragment or "apple-mobile-web-app-title" in fragment:
        return _set_attribute(fragment, attribute, config.app_name or "")
    return fragment
