# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""XML parser for flatconf.

Example XML file:

    <config>
        <app>
            <name>TestApp</name>
            <debug>true</debug>
        </app>
        <servers>
            <server role="primary">db1</server>
            <server role="replica">db2</server>
        </servers>
    </config>

Conversion rules:
  - The root element is dropped; its children become top-level keys
  - Elements with children become dicts
  - Repeated sibling tags become a list
  - Attributes are stored under "@attributes"
  - Leaf text is kept as a stripped string ("" for empty elements); when a
    leaf also has attributes, its text is stored under "#text"
  - Namespace URIs are removed from tag names

Values are not type-converted: XML has no scalar types, so "true" stays a
string.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any
import xml.etree.ElementTree as ET

from flatconf.exceptions import ConfigError, ErrorKind

from .base import read_text, register_parser

ATTRIBUTES_KEY = "@attributes"
TEXT_KEY = "#text"


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


def _element_to_value(element: ET.Element) -> dict[str, Any] | str:
    children = list(element)
    text = (element.text or "").strip()

    if not children:
        if not element.attrib:
            return text
        leaf: dict[str, Any] = {ATTRIBUTES_KEY: dict(element.attrib)}
        if text:
            leaf[TEXT_KEY] = text
        return leaf

    result: dict[str, Any] = {}
    if element.attrib:
        result[ATTRIBUTES_KEY] = dict(element.attrib)

    for child in children:
        tag = _local_name(child.tag)
        value = _element_to_value(child)
        if tag not in result:
            result[tag] = value
        elif isinstance(result[tag], list):
            # Element values are never lists, so a list here means repeats
            result[tag].append(value)
        else:
            result[tag] = [result[tag], value]
    return result


class XmlParser:
    """Parse XML configuration files with xml.etree.ElementTree."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        text = read_text(file_path, "XML")
        try:
            root = ET.fromstring(text)
        except ET.ParseError as err:
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"Error parsing XML file '{file_path}': {err}",
            ) from err

        data = _element_to_value(root)
        if isinstance(data, str):
            if data:
                raise ConfigError(
                    ErrorKind.PARSE_FAILURE,
                    f"XML root element must contain child elements: {file_path}",
                )
            return {}
        return data


register_parser("xml", XmlParser)
