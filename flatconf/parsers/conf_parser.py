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

"""CONF parser for flatconf.

Example CONF file:

    # Database settings
    host = localhost
    port = 3306
    user   root
    debug = true

One setting per line, written either as "key = value" or as "key value"
(separated by whitespace). Lines starting with "#" or ";" are comments.
Values are typed with coerce_scalar(); write key = "" for an empty string.
A line without a value is an error. The result is always a flat dict.
"""

from __future__ import annotations

from pathlib import Path
import re
from typing import Any

from flatconf.exceptions import ConfigError, ErrorKind

from .base import coerce_scalar, read_text, register_parser

_ASSIGNMENT_RE = re.compile(r"^(?P<key>[^=\s]+)\s*=\s*(?P<value>.*)$")
_WHITESPACE_RE = re.compile(r"^(?P<key>\S+)\s+(?P<value>.+)$")


class ConfParser:
    """Parse line-based CONF files."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        text = read_text(file_path, "CONF")

        data: dict[str, Any] = {}
        for lineno, raw_line in enumerate(text.splitlines(), start=1):
            line = raw_line.strip()
            if not line or line.startswith(("#", ";")):
                continue

            match = _ASSIGNMENT_RE.match(line) or _WHITESPACE_RE.match(line)
            if match is None or not match.group("value"):
                raise ConfigError(
                    ErrorKind.PARSE_FAILURE,
                    f"Invalid line {lineno} in CONF file '{file_path}': {line}",
                )
            data[match.group("key")] = coerce_scalar(match.group("value"))
        return data


register_parser("conf", ConfParser)
