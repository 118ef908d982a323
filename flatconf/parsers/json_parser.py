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

"""JSON parser for flatconf.

Example JSON file:

    {
        "database": {"host": "localhost", "port": 3306},
        "app": {"debug": true, "cache": null}
    }

The top-level value must be an object.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from flatconf.exceptions import ConfigError, ErrorKind

from .base import read_text, register_parser


class JsonParser:
    """Parse JSON configuration files with the standard library."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        text = read_text(file_path, "JSON")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as err:
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"Error parsing JSON file '{file_path}': {err}",
            ) from err
        if not isinstance(data, dict):
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"Top-level JSON value must be an object: {file_path}",
            )
        return data


register_parser("json", JsonParser)
