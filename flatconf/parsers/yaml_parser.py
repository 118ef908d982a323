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

"""YAML parser for flatconf.

Example YAML file:

    database:
      host: localhost
      port: 3306
    app:
      debug: true
      cache: null

Registered for both ".yaml" and ".yml". Uses yaml.safe_load, so no Python
objects are constructed from tags. An empty document parses to {}.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from flatconf.exceptions import ConfigError, ErrorKind

from .base import read_text, register_parser


class YamlParser:
    """Parse YAML configuration files with PyYAML."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        text = read_text(file_path, "YAML")
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as err:
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"Error parsing YAML file '{file_path}': {err}",
            ) from err
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"Top-level YAML must be a mapping (dict): {file_path}",
            )
        return data


register_parser("yaml", YamlParser)
register_parser("yml", YamlParser)
