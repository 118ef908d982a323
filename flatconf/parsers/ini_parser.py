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

"""INI parser for flatconf.

Example INI file:

    name = MyApp

    [database]
    host = localhost
    port = 3306

    [app]
    debug = true

Sections become nested dicts; keys above the first section are top-level.
Key case is preserved and [DEFAULT] is an ordinary section. Values are typed
with coerce_scalar(), so the file above parses to:

    {
        "name": "MyApp",
        "database": {"host": "localhost", "port": 3306},
        "app": {"debug": True},
    }
"""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Any

from flatconf.exceptions import ConfigError, ErrorKind

from .base import coerce_scalar, read_text, register_parser

# Section names that cannot collide with real ones
_TOP_LEVEL_SECTION = "\x00top-level"
_NO_DEFAULT_SECTION = "\x00no-default"


class IniParser:
    """Parse INI configuration files with configparser."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        text = read_text(file_path, "INI")

        parser = configparser.ConfigParser(
            interpolation=None,
            default_section=_NO_DEFAULT_SECTION,
            strict=False,
        )
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        try:
            parser.read_string(
                f"[{_TOP_LEVEL_SECTION}]\n{text}", source=str(file_path)
            )
        except configparser.Error as err:
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"Failed to parse INI configuration file '{file_path}': {err}",
            ) from err

        data: dict[str, Any] = {
            key: coerce_scalar(value)
            for key, value in parser.items(_TOP_LEVEL_SECTION, raw=True)
        }
        for section in parser.sections():
            if section == _TOP_LEVEL_SECTION:
                continue
            data[section] = {
                key: coerce_scalar(value)
                for key, value in parser.items(section, raw=True)
            }
        return data


register_parser("ini", IniParser)
