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

"""Configuration file parsers for flatconf.

This package provides a pluggable parser registry. Each parser turns one
file format into a dict, and is selected by the file's extension.

Available Parsers:
    json : JsonParser
        Standard JSON; the top-level value must be an object.
    yaml, yml : YamlParser
        YAML via PyYAML safe_load; empty documents parse to {}.
    xml : XmlParser
        XML via ElementTree; root element dropped, repeated tags as lists.
    ini : IniParser
        INI via configparser; sections become nested dicts, values typed.
    conf : ConfParser
        Line-based "key = value" files, values typed.
    php : PhpParser
        PHP files returning an array literal (read, never executed).

Example:
    Look up and use a parser:

        from flatconf.parsers import create_parser

        parser = create_parser("config/app.yaml")
        if parser is not None:
            data = parser.parse("config/app.yaml")

    Register a custom format:

        from flatconf.parsers import register_parser

        register_parser("custom", MyCustomParser)

"""

# Import parser modules to trigger self-registration
from . import (
    conf_parser,  # noqa: F401
    ini_parser,  # noqa: F401
    json_parser,  # noqa: F401
    php_parser,  # noqa: F401
    xml_parser,  # noqa: F401
    yaml_parser,  # noqa: F401
)
from .base import (
    Parser,
    create_parser,
    get_parsers,
    load_parsers,
    register_parser,
    unregister_parser,
)
from .conf_parser import ConfParser
from .ini_parser import IniParser
from .json_parser import JsonParser
from .php_parser import PhpParser
from .xml_parser import XmlParser
from .yaml_parser import YamlParser

__all__ = [
    "Parser",
    "create_parser",
    "get_parsers",
    "load_parsers",
    "register_parser",
    "unregister_parser",
    "ConfParser",
    "IniParser",
    "JsonParser",
    "PhpParser",
    "XmlParser",
    "YamlParser",
]
