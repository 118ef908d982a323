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

"""Parser protocol and registry for flatconf.

This module defines the foundational components for the parsing system:

- Parser protocol: Interface that all format parsers must implement
- Parser registry: Global dict mapping file extensions to parser classes
- Registry functions: register_parser(), unregister_parser(),
  get_parsers(), load_parsers() and create_parser()
- Shared helpers used by the built-in parsers: read_text() and
  coerce_scalar()

Design Philosophy:
    - Parsers are Protocol classes (structural subtyping, not inheritance)
    - Built-in parsers self-register when their module is imported
    - Registry is a simple dict keyed by lowercase extension (no dot)
    - Parsers are stateless and instantiated on demand

Example:
    Registering a custom format:
        ```python
        from pathlib import Path
        from typing import Any

        from flatconf.parsers import register_parser

        class EnvParser:
            def parse(self, file_path: str | Path) -> dict[str, Any]:
                ...

        register_parser("env", EnvParser)

        # Config.load("settings.env") now uses EnvParser
        ```
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
import re
from typing import Any, Protocol

from flatconf.exceptions import ConfigError, ErrorKind

# -------------------------------
# Parser Protocol
# -------------------------------


class Parser(Protocol):
    """Protocol for configuration file parsers."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        """Parse a configuration file.

        Args:
            file_path: Path to the file to parse.

        Returns:
            The file contents as a dict.

        Raises:
            ConfigError: With kind PARSE_FAILURE when the file cannot be read
                or its content is malformed.

        """
        ...


# -------------------------------
# Parser Registry
# -------------------------------

_PARSER_REGISTRY: dict[str, type[Parser]] = {}


def _normalize_extension(extension: str) -> str:
    ext = extension.strip().lstrip(".").lower()
    if not ext:
        raise ConfigError(
            ErrorKind.INVALID_ARGUMENT,
            f"Parser extension must not be empty: {extension!r}",
        )
    return ext


def _validate_parser_class(extension: str, parser_class: Any) -> None:
    if not isinstance(parser_class, type) or not callable(
        getattr(parser_class, "parse", None)
    ):
        raise ConfigError(
            ErrorKind.INVALID_PARSER,
            f"Parser for {extension!r} must be a class implementing parse(): "
            f"{parser_class!r}",
        )


def register_parser(extension: str, parser_class: type[Parser]) -> None:
    """Register a parser class for a file extension.

    Registering an extension twice overwrites the previous registration,
    which is how the built-in parsers can be overridden.

    Args:
        extension: File extension, with or without the leading dot
            (e.g., "yaml" or ".yaml"). Case-insensitive.
        parser_class: Class implementing the Parser protocol. It is
            instantiated without arguments for each file.

    Raises:
        ConfigError: INVALID_ARGUMENT for an empty extension, INVALID_PARSER
            when parser_class is not a class with a callable parse().

    Example:
        Override the JSON parser:
            ```python
            register_parser("json", MyJsonParser)
            ```

    """
    ext = _normalize_extension(extension)
    _validate_parser_class(ext, parser_class)
    _PARSER_REGISTRY[ext] = parser_class


def unregister_parser(extension: str) -> bool:
    """Remove the parser registered for an extension.

    Args:
        extension: File extension, with or without the leading dot.

    Returns:
        True if a parser was registered and has been removed.

    """
    ext = extension.strip().lstrip(".").lower()
    return _PARSER_REGISTRY.pop(ext, None) is not None


def get_parsers() -> dict[str, type[Parser]]:
    """Return a snapshot of the extension to parser class table."""
    return dict(_PARSER_REGISTRY)


def load_parsers(parsers: Mapping[str, type[Parser]]) -> None:
    """Register several parsers at once.

    Every entry is validated before the registry is touched, so one bad
    entry leaves the registry unchanged.

    Args:
        parsers: Mapping of extension to parser class.

    Raises:
        ConfigError: As register_parser().

    """
    validated: dict[str, type[Parser]] = {}
    for extension, parser_class in parsers.items():
        ext = _normalize_extension(extension)
        _validate_parser_class(ext, parser_class)
        validated[ext] = parser_class
    _PARSER_REGISTRY.update(validated)


def create_parser(file_path: str | Path) -> Parser | None:
    """Create a parser instance for a file based on its extension.

    Args:
        file_path: Path whose extension selects the parser. Only the last
            suffix is used ("app.dist.yaml" -> "yaml"). Case-insensitive.

    Returns:
        A new parser instance, or None when the file has no extension or
            no parser is registered for it.

    """
    ext = Path(file_path).suffix.lstrip(".").lower()
    if not ext:
        return None
    parser_class = _PARSER_REGISTRY.get(ext)
    if parser_class is None:
        return None
    return parser_class()


# -------------------------------
# Shared helpers
# -------------------------------


def read_text(file_path: str | Path, format_name: str) -> str:
    """Read a configuration file as UTF-8 text.

    Args:
        file_path: File to read.
        format_name: Format label used in error messages (e.g., "YAML").

    Returns:
        The file content.

    Raises:
        ConfigError: PARSE_FAILURE when the file is missing, unreadable or
            not valid UTF-8.

    """
    path = Path(file_path)
    if not path.is_file():
        raise ConfigError(
            ErrorKind.PARSE_FAILURE,
            f"{format_name} file not found or unreadable: {path}",
        )
    try:
        raw = path.read_bytes()
    except OSError as err:
        raise ConfigError(
            ErrorKind.PARSE_FAILURE,
            f"{format_name} file not found or unreadable: {path}",
        ) from err
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as err:
        raise ConfigError(
            ErrorKind.PARSE_FAILURE,
            f"File encoding must be UTF-8: {path}",
        ) from err


_INT_RE = re.compile(r"^[+-]?\d+$")
_FLOAT_RE = re.compile(r"^[+-]?(\d+\.\d*|\.\d+|\d+(\.\d*)?[eE][+-]?\d+)$")

_TRUE_WORDS = {"true", "on", "yes"}
_FALSE_WORDS = {"false", "off", "no", "none"}


def coerce_scalar(raw: str) -> Any:
    """Convert a raw text value into a typed scalar.

    Used by the line-oriented formats (INI, CONF) whose values are plain
    text.

    Args:
        raw: Value as written in the file.

    Returns:
        True for true/on/yes, False for false/off/no/none, None for null or
            an empty value, int/float for numeric literals, the unquoted
            string for a quoted value, and the stripped text otherwise.

    Example:
        ```python
        coerce_scalar("3306")        # 3306
        coerce_scalar("On")          # True
        coerce_scalar('"3306"')      # "3306"
        coerce_scalar("localhost")   # "localhost"
        ```

    """
    value = raw.strip()
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]

    lowered = value.lower()
    if lowered in _TRUE_WORDS:
        return True
    if lowered in _FALSE_WORDS:
        return False
    if lowered in ("", "null"):
        return None
    if _INT_RE.match(value):
        return int(value)
    if _FLOAT_RE.match(value):
        return float(value)
    return value
