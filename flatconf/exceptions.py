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

"""Error type for flatconf.

Every failure raised by the library is a ConfigError. Instead of one class
per failure, each error carries an ErrorKind that tells callers what went
wrong:

- INVALID_PATH: Configured base directory does not exist
- INVALID_ARGUMENT: Bad argument (e.g., max depth below 1)
- NOT_FOUND: Configuration file does not resolve to an existing file
- PARSE_FAILURE: No parser for the extension, or the parser rejected the file
- INVALID_FORMAT: Parsed data or cache record has the wrong shape
- DEPTH_EXCEEDED: Nested data is deeper than the configured max depth
- INVALID_PARSER: Registered parser does not implement parse()

Lower-level exceptions are chained with ``raise ... from err`` and remain
available as ``__cause__``.

Example:
    Branching on the error kind:
        ```python
        from flatconf import Config
        from flatconf.exceptions import ConfigError, ErrorKind

        config = Config("config/")
        try:
            config.load("app.yaml")
        except ConfigError as e:
            if e.kind is ErrorKind.NOT_FOUND:
                print("No app.yaml, using defaults")
            else:
                raise
        ```
"""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ErrorKind",
    "ConfigError",
]


class ErrorKind(str, Enum):
    """Category of a ConfigError."""

    INVALID_PATH = "invalid_path"
    INVALID_ARGUMENT = "invalid_argument"
    NOT_FOUND = "not_found"
    PARSE_FAILURE = "parse_failure"
    INVALID_FORMAT = "invalid_format"
    DEPTH_EXCEEDED = "depth_exceeded"
    INVALID_PARSER = "invalid_parser"


class ConfigError(Exception):
    """Raised for every flatconf failure.

    Attributes:
        kind: Category of the failure.
        message: Human-readable description.

    Example:
        Catching parse failures only:
            ```python
            from flatconf.exceptions import ConfigError, ErrorKind

            try:
                data = config.fetch("broken.json")
            except ConfigError as e:
                if e.kind is not ErrorKind.PARSE_FAILURE:
                    raise
                print(f"Parse error: {e}")
            ```
    """

    def __init__(self, kind: ErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ConfigError({self.kind.name}, {self.message!r})"
