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

"""PHP array-literal parser for flatconf.

Example PHP file:

    <?php
    declare(strict_types=1);

    return [
        'database' => [
            'host' => 'localhost',
            'port' => 3306,
        ],
        'app' => array(
            'debug' => true,
            'cache' => null,
        ),
    ];

The file is never executed. The parser reads the array literal that follows
the first "return" statement and ignores everything before it.

Supported syntax:
  - Short ([...]) and long (array(...)) arrays, nested, trailing commas
  - Single and double quoted strings with PHP escape sequences
    (no variable interpolation)
  - Decimal, hex (0x), binary (0b) and octal (leading 0) integers, floats
  - true, false, null (case-insensitive), with optional leading backslash
  - "//", "#" and "/* */" comments

Key handling follows PHP: integer-like string keys become integers, bool
keys become 0/1, null becomes "", and entries without a key take the next
integer index. Arrays whose keys are exactly 0..n-1 in order become lists;
all others become dicts with string keys. A top-level list is returned as a
dict keyed by index so the result is always a mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
import re
from typing import Any

from flatconf.exceptions import ConfigError, ErrorKind

from .base import read_text, register_parser

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
    |(?P<comment>//[^\n]*|\#[^\n]*|/\*.*?\*/)
    |(?P<tag><\?php|<\?=?|\?>)
    |(?P<string>'(?:[^'\\]|\\.)*'|"(?:[^"\\]|\\.)*")
    |(?P<number>0[xX][0-9a-fA-F]+|0[bB][01]+
        |(?:\d+\.\d*|\.\d+|\d+)(?:[eE][+-]?\d+)?)
    |(?P<arrow>=>)
    |(?P<punct>[\[\](),;+-])
    |(?P<word>\\?[A-Za-z_][A-Za-z0-9_\\]*)
    |(?P<other>.)
    """,
    re.VERBOSE | re.DOTALL,
)

_INT_KEY_RE = re.compile(r"^(0|-?[1-9]\d*)$")

_DOUBLE_QUOTE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "v": "\v",
    "e": "\x1b",
    "f": "\f",
    "\\": "\\",
    "$": "$",
    '"': '"',
}

_ESCAPE_RE = re.compile(
    r"\\(?:(?P<octal>[0-7]{1,3})|x(?P<hex>[0-9a-fA-F]{1,2})"
    r"|u\{(?P<unicode>[0-9a-fA-F]+)\}|(?P<char>.))",
    re.DOTALL,
)


@dataclass(frozen=True)
class _Token:
    kind: str
    text: str
    offset: int


def _tokenize(source: str) -> list[_Token]:
    tokens = []
    for match in _TOKEN_RE.finditer(source):
        kind = match.lastgroup or "other"
        if kind in ("ws", "comment", "tag"):
            continue
        tokens.append(_Token(kind, match.group(), match.start()))
    return tokens


def _unescape_double(body: str) -> str:
    def replace(match: re.Match[str]) -> str:
        if match.group("octal") is not None:
            return chr(int(match.group("octal"), 8) & 0xFF)
        if match.group("hex") is not None:
            return chr(int(match.group("hex"), 16))
        if match.group("unicode") is not None:
            return chr(int(match.group("unicode"), 16))
        char = match.group("char")
        # Unknown escapes are kept verbatim, backslash included
        return _DOUBLE_QUOTE_ESCAPES.get(char, "\\" + char)

    return _ESCAPE_RE.sub(replace, body)


def _unescape_single(body: str) -> str:
    return re.sub(r"\\([\\'])", r"\1", body)


def _parse_number(text: str) -> int | float:
    lowered = text.lower()
    if lowered.startswith("0x"):
        return int(lowered, 16)
    if lowered.startswith("0b"):
        return int(lowered, 2)
    if any(c in lowered for c in ".e"):
        return float(lowered)
    if len(lowered) > 1 and lowered.startswith("0"):
        return int(lowered, 8)
    return int(lowered)


def _normalize_key(key: Any) -> int | str:
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, int):
        return key
    if isinstance(key, float):
        return int(key)
    if key is None:
        return ""
    if isinstance(key, str) and _INT_KEY_RE.match(key):
        return int(key)
    if isinstance(key, str):
        return key
    raise TypeError(f"illegal array key: {key!r}")


class _ArrayReader:
    """Recursive descent reader over the token list."""

    def __init__(self, tokens: list[_Token], file_path: str | Path) -> None:
        self._tokens = tokens
        self._pos = 0
        self._file_path = file_path

    def _error(self, message: str) -> ConfigError:
        token = self._peek()
        where = f"offset {token.offset}" if token else "end of file"
        return ConfigError(
            ErrorKind.PARSE_FAILURE,
            f"Error parsing PHP file '{self._file_path}' at {where}: {message}",
        )

    def _peek(self) -> _Token | None:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return None

    def _next(self) -> _Token:
        token = self._peek()
        if token is None:
            raise self._error("unexpected end of file")
        self._pos += 1
        return token

    def _expect(self, text: str) -> None:
        token = self._next()
        if token.text != text:
            self._pos -= 1
            raise self._error(f"expected {text!r}, found {token.text!r}")

    def _at(self, text: str) -> bool:
        token = self._peek()
        return token is not None and token.text == text

    def skip_to_return(self) -> None:
        while True:
            token = self._peek()
            if token is None:
                raise self._error("PHP configuration file must return an array")
            self._pos += 1
            if token.kind == "word" and token.text.lower() == "return":
                return

    def _decode(self, convert: Any, token: _Token, text: str | None = None) -> Any:
        try:
            return convert(token.text if text is None else text)
        except (ValueError, OverflowError) as err:
            self._pos -= 1
            raise self._error(f"invalid literal {token.text!r}: {err}") from err

    def read_value(self) -> Any:
        token = self._next()

        if token.kind == "punct" and token.text in "+-":
            operand = self._next()
            if operand.kind != "number":
                self._pos -= 1
                raise self._error(f"expected a number after {token.text!r}")
            number = self._decode(_parse_number, operand)
            return -number if token.text == "-" else number

        if token.kind == "number":
            return self._decode(_parse_number, token)

        if token.kind == "string":
            if token.text[0] == "'":
                return _unescape_single(token.text[1:-1])
            return self._decode(_unescape_double, token, token.text[1:-1])

        if token.kind == "word":
            word = token.text.lstrip("\\").lower()
            if word == "true":
                return True
            if word == "false":
                return False
            if word == "null":
                return None
            if word == "array" and self._at("("):
                self._next()
                return self._read_array(")")

        if token.text == "[":
            return self._read_array("]")

        self._pos -= 1
        raise self._error(f"unsupported expression {token.text!r}")

    def _read_array(self, closer: str) -> dict[str, Any] | list[Any]:
        entries: dict[int | str, Any] = {}
        next_index = 0

        while not self._at(closer):
            first = self.read_value()
            if self._at("=>"):
                self._next()
                try:
                    key = _normalize_key(first)
                except TypeError as err:
                    raise self._error(str(err)) from err
                value = self.read_value()
            else:
                key = next_index
                value = first
            entries[key] = value
            if isinstance(key, int) and key >= next_index:
                next_index = key + 1

            if self._at(","):
                self._next()
            elif not self._at(closer):
                raise self._error(f"expected ',' or {closer!r}")
        self._expect(closer)

        if list(entries) == list(range(len(entries))):
            return list(entries.values())
        return {str(key): value for key, value in entries.items()}


class PhpParser:
    """Parse PHP files that return an array literal, without executing them."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        text = read_text(file_path, "PHP")
        reader = _ArrayReader(_tokenize(text), file_path)
        reader.skip_to_return()
        try:
            data = reader.read_value()
        except RecursionError as err:
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"PHP array nesting too deep in file: {file_path}",
            ) from err

        if isinstance(data, list):
            return {str(index): value for index, value in enumerate(data)}
        if not isinstance(data, dict):
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"PHP configuration file must return an array. Error in file: "
                f"{file_path}",
            )
        return data


register_parser("php", PhpParser)
