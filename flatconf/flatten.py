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

"""Flattening of nested configuration data into dot-notated keys.

Given the data parsed from "config.json":

    {"database": {"host": "localhost", "port": 3306}, "debug": True}

flatten(data, "config") returns two dicts:

    flat = {
        "config.database.host": "localhost",
        "config.database.port": 3306,
        "config.debug": True,
    }
    groups = {
        "config.database.host": "host",
        "config.database.port": "port",
        "config.debug": "debug",
    }

Rules:
  - Dicts and lists are containers; list items are keyed by index
  - Every non-container value is a leaf
  - Empty containers produce no entries
  - The top-level data is at depth 0 and each nested container adds one;
    a container deeper than max_depth is an error, never a partial result

The walk uses an explicit stack of frames instead of recursion, so the
Python call stack does not grow with the nesting of the input.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from flatconf.exceptions import ConfigError, ErrorKind

DEFAULT_MAX_DEPTH = 10

__all__ = ["DEFAULT_MAX_DEPTH", "flatten"]


def _children(container: Any) -> Iterator[tuple[Any, Any]]:
    if isinstance(container, Mapping):
        return iter(container.items())
    return enumerate(container)


def _is_container(value: Any) -> bool:
    return isinstance(value, (Mapping, list, tuple))


def flatten(
    data: Mapping[Any, Any],
    base_key: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> tuple[dict[str, Any], dict[str, str]]:
    """Flatten nested data into dot-notated keys.

    Args:
        data: Parsed configuration data.
        base_key: Prefix of every produced key (usually the file's base
            name).
        max_depth: Deepest allowed container level below data.

    Returns:
        A tuple (flat, groups), where flat maps each full key to its leaf
            value and groups maps each full key to its last key segment.
            Both preserve the document order of data.

    Raises:
        ConfigError: DEPTH_EXCEEDED when a container is nested deeper than
            max_depth. The message names the offending key.

    Example:
        Depth boundary:
            ```python
            flatten({"a": {"b": {"c": 1}}}, "x", max_depth=2)  # ok
            flatten({"a": {"b": {"c": {"d": 1}}}}, "x", max_depth=2)
            # ConfigError: Maximum depth of 2 exceeded at 'x.a.b.c'
            ```

    """
    flat: dict[str, Any] = {}
    groups: dict[str, str] = {}

    # Frames: (children iterator, key prefix, depth)
    stack: list[tuple[Iterator[tuple[Any, Any]], str, int]] = [
        (_children(data), base_key, 0)
    ]
    while stack:
        items, prefix, depth = stack[-1]
        try:
            key, value = next(items)
        except StopIteration:
            stack.pop()
            continue

        full_key = f"{prefix}.{key}"
        if _is_container(value):
            if depth + 1 > max_depth:
                raise ConfigError(
                    ErrorKind.DEPTH_EXCEEDED,
                    f"Maximum depth of {max_depth} exceeded at {full_key!r} "
                    f"while processing configuration.",
                )
            stack.append((_children(value), full_key, depth + 1))
        else:
            flat[full_key] = value
            groups[full_key] = str(key)

    return flat, groups
