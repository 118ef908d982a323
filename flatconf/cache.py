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

"""Cache file persistence for flatconf.

A cache file is a snapshot of a Config store, so a later run can skip
parsing the source files. It is a pretty-printed JSON file:

    {
      "config": {
        "app.debug": true,
        "database.host": "localhost"
      },
      "groups": {
        "app": {"app.debug": "debug"},
        "database": {"database.host": "host"}
      },
      "expires": 1767225600
    }

"expires" is an absolute Unix timestamp, or 0 for a cache that never
expires (false, written by older versions, is read as 0).

Writes are not atomic. A crash mid-write leaves a truncated file, which
read_cache() rejects with INVALID_FORMAT instead of loading it.

Example:
    Low-level API:
        ```python
        from pathlib import Path
        from flatconf.cache import CacheRecord, read_cache, write_cache

        record = CacheRecord(config={"app.debug": True}, groups={}, expires=0)
        write_cache(record, Path("cache/config.json"))

        record = read_cache(Path("cache/config.json"))
        if not record.is_expired():
            print(record.config)
        ```

Most callers use Config.save_cache() and Config.load_cache() instead.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
import json
from pathlib import Path
import time
from typing import Any

from flatconf.exceptions import ConfigError, ErrorKind

# Common expiration durations in seconds
EXPIRE_NEVER = 0
EXPIRE_ONE_DAY = 86400
EXPIRE_ONE_WEEK = 604800
EXPIRE_ONE_MONTH = 2592000

REQUIRED_FIELDS = ("config", "groups", "expires")


@dataclass
class CacheRecord:
    """In-memory form of a cache file.

    Attributes:
        config: Stored key/value pairs.
        groups: Group name -> {full key: sub key}.
        expires: Absolute Unix timestamp, or 0 for never.
    """

    config: dict[str, Any] = field(default_factory=dict)
    groups: dict[str, dict[str, str]] = field(default_factory=dict)
    expires: int = EXPIRE_NEVER

    def is_expired(self, now: float | None = None) -> bool:
        """Return True if the record has an expiry that lies in the past."""
        if not self.expires:
            return False
        if now is None:
            now = time.time()
        return now > self.expires

    def to_dict(self) -> dict[str, Any]:
        return {
            "config": self.config,
            "groups": self.groups,
            "expires": self.expires,
        }


def expiration_timestamp(expires_in: int, now: float | None = None) -> int:
    """Convert a lifetime in seconds into an absolute expiry timestamp.

    Args:
        expires_in: Lifetime in seconds. Zero or negative means never.
        now: Reference time (defaults to the current time).

    Returns:
        now + expires_in as an int, or 0 for a cache that never expires.

    """
    if expires_in <= 0:
        return EXPIRE_NEVER
    if now is None:
        now = time.time()
    return int(now) + expires_in


def _validate_record(data: Any, cache_file: Path) -> CacheRecord:
    if not isinstance(data, Mapping):
        raise ConfigError(
            ErrorKind.INVALID_FORMAT,
            f"Cache file must contain a JSON object: {cache_file}",
        )

    missing = [name for name in REQUIRED_FIELDS if name not in data]
    if missing:
        raise ConfigError(
            ErrorKind.INVALID_FORMAT,
            f"Cache file is missing required field(s) "
            f"{', '.join(missing)}: {cache_file}",
        )

    config, groups, expires = data["config"], data["groups"], data["expires"]
    if not isinstance(config, Mapping) or not isinstance(groups, Mapping):
        raise ConfigError(
            ErrorKind.INVALID_FORMAT,
            f"Cache 'config' and 'groups' must be objects: {cache_file}",
        )

    bad_groups = [
        name for name, members in groups.items() if not isinstance(members, Mapping)
    ]
    if bad_groups:
        raise ConfigError(
            ErrorKind.INVALID_FORMAT,
            f"Cache groups must map full keys to sub keys, invalid group(s) "
            f"{', '.join(map(str, bad_groups))}: {cache_file}",
        )

    if expires is False:
        expires = EXPIRE_NEVER
    if isinstance(expires, bool) or not isinstance(expires, int):
        raise ConfigError(
            ErrorKind.INVALID_FORMAT,
            f"Cache 'expires' must be an integer timestamp or 0: {cache_file}",
        )

    return CacheRecord(
        config=dict(config),
        groups={name: dict(members) for name, members in groups.items()},
        expires=expires,
    )


def read_cache(cache_file: Path) -> CacheRecord:
    """Read and validate a cache file.

    Args:
        cache_file: Path to the cache file.

    Returns:
        The validated record. Expiry is not checked here.

    Raises:
        FileNotFoundError: If the cache file doesn't exist.
        OSError: If the file cannot be read.
        ConfigError: INVALID_FORMAT if the content is not valid JSON, or not
            an object with "config" and "groups" objects and an integer
            "expires".

    """
    with open(cache_file, "rb") as f:
        raw = f.read()
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as err:
        raise ConfigError(
            ErrorKind.INVALID_FORMAT,
            f"Cache file is not valid JSON: {cache_file}",
        ) from err
    return _validate_record(data, cache_file)


def write_cache(record: CacheRecord, cache_file: Path) -> None:
    """Write a cache record as pretty-printed JSON.

    The payload is serialized before the file is opened, so a value that
    cannot be stored leaves any existing cache file untouched.

    Args:
        record: Record to write.
        cache_file: Destination path. Parent directories are created.

    Raises:
        ConfigError: INVALID_FORMAT if a stored value is not JSON
            serializable (e.g., a date parsed from YAML).
        OSError: If the file cannot be written.

    Note:
        - Uses 2-space indentation for readability
        - Keeps insertion order of keys
        - Adds trailing newline for git compatibility

    """
    try:
        payload = json.dumps(record.to_dict(), indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as err:
        raise ConfigError(
            ErrorKind.INVALID_FORMAT,
            f"Configuration cannot be written to cache {cache_file}: {err}",
        ) from err

    cache_file.parent.mkdir(parents=True, exist_ok=True)
    with open(cache_file, "w", encoding="utf-8") as f:
        f.write(payload)
        f.write("\n")  # Trailing newline for git
