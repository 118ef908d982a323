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

"""Configuration store for flatconf.

This module implements Config, the central key/value store. It loads
configuration files through the parser registry, flattens nested data into
dot-notated keys grouped by source file, and can persist its whole state to
a cache file.

Storage
-------
Two dicts hold the state:
  - **config**: key -> value. With flattening, keys look like
    "database.host"; without it, the parsed top-level keys are stored as-is.
  - **groups**: group name -> {full key: sub key}. A file "database.yaml"
    creates the group "database"; add("app.debug", ...) creates or extends
    the group "app". delete(group) removes every member key at once.

Merge Behavior
--------------
load() and insert() merge with "last wins" semantics: new keys are added,
existing keys are overwritten, and a group of the same name is replaced.

Flattening
----------
With flattening enabled (the default), "config.json" containing
{"database": {"host": "localhost"}} is stored as
{"config.database.host": "localhost"}. Nesting deeper than max_depth is an
error. See flatconf.flatten for the exact rules.

Caching
-------
save_cache() writes config, groups and an expiry timestamp as JSON.
load_cache() restores them unless the cache has expired, in which case the
stale file is deleted. A successful load_cache() makes later calls no-ops
until clear().

Error Handling
--------------
- ConfigError is raised by the constructor, set_config_path(),
  set_max_depth(), load(), fetch() and load_cache()
- save_cache() and delete_cache() report I/O problems by returning False
- has(), get(), add(), delete(), insert() and clear() never raise

Examples
--------
Load and query:

    >>> from flatconf import Config
    >>> config = Config("config/")
    >>> config.load("database.yaml")
    True
    >>> config.get("database.connection.host")
    'localhost'

Manual keys and group deletion:

    >>> config.add("app.debug", True)
    >>> config.delete("app")
    >>> config.has("app.debug")
    False

Cache across runs:

    >>> from flatconf import EXPIRE_ONE_DAY
    >>> if not config.load_cache("cache/config.json"):
    ...     config.load("database.yaml")
    ...     config.save_cache("cache/config.json", EXPIRE_ONE_DAY)
"""

from __future__ import annotations

from collections.abc import Mapping
import os
from pathlib import Path
from typing import Any

from flatconf.cache import (
    EXPIRE_NEVER,
    CacheRecord,
    expiration_timestamp,
    read_cache,
    write_cache,
)
from flatconf.exceptions import ConfigError, ErrorKind
from flatconf.flatten import DEFAULT_MAX_DEPTH, flatten
from flatconf.logging import Logger, get_global_logger
from flatconf.parsers import create_parser
from flatconf.resolver import normalize_config_path, resolve_path

__all__ = ["Config"]


class Config:
    """Key/value configuration store with grouped keys and file caching.

    Attributes:
        config_path: Base directory for bare file names (ends with a
            separator), or None.
        flatten_enabled: Whether load() flattens nested data.
        max_depth: Deepest nesting accepted while flattening.

    Example:
        Basic usage:
            ```python
            config = Config("config/")
            config.load("config.json")
            host = config.get("config.database.host", "127.0.0.1")
            ```

    """

    def __init__(
        self,
        config_path: str | Path | None = None,
        flatten: bool = True,
        *,
        max_depth: int = DEFAULT_MAX_DEPTH,
        logger: Logger | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            config_path: Base directory used to resolve bare file names.
            flatten: Whether load() flattens nested data into dot keys.
            max_depth: Deepest nesting accepted while flattening.
            logger: Logger for this store. Defaults to the global logger,
                looked up on each call.

        Raises:
            ConfigError: INVALID_PATH if config_path is not a directory,
                INVALID_ARGUMENT if max_depth is below 1.

        """
        self._logger = logger
        self._config_path: str | None = None
        self._flatten = True
        self._max_depth = DEFAULT_MAX_DEPTH
        self._cache_loaded = False
        self._config: dict[str, Any] = {}
        self._groups: dict[str, dict[str, str]] = {}

        self.set_config_path(config_path)
        self.set_flatten(flatten)
        self.set_max_depth(max_depth)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has(key)

    def __len__(self) -> int:
        return len(self._config)

    def __repr__(self) -> str:
        return (
            f"Config(config_path={self._config_path!r}, "
            f"keys={len(self._config)}, groups={len(self._groups)})"
        )

    def _log(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    # -------------------------------
    # Settings
    # -------------------------------

    @property
    def config_path(self) -> str | None:
        return self._config_path

    @property
    def flatten_enabled(self) -> bool:
        return self._flatten

    @property
    def max_depth(self) -> int:
        return self._max_depth

    def set_config_path(self, path: str | Path | None = None) -> None:
        """Set the directory used to resolve bare file names.

        Args:
            path: Existing directory, or None/"" to clear it.

        Raises:
            ConfigError: INVALID_PATH if path is not an existing directory.

        """
        if path and not Path(path).is_dir():
            raise ConfigError(
                ErrorKind.INVALID_PATH, f"Invalid configuration directory: {path}"
            )
        self._config_path = normalize_config_path(path) if path else None

    def set_flatten(self, flatten: bool) -> None:
        """Enable or disable flattening for subsequent load() calls."""
        self._flatten = bool(flatten)

    def set_max_depth(self, depth: int) -> None:
        """Set the maximum nesting depth accepted while flattening.

        Raises:
            ConfigError: INVALID_ARGUMENT if depth is not an int of at
                least 1.

        """
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise ConfigError(
                ErrorKind.INVALID_ARGUMENT,
                f"Maximum depth must be an integer of at least 1, got {depth!r}.",
            )
        self._max_depth = depth

    def is_cache_loaded(self) -> bool:
        return self._cache_loaded

    # -------------------------------
    # Loading
    # -------------------------------

    def _resolve_file(self, file_path: str | Path | None) -> Path:
        resolved = resolve_path(file_path, self._config_path)
        if resolved is None or not resolved.is_file():
            raise ConfigError(
                ErrorKind.NOT_FOUND,
                f"Configuration file not found: {resolved or file_path}",
            )
        return resolved

    def _parse(self, file_path: Path) -> Any:
        parser = create_parser(file_path)
        if parser is None:
            raise ConfigError(
                ErrorKind.PARSE_FAILURE, f"No suitable parser found for: {file_path}"
            )

        self._log().debug(
            "PARSER", f"Parsing {file_path} with {type(parser).__name__}"
        )
        try:
            return parser.parse(file_path)
        except ConfigError:
            raise
        except Exception as err:
            # Custom parsers may raise anything; report it as a parse failure
            raise ConfigError(
                ErrorKind.PARSE_FAILURE,
                f"Failed to parse configuration file {file_path}: {err}",
            ) from err

    def load(self, file_path: str | Path | None = None) -> bool:
        """Load a configuration file into the store.

        Steps
          1) Resolve the path (existing file, or config_path + name).
          2) Parse it with the parser registered for its extension.
          3) With flattening: flatten under the lowercase file stem and
             register the keys as a group of that name.
             Without flattening: store the parsed top-level keys as-is.
          4) Merge into the store (last wins).

        The store is only modified after parsing and flattening succeeded.

        Args:
            file_path: File name (resolved against config_path) or path.

        Returns:
            True once the file has been merged.

        Raises:
            ConfigError: NOT_FOUND if the file does not exist, PARSE_FAILURE
                if no parser matches or parsing fails, INVALID_FORMAT if the
                parsed data is not a mapping, DEPTH_EXCEEDED if it is nested
                deeper than max_depth.

        """
        resolved = self._resolve_file(file_path)
        self._log().verbose("CONFIG", f"Loading configuration: {resolved}")

        data = self._parse(resolved)
        if not isinstance(data, Mapping):
            raise ConfigError(
                ErrorKind.INVALID_FORMAT,
                f"Configuration data must be a mapping, got "
                f"{type(data).__name__}: {resolved}",
            )

        if self._flatten:
            base_name = resolved.stem.lower()
            flat, members = flatten(data, base_name, self._max_depth)
            self.insert(flat, {base_name: members})
            self._log().verbose(
                "CONFIG", f"Stored {len(flat)} key(s) in group {base_name!r}"
            )
            return True

        self.insert(dict(data))
        self._log().verbose(
            "CONFIG", f"Stored {len(data)} top-level key(s) without flattening"
        )
        return True

    def fetch(self, file_path: str | Path | None = None) -> dict[str, Any]:
        """Parse a configuration file without storing it.

        Returns:
            The parsed data, or {} if the parser returned nothing.

        Raises:
            ConfigError: As load(), except DEPTH_EXCEEDED.

        """
        resolved = self._resolve_file(file_path)
        data = self._parse(resolved)
        if not data:
            return {}
        if not isinstance(data, Mapping):
            raise ConfigError(
                ErrorKind.INVALID_FORMAT,
                f"Configuration data must be a mapping, got "
                f"{type(data).__name__}: {resolved}",
            )
        return dict(data)

    # -------------------------------
    # Key access
    # -------------------------------

    def has(self, key: str) -> bool:
        """Return True if key is a stored key or a group name."""
        return key in self._config or key in self._groups

    def get(self, key: str, default: Any = None) -> Any:
        """Return the value stored under key, or default."""
        return self._config.get(key, default)

    def add(self, key: str, value: Any) -> None:
        """Add or overwrite a value.

        A dotted key is also registered in the group named by its first
        segment, so add("app.cache.ttl", 60) makes the key deletable through
        delete("app").
        """
        self._config[key] = value
        if "." in key:
            group, sub_key = key.split(".", 1)
            self._groups.setdefault(group, {})[key] = sub_key

    def delete(self, key: str) -> None:
        """Delete a group and all its keys, or a single key.

        A group name takes precedence over a stored key of the same name.
        Deleting an unknown key does nothing.
        """
        members = self._groups.pop(key, None)
        if members is not None:
            for full_key in members:
                self._config.pop(full_key, None)
            return
        self._config.pop(key, None)

    def insert(
        self,
        config: Mapping[str, Any] | None = None,
        groups: Mapping[str, Mapping[str, str]] | None = None,
    ) -> None:
        """Merge key/value pairs and groups into the store (last wins).

        Inserting the same data twice leaves the store as after the first
        call.
        """
        if config:
            self._config.update(config)
        if groups:
            for name, members in groups.items():
                self._groups[name] = dict(members)

    def clear(self) -> None:
        """Remove all keys and groups and forget any loaded cache."""
        self._config = {}
        self._groups = {}
        self._cache_loaded = False

    def get_all(self) -> dict[str, Any]:
        return dict(self._config)

    def get_groups(self) -> dict[str, dict[str, str]]:
        return {name: dict(members) for name, members in self._groups.items()}

    # -------------------------------
    # Cache
    # -------------------------------

    def save_cache(self, file_path: str | Path, expires: int = EXPIRE_NEVER) -> bool:
        """Save keys and groups to a cache file.

        Args:
            file_path: Cache file path. Missing parent directories are
                created.
            expires: Lifetime in seconds; 0 (EXPIRE_NEVER) never expires.

        Returns:
            True if the cache was written, False if the directory cannot be
                created or the file cannot be written.

        Raises:
            ConfigError: INVALID_FORMAT if a stored value cannot be written
                as JSON.

        """
        cache_file = Path(file_path)
        logger = self._log()

        try:
            cache_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as err:
            logger.warning(
                "CACHE", f"Cannot create cache directory {cache_file.parent}: {err}"
            )
            return False

        if cache_file.is_file() and not os.access(cache_file, os.W_OK):
            logger.warning("CACHE", f"Cache file is not writable: {cache_file}")
            return False

        record = CacheRecord(
            config=self._config,
            groups=self._groups,
            expires=expiration_timestamp(expires),
        )
        try:
            write_cache(record, cache_file)
        except OSError as err:
            logger.warning("CACHE", f"Failed to write cache {cache_file}: {err}")
            return False

        logger.verbose(
            "CACHE",
            f"Saved {len(self._config)} key(s) to {cache_file} "
            f"(expires: {record.expires or 'never'})",
        )
        return True

    def load_cache(self, file_path: str | Path) -> bool:
        """Replace the store's contents with a cache file.

        Returns True without reading anything if a cache was already loaded
        (until clear() is called).

        Args:
            file_path: Cache file path.

        Returns:
            True if the cache was loaded (now or earlier), False if the file
                is missing, unreadable or expired. An expired file is
                deleted.

        Raises:
            ConfigError: INVALID_FORMAT if the file is not a valid cache
                record.

        """
        if self._cache_loaded:
            return True

        cache_file = Path(file_path)
        logger = self._log()
        if not cache_file.is_file():
            logger.verbose("CACHE", f"No cache file at {cache_file}")
            return False

        try:
            record = read_cache(cache_file)
        except OSError as err:
            logger.warning("CACHE", f"Cannot read cache {cache_file}: {err}")
            return False

        if record.is_expired():
            logger.verbose("CACHE", f"Cache expired, deleting {cache_file}")
            self.delete_cache(cache_file)
            return False

        self._config = record.config
        self._groups = record.groups
        self._cache_loaded = True
        logger.verbose(
            "CACHE", f"Loaded {len(self._config)} key(s) from {cache_file}"
        )
        return True

    def delete_cache(self, file_path: str | Path) -> bool:
        """Delete a cache file.

        Returns:
            True if a file existed and was removed.

        """
        cache_file = Path(file_path)
        if not cache_file.is_file():
            return False
        try:
            cache_file.unlink()
        except OSError as err:
            self._log().warning("CACHE", f"Cannot delete cache {cache_file}: {err}")
            return False
        return True
