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

"""Configuration file path resolution."""

from __future__ import annotations

import os
from pathlib import Path


def normalize_config_path(path: str | Path) -> str:
    """Return a directory path that always ends with a separator."""
    return str(path).rstrip("/" + os.sep) + os.sep


def resolve_path(
    file_path: str | Path | None, config_path: str | None = None
) -> Path | None:
    """Resolve a configuration file name to a filesystem path.

    Resolution order:
      1) An existing file (absolute or relative to the working directory)
         is returned unchanged.
      2) With a base directory, the name is joined to it after stripping
         leading slashes ("/app.yaml" -> "<config_path>app.yaml").
      3) Otherwise the path is unresolved.

    The joined path in step 2 is not checked for existence; callers decide
    how to report a missing file.

    Args:
        file_path: File name or path. None or "" is unresolved.
        config_path: Optional base directory, normalized with
            normalize_config_path().

    Returns:
        The resolved path, or None when unresolved.

    """
    if not file_path:
        return None

    candidate = Path(file_path)
    if candidate.is_file():
        return candidate

    if config_path:
        return Path(config_path + str(file_path).lstrip("/"))
    return None
