"""
flatconf - Flattened configuration store

A Python library for loading configuration files in several formats into a
single key/value store with dot-notated keys.

flatconf provides:
  - Parsers for JSON, YAML, XML, INI, CONF and PHP array files
  - A parser registry for custom formats, selected by file extension
  - Flattening of nested data into keys such as "database.host"
  - Groups of keys (per file or per key prefix) that can be deleted at once
  - JSON cache files with optional expiration

Quick Start
-----------
Load a file and read a value:

    from flatconf import Config

    config = Config("config/")
    config.load("database.yaml")
    host = config.get("database.connection.host", "localhost")

Package Structure
-----------------
config : module
    The Config store (load, query, group deletion, caching).
flatten : module
    Nested data -> dot-notated keys, with depth limiting.
cache : module
    Cache file format, reading and writing.
resolver : module
    File name -> path resolution against a base directory.
parsers : package
    Parser protocol, registry and built-in format parsers.
exceptions : module
    ConfigError and ErrorKind.
logging : module
    Configurable verbose/debug output.

Public API
----------
    from flatconf import Config, ConfigError, ErrorKind
    from flatconf import register_parser, unregister_parser, get_parsers
    from flatconf import EXPIRE_NEVER, EXPIRE_ONE_DAY

For more details, see the individual module docstrings.
"""

__version__ = "1.0.0"
__license__ = "Apache-2.0"
__description__ = "Flattened, grouped configuration store with file caching"

from flatconf.cache import (
    EXPIRE_NEVER,
    EXPIRE_ONE_DAY,
    EXPIRE_ONE_MONTH,
    EXPIRE_ONE_WEEK,
)
from flatconf.config import Config
from flatconf.exceptions import ConfigError, ErrorKind
from flatconf.flatten import DEFAULT_MAX_DEPTH, flatten
from flatconf.parsers import (
    create_parser,
    get_parsers,
    load_parsers,
    register_parser,
    unregister_parser,
)

__all__ = [
    "__version__",
    "__license__",
    "__description__",
    "Config",
    "ConfigError",
    "ErrorKind",
    "DEFAULT_MAX_DEPTH",
    "EXPIRE_NEVER",
    "EXPIRE_ONE_DAY",
    "EXPIRE_ONE_WEEK",
    "EXPIRE_ONE_MONTH",
    "flatten",
    "create_parser",
    "get_parsers",
    "load_parsers",
    "register_parser",
    "unregister_parser",
]
