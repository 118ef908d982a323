"""
Pytest configuration and shared fixtures for flatconf tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from flatconf.exceptions import ConfigError, ErrorKind
from flatconf.logging import SilentLogger, set_global_logger
from flatconf.parsers import base as parser_base

SAMPLE_JSON = """\
{
    "database": {
        "host": "localhost",
        "port": 3306,
        "user": "root"
    },
    "app": {
        "debug": true,
        "cache": null
    }
}
"""

SAMPLE_YAML = """\
database:
  host: localhost
  port: 3306
  user: root
app:
  debug: true
  cache: null
"""

SAMPLE_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<config>
    <app>
        <name>TestApp</name>
        <version>1.0</version>
    </app>
    <database>
        <host>localhost</host>
        <port>3306</port>
    </database>
</config>
"""

SAMPLE_INI = """\
; Sample INI configuration
[database]
host = localhost
port = 3306

[app]
debug = true
"""

SAMPLE_CONF = """\
# Sample CONF configuration
host = localhost
port = 3306
user = root
debug = true
"""

SAMPLE_PHP = """\
<?php

declare(strict_types=1);

return [
    'database' => [
        'host' => 'localhost',
        'port' => 3306,
    ],
    'app' => [
        'debug' => true,
        'cache' => null,
    ],
];
"""

SAMPLE_CUSTOM = """\
# Custom "key -> value" configuration
key1 -> value1
key2 -> value2
"""


class CustomParser:
    """Test-only parser for a "key -> value" line format."""

    def parse(self, file_path: str | Path) -> dict[str, Any]:
        path = Path(file_path)
        if not path.is_file():
            raise ConfigError(
                ErrorKind.PARSE_FAILURE, f"File not found or unreadable: {path}"
            )

        output: dict[str, Any] = {}
        for line in path.read_text(encoding="utf-8").splitlines():
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "->" not in line:
                raise ConfigError(
                    ErrorKind.PARSE_FAILURE,
                    f"Invalid line format in file {path}: {line}",
                )
            key, value = (part.strip() for part in line.split("->", 1))
            output[key] = value
        return output


@pytest.fixture(autouse=True)
def restore_parsers():
    """Restore the parser registry after every test."""
    snapshot = dict(parser_base._PARSER_REGISTRY)
    yield
    parser_base._PARSER_REGISTRY.clear()
    parser_base._PARSER_REGISTRY.update(snapshot)


@pytest.fixture(autouse=True)
def silent_global_logger():
    """Reset the global logger after every test."""
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """
    Provide a directory holding one sample file per supported format.

    Every sample describes the same settings (database host/port, app
    debug flag) so tests can compare formats.
    """
    directory = tmp_path / "config"
    directory.mkdir()
    samples = {
        "config.json": SAMPLE_JSON,
        "config.yaml": SAMPLE_YAML,
        "config.xml": SAMPLE_XML,
        "config.ini": SAMPLE_INI,
        "config.conf": SAMPLE_CONF,
        "config.php": SAMPLE_PHP,
        "config.custom": SAMPLE_CUSTOM,
    }
    for name, content in samples.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def create_config_file(tmp_path: Path):
    """
    Factory fixture for creating temporary configuration files.

    Usage:
        path = create_config_file("app.yaml", "key: value\\n")
    """

    def _create(filename: str, content: str | bytes) -> Path:
        path = tmp_path / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            path.write_bytes(content)
        else:
            path.write_text(content, encoding="utf-8")
        return path

    return _create


@pytest.fixture
def custom_parser() -> type[CustomParser]:
    """Register the "key -> value" parser for the .custom extension."""
    parser_base.register_parser("custom", CustomParser)
    return CustomParser
