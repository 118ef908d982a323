"""
Tests for the flatconf parser registry.

Tests registry operations including:
- Default registrations
- Parser creation by extension
- Registering, overriding, removing and bulk loading parsers
- Validation of parser classes
"""

from __future__ import annotations

import pytest

from flatconf.exceptions import ConfigError, ErrorKind
from flatconf.parsers import (
    ConfParser,
    IniParser,
    JsonParser,
    PhpParser,
    XmlParser,
    YamlParser,
    create_parser,
    get_parsers,
    load_parsers,
    register_parser,
    unregister_parser,
)


class DummyParser:
    def parse(self, file_path):
        return {"dummy": True}


class NotAParser:
    pass


class TestDefaults:
    """Tests for the built-in parser table."""

    def test_default_registrations(self):
        """Test every built-in extension is registered."""
        parsers = get_parsers()

        assert parsers["json"] is JsonParser
        assert parsers["yaml"] is YamlParser
        assert parsers["yml"] is YamlParser
        assert parsers["xml"] is XmlParser
        assert parsers["ini"] is IniParser
        assert parsers["conf"] is ConfParser
        assert parsers["php"] is PhpParser

    def test_get_parsers_returns_snapshot(self):
        """Test modifying the returned dict does not touch the registry."""
        parsers = get_parsers()
        parsers["fake"] = DummyParser

        assert "fake" not in get_parsers()


class TestCreateParser:
    """Tests for create_parser()."""

    @pytest.mark.parametrize(
        "file_path, expected",
        [
            ("config.json", JsonParser),
            ("CONFIG.JSON", JsonParser),
            ("dir/app.dist.yml", YamlParser),
            ("settings.Conf", ConfParser),
        ],
    )
    def test_create_by_extension(self, file_path, expected):
        """Test the extension selects the parser, case-insensitively."""
        assert isinstance(create_parser(file_path), expected)

    def test_new_instance_each_call(self):
        """Test parsers are instantiated on demand."""
        assert create_parser("a.json") is not create_parser("b.json")

    @pytest.mark.parametrize("file_path", ["file.unknownext", "Makefile", ""])
    def test_no_match(self, file_path):
        """Test unknown or missing extensions return None."""
        assert create_parser(file_path) is None


class TestRegistration:
    """Tests for registry mutation."""

    def test_register_custom_parser(self):
        """Test registering a custom extension."""
        register_parser("dummy", DummyParser)

        assert isinstance(create_parser("settings.dummy"), DummyParser)

    def test_register_normalizes_extension(self):
        """Test a leading dot and upper case are accepted."""
        register_parser(".DUMMY", DummyParser)

        assert get_parsers()["dummy"] is DummyParser

    def test_register_overrides_builtin(self):
        """Test re-registering an extension replaces the parser."""
        register_parser("json", DummyParser)

        assert isinstance(create_parser("config.json"), DummyParser)

    def test_register_invalid_parser(self):
        """Test a class without parse() raises INVALID_PARSER."""
        with pytest.raises(ConfigError) as exc_info:
            register_parser("bad", NotAParser)

        assert exc_info.value.kind is ErrorKind.INVALID_PARSER
        assert "bad" not in get_parsers()

    def test_register_instance_rejected(self):
        """Test a parser instance is not accepted in place of a class."""
        with pytest.raises(ConfigError) as exc_info:
            register_parser("dummy", DummyParser())

        assert exc_info.value.kind is ErrorKind.INVALID_PARSER

    def test_register_empty_extension(self):
        """Test an empty extension raises INVALID_ARGUMENT."""
        with pytest.raises(ConfigError) as exc_info:
            register_parser(".", DummyParser)

        assert exc_info.value.kind is ErrorKind.INVALID_ARGUMENT

    def test_unregister_parser(self):
        """Test removing a parser makes its extension unknown."""
        assert unregister_parser(".XML") is True

        assert "xml" not in get_parsers()
        assert create_parser("config.xml") is None

    def test_unregister_unknown(self):
        """Test removing an unknown extension returns False."""
        assert unregister_parser("nothing") is False

    def test_load_parsers(self):
        """Test bulk registration."""
        load_parsers({"one": DummyParser, ".two": DummyParser})

        parsers = get_parsers()
        assert parsers["one"] is DummyParser
        assert parsers["two"] is DummyParser

    def test_load_parsers_is_all_or_nothing(self):
        """Test one invalid entry leaves the registry unchanged."""
        before = get_parsers()

        with pytest.raises(ConfigError) as exc_info:
            load_parsers({"one": DummyParser, "bad": NotAParser})

        assert exc_info.value.kind is ErrorKind.INVALID_PARSER
        assert get_parsers() == before
