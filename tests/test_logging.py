"""
Tests for flatconf.logging module and its use by Config.
"""

from __future__ import annotations

from flatconf import Config
from flatconf.logging import (
    DefaultLogger,
    SilentLogger,
    get_global_logger,
    get_logger,
    set_global_logger,
)


class RecordingLogger:
    def __init__(self):
        self.messages: list[tuple[str, str, str]] = []

    def verbose(self, prefix, message):
        self.messages.append(("verbose", prefix, message))

    def debug(self, prefix, message):
        self.messages.append(("debug", prefix, message))

    def warning(self, prefix, message):
        self.messages.append(("warning", prefix, message))


class TestLoggers:
    """Tests for logger implementations."""

    def test_default_global_logger_is_silent(self):
        """Test library output is off by default."""
        assert isinstance(get_global_logger(), SilentLogger)

    def test_verbose_output(self, capsys):
        """Test verbose messages print with their prefix."""
        logger = get_logger(verbose=True)
        logger.verbose("CONFIG", "Loading")
        logger.debug("PARSER", "hidden")

        out = capsys.readouterr().out
        assert "[CONFIG] Loading" in out
        assert "hidden" not in out

    def test_debug_implies_verbose(self, capsys):
        """Test debug mode prints both levels."""
        logger = DefaultLogger(debug=True)
        logger.verbose("CONFIG", "one")
        logger.debug("PARSER", "two")

        out = capsys.readouterr().out
        assert "[CONFIG] one" in out
        assert "[PARSER] two" in out

    def test_warning_goes_to_stderr(self, capsys):
        """Test warnings print even when not verbose."""
        DefaultLogger().warning("CACHE", "careful")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "[CACHE] WARNING: careful" in captured.err

    def test_silent_logger(self, capsys):
        """Test the silent logger prints nothing."""
        logger = SilentLogger()
        logger.verbose("A", "a")
        logger.debug("B", "b")
        logger.warning("C", "c")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestConfigLogging:
    """Tests for logging from the Config store."""

    def test_config_uses_explicit_logger(self, config_dir):
        """Test a logger passed to Config receives load messages."""
        logger = RecordingLogger()
        config = Config(config_dir, logger=logger)

        config.load("config.json")

        prefixes = {prefix for _, prefix, _ in logger.messages}
        assert {"CONFIG", "PARSER"} <= prefixes

    def test_config_uses_global_logger(self, tmp_path):
        """Test the global logger is looked up at call time."""
        config = Config()
        logger = RecordingLogger()
        set_global_logger(logger)

        config.save_cache(tmp_path / "cache.json")

        assert ("verbose", "CACHE") in {(level, prefix) for level, prefix, _ in logger.messages}

    def test_save_failure_warns(self, tmp_path):
        """Test a failed cache save is reported as a warning."""
        blocker = tmp_path / "blocker"
        blocker.write_text("file", encoding="utf-8")
        logger = RecordingLogger()

        assert Config(logger=logger).save_cache(blocker / "cache.json") is False
        assert any(level == "warning" for level, _, _ in logger.messages)
