"""
Tests for logging setup and the Reporter status stream.
"""

import logging
from pathlib import Path

import pytest

from dotinstall.core.observability.logging_config import (
    LEVEL_ENV,
    _parse_level,
    resolve_level,
    setup_logging,
)
from dotinstall.core.observability.reporter import (
    ICON_ERROR,
    ICON_SUCCESS,
    ICON_WARNING,
    Reporter,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging.raiseExceptions = True


# ── Level resolution ────────────────────────────────────────────


class TestResolveLevel:
    def test_flags_win(self):
        environ = {LEVEL_ENV: "INFO"}
        assert resolve_level(debug=True, quiet=True, environ=environ) == "DEBUG"
        assert resolve_level(verbose=True, environ=environ) == "INFO"
        assert resolve_level(quiet=True, environ=environ) == "ERROR"

    def test_env(self):
        assert resolve_level(environ={LEVEL_ENV: "DEBUG"}) == "DEBUG"

    def test_default(self):
        assert resolve_level(environ={}) == "WARNING"

    def test_parse_level(self):
        assert _parse_level("debug") == logging.DEBUG
        assert _parse_level("nonsense") == logging.WARNING
        assert _parse_level(None) == logging.WARNING


# ── setup_logging ───────────────────────────────────────────────


class TestSetupLogging:
    def test_console_only(self, restore_root_logger):
        setup_logging("INFO")
        root = restore_root_logger
        assert root.level == logging.INFO
        assert len(root.handlers) == 1
        assert root.handlers[0].level == logging.INFO

    def test_file_handler(self, tmp_path: Path, restore_root_logger):
        log_file = tmp_path / "logs" / "install.log"
        setup_logging("WARNING", log_file=str(log_file), log_file_level="DEBUG")
        root = restore_root_logger
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2

        logging.getLogger("dotinstall.test").debug("refreshing package metadata")
        for handler in root.handlers:
            handler.flush()
        assert "refreshing package metadata" in log_file.read_text()

    def test_noisy_loggers_quieted(self, restore_root_logger):
        logging.getLogger("urllib3").setLevel(logging.NOTSET)
        setup_logging("INFO")
        assert logging.getLogger("urllib3").level == logging.WARNING

    def test_debug_leaves_libraries_alone(self, restore_root_logger):
        logging.getLogger("urllib3").setLevel(logging.NOTSET)
        setup_logging("DEBUG", quiet_third_party=False)
        assert logging.getLogger("urllib3").level == logging.NOTSET


# ── Reporter ────────────────────────────────────────────────────


class TestReporter:
    def test_lines(self, capsys):
        reporter = Reporter()
        reporter.step("Installing shell...")
        reporter.success("Shell installed")
        reporter.warning("sync.sh not found")
        reporter.error("Failed to install shell")
        captured = capsys.readouterr()
        assert "Installing shell..." in captured.out
        assert f"{ICON_SUCCESS} Shell installed" in captured.out
        assert f"{ICON_WARNING} sync.sh not found" in captured.out
        assert f"{ICON_ERROR} Failed to install shell" in captured.err

    def test_quiet_keeps_warnings_and_errors(self, capsys):
        reporter = Reporter(quiet=True)
        reporter.step("Installing shell...")
        reporter.info("Profile: quick")
        reporter.header("Quick Profile Installation")
        reporter.warning("low disk")
        reporter.error("boom")
        captured = capsys.readouterr()
        assert "Installing shell" not in captured.out
        assert "Profile: quick" not in captured.out
        assert "low disk" in captured.out
        assert "boom" in captured.err

    def test_mirrored_to_log(self, caplog):
        caplog.set_level(logging.DEBUG, logger="dotinstall.report")
        Reporter(quiet=True).info("Profile: quick")
        assert "info: Profile: quick" in caplog.messages
