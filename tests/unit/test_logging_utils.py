#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_logging_utils.py
"""Tests for the logging setup helper."""

import logging

import pytest

from adocsync.logging_utils import configure_logging


@pytest.fixture
def restore_logging():
    """Put the adocsync loggers back the way they were."""
    names = ("adocsync", "adocsync.sync", "adocsync.renderers")
    saved = {name: (logging.getLogger(name).level, list(logging.getLogger(name).handlers)) for name in names}
    saved_propagate = logging.getLogger("adocsync").propagate
    yield
    for name, (level, handlers) in saved.items():
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            if handler not in handlers:
                handler.close()
        logger.setLevel(level)
        logger.handlers[:] = handlers
    logging.getLogger("adocsync").propagate = saved_propagate


@pytest.mark.unit
@pytest.mark.usefixtures("restore_logging")
class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_string_level(self):
        """Test that level names are resolved on the package logger."""
        logger = configure_logging("warning")
        assert logger.name == "adocsync"
        assert logger.level == logging.WARNING
        assert len(logger.handlers) == 1
        assert not logger.propagate

    def test_unknown_level_name_defaults_to_info(self):
        """Test the fallback for unrecognized level names."""
        assert configure_logging("chatty").level == logging.INFO

    def test_root_logger_untouched(self):
        """Test that the host's root handlers are not replaced."""
        root_handlers = list(logging.getLogger().handlers)
        configure_logging(logging.INFO, propagate=True)
        assert logging.getLogger().handlers == root_handlers
        assert logging.getLogger("adocsync").propagate

    def test_reconfigure_replaces_own_handlers_only(self):
        """Test that repeated calls do not stack handlers and keep foreign ones."""
        foreign = logging.NullHandler()
        logging.getLogger("adocsync").addHandler(foreign)

        configure_logging(logging.INFO)
        logger = configure_logging(logging.DEBUG)

        assert foreign in logger.handlers
        assert len(logger.handlers) == 2

    def test_trace_mode(self):
        """Test that trace mode lets sync DEBUG records through with detailed formatting."""
        logger = configure_logging(logging.WARNING, trace_mode=True)
        assert logging.getLogger("adocsync.sync.controller").isEnabledFor(logging.DEBUG)
        assert not logging.getLogger("adocsync.renderers.asciidoc").isEnabledFor(logging.INFO)
        assert "%(name)s" in logger.handlers[0].formatter._fmt

    def test_without_trace_mode_sync_follows_level(self):
        """Test that sync debugging is hidden at the default level."""
        configure_logging(logging.INFO)
        assert not logging.getLogger("adocsync.sync.controller").isEnabledFor(logging.DEBUG)

    def test_log_file(self, tmp_path):
        """Test that records are teed into the log file."""
        log_path = tmp_path / "sync.log"
        logger = configure_logging(logging.INFO, log_file=str(log_path))
        logging.getLogger("adocsync.sync.controller").info("committed")
        for handler in logger.handlers:
            handler.flush()

        assert len(logger.handlers) == 2
        assert "committed" in log_path.read_text(encoding="utf-8")
