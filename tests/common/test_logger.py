"""Tests for logging utilities."""

import logging

from common.logger import error, get_logger, setup_logging, success


class TestGetLogger:
    """Tests for get_logger function."""

    def test_returns_logger_instance(self):
        """Test that get_logger returns a logger instance."""
        logger = get_logger("test")
        assert isinstance(logger, logging.Logger)

    def test_logger_name(self):
        """Test that logger has correct name."""
        logger = get_logger("test.module")
        assert logger.name == "test.module"

    def test_default_level_is_info(self, monkeypatch):
        """Test that default logging level is INFO."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        logger = get_logger("test.default")
        assert logger.level == logging.INFO

    def test_level_from_env(self, monkeypatch):
        """Test that LOG_LEVEL sets the level when none is given."""
        monkeypatch.setenv("LOG_LEVEL", "warning")
        logger = get_logger("test.env_level")
        assert logger.level == logging.WARNING

    def test_custom_level(self):
        """Test that custom logging level can be set."""
        logger = get_logger("test.custom", level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_reuses_existing_logger(self):
        """Test that get_logger reuses existing logger instance."""
        logger1 = get_logger("test.reuse")
        logger2 = get_logger("test.reuse")
        assert logger1 is logger2
        # Should not add duplicate handlers
        assert len(logger1.handlers) == 1

    def test_logging_output(self, caplog):
        """Test that logging actually produces output."""
        logger = get_logger("test.output")

        with caplog.at_level(logging.INFO):
            logger.info("Build passed")

        assert "Build passed" in caplog.text

    def test_info_level_filters_debug(self, caplog):
        """Test that INFO level filters out DEBUG messages."""
        logger = get_logger("test.filter", level="INFO")

        with caplog.at_level(logging.DEBUG):
            logger.debug("This should not appear")
            logger.info("This should appear")

        assert "This should not appear" not in caplog.text
        assert "This should appear" in caplog.text


class TestSetupLogging:
    """Tests for root logger configuration."""

    def test_writes_log_file(self, tmp_path, monkeypatch):
        """Test that records also go to the log file."""
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        log_file = tmp_path / "audit.log"
        root = logging.getLogger()
        saved_handlers, saved_level = list(root.handlers), root.level

        try:
            setup_logging("INFO", log_file=str(log_file))
            logging.getLogger("test.file").info("written to file")
            for handler in root.handlers:
                handler.flush()
        finally:
            for handler in root.handlers:
                if isinstance(handler, logging.FileHandler):
                    handler.close()
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)

        assert "written to file" in log_file.read_text()


class TestStatusLines:
    """Tests for the console status helpers."""

    def test_success_and_error_print(self, capsys):
        """Test that status lines go to stdout and stderr."""
        success("all checks passed")
        error("build failed")

        captured = capsys.readouterr()
        assert "all checks passed" in captured.out
        assert "build failed" in captured.err
