"""Unit tests for logging setup."""

import logging

import pytest

from heavyAgent.config.settings import LoggingSettings
from heavyAgent.utils.logging_utils import ROOT_LOGGER_NAME, log_error, setup_logging


@pytest.fixture
def restore_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, propagate, level = list(logger.handlers), logger.propagate, logger.level
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers = handlers
    logger.propagate = propagate
    logger.setLevel(level)


class TestSetupLogging:
    def test_file_and_console_handlers(self, tmp_path, restore_logger):
        settings = LoggingSettings(log_dir=str(tmp_path / "logs"), console_level="ERROR")

        logger = setup_logging(settings)

        assert logger is restore_logger
        assert logger.propagate is False
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert len(file_handlers) == 1
        assert file_handlers[0].level == logging.INFO
        console = [h for h in logger.handlers if not isinstance(h, logging.FileHandler)]
        assert console[0].level == logging.ERROR

        [log_file] = (tmp_path / "logs").glob("heavy_agent_*.log")
        logging.getLogger("heavyAgent.tests").info("written to file")
        file_handlers[0].flush()
        assert "written to file" in log_file.read_text(encoding="utf-8")

    def test_console_only(self, tmp_path, restore_logger):
        settings = LoggingSettings(log_dir=str(tmp_path / "logs"), log_to_file=False)

        logger = setup_logging(settings)

        assert not any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert not (tmp_path / "logs").exists()

    def test_repeated_setup_replaces_handlers(self, tmp_path, restore_logger):
        settings = LoggingSettings(log_to_file=False)

        setup_logging(settings)
        logger = setup_logging(settings)

        assert len(logger.handlers) == 1


class TestLogError:
    def test_context_line(self):
        logger = logging.getLogger("heavyAgent.tests.log_error")
        records = []

        class Collector(logging.Handler):
            def emit(self, record):
                records.append(record)

        handler = Collector(level=logging.DEBUG)
        logger.addHandler(handler)
        logger.setLevel(logging.DEBUG)
        try:
            log_error(logger, ValueError("bad value"), context="parsing")
        finally:
            logger.removeHandler(handler)

        messages = [r.getMessage() for r in records]
        assert "Error occurred: ValueError: bad value" in messages
        assert "  Context: parsing" in messages
