"""Unit tests for ux_smells.smells_logging module."""

import json
import logging
import sys
from pathlib import Path

import pytest

from ux_smells.smells_logging import (
    ROOT_LOGGER_NAME,
    JSONFormatter,
    LogCategory,
    debug_context,
    get_category_logger,
    get_default_log_file,
    get_logger,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_default_setup(self, tmp_path: Path) -> None:
        """Test basic logging setup with a log file."""
        log_file = tmp_path / "test.log"
        logger = setup_logging(log_file=log_file)

        assert logger.name == ROOT_LOGGER_NAME
        logger.info("Test message")

        assert log_file.exists()
        assert "Test message" in log_file.read_text()

    def test_json_format(self, tmp_path: Path) -> None:
        """Test JSON log format."""
        log_file = tmp_path / "json.log"
        setup_logging(log_file=log_file, log_format="json")

        get_category_logger(LogCategory.ENGINE).info(
            "Analyzed batch", extra={"rule_id": "a-rule", "element_count": 3}
        )

        entry = json.loads(log_file.read_text().strip().split("\n")[-1])
        assert entry["message"] == "Analyzed batch"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "ux_smells.engine"
        assert entry["rule_id"] == "a-rule"
        assert entry["element_count"] == 3

    def test_quiet_console_level(self) -> None:
        logger = setup_logging(quiet=True)
        console = logger.handlers[0]
        assert console.level == logging.ERROR

    def test_verbose_console_level(self) -> None:
        logger = setup_logging(verbose=True)
        assert logger.handlers[0].level == logging.DEBUG

    def test_level_is_case_insensitive(self) -> None:
        logger = setup_logging(level="warning")
        assert logger.handlers[0].level == logging.WARNING

    def test_file_logging_uses_project_dir(self, tmp_path: Path) -> None:
        logger = setup_logging(enable_file_logging=True, project_path=tmp_path)
        assert len(logger.handlers) == 2
        assert (tmp_path / ".ux-smells" / "logs").is_dir()

    def test_no_file_handler_by_default(self) -> None:
        logger = setup_logging()
        assert len(logger.handlers) == 1


class TestLoggers:
    def test_get_logger(self):
        assert get_logger().name == "ux_smells"

    def test_category_loggers(self):
        assert get_category_logger(LogCategory.REGISTRY).name == "ux_smells.registry"
        assert get_category_logger(LogCategory.VALIDATOR).name == "ux_smells.validator"

    def test_default_log_file(self, tmp_path: Path):
        path = get_default_log_file(tmp_path)
        assert path == tmp_path / ".ux-smells" / "logs" / "ux-smells.log"


class TestJSONFormatter:
    def test_exception_included(self):
        try:
            raise ValueError("bad rule")
        except ValueError:
            record = logging.LogRecord(
                "ux_smells", logging.ERROR, __file__, 1, "failed", None, sys.exc_info()
            )
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: bad rule" in entry["exception"]


class TestDebugContext:
    def test_restores_levels(self):
        logger = setup_logging(level="ERROR")
        handler = logger.handlers[0]
        with debug_context(logger) as active:
            assert active.level == logging.DEBUG
            assert handler.level == logging.DEBUG
        assert handler.level == logging.ERROR
