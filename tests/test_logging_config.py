"""
Tests for logging configuration
"""

import logging

import pytest

from hpa_metrics.core.logging_config import ColoredFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_colored_formatter_leaves_record_untouched():
    record = logging.LogRecord("hpa", logging.WARNING, __file__, 1, "watch restarted", None, None)
    output = ColoredFormatter("%(levelname)s %(message)s").format(record)

    assert "\033[33mWARNING\033[0m watch restarted" == output
    assert record.levelname == "WARNING"


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "exporter.log"
    setup_logging(level="DEBUG", log_file=str(log_file), enable_colors=False)

    logging.getLogger("hpa_metrics.test").debug("skipping unsupported metric")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert logging.getLogger().level == logging.DEBUG
    assert "skipping unsupported metric" in log_file.read_text()
