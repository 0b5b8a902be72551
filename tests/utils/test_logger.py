"""
Tests for logging helpers.
"""

import logging

import pytest

from theme_interpreter.utils.logger import check_level, configure_logging, get_logger, set_log_level


class TestLogger:
    """Test cases for logging helpers."""

    def test_check_level(self):
        assert check_level("debug") == logging.DEBUG
        with pytest.raises(ValueError):
            check_level("LOUD")

    def test_get_logger(self):
        assert get_logger("theme_interpreter.styles").name == "theme_interpreter.styles"
        with pytest.raises(ValueError):
            get_logger("")

    def test_configure_and_set_level(self):
        configure_logging("INFO")
        package_logger = logging.getLogger("theme_interpreter")
        assert package_logger.level == logging.INFO
        assert len(package_logger.handlers) == 1

        set_log_level("ERROR")
        assert package_logger.level == logging.ERROR
        assert package_logger.handlers[0].level == logging.ERROR
