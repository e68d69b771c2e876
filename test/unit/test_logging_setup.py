"""
Logging Setup Tests
===================
"""

import logging
import logging.handlers
import os
import pytest

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from mailroom_robots.core.config import LoggingConfig
from mailroom_robots.core.logging_setup import configure_logging


@pytest.fixture
def package_logger():
    logger = logging.getLogger("mailroom_robots")
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True


class TestConfigureLogging:
    """Test configure_logging()."""

    def test_console_only(self, package_logger):
        configure_logging(LoggingConfig(level="DEBUG"))

        assert package_logger.level == logging.DEBUG
        assert len(package_logger.handlers) == 1

    def test_level_override(self, package_logger):
        configure_logging(LoggingConfig(level="DEBUG"), level="error")
        assert package_logger.level == logging.ERROR

    def test_rotating_file(self, package_logger, tmp_path):
        log_file = tmp_path / "sim.log"
        settings = LoggingConfig(file_enabled=True, file_path=str(log_file),
                                 console_enabled=False)

        configure_logging(settings)
        logging.getLogger("mailroom_robots.test").info("hello")
        for handler in package_logger.handlers:
            handler.flush()

        assert isinstance(package_logger.handlers[0], logging.handlers.RotatingFileHandler)
        assert "hello" in log_file.read_text()

    def test_reconfigure_replaces_handlers(self, package_logger):
        configure_logging(LoggingConfig())
        configure_logging(LoggingConfig())
        assert len(package_logger.handlers) == 1

    def test_all_disabled(self, package_logger):
        configure_logging(LoggingConfig(console_enabled=False))
        assert isinstance(package_logger.handlers[0], logging.NullHandler)

    def test_records_not_repeated_by_root_logger(self, package_logger):
        seen = []
        catcher = logging.Handler()
        catcher.emit = seen.append
        logging.getLogger().addHandler(catcher)
        try:
            configure_logging(LoggingConfig(console_enabled=False))
            logging.getLogger("mailroom_robots.test").warning("once")
        finally:
            logging.getLogger().removeHandler(catcher)

        assert package_logger.propagate is False
        assert seen == []


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
