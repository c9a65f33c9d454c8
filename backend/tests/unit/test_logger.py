"""
Unit Tests - Logging
Tests for the loguru sink configuration.
"""
import sys

import pytest
from loguru import logger

from cryptoledger.config import settings
from cryptoledger.utils.logger import configure_logging


@pytest.fixture
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


class TestConfigureLogging:

    def test_file_sinks(self, tmp_path, monkeypatch, restore_logger):
        monkeypatch.setattr(settings, "LOG_TO_FILE", True)
        monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "logs"))

        configure_logging()
        logger.error("settlement failed")
        # Closing the sinks flushes them
        logger.remove()

        assert "settlement failed" in (tmp_path / "logs" / "app.log").read_text()
        assert "settlement failed" in (tmp_path / "logs" / "error.log").read_text()

    def test_console_only(self, tmp_path, monkeypatch, restore_logger):
        monkeypatch.setattr(settings, "LOG_TO_FILE", False)
        monkeypatch.setattr(settings, "LOG_DIR", str(tmp_path / "logs"))

        configure_logging()
        logger.info("order settled")

        assert not (tmp_path / "logs").exists()
