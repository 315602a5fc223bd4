# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import logging
import tempfile
import unittest
from pathlib import Path

from src.config.logging_config import ROOT_LOGGER_NAME, setup_logging


class TestLoggingConfig(unittest.TestCase):
    """Verify logging setup behaviour."""

    def setUp(self) -> None:
        """Start each test with a handler-free market_search logger."""
        self.root_logger = logging.getLogger(ROOT_LOGGER_NAME)
        self._saved = list(self.root_logger.handlers)
        self.root_logger.handlers.clear()
        self._tmp = tempfile.TemporaryDirectory()
        self.logs_dir = Path(self._tmp.name)

    def tearDown(self) -> None:
        for handler in self.root_logger.handlers:
            handler.close()
        self.root_logger.handlers[:] = self._saved
        self._tmp.cleanup()

    def test_setup_creates_log_file(self) -> None:
        log_path = setup_logging(self.logs_dir)
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent, self.logs_dir)

    def test_log_file_naming_convention(self) -> None:
        log_path = setup_logging(self.logs_dir)
        self.assertRegex(log_path.name, r"^market_\d{8}_\d{6}\.log$")

    def test_handler_levels(self) -> None:
        """File handler logs DEBUG+, console WARNING+."""
        setup_logging(self.logs_dir)
        file_handlers = [
            h for h in self.root_logger.handlers
            if isinstance(h, logging.FileHandler)
        ]
        console_handlers = [
            h for h in self.root_logger.handlers
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)
        self.assertEqual(len(console_handlers), 1)
        self.assertEqual(console_handlers[0].level, logging.WARNING)

    def test_custom_console_level(self) -> None:
        setup_logging(self.logs_dir, console_level=logging.ERROR)
        levels = {
            h.level for h in self.root_logger.handlers
            if not isinstance(h, logging.FileHandler)
        }
        self.assertEqual(levels, {logging.ERROR})

    def test_repeated_setup_does_not_duplicate(self) -> None:
        setup_logging(self.logs_dir)
        count = len(self.root_logger.handlers)
        setup_logging(self.logs_dir)
        self.assertEqual(len(self.root_logger.handlers), count)

    def test_child_logger_writes_to_file(self) -> None:
        log_path = setup_logging(self.logs_dir)
        logging.getLogger("market_search.search").debug("marker line")
        for handler in self.root_logger.handlers:
            handler.flush()
        self.assertIn("marker line", log_path.read_text(encoding="utf-8"))
