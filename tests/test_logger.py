"""Tests for logging setup."""
import logging
from logging.handlers import RotatingFileHandler
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from statementflow.utils.logger import (
    DocumentContextFilter,
    StatementFlowLogger,
    configure_logging,
    get_logger,
    set_document_context
)


class TestDocumentContextFilter(unittest.TestCase):
    """Test DocumentContextFilter."""

    def make_record(self):
        return logging.LogRecord("statementflow", logging.INFO, __file__, 1, "msg", None, None)

    def test_default_placeholder(self):
        """Test records outside a document get a dash."""
        record = self.make_record()
        self.assertTrue(DocumentContextFilter().filter(record))
        self.assertEqual(record.document, "-")

    def test_document_name(self):
        """Test the current document is attached."""
        context_filter = DocumentContextFilter()
        context_filter.document = "march.pdf"
        record = self.make_record()
        context_filter.filter(record)
        self.assertEqual(record.document, "march.pdf")


class TestStatementFlowLogger(unittest.TestCase):
    """Test StatementFlowLogger."""

    def setUp(self):
        """Set up test fixtures."""
        self.test_dir = Path(tempfile.mkdtemp())

    def tearDown(self):
        """Clean up test fixtures."""
        configure_logging("INFO")
        shutil.rmtree(self.test_dir, ignore_errors=True)

    def test_log_dir_from_environment(self):
        """Test the log directory override and file output."""
        with patch.dict(os.environ, {"STATEMENTFLOW_LOG_DIR": str(self.test_dir)}):
            logger = configure_logging("DEBUG")
            set_document_context("march.pdf")
            logger.debug("parsed statement")
            set_document_context(None)

        for handler in logger.handlers:
            handler.flush()

        content = (self.test_dir / "statementflow.log").read_text(encoding="utf-8")
        self.assertIn("[DEBUG] [document:march.pdf] parsed statement", content)
        self.assertFalse(logger.propagate)

    def test_reconfigure_closes_previous_handlers(self):
        """Test the old log file is released when logging is rebuilt."""
        with patch.dict(os.environ, {"STATEMENTFLOW_LOG_DIR": str(self.test_dir)}):
            configure_logging("INFO")
            old_file_handlers = [
                handler for handler in get_logger().handlers
                if isinstance(handler, RotatingFileHandler)
            ]
            configure_logging("INFO")

        self.assertEqual(len(old_file_handlers), 1)
        self.assertIsNone(old_file_handlers[0].stream)
        self.assertNotIn(old_file_handlers[0], get_logger().handlers)
        self.assertEqual(len(get_logger().handlers), 2)

    def test_unwritable_log_dir(self):
        """Test file logging is skipped when the directory cannot be created."""
        blocker = self.test_dir / "not_a_dir"
        blocker.write_text("")

        with patch.dict(os.environ, {"STATEMENTFLOW_LOG_DIR": str(blocker / "logs")}):
            manager = StatementFlowLogger("INFO")

        handlers = manager.get_logger().handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], logging.StreamHandler)


if __name__ == "__main__":
    unittest.main()
