"""Logging infrastructure with document context."""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional


class DocumentContextFilter(logging.Filter):
    """Add document context to log records."""

    def __init__(self):
        super().__init__()
        self.document: Optional[str] = None

    def filter(self, record):
        """Add document name to record."""
        record.document = self.document or "-"
        return True


class StatementFlowLogger:
    """Centralized logging manager."""

    def __init__(self, log_level: str = "INFO", max_file_size_mb: int = 10, backup_count: int = 30):
        self.log_dir = self._resolve_log_dir()
        self.log_file = self.log_dir / "statementflow.log"
        self.document_filter = DocumentContextFilter()

        self.logger = logging.getLogger("statementflow")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Close and remove existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
            self.logger.removeHandler(handler)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [document:%(document)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(logging.INFO)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.document_filter)
        self.logger.addHandler(console_handler)

        try:
            self.log_dir.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                self.log_file,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
        except OSError as e:
            self.logger.warning(f"File logging disabled, cannot write to {self.log_dir}: {e}")
        else:
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.document_filter)
            self.logger.addHandler(file_handler)

    @staticmethod
    def _resolve_log_dir() -> Path:
        """Log directory from STATEMENTFLOW_LOG_DIR, else under the home folder."""
        override = os.getenv("STATEMENTFLOW_LOG_DIR")
        if override:
            return Path(override)
        return Path.home() / ".statementflow" / "logs"

    def set_document_context(self, document: Optional[str]):
        """Set current document context for logging."""
        self.document_filter.document = document

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[StatementFlowLogger] = None


def get_logger(log_level: str = "INFO") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = StatementFlowLogger(log_level)
    return _logger_instance.get_logger()


def configure_logging(log_level: str, max_file_size_mb: int = 10, backup_count: int = 30) -> logging.Logger:
    """Rebuild the global logger with explicit settings."""
    global _logger_instance
    _logger_instance = StatementFlowLogger(log_level, max_file_size_mb, backup_count)
    return _logger_instance.get_logger()


def set_document_context(document: Optional[str]):
    """Set document context for logging."""
    global _logger_instance
    if _logger_instance:
        _logger_instance.set_document_context(document)
