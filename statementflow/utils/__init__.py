"""Utility modules."""
from .logger import get_logger, configure_logging, set_document_context
from .exceptions import (
    StatementFlowError,
    ConfigError,
    PDFError,
    DocumentTextError,
    ValidationError,
    ExportError
)

__all__ = [
    "get_logger",
    "configure_logging",
    "set_document_context",
    "StatementFlowError",
    "ConfigError",
    "PDFError",
    "DocumentTextError",
    "ValidationError",
    "ExportError"
]
