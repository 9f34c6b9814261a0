"""PDF processing module."""
from .processor import PDFProcessor

__all__ = ["PDFProcessor"]
