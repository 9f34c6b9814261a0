"""Processing orchestration module."""
from .processor import StatementProcessor, StatementReport

__all__ = ["StatementProcessor", "StatementReport"]
