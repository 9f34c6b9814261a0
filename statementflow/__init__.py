"""StatementFlow: bank statement parsing, categorization and spending insights."""
from .orchestrator import StatementProcessor, StatementReport
from .parsing import Transaction, ExtractionResult, StatementParser
from .categorize import Category, categorize, display_name
from .insights import SpendingInsight, generate_insights

__version__ = "0.1.0"

__all__ = [
    "StatementProcessor",
    "StatementReport",
    "Transaction",
    "ExtractionResult",
    "StatementParser",
    "Category",
    "categorize",
    "display_name",
    "SpendingInsight",
    "generate_insights"
]
