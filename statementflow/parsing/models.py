"""Data models for statement parsing."""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from statementflow.categorize.categories import Category
from statementflow.utils.numbers import parse_amount

DEFAULT_CATEGORY = "General"


@dataclass
class Transaction:
    """Transaction data."""
    date: str  # MM/DD, statements carry no year
    description: str
    amount: str  # signed decimal text, negative for expenses
    category: Optional[Category] = None

    @property
    def value(self) -> Optional[Decimal]:
        """Amount as a Decimal, None if it does not parse."""
        return parse_amount(self.amount)

    @property
    def month(self) -> Optional[int]:
        """1-based month taken from the MM token of the date."""
        token = self.date.split("/")[0].strip()
        return int(token) if token.isdigit() else None

    @property
    def is_expense(self) -> bool:
        value = self.value
        return value is not None and value < 0

    def is_valid(self) -> bool:
        """A candidate survives when its amount parses, is not "0.00" and it has a description."""
        return (
            self.amount != "0.00"
            and len(self.description) > 0
            and self.value is not None
        )


@dataclass
class ExtractionResult:
    """Outcome of running the extraction pipeline over one document's text."""
    bank: str
    transactions: List[Transaction] = field(default_factory=list)
    candidates_found: int = 0
    strategy: Optional[str] = None  # winning template name or "line_fallback"

    @property
    def no_transactions_found(self) -> bool:
        return not self.transactions

    @property
    def rejected_count(self) -> int:
        return self.candidates_found - len(self.transactions)


def filter_valid(candidates: List[Transaction]) -> List[Transaction]:
    """Drop candidates that fail the validity filter."""
    return [txn for txn in candidates if txn.is_valid()]


def category_key(transaction: Transaction, default: str = DEFAULT_CATEGORY) -> str:
    """Grouping key for a transaction's category; `default` when it has none."""
    category = transaction.category
    if not category:
        return default
    return category.value if isinstance(category, Enum) else str(category)
