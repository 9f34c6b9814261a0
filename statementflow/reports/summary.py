"""Spending summary: totals, category breakdown and top merchants."""
import re
from collections import defaultdict
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List

from statementflow.categorize.categories import UNCATEGORIZED_LABELS
from statementflow.parsing.models import Transaction, category_key
from statementflow.utils.logger import get_logger

logger = get_logger()

MERCHANT_CLEAN_RE = re.compile(r"[^a-zA-Z0-9\s]")


@dataclass
class CategoryBreakdown:
    """Expense total for one category."""
    category: str
    total: Decimal
    percentage: Decimal  # share of total spent, one decimal
    count: int


@dataclass
class MerchantSpending:
    """Expense total for one merchant."""
    name: str
    total: Decimal
    count: int
    average: Decimal
    category: str


@dataclass
class SpendingSummary:
    """Summary figures for a transaction list."""
    total_spent: Decimal
    total_income: Decimal
    net_amount: Decimal
    categories: List[CategoryBreakdown] = field(default_factory=list)
    top_merchants: List[MerchantSpending] = field(default_factory=list)


class SpendingSummarizer:
    """Aggregates transactions into totals, categories and merchants."""

    def __init__(self, top_merchants_limit: int = 8, merchant_name_length: int = 30):
        self.top_merchants_limit = top_merchants_limit
        self.merchant_name_length = merchant_name_length

    def summarize(self, transactions: List[Transaction]) -> SpendingSummary:
        """
        Summarize transactions.

        Args:
            transactions: Categorized transactions

        Returns:
            SpendingSummary object
        """
        priced = [txn for txn in transactions if txn.value is not None]
        expenses = [txn for txn in priced if txn.value < 0]

        total_spent = sum((abs(txn.value) for txn in expenses), Decimal("0"))
        total_income = sum((txn.value for txn in priced if txn.value > 0), Decimal("0"))

        summary = SpendingSummary(
            total_spent=total_spent,
            total_income=total_income,
            net_amount=total_income - total_spent,
            categories=self._category_breakdown(expenses, total_spent),
            top_merchants=self._top_merchants(expenses)
        )

        logger.info(
            f"Summarized {len(priced)} transactions: spent ${total_spent:.2f}, "
            f"income ${total_income:.2f}, {len(summary.categories)} expense categories"
        )
        return summary

    def _category_breakdown(self, expenses: List[Transaction], total_spent: Decimal) -> List[CategoryBreakdown]:
        totals: Dict[str, Decimal] = defaultdict(Decimal)
        counts: Dict[str, int] = defaultdict(int)
        for txn in expenses:
            category = category_key(txn, UNCATEGORIZED_LABELS["en"])
            totals[category] += abs(txn.value)
            counts[category] += 1

        breakdown = [
            CategoryBreakdown(
                category=category,
                total=total,
                percentage=self._percentage(total, total_spent),
                count=counts[category]
            )
            for category, total in totals.items()
        ]
        return sorted(breakdown, key=lambda item: item.total, reverse=True)

    def _top_merchants(self, expenses: List[Transaction]) -> List[MerchantSpending]:
        merchants: Dict[str, MerchantSpending] = {}
        for txn in expenses:
            name = self.merchant_name(txn.description)
            if name not in merchants:
                merchants[name] = MerchantSpending(
                    name=name,
                    total=Decimal("0"),
                    count=0,
                    average=Decimal("0"),
                    category=category_key(txn)
                )
            merchant = merchants[name]
            merchant.total += abs(txn.value)
            merchant.count += 1

        for merchant in merchants.values():
            merchant.average = merchant.total / merchant.count

        ranked = sorted(merchants.values(), key=lambda item: item.total, reverse=True)
        return ranked[:self.top_merchants_limit]

    def merchant_name(self, description: str) -> str:
        """Merchant key: leading characters of the description, alphanumerics and spaces only."""
        return MERCHANT_CLEAN_RE.sub("", description[:self.merchant_name_length]).strip()

    @staticmethod
    def _percentage(part: Decimal, whole: Decimal) -> Decimal:
        if not whole:
            return Decimal("0.0")
        return (part / whole * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)


def summarize(transactions: List[Transaction]) -> SpendingSummary:
    """Summarize with default limits."""
    return SpendingSummarizer().summarize(transactions)
