"""Reporting module: summaries and exports."""
from .summary import CategoryBreakdown, MerchantSpending, SpendingSummary, SpendingSummarizer, summarize
from .export import to_csv, to_ledger_csv, insights_to_json
from .schemas import TransactionSchema, InsightSchema

__all__ = [
    "CategoryBreakdown",
    "MerchantSpending",
    "SpendingSummary",
    "SpendingSummarizer",
    "summarize",
    "to_csv",
    "to_ledger_csv",
    "insights_to_json",
    "TransactionSchema",
    "InsightSchema"
]
