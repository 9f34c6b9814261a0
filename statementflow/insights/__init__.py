"""Spending insights module."""
from .models import InsightData, InsightType, Severity, SpendingInsight, sort_insights
from .engine import InsightsEngine, generate_insights

__all__ = [
    "InsightData",
    "InsightType",
    "Severity",
    "SpendingInsight",
    "sort_insights",
    "InsightsEngine",
    "generate_insights"
]
