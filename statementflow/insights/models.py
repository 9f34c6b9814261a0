"""Data models for spending insights."""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class InsightType(str, Enum):
    COMPARISON = "comparison"
    BUDGET = "budget"
    ALERT = "alert"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        return SEVERITY_RANK[self]


SEVERITY_RANK = {
    Severity.CRITICAL: 3,
    Severity.WARNING: 2,
    Severity.INFO: 1,
}


@dataclass
class InsightData:
    """Figures behind an insight."""
    current_amount: Decimal
    previous_amount: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    suggested_budget: Optional[Decimal] = None
    threshold: Optional[Decimal] = None


@dataclass
class SpendingInsight:
    """A single insight produced by one engine run."""
    id: str
    type: InsightType
    category: str
    message: str
    severity: Severity
    data: InsightData
    actionable: bool
    timestamp: datetime = field(default_factory=datetime.now)


def sort_insights(insights):
    """Severity rank descending, then newest first."""
    return sorted(insights, key=lambda i: (i.severity.rank, i.timestamp), reverse=True)
