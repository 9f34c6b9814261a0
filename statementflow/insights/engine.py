"""Spending insights: month-over-month comparisons, budget suggestions and alerts."""
import itertools
from collections import defaultdict
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Iterable, List, Optional, Set

from .models import InsightData, InsightType, Severity, SpendingInsight, sort_insights
from statementflow.config.settings import InsightThresholds
from statementflow.parsing.models import Transaction, category_key
from statementflow.utils.logger import get_logger

logger = get_logger()

MonthlySpending = Dict[str, Decimal]


def month_back(now: datetime, months: int) -> int:
    """1-based month number `months` before now's month, wrapping over the year."""
    return (now.month - 1 - months) % 12 + 1


def money(value: Decimal) -> str:
    """Two-decimal amount text, halves rounded up."""
    return f"{value.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):.2f}"


def whole_percent(value: Decimal) -> str:
    """Absolute percentage as a whole number, halves rounded up."""
    return f"{abs(value).quantize(Decimal('1'), rounding=ROUND_HALF_UP):.0f}"


class InsightsEngine:
    """Generates spending insights for one list of categorized transactions."""

    def __init__(
        self,
        transactions: Iterable[Transaction],
        thresholds: Optional[InsightThresholds] = None,
        now: Optional[datetime] = None
    ):
        """
        Initialize the engine.

        Args:
            transactions: Categorized transactions; unparseable amounts are ignored
            thresholds: Insight thresholds, defaults if omitted
            now: Reference instant for "current month", defaults to datetime.now()
        """
        self.transactions = [txn for txn in transactions if txn.value is not None]
        self.thresholds = thresholds or InsightThresholds()
        self.now = now or datetime.now()
        self.insights: List[SpendingInsight] = []
        self._sequence = itertools.count(1)

    def generate_insights(self) -> List[SpendingInsight]:
        """
        Run every analysis and return insights sorted by severity.

        Returns:
            Insights, most severe first
        """
        self.insights = []
        self._sequence = itertools.count(1)

        self._generate_spending_comparisons()
        self._generate_budget_recommendations()
        self._generate_unusual_spending_alerts()
        self._detect_large_transactions()

        logger.info(
            f"Generated {len(self.insights)} insights from {len(self.transactions)} transactions "
            f"for month {self.now.month}"
        )
        return sort_insights(self.insights)

    def _generate_spending_comparisons(self) -> None:
        t = self.thresholds
        current_month = self.get_spending_for_month(month_back(self.now, 0))
        previous_month = self.get_spending_for_month(month_back(self.now, 1))

        for category, current_amount in current_month.items():
            previous_amount = previous_month.get(category, Decimal("0"))
            if previous_amount <= 0:
                continue

            change_percent = (current_amount - previous_amount) / previous_amount * 100
            if abs(change_percent) < t.comparison_min_change_percent:
                continue

            severity = Severity.WARNING if abs(change_percent) >= t.comparison_warning_percent else Severity.INFO
            direction = "more" if change_percent > 0 else "less"

            self._add(
                InsightType.COMPARISON,
                category,
                f"You spent {whole_percent(change_percent)}% {direction} on {category} this month "
                f"(${money(current_amount)} vs ${money(previous_amount)})",
                severity,
                InsightData(
                    current_amount=current_amount,
                    previous_amount=previous_amount,
                    change_percent=change_percent
                ),
                actionable=change_percent > 0
            )

    def _generate_budget_recommendations(self) -> None:
        t = self.thresholds
        for category, monthly_amounts in self.get_recent_months_spending(t.budget_months).items():
            if len(monthly_amounts) < t.budget_min_data_points:
                continue

            avg_spending = sum(monthly_amounts) / len(monthly_amounts)
            if avg_spending <= 0:
                continue

            spread = (max(monthly_amounts) - min(monthly_amounts)) / avg_spending
            if spread <= t.budget_volatility_ratio:
                continue

            suggested_budget = avg_spending * t.budget_multiplier
            self._add(
                InsightType.BUDGET,
                category,
                f"Based on your {category} spending pattern, consider setting a monthly budget of "
                f"${money(suggested_budget)} (your average is ${money(avg_spending)})",
                Severity.INFO,
                InsightData(current_amount=avg_spending, suggested_budget=suggested_budget),
                actionable=True
            )

    def _generate_unusual_spending_alerts(self) -> None:
        multiplier = self.thresholds.unusual_spending_multiplier
        current_month = self.get_spending_for_month(month_back(self.now, 0))
        historical_averages = self.get_historical_averages()

        for category, current_amount in current_month.items():
            historical_avg = historical_averages.get(category)
            if not historical_avg:
                continue

            threshold = historical_avg * multiplier
            if current_amount <= threshold:
                continue

            self._add(
                InsightType.ALERT,
                category,
                f"Unusual spending detected: Your {category} spending this month "
                f"(${money(current_amount)}) is significantly higher than your typical ${money(historical_avg)}",
                Severity.WARNING,
                InsightData(
                    current_amount=current_amount,
                    previous_amount=historical_avg,
                    threshold=threshold
                ),
                actionable=True
            )

    def _detect_large_transactions(self) -> None:
        t = self.thresholds
        current = month_back(self.now, 0)
        category_averages = self.get_category_transaction_averages()

        for txn in self.transactions:
            if txn.month != current:
                continue

            category = category_key(txn)
            category_average = category_averages.get(category)
            if not category_average:
                continue

            amount = abs(txn.value)
            threshold = category_average * t.large_transaction_multiplier
            if amount <= threshold:
                continue

            warning_level = category_average * t.large_transaction_warning_multiplier
            self._add(
                InsightType.ALERT,
                category,
                f'Large {category} transaction: ${money(amount)} - "{txn.description}"',
                Severity.WARNING if amount > warning_level else Severity.INFO,
                InsightData(
                    current_amount=amount,
                    previous_amount=category_average,
                    threshold=threshold
                ),
                actionable=False,
                id_prefix="large_transaction"
            )

    def get_spending_for_month(self, month: int) -> MonthlySpending:
        """Absolute expense totals per category for a 1-based month token."""
        spending: MonthlySpending = defaultdict(Decimal)
        for txn in self.transactions:
            if txn.month == month and txn.value < 0:
                spending[category_key(txn)] += abs(txn.value)
        return dict(spending)

    def get_recent_months_spending(self, months: int) -> Dict[str, List[Decimal]]:
        """Per category, monthly spend for the current and preceding months where it had any."""
        result: Dict[str, List[Decimal]] = defaultdict(list)
        for offset in range(months):
            for category, amount in self.get_spending_for_month(month_back(self.now, offset)).items():
                result[category].append(amount)
        return dict(result)

    def get_historical_averages(self) -> MonthlySpending:
        """
        Lifetime absolute total per category divided by its number of active months.

        Categories active in fewer than the configured minimum of months have
        no baseline and are left out.
        """
        totals: Dict[str, Decimal] = defaultdict(Decimal)
        months: Dict[str, Set[int]] = defaultdict(set)

        for txn in self.transactions:
            category = category_key(txn)
            totals[category] += abs(txn.value)
            months[category].add(txn.month)

        return {
            category: total / len(months[category])
            for category, total in totals.items()
            if len(months[category]) >= self.thresholds.unusual_spending_min_months
        }

    def get_category_transaction_averages(self) -> MonthlySpending:
        """Mean absolute transaction amount per category across all transactions."""
        totals: Dict[str, Decimal] = defaultdict(Decimal)
        counts: Dict[str, int] = defaultdict(int)

        for txn in self.transactions:
            category = category_key(txn)
            totals[category] += abs(txn.value)
            counts[category] += 1

        return {category: totals[category] / counts[category] for category in totals}

    def _add(
        self,
        insight_type: InsightType,
        category: str,
        message: str,
        severity: Severity,
        data: InsightData,
        actionable: bool,
        id_prefix: Optional[str] = None
    ) -> None:
        epoch_ms = int(self.now.timestamp() * 1000)
        prefix = id_prefix or insight_type.value
        self.insights.append(SpendingInsight(
            id=f"{prefix}_{category}_{epoch_ms}_{next(self._sequence)}",
            type=insight_type,
            category=category,
            message=message,
            severity=severity,
            data=data,
            actionable=actionable,
            timestamp=self.now
        ))


def generate_insights(
    transactions: Iterable[Transaction],
    entitled: bool,
    now: Optional[datetime] = None,
    thresholds: Optional[InsightThresholds] = None
) -> List[SpendingInsight]:
    """
    Generate insights when the caller is entitled to them.

    Args:
        transactions: Categorized transactions
        entitled: Feature entitlement flag; False short-circuits to an empty list
        now: Reference instant for "current month"
        thresholds: Insight thresholds

    Returns:
        Sorted insights
    """
    if not entitled:
        logger.debug("Insights not enabled for this caller, skipping")
        return []
    return InsightsEngine(transactions, thresholds, now).generate_insights()
