"""Keyword-based transaction categorization."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple, Union

from .categories import Category
from statementflow.utils.numbers import parse_amount


@dataclass(frozen=True)
class KeywordRule:
    """Maps any of a set of keywords to a category, optionally below an amount cap."""
    category: Category
    keywords: Tuple[str, ...]
    max_amount: Optional[Decimal] = None

    def matches(self, description: str, amount: Optional[Decimal]) -> bool:
        if not any(keyword in description for keyword in self.keywords):
            return False
        if self.max_amount is None:
            return True
        return amount is not None and abs(amount) < self.max_amount


INCOME_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(Category.SALARY, ("payroll", "salary", "trilyon", "employer")),
    KeywordRule(Category.TRANSFER_IN, ("cash app", "venmo", "transfer", "deposit")),
)

# Order matters: "uber eats" must hit Food Delivery before "uber" hits Rideshare
EXPENSE_RULES: Tuple[KeywordRule, ...] = (
    KeywordRule(Category.FAST_FOOD, ("mcdonald", "burger king", "taco bell")),
    KeywordRule(Category.RESTAURANTS, ("restaurant", "bistro", "grill")),
    KeywordRule(Category.COFFEE, ("starbucks", "coffee", "cafe")),
    KeywordRule(Category.FOOD_DELIVERY, ("doordash", "uber eats", "grubhub")),
    KeywordRule(Category.GAS, ("shell", "exxon", "gas", "fuel")),
    KeywordRule(Category.AUTO_PAYMENT, ("audi", "auto", "car payment")),
    KeywordRule(Category.RIDESHARE, ("uber", "lyft", "taxi")),
    KeywordRule(Category.MOVIES, ("amc", "cinema", "movie")),
    KeywordRule(Category.SUBSCRIPTIONS, ("netflix", "spotify", "subscription")),
    KeywordRule(Category.ONLINE_SHOPPING, ("amazon",), max_amount=Decimal("25")),
    KeywordRule(Category.GENERAL_SHOPPING, ("target", "walmart")),
    KeywordRule(Category.CLOTHING, ("foot locker", "clothing")),
    KeywordRule(Category.TECHNOLOGY, ("apple", "app store")),
    KeywordRule(Category.PERSONAL_TRANSFERS, ("cash app", "venmo", "payment sent")),
)


class Categorizer:
    """Assigns a category from a description and a signed amount."""

    def __init__(
        self,
        income_rules: Tuple[KeywordRule, ...] = INCOME_RULES,
        expense_rules: Tuple[KeywordRule, ...] = EXPENSE_RULES
    ):
        self.income_rules = income_rules
        self.expense_rules = expense_rules

    def categorize(self, description: str, amount: Union[str, Decimal]) -> Category:
        """
        Categorize a transaction.

        Non-negative (or unparseable) amounts go through the income rules,
        negative amounts through the expense rules. First matching rule wins.

        Args:
            description: Transaction description
            amount: Signed amount, negative for expenses

        Returns:
            Category key
        """
        desc = (description or "").lower().strip()
        value = parse_amount(amount)

        if value is None or value >= 0:
            return self._first_match(self.income_rules, desc, value, Category.OTHER_INCOME)
        return self._first_match(self.expense_rules, desc, value, Category.GENERAL_EXPENSES)

    @staticmethod
    def _first_match(
        rules: Tuple[KeywordRule, ...],
        description: str,
        amount: Optional[Decimal],
        default: Category
    ) -> Category:
        for rule in rules:
            if rule.matches(description, amount):
                return rule.category
        return default


_default_categorizer = Categorizer()


def categorize(description: str, amount: Union[str, Decimal]) -> Category:
    """Categorize with the default rule set."""
    return _default_categorizer.categorize(description, amount)
