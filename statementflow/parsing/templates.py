"""Regular-expression templates for transaction rows, per bank."""
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List

from .bank_detector import GENERIC


# Signed amount with optional "$", comma-grouped or plain digits, two decimals.
# Must not start in the middle of another number.
AMOUNT = r"(?<![\d,.])-?\$?(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}"


class MatchShape(Enum):
    """How the capture groups of a template map onto transaction fields."""
    POSTED_DATE = 4  # date, posted date, description, amount
    DESCRIPTION = 3  # date, description, amount
    DATE_AMOUNT = 2  # date, amount; description is whatever else matched
    OTHER = 0  # description synthesized, amount is the last group


@dataclass(frozen=True)
class PatternTemplate:
    """A named transaction-row pattern."""
    name: str
    pattern: re.Pattern

    @property
    def shape(self) -> MatchShape:
        try:
            return MatchShape(self.pattern.groups)
        except ValueError:
            return MatchShape.OTHER


def _template(name: str, regex: str) -> PatternTemplate:
    return PatternTemplate(name, re.compile(regex.replace("AMOUNT", AMOUNT)))


BANK_TEMPLATES: Dict[str, List[PatternTemplate]] = {
    "chase": [
        _template(
            "chase_card_detail",
            r"(\d{2}/\d{2})\s+.*?\s+(\d{2}/\d{2})\s+([^-+\d]*?)\s+[\d\-\(\)]+\s+[A-Z]{2}\s+.*?(AMOUNT)\s+[\d,]+\.\d{2}"
        ),
        _template(
            "chase_simple",
            r"(\d{2}/\d{2})\s+([^-+\d]*?[^-+\d\s])\s+(AMOUNT)"
        ),
        _template(
            "chase_typed",
            r"(\d{2}/\d{2})\s+(?:Card Purchase|Payment|Deposit|Transfer|Withdrawal)\s+\d{2}/\d{2}\s+([^-+\d]*?)\s+(AMOUNT)"
        ),
    ],
    GENERIC: [
        _template(
            "generic_description",
            r"(\d{1,2}/\d{1,2}(?:/\d{2,4})?)\s+(.*?)\s+(AMOUNT)"
        ),
        _template(
            "generic_date_amount",
            r"(\d{1,2}/\d{1,2})\s+.*?(AMOUNT)"
        ),
    ],
}


def templates_for(bank: str) -> List[PatternTemplate]:
    """Ordered templates for a bank; banks without their own list use the generic one."""
    return BANK_TEMPLATES.get(bank, BANK_TEMPLATES[GENERIC])
