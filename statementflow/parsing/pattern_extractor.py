"""Template-driven transaction extraction."""
import re
from typing import List, Optional, Tuple

from .models import Transaction
from .templates import MatchShape, PatternTemplate, templates_for
from statementflow.categorize.categorizer import Categorizer
from statementflow.utils.logger import get_logger

logger = get_logger()

WHITESPACE_RE = re.compile(r"\s+")


def normalize_description(text: str, max_length: int = 50) -> str:
    """Trim, collapse whitespace runs and truncate."""
    return WHITESPACE_RE.sub(" ", text.strip())[:max_length]


class PatternExtractor:
    """Tries a bank's templates in order and keeps the first one that matches."""

    def __init__(self, categorizer: Optional[Categorizer] = None, description_max_length: int = 50):
        self.categorizer = categorizer or Categorizer()
        self.description_max_length = description_max_length

    def extract(self, text: str, bank: str) -> Tuple[List[Transaction], Optional[str]]:
        """
        Extract candidate transactions with the bank's templates.

        Args:
            text: Full statement text
            bank: Detected bank label

        Returns:
            (candidates, winning template name); ([], None) if no template matched
        """
        templates = templates_for(bank)
        logger.debug(f"Trying {len(templates)} {bank} templates")

        for position, template in enumerate(templates, 1):
            matches = list(template.pattern.finditer(text))
            logger.debug(f"Template {position} ({template.name}) found {len(matches)} matches")

            if matches:
                logger.info(f"{bank} template {template.name} matched {len(matches)} transactions")
                candidates = [
                    self._to_transaction(match, index, template, bank)
                    for index, match in enumerate(matches, 1)
                ]
                return candidates, template.name

        return [], None

    def _to_transaction(self, match: re.Match, index: int, template: PatternTemplate, bank: str) -> Transaction:
        """Build a candidate from one match; index is 1-based."""
        groups = match.groups()
        shape = template.shape

        if shape is MatchShape.POSTED_DATE:
            description, amount = groups[2] or "", groups[3] or ""
        elif shape is MatchShape.DESCRIPTION:
            description, amount = groups[1] or "", groups[2] or ""
        elif shape is MatchShape.DATE_AMOUNT:
            amount = groups[1] or ""
            description = match.group(0).replace(groups[0] or "", "", 1).replace(amount, "", 1).strip()
        else:
            description = f"Transaction {index}"
            amount = (groups[-1] if groups else None) or ""

        date = groups[0] if groups else ""
        if date and len(date) > 5:
            date = date[:5]
        if not date:
            date = f"{index:02d}/01"

        description = normalize_description(description, self.description_max_length)
        if len(description) < 2:
            description = f"{bank} Transaction {index}"

        amount = amount.replace("$", "").replace(",", "")

        return Transaction(
            date=date,
            description=description,
            amount=amount,
            category=self.categorizer.categorize(description, amount)
        )
