"""Line-by-line fallback extraction for statements no template understands."""
import re
from typing import List, Optional

from .models import Transaction
from .pattern_extractor import normalize_description
from .templates import AMOUNT
from statementflow.categorize.categorizer import Categorizer
from statementflow.utils.logger import get_logger

logger = get_logger()

LINE_SPLIT_RE = re.compile(r"[\n\r]+")
DATE_RE = re.compile(r"\d{2}/\d{2}")
AMOUNT_HINT_RE = re.compile(r"\d+\.\d{2}")
AMOUNT_RE = re.compile(AMOUNT)

# Matched case-sensitively
HEADER_MARKERS = ("Balance", "TOTAL", "SUMMARY")


class LineExtractor:
    """Extracts one transaction per line that carries both a date and an amount."""

    def __init__(
        self,
        categorizer: Optional[Categorizer] = None,
        min_line_length: int = 10,
        description_max_length: int = 50
    ):
        self.categorizer = categorizer or Categorizer()
        self.min_line_length = min_line_length
        self.description_max_length = description_max_length

    def extract(self, text: str) -> List[Transaction]:
        """
        Extract candidate transactions line by line.

        Args:
            text: Full statement text

        Returns:
            Candidate transactions, possibly empty
        """
        lines = [line for line in LINE_SPLIT_RE.split(text) if len(line.strip()) > self.min_line_length]
        logger.debug(f"Line fallback: {len(lines)} lines long enough to inspect")

        transaction_lines = [line for line in lines if self.is_transaction_line(line)]
        logger.info(f"Line fallback: {len(transaction_lines)} lines with dates and amounts")

        return [self._parse_line(line, index) for index, line in enumerate(transaction_lines, 1)]

    @staticmethod
    def is_transaction_line(line: str) -> bool:
        """True for lines with a date and an amount that are not headers or totals."""
        return (
            DATE_RE.search(line) is not None
            and AMOUNT_HINT_RE.search(line) is not None
            and not any(marker in line for marker in HEADER_MARKERS)
        )

    def _parse_line(self, line: str, index: int) -> Transaction:
        date_match = DATE_RE.search(line)
        amounts = AMOUNT_RE.findall(line)
        # Last amount wins, which picks up the running balance on some layouts
        last_amount = amounts[-1] if amounts else "0.00"

        description = line
        if date_match:
            description = description.replace(date_match.group(0), "", 1).strip()
        for amount in amounts:
            description = description.replace(amount, "", 1).strip()

        description = normalize_description(description, self.description_max_length)
        if not description:
            description = f"Transaction {index}"

        amount = last_amount.replace("$", "").replace(",", "")

        return Transaction(
            date=date_match.group(0) if date_match else f"{index:02d}/01",
            description=description,
            amount=amount,
            category=self.categorizer.categorize(description, amount)
        )
