"""Statement text to transactions: detection, templates, line fallback, filtering."""
from typing import Optional

from .bank_detector import detect_bank
from .line_extractor import LineExtractor
from .models import ExtractionResult, filter_valid
from .pattern_extractor import PatternExtractor
from statementflow.categorize.categorizer import Categorizer
from statementflow.utils.logger import get_logger

logger = get_logger()

LINE_FALLBACK = "line_fallback"


class StatementParser:
    """Runs the extraction cascade over a statement's full text."""

    def __init__(
        self,
        categorizer: Optional[Categorizer] = None,
        description_max_length: int = 50,
        min_line_length: int = 10
    ):
        categorizer = categorizer or Categorizer()
        self.pattern_extractor = PatternExtractor(categorizer, description_max_length)
        self.line_extractor = LineExtractor(categorizer, min_line_length, description_max_length)

    def parse(self, text: str) -> ExtractionResult:
        """
        Extract categorized transactions from statement text.

        An empty result is a normal outcome meaning the text does not look
        like a supported statement.

        Args:
            text: Full statement text (pages joined with newlines)

        Returns:
            ExtractionResult
        """
        text = text or ""
        bank = detect_bank(text)

        candidates, strategy = self.pattern_extractor.extract(text, bank)
        if not candidates:
            logger.info("Pattern matching failed, trying line-by-line analysis")
            candidates = self.line_extractor.extract(text)
            strategy = LINE_FALLBACK if candidates else None

        transactions = filter_valid(candidates)
        result = ExtractionResult(
            bank=bank,
            transactions=transactions,
            candidates_found=len(candidates),
            strategy=strategy
        )

        if result.rejected_count:
            logger.debug(f"Dropped {result.rejected_count} invalid candidates")

        if result.no_transactions_found:
            logger.warning("No transactions found, text does not look like a supported bank statement")
        else:
            logger.info(f"Extracted {len(transactions)} valid transactions ({bank}, {strategy})")

        return result
