"""Statement parsing module."""
from .models import Transaction, ExtractionResult, filter_valid, category_key
from .bank_detector import detect_bank, KNOWN_BANKS
from .templates import PatternTemplate, MatchShape, templates_for
from .pattern_extractor import PatternExtractor
from .line_extractor import LineExtractor
from .parser import StatementParser

__all__ = [
    "Transaction",
    "ExtractionResult",
    "filter_valid",
    "category_key",
    "detect_bank",
    "KNOWN_BANKS",
    "PatternTemplate",
    "MatchShape",
    "templates_for",
    "PatternExtractor",
    "LineExtractor",
    "StatementParser"
]
