"""Transaction categorization module."""
from .categories import Category, display_name, SUPPORTED_LANGUAGES
from .categorizer import Categorizer, KeywordRule, categorize

__all__ = ["Category", "display_name", "SUPPORTED_LANGUAGES", "Categorizer", "KeywordRule", "categorize"]
