"""Bank issuer detection from statement text."""
import re
from typing import List, Tuple

from statementflow.utils.logger import get_logger

logger = get_logger()

GENERIC = "generic"

# Checked in order, first hit wins
BANK_SIGNATURES: List[Tuple[str, re.Pattern]] = [
    ("chase", re.compile(r"chase|jpmorgan", re.IGNORECASE)),
    ("wellsFargo", re.compile(r"wells fargo|wf", re.IGNORECASE)),
    ("bankOfAmerica", re.compile(r"bank of america|boa", re.IGNORECASE)),
    ("citi", re.compile(r"citibank|citi", re.IGNORECASE)),
    ("usBank", re.compile(r"u\.?s\.?\s*bank", re.IGNORECASE)),
    ("capital", re.compile(r"capital one", re.IGNORECASE)),
]

KNOWN_BANKS = tuple(label for label, _ in BANK_SIGNATURES) + (GENERIC,)


def detect_bank(text: str) -> str:
    """
    Classify statement text into a known issuer profile.

    Args:
        text: Full statement text (all pages joined)

    Returns:
        Bank label, or "generic" if no signature matches
    """
    for label, signature in BANK_SIGNATURES:
        if signature.search(text or ""):
            logger.info(f"Detected bank format: {label}")
            return label

    logger.info(f"No bank signature matched, using {GENERIC} format")
    return GENERIC
