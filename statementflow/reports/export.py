"""CSV and JSON serialization for transactions and insights."""
from dataclasses import asdict
from typing import List

from pydantic import ValidationError

from .schemas import InsightSchema, InsightsResponse
from statementflow.categorize.categories import display_name
from statementflow.insights.models import SpendingInsight
from statementflow.parsing.models import Transaction
from statementflow.utils.exceptions import ExportError
from statementflow.utils.logger import get_logger

logger = get_logger()

CSV_HEADER = "Date,Description,Amount,Category"
LEDGER_HEADER = "Date,Description,Account,Debit,Credit,Category"


def to_csv(transactions: List[Transaction], language: str = "en") -> str:
    """
    Render transactions as Date,Description,Amount,Category rows.

    The description is quoted, the category is the localized label.
    Rows are newline-joined with no trailing newline.
    """
    rows = [CSV_HEADER]
    for txn in transactions:
        rows.append(f'{txn.date},"{txn.description}",{txn.amount},{display_name(txn.category, language)}')

    logger.info(f"Exported {len(transactions)} transactions to CSV")
    return "\n".join(rows)


def to_ledger_csv(transactions: List[Transaction], account: str = "Checking", language: str = "en") -> str:
    """
    Render transactions as ledger rows with separate Debit and Credit columns.

    Negative amounts go to Debit, the rest to Credit, both as absolute values
    with two decimals; the other column is left empty.

    Raises:
        ExportError: If a transaction amount does not parse
    """
    rows = [LEDGER_HEADER]
    for txn in transactions:
        value = txn.value
        if value is None:
            raise ExportError(f"Cannot export transaction with invalid amount: {txn.amount!r}")

        amount = f"{abs(value):.2f}"
        is_debit = value < 0
        debit = amount if is_debit else ""
        credit = "" if is_debit else amount
        category = display_name(txn.category, language)
        rows.append(f'{txn.date},"{txn.description}",{account},{debit},{credit},"{category}"')

    logger.info(f"Exported {len(transactions)} transactions to ledger CSV")
    return "\n".join(rows)


def insights_to_json(insights: List[SpendingInsight], indent: int = 2) -> str:
    """
    Serialize insights to JSON with camelCase keys.

    Raises:
        ExportError: If an insight does not fit the schema
    """
    try:
        response = InsightsResponse(insights=[InsightSchema(**asdict(insight)) for insight in insights])
    except ValidationError as e:
        logger.error(f"Insight serialization failed: {e}")
        raise ExportError(f"Insights do not match expected schema: {e}")

    return response.model_dump_json(by_alias=True, indent=indent)
