"""Core processing flow: document text -> transactions -> summary and insights."""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from statementflow.config.settings import AppSettings, get_settings
from statementflow.insights.engine import generate_insights
from statementflow.insights.models import SpendingInsight
from statementflow.parsing.models import ExtractionResult, Transaction
from statementflow.parsing.parser import StatementParser
from statementflow.pdf.processor import PDFProcessor
from statementflow.reports.export import to_csv, to_ledger_csv
from statementflow.reports.schemas import TransactionSchema
from statementflow.reports.summary import SpendingSummarizer, SpendingSummary
from statementflow.utils.exceptions import DocumentTextError, ValidationError
from statementflow.utils.logger import configure_logging, get_logger, set_document_context

logger = get_logger()

TextProvider = Callable[[Any], Sequence[str]]


@dataclass
class StatementReport:
    """Everything derived from one statement."""
    extraction: ExtractionResult
    summary: SpendingSummary
    insights: List[SpendingInsight] = field(default_factory=list)

    @property
    def transactions(self) -> List[Transaction]:
        return self.extraction.transactions


class StatementProcessor:
    """Orchestrates the flow: document text -> parser -> summary -> insights."""

    def __init__(self, text_provider: Optional[TextProvider] = None, settings: Optional[AppSettings] = None):
        """
        Initialize the processor.

        Args:
            text_provider: Callable returning page texts for a document; PDF files by default
            settings: Application settings; loaded from config.yaml if omitted
        """
        self.settings = settings or get_settings()
        self.text_provider = text_provider or PDFProcessor()
        self.parser = StatementParser(
            description_max_length=self.settings.description_max_length,
            min_line_length=self.settings.min_line_length
        )
        self.summarizer = SpendingSummarizer(
            top_merchants_limit=self.settings.top_merchants_limit,
            merchant_name_length=self.settings.merchant_name_length
        )

    @classmethod
    def from_config(
        cls,
        config_path: Optional[Union[str, Path]] = None,
        text_provider: Optional[TextProvider] = None
    ) -> "StatementProcessor":
        """
        Load settings from a YAML file, apply its logging section and build a processor.

        Args:
            config_path: Path to config.yaml; the packaged one if omitted
            text_provider: Callable returning page texts for a document

        Returns:
            StatementProcessor

        Raises:
            ConfigError: If the file is missing or invalid
        """
        settings = AppSettings.load(config_path)
        configure_logging(settings.log_level, settings.log_max_file_size_mb, settings.log_backup_count)
        logger.info(f"{settings.app_name} {settings.app_version} configured")
        return cls(text_provider=text_provider, settings=settings)

    def process_document(self, document: Any) -> ExtractionResult:
        """
        Extract transactions from a document.

        Args:
            document: Anything the text provider accepts (a PDF path by default)

        Returns:
            ExtractionResult; check no_transactions_found for unsupported input

        Raises:
            DocumentTextError: If the document text cannot be obtained
        """
        name = self._document_name(document)
        set_document_context(name)
        try:
            pages = self._read_pages(document, name)
            logger.info(f"Processing {len(pages)} pages")
            return self.process_text("\n".join(pages))
        finally:
            set_document_context(None)

    def process_text(self, text: str) -> ExtractionResult:
        """Extract transactions from already assembled statement text."""
        return self.parser.parse(text)

    def analyze(
        self,
        transactions: Union[ExtractionResult, Iterable[Transaction]],
        entitled: bool,
        now: Optional[datetime] = None
    ) -> StatementReport:
        """
        Summarize transactions and, for entitled callers, generate insights.

        Args:
            transactions: Extraction result or categorized transactions
            entitled: Whether the caller may receive insights
            now: Reference instant for month-based insights

        Returns:
            StatementReport
        """
        if isinstance(transactions, ExtractionResult):
            extraction = transactions
        else:
            txns = list(transactions)
            extraction = ExtractionResult(bank="unknown", transactions=txns, candidates_found=len(txns))

        # Work on a private copy of the list
        txns = list(extraction.transactions)
        return StatementReport(
            extraction=extraction,
            summary=self.summarizer.summarize(txns),
            insights=generate_insights(txns, entitled, now=now, thresholds=self.settings.insights)
        )

    def run(self, document: Any, entitled: bool, now: Optional[datetime] = None) -> StatementReport:
        """Process a document and analyze the result in one call."""
        return self.analyze(self.process_document(document), entitled, now=now)

    def export_csv(self, transactions: Iterable[Transaction], language: Optional[str] = None) -> str:
        """Transactions as Date,Description,Amount,Category CSV in the configured language."""
        return to_csv(list(transactions), language or self.settings.default_language)

    def export_ledger(
        self,
        transactions: Iterable[Transaction],
        account: Optional[str] = None,
        language: Optional[str] = None
    ) -> str:
        """Transactions as debit/credit ledger CSV for the configured account."""
        return to_ledger_csv(
            list(transactions),
            account or self.settings.ledger_account,
            language or self.settings.default_language
        )

    @staticmethod
    def load_transactions(records: Iterable[Dict[str, Any]]) -> List[Transaction]:
        """
        Validate caller-supplied transaction dicts.

        Args:
            records: Dicts with date, description, amount and optional category

        Returns:
            Transaction objects

        Raises:
            ValidationError: If a record does not match the schema
        """
        transactions = []
        for position, record in enumerate(records, 1):
            try:
                validated = TransactionSchema(**record)
            except PydanticValidationError as e:
                raise ValidationError(f"Transaction record {position} is invalid: {e}")
            transactions.append(Transaction(**validated.model_dump()))

        logger.debug(f"Loaded {len(transactions)} transaction records")
        return transactions

    def _read_pages(self, document: Any, name: str) -> List[str]:
        try:
            pages = self.text_provider(document)
        except DocumentTextError:
            raise
        except Exception as e:
            logger.error(f"Text provider failed for {name}: {e}")
            raise DocumentTextError(f"Failed to read document text: {e}", document=name)

        if pages is None:
            raise DocumentTextError("Text provider returned no pages", document=name)
        return [page or "" for page in pages]

    @staticmethod
    def _document_name(document: Any) -> str:
        if isinstance(document, (str, Path)):
            return Path(document).name
        return getattr(document, "name", None) or type(document).__name__
