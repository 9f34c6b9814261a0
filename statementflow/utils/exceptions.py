"""Custom exception classes for StatementFlow."""


class StatementFlowError(Exception):
    """Base exception for StatementFlow."""
    pass


class ConfigError(StatementFlowError):
    """Configuration-related errors."""
    pass


class PDFError(StatementFlowError):
    """PDF extraction errors."""
    pass


class DocumentTextError(PDFError):
    """Document text could not be obtained from the text provider."""

    def __init__(self, reason: str, document=None):
        super().__init__(reason)
        self.reason = reason
        self.document = document


class ValidationError(StatementFlowError):
    """Data validation errors."""
    pass


class ExportError(StatementFlowError):
    """Export serialization errors."""
    pass
