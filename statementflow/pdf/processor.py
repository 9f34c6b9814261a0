"""PDF page text extraction, the default document text provider."""
from pathlib import Path
from typing import List, Optional, Union

import pdfplumber
import pypdf

from statementflow.utils.logger import get_logger
from statementflow.utils.exceptions import DocumentTextError

logger = get_logger()


class PDFProcessor:
    """Extracts per-page text from PDF files."""

    MIN_TEXT_LENGTH = 20

    def __call__(self, document: Union[str, Path]) -> List[str]:
        return self.extract_pages(document)

    def extract_pages(self, pdf_path: Union[str, Path]) -> List[str]:
        """
        Extract text from each page of a PDF file.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Page texts in page order

        Raises:
            DocumentTextError: If the file is missing or no usable text comes out
        """
        pdf_path = Path(pdf_path)
        if not pdf_path.exists():
            raise DocumentTextError(f"File not found: {pdf_path}", document=str(pdf_path))

        # Try pdfplumber first
        pages = self._extract_with_pdfplumber(pdf_path)

        if not self.validate_extraction(pages):
            # Fallback to pypdf
            logger.info(f"pdfplumber extracted too little text, trying pypdf for {pdf_path.name}")
            pages = self._extract_with_pypdf(pdf_path)

        if not self.validate_extraction(pages):
            chars = sum(len(page) for page in pages) if pages else 0
            raise DocumentTextError(
                f"Extracted text too short ({chars} chars, minimum {self.MIN_TEXT_LENGTH}). "
                f"File may be scanned or corrupted.",
                document=str(pdf_path)
            )

        logger.info(f"Successfully extracted {len(pages)} pages from {pdf_path.name}")
        return pages

    def extract_text(self, pdf_path: Union[str, Path]) -> str:
        """Extract the whole document as one newline-joined string."""
        return "\n".join(self.extract_pages(pdf_path))

    def validate_extraction(self, pages: Optional[List[str]]) -> bool:
        """
        Validate extracted pages.

        Args:
            pages: Extracted page texts

        Returns:
            True if valid, False otherwise
        """
        return bool(pages) and sum(len(page) for page in pages) >= self.MIN_TEXT_LENGTH

    def _extract_with_pdfplumber(self, pdf_path: Path) -> Optional[List[str]]:
        """
        Extract page texts using pdfplumber.

        Args:
            pdf_path: Path to PDF file

        Returns:
            Page texts or None if failed
        """
        try:
            with pdfplumber.open(pdf_path) as pdf:
                pages = []
                logger.debug(f"pdfplumber: Processing {len(pdf.pages)} pages from {pdf_path.name}")
                for i, page in enumerate(pdf.pages, 1):
                    page_text = page.extract_text()
                    if page_text:
                        pages.append(page_text)
                        logger.debug(f"pdfplumber: Page {i} extracted {len(page_text)} chars")
                    else:
                        logger.debug(f"pdfplumber: Page {i} extracted no text")

                return pages or None

        except Exception as e:
            logger.warning(f"pdfplumber extraction failed for {pdf_path.name}: {e}")
            return None

    def _extract_with_pypdf(self, pdf_path: Path) -> Optional[List[str]]:
        """
        Extract page texts using pypdf (fallback).

        Args:
            pdf_path: Path to PDF file

        Returns:
            Page texts or None if failed
        """
        try:
            with open(pdf_path, "rb") as f:
                reader = pypdf.PdfReader(f)
                pages = []
                logger.debug(f"pypdf: Processing {len(reader.pages)} pages from {pdf_path.name}")

                for i, page in enumerate(reader.pages, 1):
                    page_text = page.extract_text()
                    if page_text:
                        pages.append(page_text)
                    else:
                        logger.debug(f"pypdf: Page {i} extracted no text")

                return pages or None

        except Exception as e:
            logger.error(f"pypdf extraction failed for {pdf_path.name}: {e}")
            return None
