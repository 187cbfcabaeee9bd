"""Positioned text extraction from native PDFs using pdfplumber."""
import logging
from pathlib import Path
from typing import Optional

import pdfplumber

from ..config.settings import PDF_X_TOLERANCE, PDF_Y_TOLERANCE
from ..models import Document, Fragment, Page
from .base_extractor import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class PDFExtractor(BaseExtractor):
    """
    Extract word fragments with coordinates from PDFs.

    Words are extracted with ``keep_blank_chars=True`` so that a table cell
    such as "640 Columbia Street" stays a single fragment, while the wider
    gaps between columns still split cells apart.
    """

    suffixes = ('.pdf',)

    def __init__(self, word_kwargs: Optional[dict] = None):
        """
        Initialize PDF extractor.

        Args:
            word_kwargs: Overrides for pdfplumber ``extract_words``
        """
        super().__init__()
        self.word_kwargs = {
            'keep_blank_chars': True,
            'x_tolerance': PDF_X_TOLERANCE,
            'y_tolerance': PDF_Y_TOLERANCE,
        }
        if word_kwargs:
            self.word_kwargs.update(word_kwargs)

    def extract(self, file_path: Path) -> Document:
        """
        Extract fragments from every page.

        Args:
            file_path: Path to PDF file

        Returns:
            Document with one Page per PDF page; x is the word's left edge
            and y its top edge, in PDF points

        Raises:
            ExtractionError: If the PDF cannot be opened or read
        """
        self.validate_file(file_path)

        if not self.can_handle(file_path):
            raise ExtractionError(f"File is not a PDF: {file_path}")

        try:
            logger.info(f"Extracting positioned text from PDF: {file_path}")

            pages = []
            with pdfplumber.open(file_path) as pdf:
                logger.debug(f"PDF has {len(pdf.pages)} pages")

                for page_num, page in enumerate(pdf.pages, start=1):
                    words = page.extract_words(**self.word_kwargs)
                    content = [
                        Fragment(text=w['text'], x=float(w['x0']), y=float(w['top']))
                        for w in words
                    ]
                    if not content:
                        logger.warning(f"No text found on page {page_num}")
                    else:
                        logger.debug(f"Extracted {len(content)} fragments from page {page_num}")
                    pages.append(Page(content=content, page_number=page_num))

            document = Document(pages=pages, source=file_path.name)
            logger.info(
                f"Extracted {sum(len(p.content) for p in pages)} fragments "
                f"from {document.page_count} pages"
            )
            return document

        except Exception as e:
            logger.error(f"Failed to extract text from PDF: {e}")
            raise ExtractionError(f"PDF extraction failed: {e}") from e
