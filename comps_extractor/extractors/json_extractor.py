"""Load pre-extracted positioned text from JSON."""
import json
import logging
from pathlib import Path

from ..models import Document
from .base_extractor import BaseExtractor, ExtractionError

logger = logging.getLogger(__name__)


class JSONExtractor(BaseExtractor):
    """
    Read a positioned-text dump produced by an external layout extractor.

    Expected shape::

        {"pages": [{"content": [{"str": "Jun-22", "x": 40.1, "y": 512.0}, ...]}, ...]}

    ``text`` is accepted in place of ``str``. Any other keys are ignored.
    """

    suffixes = ('.json',)

    def extract(self, file_path: Path) -> Document:
        """
        Load a document dump.

        Args:
            file_path: Path to JSON file

        Returns:
            Document

        Raises:
            ExtractionError: If the file is not valid JSON or lacks pages
        """
        self.validate_file(file_path)

        try:
            data = json.loads(file_path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise ExtractionError(f"Could not read positioned text from {file_path}: {e}") from e

        return self.from_data(data, source=file_path.name)

    @staticmethod
    def from_data(data, source=None) -> Document:
        """
        Build a Document from already-parsed extractor output.

        Raises:
            ExtractionError: If the structure is not a page list of fragments
        """
        if not isinstance(data, dict) or not isinstance(data.get('pages'), list):
            raise ExtractionError("Positioned text must be an object with a 'pages' list")

        try:
            document = Document.from_dict(data, source=source)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ExtractionError(f"Malformed fragment in positioned text: {e}") from e

        logger.debug(f"Loaded {document.page_count} pages from {source or 'data'}")
        return document
