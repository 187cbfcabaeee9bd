"""Base extractor abstract class."""
from abc import ABC, abstractmethod
from pathlib import Path

from ..config.settings import MAX_FILE_SIZE_MB
from ..models import Document


class BaseExtractor(ABC):
    """
    Abstract base class for positioned-text extractors.

    Extractors turn a file into a Document: pages of fragments with x/y
    positions. They make no attempt to order the fragments.
    """

    # File suffixes this extractor accepts
    suffixes: tuple = ()

    def __init__(self):
        """Initialize the extractor."""
        self.name = self.__class__.__name__

    @abstractmethod
    def extract(self, file_path: Path) -> Document:
        """
        Extract positioned text from a document.

        Args:
            file_path: Path to the document file

        Returns:
            Document with one Page per source page

        Raises:
            ExtractionError: If the document cannot be read
        """
        pass

    def can_handle(self, file_path: Path) -> bool:
        """
        Check if this extractor can handle the given file.

        Args:
            file_path: Path to the document file

        Returns:
            True if this extractor can process the file
        """
        return file_path.suffix.lower() in self.suffixes

    def validate_file(self, file_path: Path) -> None:
        """
        Validate that the file exists and is readable.

        Args:
            file_path: Path to the document file

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If the path is not a file, is empty or is too large
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise ValueError(f"Not a file: {file_path}")

        size = file_path.stat().st_size
        if not size > 0:
            raise ValueError(f"File is empty: {file_path}")

        if size > MAX_FILE_SIZE_MB * 1024 * 1024:
            raise ValueError(f"File exceeds {MAX_FILE_SIZE_MB} MB: {file_path}")


class ExtractionError(Exception):
    """Raised when a document cannot be read at all."""
    pass
