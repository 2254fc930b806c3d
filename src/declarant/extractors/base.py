"""Base extractor interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from ..utils.file_handlers import UploadedFile


@dataclass
class ExtractionResult:
    """Result from document text extraction."""

    # Plain text content
    text: str | None = None

    # Any warnings or issues during extraction
    warnings: list[str] = field(default_factory=list)

    # Source type for tracking
    source_type: str = "unknown"

    @property
    def has_content(self) -> bool:
        """Check if extraction produced any non-blank text."""
        return bool(self.text and self.text.strip())


class BaseExtractor(ABC):
    """
    Abstract base class for text extraction services.

    Implementations raise ReadError (or UnsupportedFormatError) instead of
    returning partial results.
    """

    @abstractmethod
    async def extract(self, upload: UploadedFile) -> ExtractionResult:
        """
        Extract plain text from an uploaded document.

        Args:
            upload: The uploaded file

        Returns:
            ExtractionResult with the document text
        """
        pass

    @abstractmethod
    def supports_file_type(self, file_type: str) -> bool:
        """
        Check if this extractor supports the given file type.

        Args:
            file_type: FileType enum value as string

        Returns:
            True if supported
        """
        pass
