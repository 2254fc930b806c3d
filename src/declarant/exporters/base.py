"""Base workbook builder interface."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from .projector import ProjectedSheet


class WorkbookBuilder(ABC):
    """Abstract base class for turning projected sheets into a file."""

    @abstractmethod
    def build(self, sheets: Sequence[ProjectedSheet]) -> bytes:
        """
        Combine the sheets, in order, into one workbook.

        Args:
            sheets: Cell matrices with their names and column widths

        Returns:
            Workbook file content as bytes
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Return the name of the export format."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Return the file extension for the export format."""
        pass

    @property
    @abstractmethod
    def mime_type(self) -> str:
        """Return the MIME type for the export format."""
        pass
