"""File type detection and handling utilities."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileType(str, Enum):
    """Detected file types."""

    DOCX = "docx"
    TXT = "txt"
    UNKNOWN = "unknown"


EXTENSION_TO_FILETYPE: dict[str, FileType] = {
    ".docx": FileType.DOCX,
    ".txt": FileType.TXT,
}


@dataclass(frozen=True)
class UploadedFile:
    """An uploaded document: its original name and raw bytes."""

    filename: str
    content: bytes

    @classmethod
    def from_path(cls, path: str | Path) -> "UploadedFile":
        path = Path(path)
        return cls(filename=path.name, content=path.read_bytes())

    @property
    def extension(self) -> str:
        """Lowercased extension without the dot ("" when there is none)."""
        return Path(self.filename).suffix.lower().lstrip(".")

    @property
    def size(self) -> int:
        return len(self.content)


def detect_file_type(filename: str | None) -> FileType:
    """
    Detect file type from the filename extension.

    Args:
        filename: Original filename

    Returns:
        Detected FileType, UNKNOWN when the extension is not recognized
    """
    if not filename:
        return FileType.UNKNOWN
    ext = Path(filename).suffix.lower()
    return EXTENSION_TO_FILETYPE.get(ext, FileType.UNKNOWN)


class FileHandler:
    """Handle size checks for uploaded documents."""

    def __init__(self, max_size_bytes: int = 50 * 1024 * 1024):
        self.max_size_bytes = max_size_bytes

    def check_size(self, upload: UploadedFile) -> None:
        """
        Reject files larger than the configured maximum.

        Raises:
            ValueError: If file exceeds max size
        """
        if upload.size > self.max_size_bytes:
            raise ValueError(
                f"File size {upload.size} bytes exceeds maximum "
                f"{self.max_size_bytes} bytes"
            )
