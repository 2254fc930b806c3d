"""Word (.docx) document extractor."""

import asyncio
import io
import logging

import docx

from ..core.exceptions import ReadError
from ..utils.file_handlers import FileType, UploadedFile
from .base import BaseExtractor, ExtractionResult

logger = logging.getLogger(__name__)


class DocxExtractor(BaseExtractor):
    """Extract raw text from .docx files using python-docx."""

    SUPPORTED_TYPES = {FileType.DOCX}

    async def extract(self, upload: UploadedFile) -> ExtractionResult:
        """
        Extract paragraph and table text from a .docx file.

        Parsing runs in a worker thread so several documents can be read at once.

        Raises:
            ReadError: If the bytes are not a readable .docx package
        """
        try:
            text, table_count = await asyncio.to_thread(self._read_text, upload.content)
        except Exception as e:
            logger.error(f"Error extracting text from docx {upload.filename}: {e}")
            raise ReadError("Failed to parse DOCX file.", details={"filename": upload.filename}) from e

        warnings = []
        if table_count:
            warnings.append(f"Appended text of {table_count} table(s) after the body")

        return ExtractionResult(text=text, warnings=warnings, source_type="docx")

    def _read_text(self, content: bytes) -> tuple[str, int]:
        document = docx.Document(io.BytesIO(content))

        lines = [paragraph.text for paragraph in document.paragraphs]

        # Trade documents keep most of their figures in tables
        for table in document.tables:
            for row in table.rows:
                cells = []
                for cell in row.cells:
                    value = cell.text.strip()
                    # Merged cells repeat the same text across the span
                    if value and (not cells or cells[-1] != value):
                        cells.append(value)
                if cells:
                    lines.append("\t".join(cells))

        return "\n".join(lines).strip(), len(document.tables)

    def supports_file_type(self, file_type: str) -> bool:
        """Check if this extractor supports the given file type."""
        try:
            ft = FileType(file_type)
            return ft in self.SUPPORTED_TYPES
        except ValueError:
            return False
