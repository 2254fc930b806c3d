"""Plain text extractor with best-effort decoding."""

import logging

from ..core.exceptions import UnsupportedFormatError
from ..utils.file_handlers import FileType, UploadedFile
from .base import BaseExtractor, ExtractionResult

logger = logging.getLogger(__name__)


class PlainTextExtractor(BaseExtractor):
    """
    Decode text files.

    Used for .txt and as the fallback for unrecognized extensions, where the
    decoded result must also look like text rather than binary data.
    """

    SUPPORTED_TYPES = {FileType.TXT, FileType.UNKNOWN}

    # UTF-8 first, then the Chinese national charset (superset of GBK/GB2312)
    ENCODINGS = ("utf-8-sig", "gb18030")

    # Share of printable characters below which decoded bytes count as binary
    MIN_PRINTABLE_RATIO = 0.9

    async def extract(self, upload: UploadedFile) -> ExtractionResult:
        """
        Decode the file bytes into text.

        Raises:
            UnsupportedFormatError: If no encoding yields meaningful text
        """
        text, encoding = self._decode(upload.content)

        if text is None or not self._looks_like_text(text):
            ext = upload.extension or "(none)"
            logger.warning(f"Could not decode {upload.filename} as text")
            raise UnsupportedFormatError(
                f"Unsupported file type: .{ext}",
                details={"filename": upload.filename},
            )

        warnings = []
        if encoding != self.ENCODINGS[0]:
            warnings.append(f"Decoded as {encoding}")

        return ExtractionResult(text=text, warnings=warnings, source_type="text")

    def _decode(self, content: bytes) -> tuple[str | None, str | None]:
        for encoding in self.ENCODINGS:
            try:
                return content.decode(encoding), encoding
            except UnicodeDecodeError:
                continue
        return None, None

    def _looks_like_text(self, text: str) -> bool:
        if "\x00" in text:
            return False
        if not text:
            return True
        printable = sum(1 for ch in text if ch.isprintable() or ch in "\r\n\t")
        return printable / len(text) >= self.MIN_PRINTABLE_RATIO

    def supports_file_type(self, file_type: str) -> bool:
        """Check if this extractor supports the given file type."""
        try:
            ft = FileType(file_type)
            return ft in self.SUPPORTED_TYPES
        except ValueError:
            return False
