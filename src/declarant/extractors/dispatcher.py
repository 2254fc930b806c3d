"""Route uploaded files to the extractor for their extension."""

import logging

from ..config import get_settings
from ..core.exceptions import ReadError
from ..utils.file_handlers import FileHandler, FileType, UploadedFile, detect_file_type
from .base import BaseExtractor, ExtractionResult
from .text import PlainTextExtractor
from .word import DocxExtractor

logger = logging.getLogger(__name__)


class TextExtractor(BaseExtractor):
    """
    Convert one uploaded file into plain text, dispatching by extension.

    .docx goes through python-docx, .txt is decoded directly, and anything
    else gets best-effort decoding.
    """

    def __init__(
        self,
        docx_extractor: BaseExtractor | None = None,
        text_extractor: BaseExtractor | None = None,
        file_handler: FileHandler | None = None,
    ):
        self.docx_extractor = docx_extractor or DocxExtractor()
        self.text_extractor = text_extractor or PlainTextExtractor()
        self.file_handler = file_handler or FileHandler(get_settings().max_file_size_bytes)

    async def extract(self, upload: UploadedFile) -> ExtractionResult:
        try:
            self.file_handler.check_size(upload)
        except ValueError as e:
            raise ReadError(str(e), details={"filename": upload.filename}) from e

        file_type = detect_file_type(upload.filename)
        logger.debug(f"Reading {upload.filename} as {file_type.value}")

        if file_type == FileType.DOCX:
            return await self.docx_extractor.extract(upload)

        if file_type != FileType.TXT:
            logger.info(f"Unrecognized extension for {upload.filename}, trying plain text")
        return await self.text_extractor.extract(upload)

    def supports_file_type(self, file_type: str) -> bool:
        return self.docx_extractor.supports_file_type(file_type) or self.text_extractor.supports_file_type(
            file_type
        )
