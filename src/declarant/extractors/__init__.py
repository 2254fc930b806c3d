"""Document text extractors."""

from .base import BaseExtractor, ExtractionResult
from .dispatcher import TextExtractor
from .text import PlainTextExtractor
from .word import DocxExtractor

__all__ = [
    "BaseExtractor",
    "DocxExtractor",
    "ExtractionResult",
    "PlainTextExtractor",
    "TextExtractor",
]
