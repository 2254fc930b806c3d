"""Utility modules."""

from .file_handlers import FileHandler, FileType, UploadedFile, detect_file_type

__all__ = ["FileHandler", "FileType", "UploadedFile", "detect_file_type"]
