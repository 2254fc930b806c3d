"""Customs declarant: trade documents to a Chinese customs declaration workbook."""

import logging

from .core.pipeline import DeclarationSession

__version__ = "0.1.0"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str | int = logging.INFO) -> None:
    """Configure root logging for scripts; library code only creates loggers."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = ["DeclarationSession", "configure_logging", "__version__"]
