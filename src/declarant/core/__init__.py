"""Core module - models, errors, ingestion and the session pipeline."""

from .exceptions import (
    DeclarantError,
    OracleError,
    OracleResponseError,
    OracleUnavailableError,
    ReadError,
    UnsupportedFormatError,
    ValidationError,
)
from .models import (
    ContractInfo,
    CustomsRecord,
    DocumentRole,
    DocumentSlot,
    ExtractionRequest,
    GoodsItem,
    InvoiceInfo,
    PackingInfo,
    SlotStatus,
)

# IngestionState and DeclarationSession live in .ingestion and .pipeline;
# they import the extractors, which import this package.

__all__ = [
    "ContractInfo",
    "CustomsRecord",
    "DeclarantError",
    "DocumentRole",
    "DocumentSlot",
    "ExtractionRequest",
    "GoodsItem",
    "InvoiceInfo",
    "OracleError",
    "OracleResponseError",
    "OracleUnavailableError",
    "PackingInfo",
    "ReadError",
    "SlotStatus",
    "UnsupportedFormatError",
    "ValidationError",
]
