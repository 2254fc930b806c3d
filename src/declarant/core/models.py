"""Pydantic models for the customs record and the document slots."""

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator

from ..utils.file_handlers import UploadedFile


class DocumentRole(str, Enum):
    """The four trade documents a declaration is built from."""

    CONTRACT = "contract"
    INVOICE = "invoice"
    DESCRIPTION = "description"
    PACKING = "packing"

    @property
    def label(self) -> str:
        """Human-readable name used in messages."""
        return {
            DocumentRole.CONTRACT: "Contract",
            DocumentRole.INVOICE: "Invoice",
            DocumentRole.DESCRIPTION: "Goods Description",
            DocumentRole.PACKING: "Packing List",
        }[self]


class SlotStatus(str, Enum):
    """Lifecycle of one document slot."""

    EMPTY = "empty"
    READING = "reading"
    READY = "ready"
    ERROR = "error"


@dataclass
class DocumentSlot:
    """Holder for one uploaded document and its extracted text."""

    role: DocumentRole
    file: UploadedFile | None = None
    content: str | None = None
    status: SlotStatus = SlotStatus.EMPTY
    error: str | None = None
    # Bumped on every selection; completions from older generations are dropped
    generation: int = 0

    @property
    def is_ready(self) -> bool:
        return self.status == SlotStatus.READY and bool(self.content)


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


# LLMs return null for fields they could not find; the sheets want "".
Text = Annotated[str, BeforeValidator(_none_to_empty)]


class RecordModel(BaseModel):
    """Base for the immutable record parts, keyed by camelCase JSON names."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class ContractInfo(RecordModel):
    """Contract header data."""

    contract_number: Text = Field(default="", alias="contractNumber")
    date: Text = Field(default="")
    buyer: Text = Field(default="", description="Domestic consignee")
    seller: Text = Field(default="", description="Foreign shipper")
    signing_place: Text = Field(default="", alias="signingPlace")


class InvoiceInfo(RecordModel):
    """Commercial invoice header data."""

    invoice_number: Text = Field(default="", alias="invoiceNumber")
    date: Text = Field(default="")
    currency: Text = Field(default="")
    total_amount: Decimal | None = Field(default=None, ge=0, alias="totalAmount")
    incoterms: Text = Field(default="")


class PackingInfo(RecordModel):
    """Packing list aggregates."""

    total_packages: Decimal | None = Field(default=None, ge=0, alias="totalPackages")
    total_net_weight: Decimal | None = Field(default=None, ge=0, alias="totalNetWeight")
    total_gross_weight: Decimal | None = Field(default=None, ge=0, alias="totalGrossWeight")
    package_type: Text = Field(default="", alias="packageType")


class GoodsItem(RecordModel):
    """One declaration line."""

    hs_code: str = Field(..., pattern=r"^\d{6,10}$", alias="hsCode")
    name_chinese: str = Field(..., alias="nameChinese")
    name_english: Text = Field(default="", alias="nameEnglish")
    element_string: Text = Field(
        default="",
        alias="elementString",
        description="Declarable elements string (申报要素)",
    )
    quantity: Decimal = Field(..., ge=0)
    unit: Text = Field(default="", description="Unit in Chinese, e.g. 千克, 个")
    unit_price: Decimal = Field(..., ge=0, alias="unitPrice")
    total_price: Decimal = Field(..., ge=0, alias="totalPrice")
    net_weight: Decimal = Field(default=Decimal("0"), ge=0, alias="netWeight")
    gross_weight: Decimal = Field(default=Decimal("0"), ge=0, alias="grossWeight")
    origin_country: Text = Field(default="", alias="originCountry")

    @field_validator("hs_code", mode="before")
    @classmethod
    def strip_hs_separators(cls, value: Any) -> Any:
        """Accept codes written as 3901.10.0000 or 3901 10 00 00."""
        if isinstance(value, int):
            return str(value)
        if isinstance(value, str):
            return re.sub(r"[.\s-]", "", value)
        return value

    @field_validator("net_weight", "gross_weight", mode="before")
    @classmethod
    def default_missing_weight(cls, value: Any) -> Any:
        return Decimal("0") if value is None else value


class CustomsRecord(RecordModel):
    """
    The structured result of analyzing the four trade documents.

    This is the only input to projection; every sheet is derived from it.
    """

    contract_info: ContractInfo = Field(..., alias="contractInfo")
    invoice_info: InvoiceInfo = Field(..., alias="invoiceInfo")
    packing_info: PackingInfo = Field(..., alias="packingInfo")
    goods_list: tuple[GoodsItem, ...] = Field(..., alias="goodsList")
    summary: Text = Field(...)


class ExtractionRequest(RecordModel):
    """The four document texts of one analysis call."""

    contract_text: str = Field(..., min_length=1)
    invoice_text: str = Field(..., min_length=1)
    description_text: str = Field(..., min_length=1)
    packing_text: str = Field(..., min_length=1)
