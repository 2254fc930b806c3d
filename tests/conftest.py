"""Pytest configuration and fixtures."""

import asyncio
import copy
import io

import docx
import pytest

from declarant.core.exceptions import ReadError
from declarant.core.models import CustomsRecord
from declarant.extractors import BaseExtractor, ExtractionResult
from declarant.utils.file_handlers import UploadedFile

SAMPLE_RECORD_DATA = {
    "contractInfo": {
        "contractNumber": "SC-2024-018",
        "date": "2024-03-02",
        "buyer": "上海华东化工有限公司",
        "seller": "Hanwha Solutions Corp.",
        "signingPlace": "Seoul",
    },
    "invoiceInfo": {
        "invoiceNumber": "INV-2024-001",
        "date": "2024-03-10",
        "currency": "USD",
        "totalAmount": 1250,
        "incoterms": "CIF Shanghai",
    },
    "packingInfo": {
        "totalPackages": 20,
        "totalNetWeight": 480,
        "totalGrossWeight": 500,
        "packageType": "袋",
    },
    "goodsList": [
        {
            "hsCode": "3901100000",
            "nameChinese": "聚乙烯树脂",
            "nameEnglish": "Polyethylene Resin",
            "elementString": "品牌:无;型号:LD100;成分:聚乙烯;用途:工业原料",
            "quantity": 500,
            "unit": "千克",
            "unitPrice": 2.5,
            "totalPrice": 1250,
            "netWeight": 480,
            "grossWeight": 500,
            "originCountry": "韩国",
        }
    ],
    "summary": "One polyethylene resin line, documents consistent.",
}


@pytest.fixture
def sample_record_data() -> dict:
    """Raw oracle JSON for the polyethylene resin shipment."""
    return copy.deepcopy(SAMPLE_RECORD_DATA)


@pytest.fixture
def sample_record(sample_record_data) -> CustomsRecord:
    """Create a sample customs record for testing."""
    return CustomsRecord.model_validate(sample_record_data)


@pytest.fixture
def empty_goods_record(sample_record_data) -> CustomsRecord:
    """Record with no goods and no packing aggregates."""
    sample_record_data["goodsList"] = []
    sample_record_data["packingInfo"] = {"packageType": "", "totalPackages": None}
    sample_record_data["invoiceInfo"]["totalAmount"] = None
    return CustomsRecord.model_validate(sample_record_data)


@pytest.fixture
def docx_bytes() -> bytes:
    """A small .docx with one paragraph and one table."""
    document = docx.Document()
    document.add_paragraph("SALES CONTRACT No. SC-2024-018")
    table = document.add_table(rows=2, cols=2)
    table.cell(0, 0).text = "Buyer"
    table.cell(0, 1).text = "Shanghai Huadong Chemical"
    table.cell(1, 0).text = "Seller"
    table.cell(1, 1).text = "Hanwha Solutions"
    output = io.BytesIO()
    document.save(output)
    return output.getvalue()


class FakeExtractor(BaseExtractor):
    """
    Extractor returning the decoded bytes, or failing for names containing "bad".

    Files whose name is registered in `gates` wait for that event first, so a
    test can control the order in which extractions finish.
    """

    def __init__(self):
        self.gates: dict[str, asyncio.Event] = {}
        self.calls: list[str] = []

    async def extract(self, upload: UploadedFile) -> ExtractionResult:
        self.calls.append(upload.filename)
        gate = self.gates.get(upload.filename)
        if gate is not None:
            await gate.wait()
        if "bad" in upload.filename:
            raise ReadError("Failed to parse DOCX file.")
        return ExtractionResult(text=upload.content.decode("utf-8"), source_type="fake")

    def supports_file_type(self, file_type: str) -> bool:
        return True


@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor()


@pytest.fixture
def make_upload():
    """Factory for UTF-8 text uploads."""

    def _make(name: str = "doc.txt", text: str = "content") -> UploadedFile:
        return UploadedFile(filename=name, content=text.encode("utf-8"))

    return _make
