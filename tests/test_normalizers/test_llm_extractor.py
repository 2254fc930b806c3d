"""Tests for the OpenAI-backed customs record extraction."""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import openai
import pytest

from declarant.config import Settings
from declarant.core.exceptions import OracleResponseError, OracleUnavailableError
from declarant.core.models import CustomsRecord, ExtractionRequest
from declarant.normalizers import LLMExtractor, truncate_document
from declarant.normalizers.prompts import OUTPUT_CONTRACT_VERSION, SYSTEM_INSTRUCTION


def make_settings(**overrides) -> Settings:
    values = {"openai_api_key": "test-key", "llm_model": "gpt-4o", "max_document_chars": 10000}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_mock_response(content: str | None):
    """Create a mock chat completion response."""
    mock_message = MagicMock()
    mock_message.content = content
    mock_choice = MagicMock()
    mock_choice.message = mock_message
    mock_response = MagicMock()
    mock_response.choices = [mock_choice]
    return mock_response


def _request_error() -> httpx.Request:
    return httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class TestLLMExtractor:
    """Test cases for LLMExtractor."""

    def setup_method(self):
        """Setup test fixtures."""
        self.extractor = LLMExtractor(settings=make_settings())

    async def _analyze(self, mock_create, *texts):
        texts = texts or ("contract", "invoice", "description", "packing")
        with patch.object(self.extractor.client.chat.completions, "create", new=mock_create):
            return await self.extractor.analyze(*texts)

    @pytest.mark.asyncio
    async def test_well_formed_response_returns_record(self, sample_record_data):
        mock_create = AsyncMock(return_value=make_mock_response(json.dumps(sample_record_data)))

        record = await self._analyze(mock_create)

        assert isinstance(record, CustomsRecord)
        assert record.contract_info.seller == "Hanwha Solutions Corp."
        assert record.invoice_info.currency == "USD"
        assert record.packing_info.total_packages == 20
        assert len(record.goods_list) == 1
        assert record.summary
        mock_create.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_request_shape(self, sample_record_data):
        mock_create = AsyncMock(return_value=make_mock_response(json.dumps(sample_record_data)))

        await self._analyze(mock_create, "CONTRACT-TEXT", "INVOICE-TEXT", "DESC-TEXT", "PACKING-TEXT")

        kwargs = mock_create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["response_format"] == {"type": "json_object"}
        assert "stream" not in kwargs
        assert "tools" not in kwargs

        system, user = kwargs["messages"]
        assert system == {"role": "system", "content": SYSTEM_INSTRUCTION}
        assert user["role"] == "user"
        for text in ("CONTRACT-TEXT", "INVOICE-TEXT", "DESC-TEXT", "PACKING-TEXT"):
            assert text in user["content"]
        assert user["content"].index("CONTRACT-TEXT") < user["content"].index("PACKING-TEXT")
        assert f"output contract v{OUTPUT_CONTRACT_VERSION}" in user["content"]
        assert '"elementString"' in user["content"]

    @pytest.mark.asyncio
    async def test_documents_truncated_to_prefix(self, sample_record_data):
        mock_create = AsyncMock(return_value=make_mock_response(json.dumps(sample_record_data)))
        head = "发票" * 5000
        long_invoice = head + "TRAILING-DETAIL"

        await self._analyze(mock_create, "contract", long_invoice, "description", "packing")

        prompt = mock_create.await_args.kwargs["messages"][1]["content"]
        assert len(head) == 10000
        assert head in prompt
        assert "TRAILING-DETAIL" not in prompt

    def test_truncate_document(self):
        assert truncate_document("abcdef", 3) == "abc"
        assert truncate_document("ab", 3) == "ab"

    @pytest.mark.asyncio
    async def test_missing_top_level_key_raises_response_error(self, sample_record_data):
        del sample_record_data["packingInfo"]
        mock_create = AsyncMock(return_value=make_mock_response(json.dumps(sample_record_data)))

        with pytest.raises(OracleResponseError) as exc_info:
            await self._analyze(mock_create)

        assert "packingInfo" in exc_info.value.details["fields"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", [None, "", "   "])
    async def test_empty_response_raises_response_error(self, content):
        mock_create = AsyncMock(return_value=make_mock_response(content))

        with pytest.raises(OracleResponseError):
            await self._analyze(mock_create)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("content", ["not json at all", "[1, 2, 3]"])
    async def test_unparseable_response_raises_response_error(self, content):
        mock_create = AsyncMock(return_value=make_mock_response(content))

        with pytest.raises(OracleResponseError):
            await self._analyze(mock_create)

    @pytest.mark.asyncio
    async def test_connection_error_raises_unavailable(self):
        mock_create = AsyncMock(side_effect=openai.APIConnectionError(request=_request_error()))

        with pytest.raises(OracleUnavailableError) as exc_info:
            await self._analyze(mock_create)

        assert "API key" in exc_info.value.message
        assert "test-key" not in exc_info.value.message

    @pytest.mark.asyncio
    async def test_auth_error_does_not_leak_key(self):
        response = httpx.Response(401, request=_request_error())
        error = openai.AuthenticationError("Incorrect API key provided: test-key", response=response, body=None)
        mock_create = AsyncMock(side_effect=error)

        with pytest.raises(OracleUnavailableError) as exc_info:
            await self._analyze(mock_create)

        assert "test-key" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_request(self):
        extractor = LLMExtractor(settings=make_settings(openai_api_key=""))

        assert not extractor.has_credentials
        with pytest.raises(OracleUnavailableError) as exc_info:
            await extractor.analyze("a", "b", "c", "d")

        assert "OPENAI_API_KEY" in exc_info.value.message
        assert extractor._client is None

    @pytest.mark.asyncio
    async def test_analyze_request(self, sample_record_data):
        mock_create = AsyncMock(return_value=make_mock_response(json.dumps(sample_record_data)))
        request = ExtractionRequest(
            contract_text="c", invoice_text="i", description_text="d", packing_text="p"
        )

        with patch.object(self.extractor.client.chat.completions, "create", new=mock_create):
            record = await self.extractor.analyze_request(request)

        assert record.invoice_info.invoice_number == "INV-2024-001"
        mock_create.assert_awaited_once()

    def test_explicit_arguments_override_settings(self):
        extractor = LLMExtractor(api_key="other-key", model="gpt-4o-mini", settings=make_settings())

        assert extractor.api_key == "other-key"
        assert extractor.model == "gpt-4o-mini"
