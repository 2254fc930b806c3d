"""LLM-based extraction of the customs record using OpenAI."""

import json
import logging
from typing import Any

import openai
from openai import AsyncOpenAI
from pydantic import ValidationError as SchemaValidationError

from ..config import Settings, get_settings
from ..core.exceptions import OracleResponseError, OracleUnavailableError
from ..core.models import CustomsRecord, ExtractionRequest
from .prompts import SYSTEM_INSTRUCTION, get_extraction_prompt

logger = logging.getLogger(__name__)


def truncate_document(text: str, limit: int) -> str:
    """Keep the first `limit` characters; headers and totals usually come first."""
    return text[:limit]


class LLMExtractor:
    """Turn the four trade documents into a CustomsRecord with one OpenAI call."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: AsyncOpenAI | None = None,
        settings: Settings | None = None,
    ):
        """
        Initialize LLM extractor.

        Args:
            api_key: OpenAI API key. If None, uses settings.
            model: Model to use. If None, uses settings.
            client: Pre-built client (tests). If None, created on first use.
            settings: Settings to read defaults from. If None, uses get_settings().
        """
        settings = settings or get_settings()
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model = model or settings.llm_model
        self.temperature = settings.llm_temperature
        self.max_document_chars = settings.max_document_chars
        self._client = client

    @property
    def has_credentials(self) -> bool:
        """Whether an API key is configured."""
        return bool(self.api_key) or self._client is not None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-load OpenAI client."""
        if self._client is None:
            # One request per analysis; resubmitting is the caller's decision
            self._client = AsyncOpenAI(api_key=self.api_key, max_retries=0)
        return self._client

    async def analyze_request(self, request: ExtractionRequest) -> CustomsRecord:
        """Analyze the texts collected by IngestionState.build_request()."""
        return await self.analyze(
            contract_text=request.contract_text,
            invoice_text=request.invoice_text,
            description_text=request.description_text,
            packing_text=request.packing_text,
        )

    async def analyze(
        self,
        contract_text: str,
        invoice_text: str,
        description_text: str,
        packing_text: str,
    ) -> CustomsRecord:
        """
        Extract the customs record from the four document texts.

        Each text is cut to its first max_document_chars characters before
        being sent.

        Returns:
            The validated CustomsRecord

        Raises:
            OracleUnavailableError: Missing API key, or the request itself failed
            OracleResponseError: Empty, non-JSON or non-conforming response
        """
        if not self.has_credentials:
            raise OracleUnavailableError(
                "OpenAI API key is not configured. Set OPENAI_API_KEY in the deployment environment."
            )

        texts = [
            truncate_document(text, self.max_document_chars)
            for text in (contract_text, invoice_text, description_text, packing_text)
        ]
        prompt = get_extraction_prompt(*texts)

        logger.info(
            f"Analyzing documents with {self.model} "
            f"(chars: {', '.join(str(len(text)) for text in texts)})"
        )

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_INSTRUCTION},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.temperature,
                response_format={"type": "json_object"},
            )
        except openai.OpenAIError as e:
            logger.error(f"LLM request failed: {type(e).__name__}")
            raise OracleUnavailableError(
                "Failed to reach the AI service. Please check your API key configuration and network connection."
            ) from e

        json_text = response.choices[0].message.content if response.choices else None
        record = self._parse_record(json_text)

        logger.info(f"Extracted {len(record.goods_list)} goods item(s)")
        return record

    def _parse_record(self, json_text: str | None) -> CustomsRecord:
        """Parse and validate the raw response text."""
        if not json_text or not json_text.strip():
            raise OracleResponseError("No response from AI. Please try again.")

        try:
            data: Any = json.loads(json_text)
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse LLM response as JSON: {e}")
            raise OracleResponseError(
                "The AI response was not valid JSON. Please try again."
            ) from e

        if not isinstance(data, dict):
            raise OracleResponseError("The AI response was not a JSON object. Please try again.")

        try:
            return CustomsRecord.model_validate(data)
        except SchemaValidationError as e:
            problems = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
            logger.error(f"LLM response does not match the record schema: {problems}")
            raise OracleResponseError(
                "The AI response was incomplete or malformed. Please try again.",
                details={"fields": problems},
            ) from e
