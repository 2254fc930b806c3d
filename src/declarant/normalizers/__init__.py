"""Normalizers - LLM extraction of the customs record."""

from .llm_extractor import LLMExtractor, truncate_document

__all__ = ["LLMExtractor", "truncate_document"]
