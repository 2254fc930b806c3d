"""LLM prompts for customs extraction."""

from .extraction import (
    OUTPUT_CONTRACT,
    OUTPUT_CONTRACT_VERSION,
    SYSTEM_INSTRUCTION,
    get_extraction_prompt,
)

__all__ = [
    "OUTPUT_CONTRACT",
    "OUTPUT_CONTRACT_VERSION",
    "SYSTEM_INSTRUCTION",
    "get_extraction_prompt",
]
