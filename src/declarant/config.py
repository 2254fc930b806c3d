"""Configuration management using pydantic-settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # OpenAI
    openai_api_key: str = Field(
        default="",
        description="OpenAI API key",
    )

    # LLM Settings
    llm_model: str = Field(
        default="gpt-4o",
        description="OpenAI model used to analyze the trade documents",
    )
    llm_temperature: float = Field(
        default=0.1,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for the analysis call",
    )
    max_document_chars: int = Field(
        default=10000,
        ge=1000,
        le=200000,
        description="Characters of each document sent to the LLM (prefix is kept)",
    )

    # File Processing
    max_file_size_mb: int = Field(
        default=50,
        ge=1,
        le=500,
        description="Maximum file size in MB",
    )
    output_dir: Path = Field(
        default=Path("exports"),
        description="Directory where generated workbooks are written",
    )

    log_level: str = Field(default="INFO")

    @property
    def max_file_size_bytes(self) -> int:
        """Maximum file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
