"""
Exceptions raised by the declaration pipeline.

Every failure the user can recover from derives from DeclarantError, so the
session can turn it into a single message without losing its slot state.
"""

from typing import Any


class DeclarantError(Exception):
    """Base exception for all declarant errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ReadError(DeclarantError):
    """A document could not be read into text."""

    def __init__(self, message: str, role: str | None = None, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, details)
        self.role = role


class UnsupportedFormatError(ReadError):
    """The file's bytes do not decode to meaningful text."""

    pass


class ValidationError(DeclarantError):
    """The session is not in a state that allows analysis."""

    pass


class OracleError(DeclarantError):
    """Base exception for failures of the LLM analysis call."""

    pass


class OracleUnavailableError(OracleError):
    """The LLM service could not be reached (credential, network, quota)."""

    pass


class OracleResponseError(OracleError):
    """The LLM service answered with an empty or non-conforming payload."""

    pass
