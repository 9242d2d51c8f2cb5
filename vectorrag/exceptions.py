"""Shared exception hierarchy for the vector-rag services."""
from __future__ import annotations

from typing import Optional


class PlatformError(Exception):
    """Base exception for domain specific failures."""

    public_message = "Error processing request."


class ValidationError(PlatformError):
    """Raised when caller supplied input is missing or unusable."""

    public_message = "Invalid request."


class PromptTooLongError(ValidationError):
    """Raised when the assembled answer prompt exceeds the character limit."""

    public_message = "Prompt is too long."

    def __init__(self, length: int, limit: int) -> None:
        super().__init__(f"Prompt is too long: {length} characters (limit {limit})")
        self.length = length
        self.limit = limit


class ProviderError(PlatformError):
    """Raised when an embedding or answer provider call fails."""

    public_message = "Error calling model provider."

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class StorageError(PlatformError):
    """Raised when the document store cannot be read or written."""

    public_message = "Error accessing document store."

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause


class DimensionMismatch(PlatformError):
    """Raised when a vector does not match the index dimensionality."""

    public_message = "Vector dimension mismatch."

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Expected a vector of length {expected}, got {actual}")
        self.expected = expected
        self.actual = actual


__all__ = [
    "PlatformError",
    "ValidationError",
    "PromptTooLongError",
    "ProviderError",
    "StorageError",
    "DimensionMismatch",
]
