"""
Errors raised while generating the fallback table.

Lookups never raise: misses are reported as None or an empty list.
"""

from typing import Any, Optional


class GenerationError(Exception):
    """Base class for failures that abort a generation run."""

    def __init__(self, message: str, details: Any = None):
        """
        Initialize generation error.

        Args:
            message: Error message
            details: Optional additional details
        """
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details is not None:
            return f"{self.message} ({self.details})"
        return self.message


class FetchError(GenerationError):
    """A dataset could not be downloaded."""

    def __init__(self, url: str, status_code: Optional[int] = None, details: Any = None):
        if status_code is not None:
            message = f"HTTP {status_code}: {url}"
        else:
            message = f"Failed to download {url}"
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code


class SizeLimitExceededError(GenerationError):
    """The serialized table is larger than the allowed budget."""

    def __init__(self, size_bytes: int, limit_bytes: int):
        super().__init__(
            f"Output file size ({size_bytes / 1024:.1f} KB) exceeds limit ({limit_bytes / 1024:.0f} KB)"
        )
        self.size_bytes = size_bytes
        self.limit_bytes = limit_bytes
