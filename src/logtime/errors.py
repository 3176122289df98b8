"""Error types and codes shared by the timer, its offset and its format descriptions."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Standardized error codes for timestamp formatting failures."""

    # Construction-time errors
    INVALID_OFFSET = "invalid_offset"
    INVALID_FORMAT_DESCRIPTION = "invalid_format_description"

    # Call-time errors
    FORMATTING_ERROR = "formatting_error"


class LogTimeError(Exception):
    """Base exception class for logtime errors."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        """Initialize the error.

        Args:
            code: Error code identifier
            message: Human-readable error message
            details: Additional error context and data
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.cause = cause


class InvalidOffsetError(LogTimeError):
    """Raised when a UTC offset is out of range or has mixed signs."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize invalid offset error.

        Args:
            message: Description of what is wrong with the offset
            details: Offending components or string
        """
        super().__init__(
            ErrorCode.INVALID_OFFSET,
            message,
            details,
        )


class InvalidFormatDescriptionError(LogTimeError):
    """Raised when a format description template cannot be compiled."""

    def __init__(
        self,
        message: str,
        template: str,
        index: Optional[int] = None,
    ):
        """Initialize invalid format description error.

        Args:
            message: Parse error message
            template: The template being compiled
            index: Character position of the problem, if known
        """
        if index is not None:
            message = f"{message} (at index {index})"
        super().__init__(
            ErrorCode.INVALID_FORMAT_DESCRIPTION,
            message,
            details={"template": template, "index": index},
        )


class FormattingError(LogTimeError):
    """Raised when a timestamp cannot be rendered or written to its sink."""

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        """Initialize formatting error.

        Args:
            message: Description of the failure
            cause: Original exception raised by the renderer or sink
            details: Additional error context
        """
        if cause:
            message += f": {cause}"
        super().__init__(
            ErrorCode.FORMATTING_ERROR,
            message,
            details,
            cause=cause,
        )
