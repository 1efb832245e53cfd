"""
Exceptions raised while slicing and resizing sprite sheets.
"""

from typing import Optional


class ProcessingError(Exception):
    """Base exception for frame processing errors."""

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source


class InvalidInputError(ProcessingError):
    """Raised when geometry inputs are missing or out of range."""


class SourceUnreadableError(ProcessingError):
    """Raised when a sprite sheet cannot be opened or decoded."""


class DecodeError(ProcessingError):
    """Raised when an intermediate frame buffer cannot be decoded."""


class OutOfBoundsError(ProcessingError):
    """Raised when a frame rectangle leaves the sheet."""


class EncodeError(ProcessingError):
    """Raised when an image cannot be serialized back to its format."""
