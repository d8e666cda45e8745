"""
Custom exceptions for PDF Nine-Up.

This module defines all custom exceptions used throughout the library.
"""


class NineUpException(Exception):
    """Base exception for all PDF Nine-Up errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF nine-up error occurred."


class InputMissingError(NineUpException):
    """Raised when no source document was supplied."""

    @property
    def default_message(self) -> str:
        return "Please choose a PDF file first."


class InvalidPDFError(NineUpException):
    """Raised when the source document cannot be opened as a PDF."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class RasterizationError(NineUpException):
    """Raised when a source page cannot be rendered to an image."""

    def __init__(self, page_index: int, message: str = "") -> None:
        self.page_index = page_index
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return f"Failed to render page {self.page_index + 1}."


class EmbedError(NineUpException):
    """Raised by a document encoder that rejects an image payload."""

    @property
    def default_message(self) -> str:
        return "Image could not be embedded into the output document."


class DecodeError(NineUpException):
    """Raised when image bytes cannot be decoded into pixels."""

    @property
    def default_message(self) -> str:
        return "Image bytes could not be decoded."


class SerializationError(NineUpException):
    """Raised when the output document cannot be written."""

    @property
    def default_message(self) -> str:
        return "Failed to assemble the output PDF."
