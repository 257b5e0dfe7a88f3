"""
Custom Exceptions for Document Ingestion.

This module defines a hierarchy of exceptions for precise error handling
across classification, text extraction and chunking.

Exception Hierarchy:
    IngestError (base)
    ├── UnsupportedFormatError
    ├── EncodingError
    │   ├── UnsupportedEncodingError
    │   └── DecodeFailureError
    ├── ExtractionFailedError
    └── NoChunksProducedError

None of these errors are retried inside the package. The caller decides
whether a failed document is reported, skipped or retried.

Usage:
    from extraction.exceptions import (
        IngestError,
        UnsupportedEncodingError,
        NoChunksProducedError,
    )

    try:
        results = service.process_file("notes.txt", content)
    except UnsupportedEncodingError as e:
        print(f"Charset not supported: {e.encoding}")
    except IngestError as e:
        print(f"Ingestion failed: {e}")
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# BASE EXCEPTION
# =============================================================================


class IngestError(Exception):
    """
    Base exception for all ingestion-related errors.

    Attributes:
        message: Human-readable error description
        details: Additional technical details (optional)
    """

    def __init__(
        self,
        message: str = "An ingestion error occurred",
        details: Optional[str] = None,
    ):
        self.message = message
        self.details = details

        full_message = message
        if details:
            full_message = f"{message} | Details: {details}"

        super().__init__(full_message)


# =============================================================================
# FORMAT ERRORS
# =============================================================================


class UnsupportedFormatError(IngestError):
    """
    Raised when content has no extraction strategy or cannot be read as text.

    Attributes:
        document_type: The classified type, if known
        name: Document or archive entry name, if known
    """

    def __init__(
        self,
        message: str = "Unsupported document format",
        document_type: Optional[str] = None,
        name: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.document_type = document_type
        self.name = name
        if document_type:
            message = f"{message}: {document_type}"
        if name:
            message = f"{message} [{name}]"
        super().__init__(message, details)


# =============================================================================
# ENCODING ERRORS
# =============================================================================


class EncodingError(IngestError):
    """Base class for charset detection and decoding errors."""

    def __init__(
        self,
        message: str = "Encoding error",
        encoding: Optional[str] = None,
        details: Optional[str] = None,
    ):
        self.encoding = encoding
        super().__init__(message, details)


class UnsupportedEncodingError(EncodingError):
    """
    Raised when the detected charset is outside the allow-list.

    Attributes:
        encoding: The detected encoding name
    """

    def __init__(self, encoding: str):
        super().__init__(
            message=f"Unsupported encoding: {encoding}",
            encoding=encoding,
        )


class DecodeFailureError(EncodingError):
    """
    Raised when bytes cannot be decoded with the detected charset.

    Attributes:
        encoding: The codec that failed
        original_error: The underlying UnicodeDecodeError
    """

    def __init__(
        self,
        encoding: str,
        original_error: Optional[Exception] = None,
    ):
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(
            message=f"Failed to decode content as {encoding}",
            encoding=encoding,
            details=details,
        )


# =============================================================================
# EXTRACTION ERRORS
# =============================================================================


class ExtractionFailedError(IngestError):
    """
    Raised when a document converter or the archive reader fails.

    Attributes:
        operation: Name of the failing operation (e.g. "convert_pdf")
        original_error: The underlying exception
    """

    def __init__(
        self,
        operation: str,
        original_error: Optional[Exception] = None,
        message: Optional[str] = None,
    ):
        self.operation = operation
        self.original_error = original_error
        details = str(original_error) if original_error else None
        super().__init__(message or f"{operation} failed", details)


# =============================================================================
# CHUNKING ERRORS
# =============================================================================


class NoChunksProducedError(IngestError):
    """
    Raised when chunking a document emits zero chunks.

    This happens for documents without sentences and for documents whose
    every sentence exceeds the token budget.

    Attributes:
        title: The document the chunker was working on
    """

    def __init__(self, title: str, details: Optional[str] = None):
        self.title = title
        super().__init__(f"No chunks created for {title!r}", details)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def format_error_chain(error: Exception) -> str:
    """
    Format an exception and its chain for logging.

    Returns a multi-line string showing the error hierarchy.
    """
    lines = []
    current = error
    depth = 0

    while current is not None:
        prefix = "  " * depth + ("└─ " if depth > 0 else "")
        lines.append(f"{prefix}{type(current).__name__}: {current}")

        if getattr(current, "original_error", None) is not None:
            current = current.original_error
            depth += 1
        elif current.__cause__:
            current = current.__cause__
            depth += 1
        else:
            break

    return "\n".join(lines)
