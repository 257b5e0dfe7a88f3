"""
Data Models for Document Text Extraction.

This module defines the data structures passed between the format
classifier, the per-format extraction strategies and the chunking
pipeline:

    bytes → [classify]  → DocumentType
                ↓
          [TextExtractor] → ExtractedDocument[]
                ↓
          ExtractionResult

Design Principles:
    - Pydantic v2 for validation and serialization
    - One ExtractedDocument per logical document (archives yield many)
    - Archive entry failures are only ever reported, never hidden

Usage:
    from extraction import TextExtractor

    result = TextExtractor().extract(content, name="upload.zip")
    for doc in result.documents:
        print(doc.name, len(doc.text))
"""

from __future__ import annotations

import json
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, computed_field, field_validator

from .charset import DEFAULT_ALLOWED_ENCODINGS, normalize_encoding_name


# =============================================================================
# ENUMS
# =============================================================================


class DocumentType(str, Enum):
    """
    Content-sniffed document type.

    Every byte sequence maps to exactly one member; anything that is not
    recognised is PLAIN and handled by charset detection.
    """

    ARCHIVE = "archive"
    LEGACY_WORD = "legacy-word-binary"
    MODERN_WORD = "modern-word-xml"
    PDF = "pdf"
    PLAIN = "plain-or-unknown"


ArchivePolicy = Literal["all_or_nothing", "per_entry"]


# =============================================================================
# CONFIGURATION
# =============================================================================


class ExtractionConfig(BaseModel):
    """
    Configuration for the text extraction pipeline.
    """

    allowed_encodings: tuple[str, ...] = Field(
        DEFAULT_ALLOWED_ENCODINGS,
        description="Legacy (non-Unicode) encodings plain text may be decoded from",
    )
    archive_policy: ArchivePolicy = Field(
        "all_or_nothing",
        description=(
            "'all_or_nothing' fails the whole archive on one unreadable entry; "
            "'per_entry' skips the entry and records it in ExtractionResult.failures"
        ),
    )
    pdf_join_lines: bool = Field(
        True,
        description="Replace newlines inside a PDF page with spaces",
    )

    @field_validator("allowed_encodings")
    @classmethod
    def _normalize_encodings(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(normalize_encoding_name(name) for name in value)


# =============================================================================
# RESULTS
# =============================================================================


class ExtractedDocument(BaseModel):
    """A single logical document and its extracted text."""

    name: str = Field(
        ...,
        description="Upload file name or archive entry path",
    )
    text: str = Field(
        "",
        description="Extracted Unicode text",
    )


class EntryFailure(BaseModel):
    """An archive entry that was skipped under the per-entry policy."""

    name: str
    reason: str


class ExtractionResult(BaseModel):
    """
    Complete result of extracting one uploaded artifact.

    Single documents hold one ExtractedDocument; archives hold one per
    non-directory entry in archive order.
    """

    source_name: str = Field(
        ...,
        description="Name of the uploaded artifact",
    )
    document_type: DocumentType = Field(
        ...,
        description="Type the classifier assigned to the content",
    )
    documents: list[ExtractedDocument] = Field(
        default_factory=list,
        description="Extracted documents",
    )
    failures: list[EntryFailure] = Field(
        default_factory=list,
        description="Archive entries skipped under the per-entry policy",
    )
    extracted_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="Extraction timestamp",
    )

    @computed_field
    @property
    def total_chars(self) -> int:
        """Total number of characters extracted."""
        return sum(len(d.text) for d in self.documents)

    @property
    def is_container(self) -> bool:
        return self.document_type == DocumentType.ARCHIVE

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json")

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    def save(self, path: str) -> None:
        """Save extraction result to a JSON file."""
        Path(path).write_text(self.to_json(), encoding="utf-8")

    @classmethod
    def load(cls, path: str) -> "ExtractionResult":
        """Load extraction result from a JSON file."""
        data = json.loads(Path(path).read_text(encoding="utf-8"))
        return cls.model_validate(data)
