"""
Text Extractor - Per-format text extraction for uploaded documents

Classifies raw upload bytes by content and dispatches to one extraction
strategy per DocumentType:

    PDF          → DocumentConverter.convert_pdf           (one document)
    LEGACY_WORD  → DocumentConverter.convert_legacy_word   (one document)
    MODERN_WORD  → DocumentConverter.convert_modern_word   (one document)
    ARCHIVE      → zipfile, one document per file entry    (many documents)
    PLAIN        → CharsetNormalizer                       (one document)

Strategies never retry. Converter failures are wrapped in
ExtractionFailedError carrying the operation name; errors from this
package propagate unchanged.

Usage:
    from extraction import TextExtractor

    result = TextExtractor().extract(content, name="report.pdf")
    text = result.documents[0].text
"""

from __future__ import annotations

import io
import logging
import zipfile
from typing import Callable, Optional

from .charset import CharsetNormalizer
from .classifier import ZIP_ERRORS, classify
from .converters import DefaultDocumentConverter, DocumentConverter
from .exceptions import (
    ExtractionFailedError,
    IngestError,
    UnsupportedFormatError,
)
from .models import (
    DocumentType,
    EntryFailure,
    ExtractedDocument,
    ExtractionConfig,
    ExtractionResult,
)

logger = logging.getLogger(__name__)

Strategy = Callable[[bytes, str], ExtractionResult]


class TextExtractor:
    """
    Extracts Unicode text from raw document bytes.

    Args:
        config: Extraction options (encoding allow-list, archive policy).
        converter: Backend for PDF and word-processor formats.
        normalizer: Charset detector for plain text.
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        converter: Optional[DocumentConverter] = None,
        normalizer: Optional[CharsetNormalizer] = None,
    ) -> None:
        self.config = config or ExtractionConfig()
        self.converter = converter or DefaultDocumentConverter(
            join_pdf_lines=self.config.pdf_join_lines,
        )
        self.normalizer = normalizer or CharsetNormalizer(self.config.allowed_encodings)
        self._strategies: dict[DocumentType, Strategy] = {
            DocumentType.PDF: self._extract_pdf,
            DocumentType.LEGACY_WORD: self._extract_legacy_word,
            DocumentType.MODERN_WORD: self._extract_modern_word,
            DocumentType.ARCHIVE: self._extract_archive,
            DocumentType.PLAIN: self._extract_plain,
        }

    def extract(self, content: bytes, name: str) -> ExtractionResult:
        """
        Classify and extract one uploaded artifact.

        Args:
            content: Raw bytes of the upload.
            name: Upload file name, used as the document title.

        Returns:
            ExtractionResult with one document, or one per archive entry.

        Raises:
            UnsupportedFormatError: No strategy for the type, or an archive
                entry is not text.
            UnsupportedEncodingError, DecodeFailureError: Plain-text decoding
                failed.
            ExtractionFailedError: A converter or the archive reader failed.
        """
        document_type = classify(content)
        logger.info("[%s] Content type: %s (%d bytes)", name, document_type.value, len(content))
        return self.extract_as(document_type, content, name)

    def extract_as(self, document_type: DocumentType, content: bytes, name: str) -> ExtractionResult:
        """Extract using the strategy for an already known document type."""
        strategy = self._strategies.get(document_type)
        if strategy is None:
            raise UnsupportedFormatError(document_type=str(document_type), name=name)

        result = strategy(content, name)
        logger.info(
            "[%s] Extracted %d chars from %d document(s)",
            name,
            result.total_chars,
            len(result.documents),
        )
        return result

    # -------------------------------------------------------------------------
    # Strategies
    # -------------------------------------------------------------------------

    def _extract_pdf(self, content: bytes, name: str) -> ExtractionResult:
        text = self._convert("convert_pdf", self.converter.convert_pdf, content)
        return self._single(DocumentType.PDF, name, text)

    def _extract_legacy_word(self, content: bytes, name: str) -> ExtractionResult:
        text = self._convert("convert_legacy_word", self.converter.convert_legacy_word, content)
        return self._single(DocumentType.LEGACY_WORD, name, text)

    def _extract_modern_word(self, content: bytes, name: str) -> ExtractionResult:
        text = self._convert("convert_modern_word", self.converter.convert_modern_word, content)
        return self._single(DocumentType.MODERN_WORD, name, text)

    def _extract_plain(self, content: bytes, name: str) -> ExtractionResult:
        text = self.normalizer.normalize(content)
        return self._single(DocumentType.PLAIN, name, text)

    def _extract_archive(self, content: bytes, name: str) -> ExtractionResult:
        per_entry = self.config.archive_policy == "per_entry"
        documents: list[ExtractedDocument] = []
        failures: list[EntryFailure] = []

        try:
            with zipfile.ZipFile(io.BytesIO(content)) as archive:
                for info in archive.infolist():
                    if info.is_dir():
                        continue
                    try:
                        documents.append(self._read_entry(archive, info))
                    except IngestError as exc:
                        if not per_entry:
                            raise
                        logger.warning("[%s] Skipping entry %s: %s", name, info.filename, exc)
                        failures.append(EntryFailure(name=info.filename, reason=str(exc)))
        except IngestError:
            raise
        except ZIP_ERRORS as exc:
            logger.error("[%s] Failed to read archive: %s", name, exc)
            raise ExtractionFailedError("read_archive", exc) from exc

        return ExtractionResult(
            source_name=name,
            document_type=DocumentType.ARCHIVE,
            documents=documents,
            failures=failures,
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    @staticmethod
    def _read_entry(archive: zipfile.ZipFile, info: zipfile.ZipInfo) -> ExtractedDocument:
        try:
            raw = archive.read(info)
        except ZIP_ERRORS as exc:
            raise ExtractionFailedError(
                "read_archive_entry",
                exc,
                message=f"Failed to read archive entry {info.filename}",
            ) from exc
        try:
            text = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise UnsupportedFormatError(
                "Archive entry is not text",
                name=info.filename,
                details=str(exc),
            ) from exc
        return ExtractedDocument(name=info.filename, text=text)

    @staticmethod
    def _convert(operation: str, convert: Callable[[io.BytesIO], str], content: bytes) -> str:
        try:
            return convert(io.BytesIO(content))
        except IngestError:
            raise
        except Exception as exc:
            logger.error("%s failed: %s", operation, exc)
            raise ExtractionFailedError(operation, exc) from exc

    @staticmethod
    def _single(document_type: DocumentType, name: str, text: str) -> ExtractionResult:
        return ExtractionResult(
            source_name=name,
            document_type=document_type,
            documents=[ExtractedDocument(name=name, text=text)],
        )
