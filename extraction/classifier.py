"""Content-based document type sniffing."""

from __future__ import annotations

import io
import logging
import struct
import zipfile
import zlib

from .models import DocumentType

logger = logging.getLogger(__name__)

PDF_MAGIC = b"%PDF-"
OLE2_MAGIC = b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1"
ZIP_MAGICS = (b"PK\x03\x04", b"PK\x05\x06")

UTF8_BOM = b"\xef\xbb\xbf"

# Everything zipfile raises for damaged or unsupported containers. Bad
# central-directory names surface as UnicodeDecodeError, a ValueError.
ZIP_ERRORS = (
    zipfile.BadZipFile,
    zipfile.LargeZipFile,
    OSError,
    EOFError,
    RuntimeError,
    ValueError,
    NotImplementedError,
    struct.error,
    zlib.error,
)

_WORD_MAIN_PART = "word/document.xml"
_WORD_CONTENT_TYPE = b"wordprocessingml.document.main+xml"


def classify(content: bytes) -> DocumentType:
    """
    Sniff the document type of raw bytes.

    Never raises: empty, truncated or unrecognised content is PLAIN, and a
    zip that cannot be opened is still an ARCHIVE so the archive strategy
    can report the corruption.
    """
    if not content:
        return DocumentType.PLAIN
    if _is_pdf(content):
        return DocumentType.PDF
    if content.startswith(OLE2_MAGIC):
        return DocumentType.LEGACY_WORD
    if content.startswith(ZIP_MAGICS):
        return _classify_zip(content)
    return DocumentType.PLAIN


def _is_pdf(content: bytes) -> bool:
    """The PDF header may only be preceded by a UTF-8 BOM or whitespace."""
    head = content[:1024]
    if head.startswith(UTF8_BOM):
        head = head[len(UTF8_BOM):]
    return head.lstrip().startswith(PDF_MAGIC)


def _classify_zip(content: bytes) -> DocumentType:
    try:
        with zipfile.ZipFile(io.BytesIO(content)) as archive:
            names = set(archive.namelist())
            if _WORD_MAIN_PART in names:
                return DocumentType.MODERN_WORD
            if "[Content_Types].xml" in names:
                if _WORD_CONTENT_TYPE in archive.read("[Content_Types].xml"):
                    return DocumentType.MODERN_WORD
    except ZIP_ERRORS as exc:
        logger.debug("Zip container could not be inspected: %s", exc)
    return DocumentType.ARCHIVE
