"""
Extraction - Content-sniffed text extraction for uploaded documents

Turns raw upload bytes into Unicode text. Supported inputs:

- PDF (PyMuPDF)
- Legacy Word .doc (antiword)
- Word .docx (python-docx)
- Zip archives of text documents (one document per entry)
- Plain text in any Unicode encoding or an allow-listed legacy charset

Quick Start:
    from extraction import TextExtractor

    extractor = TextExtractor()
    result = extractor.extract(content, name="upload.zip")

    for doc in result.documents:
        print(f"{doc.name}: {len(doc.text)} chars")
"""

__version__ = "1.0.0"

from .charset import CharsetNormalizer, DEFAULT_ALLOWED_ENCODINGS
from .classifier import classify
from .converters import DefaultDocumentConverter, DocumentConverter
from .extractor import TextExtractor
from .models import (
    DocumentType,
    EntryFailure,
    ExtractedDocument,
    ExtractionConfig,
    ExtractionResult,
)
from .exceptions import (
    IngestError,
    UnsupportedFormatError,
    EncodingError,
    UnsupportedEncodingError,
    DecodeFailureError,
    ExtractionFailedError,
    NoChunksProducedError,
    format_error_chain,
)

__all__ = [
    "__version__",
    # Classification
    "classify",
    "DocumentType",
    # Extraction
    "TextExtractor",
    "CharsetNormalizer",
    "DEFAULT_ALLOWED_ENCODINGS",
    "DocumentConverter",
    "DefaultDocumentConverter",
    # Models
    "ExtractedDocument",
    "EntryFailure",
    "ExtractionConfig",
    "ExtractionResult",
    # Exceptions
    "IngestError",
    "UnsupportedFormatError",
    "EncodingError",
    "UnsupportedEncodingError",
    "DecodeFailureError",
    "ExtractionFailedError",
    "NoChunksProducedError",
    "format_error_chain",
]
