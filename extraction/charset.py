"""
Charset detection and transcoding for plain-text uploads.

Uses charset-normalizer to guess the encoding of bytes whose encoding the
caller does not know. Unicode encodings are decoded directly; anything else
must be on an explicit allow-list of legacy encodings, otherwise the
content is rejected instead of being silently mis-decoded.

Usage:
    from extraction.charset import CharsetNormalizer

    text = CharsetNormalizer().normalize(raw_bytes)
"""

from __future__ import annotations

import codecs
import logging
from typing import Iterable, Optional

from charset_normalizer import from_bytes

from .exceptions import DecodeFailureError, UnsupportedEncodingError

logger = logging.getLogger(__name__)

# Single-byte Western European encodings accepted out of the box.
DEFAULT_ALLOWED_ENCODINGS = ("iso8859_1", "cp1252")

_UNICODE_ENCODINGS = frozenset({
    "utf-8",
    "utf-8-sig",
    "utf-16",
    "utf-16-le",
    "utf-16-be",
    "utf-32",
    "utf-32-le",
    "utf-32-be",
})


def normalize_encoding_name(name: str) -> str:
    """Return the canonical codec name ("latin_1" -> "iso8859-1")."""
    try:
        return codecs.lookup(name).name
    except LookupError:
        return name.strip().lower()


class CharsetNormalizer:
    """
    Detects the charset of raw bytes and returns canonical Unicode text.

    Args:
        allowed_encodings: Legacy encodings that may be transcoded. Unicode
            encodings are always accepted.
    """

    def __init__(self, allowed_encodings: Optional[Iterable[str]] = None) -> None:
        names = DEFAULT_ALLOWED_ENCODINGS if allowed_encodings is None else allowed_encodings
        self.allowed_encodings = frozenset(normalize_encoding_name(n) for n in names)

    def detect(self, content: bytes) -> Optional[str]:
        """Best-guess canonical encoding name, or None if nothing fits."""
        best = from_bytes(content).best()
        if best is None:
            return None
        return normalize_encoding_name(best.encoding)

    def _detect_allowed(self, content: bytes) -> Optional[str]:
        """Repeat detection restricted to the allow-list."""
        if not self.allowed_encodings:
            return None
        best = from_bytes(content, cp_isolation=sorted(self.allowed_encodings)).best()
        if best is None:
            return None
        encoding = normalize_encoding_name(best.encoding)
        return encoding if encoding in self.allowed_encodings else None

    def normalize(self, content: bytes) -> str:
        """
        Decode bytes of unknown encoding.

        Raises:
            UnsupportedEncodingError: Detected charset is not allowed, or no
                charset could be detected at all.
            DecodeFailureError: Bytes are malformed for the detected charset.
        """
        if not content:
            return ""

        encoding = self.detect(content)
        logger.debug("Detected charset %s for %d bytes", encoding, len(content))

        if encoding is None or (
            encoding != "ascii"
            and encoding not in _UNICODE_ENCODINGS
            and encoding not in self.allowed_encodings
        ):
            # Single-byte codepages overlap heavily; cp1252 text is often
            # reported as cp1250 or similar.
            fallback = self._detect_allowed(content)
            if fallback is None:
                logger.warning("Rejected content with unsupported charset %s", encoding)
                raise UnsupportedEncodingError(encoding or "unknown")
            logger.debug("Charset %s not allowed, decoding as %s", encoding, fallback)
            encoding = fallback

        if encoding == "ascii":
            # ASCII is a strict subset of UTF-8.
            encoding = "utf-8"

        try:
            return content.decode(encoding)
        except UnicodeDecodeError as exc:
            raise DecodeFailureError(encoding, exc) from exc
