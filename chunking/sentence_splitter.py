"""
Sentence Splitter for the Chunking Pipeline

Regex-based sentence boundary detection for English prose. Handles common
abbreviations (Mr., Dr., e.g., etc.) without requiring external NLP
libraries, and reports every sentence as a span into the original text.

Design:
- Split at sentence-ending punctuation (.!?) followed by whitespace + uppercase
- Split at blank lines (paragraph breaks), whatever follows
- Protect known abbreviations, initialisms (U.S., e.g.) and list markers (1.)
- Protection swaps each dot for a one-character placeholder, so offsets in
  the protected text are offsets in the original text

Usage:
    from chunking.sentence_splitter import split_sentences

    sentences = split_sentences("This is one. This is two.")
    # ["This is one.", "This is two."]
"""

import re
from typing import Protocol, runtime_checkable

from .models import SentenceSpan

# Placeholder character used to protect dots from sentence splitting.
_DOT_PLACEHOLDER = "\x00"

# Abbreviations that should NOT trigger sentence splits.
_ABBREVIATIONS = {
    # Titles
    "mr", "mrs", "ms", "dr", "prof", "sr", "jr", "st", "rev", "gen", "sen",
    # Common
    "etc", "vs", "approx", "cf", "ca", "al", "dept", "misc",
    # References
    "fig", "figs", "vol", "vols", "p", "pp", "ch", "sec", "eq",
    # Companies
    "inc", "ltd", "co", "corp", "bros",
    # Months (abbreviated)
    "jan", "feb", "mar", "apr", "jun", "jul", "aug", "sep", "sept",
    "oct", "nov", "dec",
}

_ABBREV_PATTERN = re.compile(
    r"(?<!\w)(?:" + "|".join(re.escape(a) for a in sorted(_ABBREVIATIONS)) + r")\.(?=\s)",
    re.IGNORECASE,
)

# Multi-part abbreviations: e.g., i.e., U.S., a.m., Ph.D. (dotted letters)
_MULTI_ABBREV_PATTERN = re.compile(r"(?<!\w)[A-Za-z]\.(?:[A-Za-z]\.)+")

# Numbered list markers at line start: "1. ", "23. "
_LIST_MARKER_PATTERN = re.compile(r"(?m)^[ \t]*\d{1,3}\.(?=\s)")

_BOUNDARY_PATTERN = re.compile(
    r"(?<=[.!?])[\"'”’)\]]*\s+(?=[A-Z0-9\"'“‘(\[])"
    r"|\n[ \t]*\n\s*"
)


@runtime_checkable
class SentenceSegmenter(Protocol):
    """Finds sentence spans in a text."""

    def segment(self, text: str) -> list[SentenceSpan]:
        ...


def _protect_dots(text: str) -> str:
    """Replace dots in abbreviations and special patterns with placeholders."""
    # Order matters: protect multi-part abbreviations first (e.g. before "g.")
    for pattern in (
        _MULTI_ABBREV_PATTERN,
        _ABBREV_PATTERN,
        _LIST_MARKER_PATTERN,
    ):
        text = pattern.sub(lambda m: m.group().replace(".", _DOT_PLACEHOLDER), text)
    return text


class RegexSentenceSegmenter:
    """Default SentenceSegmenter based on punctuation and blank lines."""

    def segment(self, text: str) -> list[SentenceSpan]:
        """
        Split text into sentence spans.

        Args:
            text: Input text to split into sentences.

        Returns:
            Ordered, non-overlapping spans. Each span is trimmed of
            surrounding whitespace; empty/whitespace input returns [].
        """
        if not text or not text.strip():
            return []

        # The placeholder must not collide with NULs already in the text.
        source = text.replace(_DOT_PLACEHOLDER, " ")
        protected = _protect_dots(source)

        spans: list[SentenceSpan] = []
        cursor = 0
        for match in _BOUNDARY_PATTERN.finditer(protected):
            # Keep closing quotes/brackets with the sentence they end.
            piece_end = match.start() + len(match.group()) - len(match.group().lstrip("\"'”’)]"))
            self._append(spans, text, cursor, piece_end)
            cursor = match.end()
        self._append(spans, text, cursor, len(text))
        return spans

    @staticmethod
    def _append(spans: list[SentenceSpan], text: str, start: int, end: int) -> None:
        piece = text[start:end]
        stripped = piece.strip()
        if not stripped:
            return
        offset = start + (len(piece) - len(piece.lstrip()))
        spans.append(SentenceSpan(start=offset, end=offset + len(stripped), text=stripped))


_default_segmenter = RegexSentenceSegmenter()


def split_sentences(text: str) -> list[str]:
    """
    Split text into sentences at proper sentence boundaries.

    Args:
        text: Input text to split into sentences.

    Returns:
        List of sentence strings. Empty/whitespace input returns empty list.
        Each sentence is stripped of leading/trailing whitespace.
    """
    return [span.text for span in _default_segmenter.segment(text)]
