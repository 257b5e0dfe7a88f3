"""
Pytest fixtures for extraction, chunking and ingestion tests.
"""

import io
import zipfile

import pytest

from chunking import Chunker, ChunkingConfig, SentenceSpan


class WhitespaceCounter:
    """Deterministic token counter: one token per whitespace-separated word."""

    def __init__(self):
        self.calls = 0

    def count(self, text: str) -> int:
        self.calls += 1
        return len(text.split())


def make_spans(sentences: list[str]) -> list[SentenceSpan]:
    """Lay sentences out space-separated and return their spans."""
    spans = []
    offset = 0
    for sentence in sentences:
        spans.append(SentenceSpan(start=offset, end=offset + len(sentence), text=sentence))
        offset += len(sentence) + 1
    return spans


def make_zip(entries: list[tuple[str, bytes]]) -> bytes:
    """Build a zip archive in memory; names ending in '/' are directories."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, data in entries:
            archive.writestr(name, data)
    return buffer.getvalue()


def damage_central_directory(data: bytes) -> bytes:
    """Flag the last entry name as UTF-8 and overwrite it with invalid bytes."""
    buffer = bytearray(data)
    header = buffer.rindex(b"PK\x01\x02")
    flags = int.from_bytes(buffer[header + 8:header + 10], "little") | 0x0800
    buffer[header + 8:header + 10] = flags.to_bytes(2, "little")
    name_length = int.from_bytes(buffer[header + 28:header + 30], "little")
    buffer[header + 46:header + 46 + name_length] = b"\xff" * name_length
    return bytes(buffer)


@pytest.fixture
def counter():
    return WhitespaceCounter()


@pytest.fixture
def make_chunker(counter):
    """Factory for chunkers using the whitespace token counter."""

    def _make(max_tokens: int = 3, stride_divisor: int = 5) -> Chunker:
        config = ChunkingConfig(max_tokens_per_chunk=max_tokens, stride_divisor=stride_divisor)
        return Chunker(config, counter=counter)

    return _make


@pytest.fixture
def letter_sentences():
    return make_spans(["A.", "B.", "C.", "D.", "E.", "F."])


@pytest.fixture
def docx_bytes():
    """A small .docx with two paragraphs and a table."""
    import docx

    document = docx.Document()
    document.add_paragraph("The first paragraph.")
    document.add_paragraph("The second paragraph.")
    table = document.add_table(rows=1, cols=2)
    table.rows[0].cells[0].text = "Left cell"
    table.rows[0].cells[1].text = "Right cell"
    buffer = io.BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.fixture
def pdf_bytes():
    """A two-page PDF with one line of text per page."""
    import fitz

    doc = fitz.open()
    for line in ("First page text.", "Second page text."):
        page = doc.new_page()
        page.insert_text((72, 72), line)
    data = doc.tobytes()
    doc.close()
    return data
