"""
Document conversion backends.

Each converter turns one binary document format into plain Unicode text:

- PDF: PyMuPDF (fitz), page by page, fail-fast on any page
- .docx: python-docx paragraphs and table cells
- .doc: the ``antiword`` command-line tool

The TextExtractor only depends on the DocumentConverter protocol, so a
deployment can swap in another engine without touching the dispatch code.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import tempfile
from typing import BinaryIO, Protocol, runtime_checkable

import docx
import fitz  # PyMuPDF

from .exceptions import ExtractionFailedError

logger = logging.getLogger(__name__)


@runtime_checkable
class DocumentConverter(Protocol):
    """Converts binary word-processor and PDF documents to text."""

    def convert_legacy_word(self, stream: BinaryIO) -> str:
        ...

    def convert_modern_word(self, stream: BinaryIO) -> str:
        ...

    def convert_pdf(self, stream: BinaryIO) -> str:
        ...


class DefaultDocumentConverter:
    """
    Converter backed by PyMuPDF, python-docx and antiword.

    Args:
        join_pdf_lines: Replace newlines inside a PDF page with spaces.
        antiword_path: Executable used for legacy .doc files.
        timeout: Seconds antiword may run before it is killed.
    """

    def __init__(
        self,
        join_pdf_lines: bool = True,
        antiword_path: str = "antiword",
        timeout: float = 60.0,
    ) -> None:
        self.join_pdf_lines = join_pdf_lines
        self.antiword_path = antiword_path
        self.timeout = timeout

    def convert_pdf(self, stream: BinaryIO) -> str:
        data = stream.read()
        parts: list[str] = []
        with fitz.open(stream=data, filetype="pdf") as doc:
            for index in range(doc.page_count):
                try:
                    page_text = doc.load_page(index).get_text("text")
                except Exception as exc:
                    raise ExtractionFailedError(
                        "convert_pdf",
                        exc,
                        message=f"Failed to extract text from page {index + 1}",
                    ) from exc
                if self.join_pdf_lines:
                    page_text = page_text.replace("\n", " ")
                logger.debug("PDF page %d: %d chars", index + 1, len(page_text))
                parts.append(page_text)
        return "".join(parts).strip()

    def convert_modern_word(self, stream: BinaryIO) -> str:
        document = docx.Document(stream)
        lines = [p.text for p in document.paragraphs if p.text.strip()]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells if cell.text.strip()]
                if cells:
                    lines.append(" ".join(cells))
        return "\n".join(lines)

    def convert_legacy_word(self, stream: BinaryIO) -> str:
        executable = shutil.which(self.antiword_path)
        if executable is None:
            raise FileNotFoundError(f"antiword executable not found: {self.antiword_path}")

        with tempfile.TemporaryDirectory() as tmp_dir:
            path = os.path.join(tmp_dir, "document.doc")
            with open(path, "wb") as f:
                f.write(stream.read())
            completed = subprocess.run(
                [executable, "-m", "UTF-8.txt", "-w", "0", path],
                capture_output=True,
                check=True,
                timeout=self.timeout,
            )
        return completed.stdout.decode("utf-8", errors="replace").strip()
