"""Tests for extraction.classifier."""

import pytest

from extraction import DocumentType, classify
from extraction.classifier import OLE2_MAGIC

from conftest import damage_central_directory, make_zip


class TestClassify:
    def test_empty_is_plain(self):
        assert classify(b"") == DocumentType.PLAIN

    def test_text_is_plain(self):
        assert classify(b"Just some notes.\n") == DocumentType.PLAIN

    def test_pdf_header(self):
        assert classify(b"%PDF-1.7\n%\xe2\xe3\xcf\xd3\n") == DocumentType.PDF

    def test_text_mentioning_pdf_header_is_plain(self):
        assert classify(b"The file must start with %PDF-1.7 to be valid.\n") == DocumentType.PLAIN

    def test_pdf_header_after_binary_junk_is_plain(self):
        assert classify(b"\x00" * 100 + b"%PDF-1.4\n") == DocumentType.PLAIN

    @pytest.mark.parametrize("prefix", [b"\n", b"  \r\n", b"\xef\xbb\xbf", b"\xef\xbb\xbf\n"])
    def test_pdf_header_after_bom_or_whitespace(self, prefix):
        assert classify(prefix + b"%PDF-1.4\n") == DocumentType.PDF

    def test_pdf_header_too_late(self):
        assert classify(b" " * 2048 + b"%PDF-1.4\n") == DocumentType.PLAIN

    def test_ole2_is_legacy_word(self):
        assert classify(OLE2_MAGIC + b"\x00" * 512) == DocumentType.LEGACY_WORD

    def test_truncated_ole2_is_plain(self):
        assert classify(OLE2_MAGIC[:4]) == DocumentType.PLAIN

    def test_docx(self, docx_bytes):
        assert classify(docx_bytes) == DocumentType.MODERN_WORD

    def test_zip_with_word_content_type(self):
        content_types = (
            b'<Types><Override PartName="/word/main.xml" ContentType="application/'
            b'vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"/></Types>'
        )
        data = make_zip([("[Content_Types].xml", content_types), ("word/main.xml", b"<w/>")])
        assert classify(data) == DocumentType.MODERN_WORD

    def test_plain_zip_is_archive(self):
        data = make_zip([("notes/", b""), ("notes/a.txt", b"hello")])
        assert classify(data) == DocumentType.ARCHIVE

    def test_other_ooxml_is_archive(self):
        data = make_zip([("[Content_Types].xml", b"<Types/>"), ("xl/workbook.xml", b"<x/>")])
        assert classify(data) == DocumentType.ARCHIVE

    def test_empty_zip_is_archive(self):
        assert classify(make_zip([])) == DocumentType.ARCHIVE

    def test_corrupt_zip_is_archive(self):
        assert classify(b"PK\x03\x04" + b"\x00" * 10) == DocumentType.ARCHIVE

    @pytest.mark.parametrize("data", [b"PK", b"%PD", b"\xd0\xcf"])
    def test_short_prefixes_are_plain(self, data):
        assert classify(data) == DocumentType.PLAIN

    def test_undecodable_entry_name_is_archive(self):
        data = damage_central_directory(make_zip([("notes.txt", b"hello")]))
        assert classify(data) == DocumentType.ARCHIVE
