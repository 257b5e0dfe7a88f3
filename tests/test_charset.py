"""Tests for extraction.charset: detection and allow-listed transcoding."""

from unittest.mock import Mock, patch

import pytest

from extraction.charset import CharsetNormalizer, normalize_encoding_name
from extraction.exceptions import DecodeFailureError, UnsupportedEncodingError


@pytest.fixture
def detected():
    """Patch charset detection to report a fixed encoding."""

    def _detected(encoding):
        patcher = patch("extraction.charset.from_bytes")
        mock = patcher.start()
        best = None if encoding is None else Mock(encoding=encoding)
        mock.return_value.best.return_value = best
        return mock

    yield _detected
    patch.stopall()


class TestNormalizeEncodingName:
    def test_aliases_collapse(self):
        assert normalize_encoding_name("latin_1") == normalize_encoding_name("ISO-8859-1")
        assert normalize_encoding_name("utf_8") == "utf-8"

    def test_unknown_name_lowercased(self):
        assert normalize_encoding_name(" X-Custom ") == "x-custom"


class TestNormalize:
    def test_empty_content(self):
        assert CharsetNormalizer().normalize(b"") == ""

    def test_utf8_text(self):
        text = "Größe und Übergänge über die Straße, schön grün."
        assert CharsetNormalizer().normalize(text.encode("utf-8")) == text

    def test_ascii_decoded_as_utf8(self, detected):
        detected("ascii")
        assert CharsetNormalizer().normalize(b"hello world") == "hello world"

    def test_cp1252_transcoded(self, detected):
        detected("cp1252")
        assert CharsetNormalizer().normalize(b"caf\xe9") == "café"

    def test_latin_1_allowed_by_default(self, detected):
        detected("latin_1")
        assert CharsetNormalizer().normalize(b"na\xefve") == "naïve"

    def test_utf16_always_allowed(self, detected):
        detected("utf_16")
        content = "hello".encode("utf-16")
        assert CharsetNormalizer(allowed_encodings=[]).normalize(content) == "hello"

    def test_disallowed_charset_rejected(self, detected):
        detected("shift_jis")
        with pytest.raises(UnsupportedEncodingError) as exc_info:
            CharsetNormalizer().normalize(b"\x82\xa0")
        assert exc_info.value.encoding == "shift_jis"
        assert str(exc_info.value) == "Unsupported encoding: shift_jis"

    def test_custom_allow_list(self, detected):
        detected("shift_jis")
        normalizer = CharsetNormalizer(allowed_encodings=["Shift_JIS"])
        assert normalizer.normalize("あ".encode("shift_jis")) == "あ"

    def test_empty_allow_list_rejects_legacy(self, detected):
        detected("cp1252")
        with pytest.raises(UnsupportedEncodingError):
            CharsetNormalizer(allowed_encodings=[]).normalize(b"caf\xe9")

    def test_nothing_detected(self, detected):
        detected(None)
        with pytest.raises(UnsupportedEncodingError) as exc_info:
            CharsetNormalizer().normalize(b"\x00\x01\x02")
        assert exc_info.value.encoding == "unknown"

    def test_malformed_bytes(self, detected):
        detected("utf_8")
        with pytest.raises(DecodeFailureError) as exc_info:
            CharsetNormalizer().normalize(b"abc\xff\xfe")
        assert exc_info.value.encoding == "utf-8"
        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)


class TestDetect:
    def test_returns_canonical_name(self, detected):
        detected("utf_8")
        assert CharsetNormalizer().detect(b"abc") == "utf-8"

    def test_returns_none_when_undetectable(self, detected):
        detected(None)
        assert CharsetNormalizer().detect(b"abc") is None


WESTERN_SAMPLES = [
    "Café crème à la carte, naïve façade. Le garçon a déjà apporté le gâteau à la fenêtre.",
    "Die Größe der Straße überrascht. Müller und Schäfer gehen früh über die Brücke.",
]


class TestWesternEuropeanDetection:
    """Real detection, no mocks: single-byte Western text must not be rejected."""

    @pytest.mark.parametrize("text", WESTERN_SAMPLES)
    @pytest.mark.parametrize("codec", ["cp1252", "latin_1"])
    def test_decoded_with_default_allow_list(self, text, codec):
        assert CharsetNormalizer().normalize(text.encode(codec)) == text

    def test_retry_restricted_to_allow_list(self):
        first = Mock()
        first.best.return_value = Mock(encoding="cp1250")
        second = Mock()
        second.best.return_value = Mock(encoding="cp1252")

        with patch("extraction.charset.from_bytes", side_effect=[first, second]) as mock:
            assert CharsetNormalizer().normalize(b"caf\xe9") == "café"

        assert sorted(mock.call_args.kwargs["cp_isolation"]) == ["cp1252", "iso8859-1"]

    def test_rejected_when_retry_finds_nothing(self):
        first = Mock()
        first.best.return_value = Mock(encoding="cp1250")
        second = Mock()
        second.best.return_value = None

        with patch("extraction.charset.from_bytes", side_effect=[first, second]):
            with pytest.raises(UnsupportedEncodingError) as exc_info:
                CharsetNormalizer().normalize(b"\x9a\x9e")
        assert exc_info.value.encoding == "cp1250"
