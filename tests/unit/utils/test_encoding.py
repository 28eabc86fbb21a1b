#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/utils/test_encoding.py
"""Unit tests for encoding detection and handling utilities."""

from __future__ import annotations

from io import BytesIO, StringIO
from unittest.mock import patch

import pytest

from wikilang.utils.encoding import detect_encoding, normalize_stream_to_text, read_text_with_encoding_detection


@pytest.mark.unit
class TestDetectEncoding:
    """Test cases for detect_encoding function."""

    def test_detect_utf8(self):
        """Test detection of UTF-8 encoded text."""
        encoding = detect_encoding("= Überschrift =\nGrüße aus Köln, 你好世界".encode("utf-8"))
        assert encoding is not None
        assert encoding.lower() in ["utf-8", "ascii"]

    def test_empty_data(self):
        """Empty data gives no detection."""
        assert detect_encoding(b"") is None

    def test_low_confidence_is_rejected(self):
        with patch("wikilang.utils.encoding.chardet.detect", return_value={"encoding": "cp1252", "confidence": 0.3}):
            assert detect_encoding(b"abc") is None
            assert detect_encoding(b"abc", confidence_threshold=0.2) == "cp1252"


@pytest.mark.unit
class TestReadTextWithEncodingDetection:
    """Test cases for read_text_with_encoding_detection."""

    def test_utf8(self):
        assert read_text_with_encoding_detection("= Café =".encode("utf-8")) == "= Café ="

    def test_bom_is_stripped(self):
        assert read_text_with_encoding_detection(b"\xef\xbb\xbf= Title =") == "= Title ="

    def test_latin1_fallback(self):
        """Non UTF-8 bytes are decoded with a detected or fallback encoding."""
        data = "Café résumé naïve, déjà vu".encode("latin-1")
        text = read_text_with_encoding_detection(data)
        assert text.startswith("Caf")
        assert "�" not in text

    def test_explicit_fallbacks(self):
        with patch("wikilang.utils.encoding.detect_encoding", return_value=None):
            assert read_text_with_encoding_detection(b"\xe9t\xe9", fallback_encodings=("latin-1",)) == "été"


@pytest.mark.unit
class TestNormalizeStreamToText:
    """Test cases for normalize_stream_to_text."""

    def test_text_stream(self):
        assert normalize_stream_to_text(StringIO("- item")) == "- item"

    def test_binary_stream(self):
        assert normalize_stream_to_text(BytesIO("- ítem".encode("utf-8"))) == "- ítem"

    def test_unexpected_type(self):
        class Weird:
            def read(self):
                return 42

        with pytest.raises(TypeError, match="unexpected type int"):
            normalize_stream_to_text(Weird())  # type: ignore[arg-type]
