#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/wikilang/utils/encoding.py
"""Character encoding detection for wiki files read as bytes.

Wiki pages are normally UTF-8, so strict UTF-8 is tried first. Anything else
is detected with chardet, then decoded with a list of fallback encodings.
"""

from __future__ import annotations

import logging
from typing import IO

import chardet

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


def detect_encoding(data: bytes, sample_size: int = 8192, confidence_threshold: float = 0.7) -> str | None:
    """Detect character encoding of binary data using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of bytes to sample for detection (uses first N bytes)
    confidence_threshold : float, default 0.7
        Minimum confidence level (0.0-1.0) required to trust detection

    Returns
    -------
    str | None
        Detected encoding name, or None if detection fails or the confidence
        is below the threshold

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding")
    if not encoding:
        logger.debug("chardet: No encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    if confidence < confidence_threshold:
        return None
    return encoding


def read_text_with_encoding_detection(data: bytes, fallback_encodings: tuple[str, ...] | None = None) -> str:
    """Decode bytes as text, detecting the encoding when it is not UTF-8.

    Parameters
    ----------
    data : bytes
        Binary data to decode
    fallback_encodings : tuple of str or None, default None
        Encodings to try after detection fails. Defaults to
        ``("utf-8-sig", "cp1252", "latin-1")``.

    Returns
    -------
    str
        Decoded text content

    """
    if data.startswith(b"\xef\xbb\xbf"):
        return data.decode("utf-8-sig")
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        logger.debug("Input is not valid UTF-8, detecting encoding")

    candidates = list(fallback_encodings or DEFAULT_FALLBACK_ENCODINGS)
    detected = detect_encoding(data)
    if detected:
        candidates.insert(0, detected)

    for encoding in candidates:
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Failed to decode with {encoding}: {e}")
            continue
        logger.debug(f"Successfully decoded with encoding: {encoding}")
        return text

    logger.warning("All encoding attempts failed, using utf-8 with error replacement")
    return data.decode("utf-8", errors="replace")


def normalize_stream_to_text(stream: IO[bytes] | IO[str]) -> str:
    """Read a binary or text mode stream and return its text.

    Raises
    ------
    TypeError
        If stream.read() returns something other than bytes or str

    """
    content = stream.read()

    if isinstance(content, bytes):
        return read_text_with_encoding_detection(content)
    if isinstance(content, str):
        return content
    raise TypeError(f"Stream read() returned unexpected type {type(content).__name__}. Expected bytes or str.")
