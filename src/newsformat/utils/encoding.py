#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Character encoding detection for article markup read as bytes.

Article files exported from older CMS installs are often Latin-1 or
Windows-1252 rather than UTF-8. Input is decoded as UTF-8 when it can be,
otherwise with the encoding chardet detects.
"""

from __future__ import annotations

import logging

import chardet

logger = logging.getLogger(__name__)

DEFAULT_SAMPLE_SIZE = 8192


def detect_encoding(
    data: bytes,
    sample_size: int = DEFAULT_SAMPLE_SIZE,
    confidence_threshold: float = 0.0,
) -> str | None:
    """Detect the character encoding of ``data`` using chardet.

    Parameters
    ----------
    data : bytes
        Binary data to analyze
    sample_size : int, default 8192
        Number of leading bytes to sample for detection
    confidence_threshold : float, default 0.0
        Minimum confidence (0.0-1.0) required to trust the detection

    Returns
    -------
    str | None
        Detected encoding name, or None when nothing was detected or the
        confidence is below ``confidence_threshold``

    """
    result = chardet.detect(data[:sample_size])
    encoding = result.get("encoding") if result else None
    if not encoding:
        logger.debug("chardet: no encoding detected")
        return None

    confidence = result.get("confidence") or 0.0
    logger.debug(f"chardet detected encoding: {encoding} (confidence: {confidence:.2f})")
    if confidence < confidence_threshold:
        logger.debug(f"chardet confidence {confidence:.2f} below threshold {confidence_threshold}")
        return None
    return encoding


def decode_markup(data: bytes) -> str:
    """Decode article markup, trying UTF-8 (with or without BOM) before detection.

    Raises
    ------
    UnicodeDecodeError
        If the input is not UTF-8 and no detected encoding decodes it

    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as utf8_error:
        encoding = detect_encoding(data)
        if encoding is None:
            raise
        try:
            text = data.decode(encoding)
        except (UnicodeDecodeError, LookupError) as e:
            logger.debug(f"Detected encoding {encoding} failed: {e}")
            raise utf8_error from e
        logger.info(f"Decoded input as {encoding}")
        return text


__all__ = ["decode_markup", "detect_encoding"]
