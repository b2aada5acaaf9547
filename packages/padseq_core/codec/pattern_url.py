"""URL-safe share strings.

Pipeline: binary format -> zlib deflate -> base64 -> URL-safe alphabet
(``+/`` become ``-_``, ``=`` padding stripped). Decoding reverses every
step and reports any failure as ``None``.
"""

from __future__ import annotations

import base64
import binascii
import logging
import zlib
from typing import Final
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from ..exceptions import PatternDecodeError, PatternEncodeError
from ..ir.pattern import DrumPattern
from .binary_format import from_binary, to_binary

logger = logging.getLogger(__name__)

MAX_ENCODED_LENGTH: Final[int] = 2000
PATTERN_PARAM: Final[str] = "pattern"

# Upper bound of the binary format (4 bars of 32t, every step active)
_MAX_BINARY_SIZE: Final[int] = 8192


def to_url_safe(data: bytes) -> str:
    """Base64-encode bytes with the URL-safe alphabet and no padding."""
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def from_url_safe(text: str) -> bytes:
    """
    Reverse ``to_url_safe``.

    Raises:
        binascii.Error: If the text is not valid URL-safe base64
    """
    padded = text + "=" * (-len(text) % 4)
    return base64.b64decode(padded, altchars=b"-_", validate=True)


def _inflate(data: bytes) -> bytes:
    inflater = zlib.decompressobj()
    raw = inflater.decompress(data, _MAX_BINARY_SIZE)
    if inflater.unconsumed_tail:
        raise PatternDecodeError("decompressed payload too large")
    if not inflater.eof:
        raise PatternDecodeError("incomplete deflate stream")
    return raw


def encode_pattern(
    pattern: DrumPattern,
    max_length: int = MAX_ENCODED_LENGTH,
) -> str | None:
    """
    Encode a pattern into a URL-safe share string.

    Args:
        pattern: Pattern to encode
        max_length: Longest acceptable result

    Returns:
        The share string, or None if it would exceed max_length
    """
    try:
        encoded = to_url_safe(zlib.compress(to_binary(pattern), 9))
    except PatternEncodeError as e:
        logger.warning(f"Pattern encode failed: {e}")
        return None

    if len(encoded) > max_length:
        logger.warning(
            f"Encoded pattern too long: {len(encoded)} chars (limit {max_length})"
        )
        return None
    return encoded


def decode_pattern(
    encoded: str,
    max_length: int = MAX_ENCODED_LENGTH,
) -> DrumPattern | None:
    """
    Decode a share string back into a pattern.

    Returns:
        The pattern with a freshly minted id, or None if the string is
        empty, too long, or malformed at any stage
    """
    if not encoded or len(encoded) > max_length:
        return None
    try:
        return from_binary(_inflate(from_url_safe(encoded)))
    except (binascii.Error, zlib.error, PatternDecodeError, ValueError) as e:
        logger.debug(f"Pattern decode failed: {e}")
        return None


# =============================================================================
# Share links
# =============================================================================


def get_pattern_param(url: str) -> str | None:
    """Value of the ``pattern`` query parameter, if present."""
    for key, value in parse_qsl(urlsplit(url).query, keep_blank_values=True):
        if key == PATTERN_PARAM:
            return value
    return None


def with_pattern_param(url: str, encoded: str | None) -> str:
    """
    Set or remove the ``pattern`` query parameter, keeping all others.

    Args:
        url: Address to rewrite
        encoded: Share string, or None to remove the parameter
    """
    parts = urlsplit(url)
    query = [
        (key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True)
        if key != PATTERN_PARAM
    ]
    if encoded is not None:
        query.append((PATTERN_PARAM, encoded))
    return urlunsplit(parts._replace(query=urlencode(query)))


def share_url(base_url: str, encoded: str) -> str:
    """Build a share link from a base address and a share string."""
    return with_pattern_param(base_url, encoded)


def extract_encoded(link_or_code: str) -> str:
    """Accept either a full share link or a bare share string."""
    text = link_or_code.strip()
    if "?" in text or "://" in text:
        return get_pattern_param(text) or ""
    return text
