"""Pattern share codec."""

from .binary_format import FORMAT_V1, FORMAT_V2, format_version_for, from_binary, to_binary
from .pattern_url import (
    MAX_ENCODED_LENGTH,
    PATTERN_PARAM,
    decode_pattern,
    encode_pattern,
    extract_encoded,
    from_url_safe,
    get_pattern_param,
    share_url,
    to_url_safe,
    with_pattern_param,
)

__all__ = [
    "FORMAT_V1",
    "FORMAT_V2",
    "format_version_for",
    "from_binary",
    "to_binary",
    "MAX_ENCODED_LENGTH",
    "PATTERN_PARAM",
    "decode_pattern",
    "encode_pattern",
    "extract_encoded",
    "from_url_safe",
    "get_pattern_param",
    "share_url",
    "to_url_safe",
    "with_pattern_param",
]
