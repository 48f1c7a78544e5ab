"""Shared constants for utf8validator.

Bit patterns and limits of the UTF-8 encoding form (Unicode Standard,
chapter 3.9, and RFC 3629), plus defaults for the host-side scanner.

Constants are grouped by domain:
- Scalar value limits: code space and surrogate range
- Lead byte patterns: high-bit shapes that announce a sequence length
- Continuation bytes: the 10xxxxxx shape and its payload mask
- Overlong thresholds: smallest value each sequence length may encode
- Scanner defaults: chunking and replacement character

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Scalar value limits
    "CODE_POINT_MAX",
    "SURROGATE_MIN",
    "SURROGATE_MAX",
    # Lead byte patterns
    "ASCII_MAX",
    "LEAD_2_PATTERN",
    "LEAD_3_PATTERN",
    "LEAD_4_PATTERN",
    "LEAD_2_PAYLOAD_MASK",
    "LEAD_3_PAYLOAD_MASK",
    "LEAD_4_PAYLOAD_MASK",
    # Continuation bytes
    "CONTINUATION_PATTERN",
    "CONTINUATION_PAYLOAD_MASK",
    # Sequence lengths
    "MAX_SEQUENCE_LENGTH",
    "MIN_TWO_BYTE_VALUE",
    "MIN_THREE_BYTE_VALUE",
    "MIN_FOUR_BYTE_VALUE",
    # Scanner defaults
    "DEFAULT_CHUNK_SIZE",
    "REPLACEMENT_CHARACTER",
]

# ============================================================================
# SCALAR VALUE LIMITS
# ============================================================================

# Largest code point in the Unicode code space (end of plane 16).
CODE_POINT_MAX: int = 0x10FFFF

# UTF-16 surrogate halves. Never valid as standalone scalar values.
SURROGATE_MIN: int = 0xD800
SURROGATE_MAX: int = 0xDFFF

# ============================================================================
# LEAD BYTE PATTERNS
# ============================================================================
#
# Each pattern is compared against the lead byte shifted right so that only
# the marker bits remain:
#
#   0xxxxxxx  -> 1 byte  (value <= ASCII_MAX)
#   110xxxxx  -> 2 bytes (lead >> 5 == 0b110)
#   1110xxxx  -> 3 bytes (lead >> 4 == 0b1110)
#   11110xxx  -> 4 bytes (lead >> 3 == 0b11110)
#
# 10xxxxxx (stray continuation) and 11111xxx match none of them.

ASCII_MAX: int = 0x7F

LEAD_2_PATTERN: int = 0b110
LEAD_3_PATTERN: int = 0b1110
LEAD_4_PATTERN: int = 0b11110

# Payload bits carried by the lead byte, per sequence length.
LEAD_2_PAYLOAD_MASK: int = 0x1F
LEAD_3_PAYLOAD_MASK: int = 0x0F
LEAD_4_PAYLOAD_MASK: int = 0x07

# ============================================================================
# CONTINUATION BYTES
# ============================================================================

# Top two bits of every continuation byte (byte >> 6).
CONTINUATION_PATTERN: int = 0b10

CONTINUATION_PAYLOAD_MASK: int = 0x3F

# ============================================================================
# SEQUENCE LENGTHS
# ============================================================================

MAX_SEQUENCE_LENGTH: int = 4

# Smallest value that genuinely needs 2, 3 or 4 bytes. Anything below the
# threshold for its length is an overlong encoding.
MIN_TWO_BYTE_VALUE: int = 0x80
MIN_THREE_BYTE_VALUE: int = 0x800
MIN_FOUR_BYTE_VALUE: int = 0x10000

# ============================================================================
# SCANNER DEFAULTS
# ============================================================================

# Read size for StreamByteSource. Bounds memory use of streaming validation.
DEFAULT_CHUNK_SIZE: int = 64 * 1024

# U+FFFD, substituted for malformed sequences by scanner.decode_text().
REPLACEMENT_CHARACTER: str = "\ufffd"
