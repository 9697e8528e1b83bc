"""CBOR constants: major types, additional-information codes, simple values,
supported tag numbers and decoder limits.

RFC references: §3 (initial byte), §3.1 (major types), §3.2.1 (break),
§3.3 (simple values and floats), §3.4 (tags).
"""

from __future__ import annotations

__rfc__ = "8949"

# ── Major types (high-order 3 bits of the initial byte) ──────
MT_UNSIGNED: int = 0
MT_NEGATIVE: int = 1
MT_BYTES: int = 2
MT_TEXT: int = 3
MT_ARRAY: int = 4
MT_MAP: int = 5
MT_TAG: int = 6
MT_SIMPLE: int = 7  # floats and simple values share major type 7

# Only strings, arrays and maps may be indefinite-length.
INDEFINITE_MAJOR_TYPES = frozenset((MT_BYTES, MT_TEXT, MT_ARRAY, MT_MAP))

# Without a derivable argument these major types are not well-formed.
ARGUMENT_REQUIRED_MAJOR_TYPES = frozenset((MT_UNSIGNED, MT_NEGATIVE, MT_TAG))

# ── Additional information (low-order 5 bits) ────────────────
AI_INLINE_MAX: int = 23   # 0..23: the argument is the code itself
AI_UINT8: int = 24
AI_UINT16: int = 25
AI_UINT32: int = 26
AI_UINT64: int = 27
AI_RESERVED = frozenset((28, 29, 30))
AI_INDEFINITE: int = 31

# Bytes following the initial byte for ai 24..27.
ARGUMENT_WIDTHS = {AI_UINT8: 1, AI_UINT16: 2, AI_UINT32: 4, AI_UINT64: 8}

# Terminates indefinite-length items.  Major type 7, ai 31.
BREAK: int = 0xFF

# ── Major type 7 ──────────────────────────────────────────────
# For major type 7 the ai 25..27 argument bytes are an IEEE 754 value,
# not an integer.
AI_FALSE: int = 20
AI_TRUE: int = 21
AI_NULL: int = 22
AI_UNDEFINED: int = 23
AI_SIMPLE_EXTENDED: int = 24  # one-byte simple value follows
AI_FLOAT16: int = 25
AI_FLOAT32: int = 26
AI_FLOAT64: int = 27

# A one-byte simple value below 32 is not well-formed (§3.3).
SIMPLE_EXTENDED_MIN: int = 32

# ── Tag numbers with a registered interpretation ─────────────
TAG_DATETIME_STRING: int = 0
TAG_EPOCH_DATETIME: int = 1
TAG_UNSIGNED_BIGNUM: int = 2
TAG_NEGATIVE_BIGNUM: int = 3

# ── Decoder limits ────────────────────────────────────────────
# Each nesting level costs a few interpreter frames; 128 levels stays
# well clear of the default recursion limit.
MAX_DEPTH: int = 128

# Declared string lengths come straight off the wire, so reads happen in
# slices of this size rather than one allocation of the declared size.
READ_CHUNK_SIZE: int = 65_536
