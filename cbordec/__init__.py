"""cbordec — RFC 8949 CBOR decoder.

Decode CBOR bytes into a tree of typed, immutable `Item` objects that
keep the header each value came from.

Quick start:
    >>> from cbordec import loads, diagnostic
    >>> item = loads(bytes.fromhex("a26161016162820203"))
    >>> diagnostic(item)
    '{"a": 1, "b": [2, 3]}'

Tags 0, 1, 2 and 3 are interpreted; any other tag number raises
UnsupportedTag:
    >>> loads(bytes.fromhex("c2420100")).value.value
    256
"""

from __future__ import annotations

from ._constants import MAX_DEPTH
from ._core import decode_item
from ._diagnostic import diagnostic
from ._errors import (
    ERR_INVALID_ENCODING,
    ERR_INVALID_MAJOR_TYPE,
    ERR_INVALID_TAG_CONTENT,
    ERR_LIMIT_DEPTH,
    ERR_MALFORMED_ARGUMENT,
    ERR_PREMATURE_END,
    ERR_TRAILING_DATA,
    ERR_UNSUPPORTED_TAG,
    CborError,
    DepthLimitExceeded,
    InvalidEncoding,
    InvalidMajorType,
    InvalidTagContent,
    MalformedArgument,
    PrematureEnd,
    TrailingData,
    UnsupportedTag,
)
from ._header import Header, decompose, read_argument
from ._item import Item, Kind, SimpleValue
from ._json_adapter import item_to_json, item_to_json_value
from ._numeric import half_to_float
from ._source import ByteSource
from ._stream import decode_all, decode_one, iter_decode, loads
from ._tags import SUPPORTED_TAGS, to_datetime

__version__ = "1.0.0"

__all__ = [
    # Decoding
    "decode_one",
    "decode_all",
    "iter_decode",
    "loads",
    "decode_item",
    # Building blocks
    "ByteSource",
    "Header",
    "decompose",
    "read_argument",
    "half_to_float",
    "to_datetime",
    "SUPPORTED_TAGS",
    "MAX_DEPTH",
    # Data model
    "Item",
    "Kind",
    "SimpleValue",
    # Output
    "diagnostic",
    "item_to_json",
    "item_to_json_value",
    # Exceptions
    "CborError",
    "MalformedArgument",
    "PrematureEnd",
    "InvalidEncoding",
    "InvalidMajorType",
    "InvalidTagContent",
    "UnsupportedTag",
    "DepthLimitExceeded",
    "TrailingData",
    # Error codes
    "ERR_MALFORMED_ARGUMENT",
    "ERR_PREMATURE_END",
    "ERR_INVALID_ENCODING",
    "ERR_INVALID_MAJOR_TYPE",
    "ERR_INVALID_TAG_CONTENT",
    "ERR_UNSUPPORTED_TAG",
    "ERR_LIMIT_DEPTH",
    "ERR_TRAILING_DATA",
]
