"""Byte-string and text-string assembly (major types 2 and 3).

A definite string is its argument's worth of bytes.  An indefinite string
(ai 31) is a run of definite chunks of the same major type, ended by the
break code; the result is the concatenation of the chunks.
"""

from __future__ import annotations

from typing import List

from ._constants import BREAK, MT_BYTES, MT_TEXT
from ._errors import InvalidEncoding, MalformedArgument, PrematureEnd
from ._header import Header, decompose, read_argument
from ._item import Item, Kind
from ._numeric import unsigned_value
from ._source import ByteSource

_NAMES = {MT_BYTES: "byte string", MT_TEXT: "text string"}


def _utf8(raw: bytes, offset: int) -> str:
    try:
        return raw.decode("utf-8", errors="strict")
    except UnicodeDecodeError as e:
        raise InvalidEncoding(
            "invalid utf-8 in text string: {}".format(e.reason),
            offset=offset + e.start)


def _read_chunks(src: ByteSource, major_type: int) -> List[bytes]:
    name = _NAMES[major_type]
    chunks: List[bytes] = []
    while True:
        b = src.read_byte()
        if b is None:
            raise PrematureEnd(
                "indefinite-length {} is missing its break code".format(name),
                offset=src.offset)
        if b == BREAK:
            return chunks
        chunk = decompose(b)
        if chunk.major_type != major_type:
            raise MalformedArgument(
                "indefinite-length {} contains a chunk of major type {}".format(
                    name, chunk.major_type),
                offset=src.offset - 1)
        if chunk.indefinite:
            raise MalformedArgument(
                "indefinite-length {} contains an indefinite-length chunk".format(name),
                offset=src.offset - 1)
        length = unsigned_value(read_argument(chunk, src))
        start = src.offset
        raw = src.read_exact(length, name + " chunk")
        if major_type == MT_TEXT:
            # Each chunk must be valid UTF-8 on its own (§3.2.3).
            _utf8(raw, start)
        chunks.append(raw)


def read_byte_string(src: ByteSource, header: Header, argument: bytes) -> Item:
    if header.indefinite:
        value = b"".join(_read_chunks(src, MT_BYTES))
    else:
        value = src.read_exact(unsigned_value(argument), "byte string")
    return Item(MT_BYTES, header.additional_info, argument, Kind.BYTES, value)


def read_text_string(src: ByteSource, header: Header, argument: bytes) -> Item:
    if header.indefinite:
        value = b"".join(_read_chunks(src, MT_TEXT)).decode("utf-8")
    else:
        start = src.offset
        value = _utf8(src.read_exact(unsigned_value(argument), "text string"), start)
    return Item(MT_TEXT, header.additional_info, argument, Kind.TEXT, value)
