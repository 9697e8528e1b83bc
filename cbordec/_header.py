"""Initial-byte decomposition and argument reading (RFC 8949 §3)."""

from __future__ import annotations

from typing import NamedTuple

from ._constants import (
    AI_INDEFINITE,
    AI_INLINE_MAX,
    AI_RESERVED,
    ARGUMENT_REQUIRED_MAJOR_TYPES,
    ARGUMENT_WIDTHS,
)
from ._errors import MalformedArgument
from ._source import ByteSource


class Header(NamedTuple):
    major_type: int
    additional_info: int

    @property
    def initial_byte(self) -> int:
        return (self.major_type << 5) | self.additional_info

    @property
    def indefinite(self) -> bool:
        return self.additional_info == AI_INDEFINITE


def decompose(byte: int) -> Header:
    """Split an initial byte into (major type, additional information).

    Total over 0..255: every byte is a syntactically valid initial byte.
    """
    byte &= 0xFF
    return Header(byte >> 5, byte & 0x1F)


def read_argument(header: Header, src: ByteSource) -> bytes:
    """Return the raw argument bytes for `header`.

    The bytes are returned exactly as they appear on the wire (big-endian)
    so the Item keeps them; callers reassemble integers or floats from
    them.  Indefinite-length headers and the break code yield b"".
    """
    ai = header.additional_info
    if ai <= AI_INLINE_MAX:
        return bytes([ai])

    width = ARGUMENT_WIDTHS.get(ai)
    if width is not None:
        return src.read_exact(width, "argument of initial byte 0x{:02x}".format(
            header.initial_byte))

    if ai in AI_RESERVED:
        raise MalformedArgument(
            "reserved additional information {} (initial byte 0x{:02x})".format(
                ai, header.initial_byte),
            offset=src.offset)

    # ai == 31: indefinite length for 2..5, break for 7, nothing otherwise.
    if header.major_type in ARGUMENT_REQUIRED_MAJOR_TYPES:
        raise MalformedArgument(
            "major type {} cannot use additional information 31".format(
                header.major_type),
            offset=src.offset)
    return b""
