"""Tag interpretation (major type 6, RFC 8949 §3.4).

Four tag numbers have an interpretation:

    0  standard date/time string   content: definite text, RFC 3339
    1  epoch-based date/time       content: integer or float
    2  unsigned bignum             content: byte string
    3  negative bignum             content: byte string

Content shape is checked against the tag's content header before the
content is decoded.  Any other tag number is an UnsupportedTag error,
raised after its content has been decoded so the error is reported
against a well-formed stream position.
"""

from __future__ import annotations

import datetime
import math
import re
from typing import Callable, Dict

from ._constants import (
    AI_FLOAT16,
    AI_FLOAT64,
    MT_BYTES,
    MT_NEGATIVE,
    MT_SIMPLE,
    MT_TAG,
    MT_TEXT,
    MT_UNSIGNED,
    TAG_DATETIME_STRING,
    TAG_EPOCH_DATETIME,
    TAG_NEGATIVE_BIGNUM,
    TAG_UNSIGNED_BIGNUM,
)
from ._errors import CborError, InvalidTagContent, PrematureEnd, UnsupportedTag
from ._header import Header, decompose
from ._item import Item, Kind
from ._numeric import unsigned_value
from ._source import ByteSource

Decode = Callable[..., Item]

# RFC 3339 date-time as refined by RFC 4287 §3.3: upper-case T and Z,
# mandatory offset.
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(\.\d+)?"
    r"(Z|[+-]\d{2}:\d{2})", re.ASCII)


def _parse_rfc3339(text: str) -> datetime.datetime:
    m = _RFC3339.fullmatch(text)
    if m is None:
        raise InvalidTagContent("not an RFC 3339 date-time: {!r}".format(text))
    year, month, day, hour, minute, second = (int(g) for g in m.groups()[:6])
    frac, zone = m.group(7), m.group(8)
    micro = int((frac[1:] + "000000")[:6]) if frac else 0
    if second > 60:
        raise InvalidTagContent("invalid date-time {!r}: second out of range".format(text))
    if zone == "Z":
        tz = datetime.timezone.utc
    else:
        off_hours, off_minutes = int(zone[1:3]), int(zone[4:6])
        if off_hours > 23 or off_minutes > 59:
            raise InvalidTagContent(
                "invalid date-time {!r}: offset out of range".format(text))
        sign = -1 if zone[0] == "-" else 1
        tz = datetime.timezone(sign * datetime.timedelta(
            hours=off_hours, minutes=off_minutes))
    try:
        # Leap second 60 clamps to 59; datetime cannot represent it.
        return datetime.datetime(year, month, day, hour, minute, min(second, 59),
                                 micro, tzinfo=tz)
    except ValueError as e:
        raise InvalidTagContent("invalid date-time {!r}: {}".format(text, e))


# ── Content handlers ──────────────────────────────────────────

def _datetime_string(content: Header, decode: Decode) -> Item:
    if content.major_type != MT_TEXT or content.indefinite:
        raise InvalidTagContent(
            "content must be a definite-length text string, got major type {}".format(
                content.major_type))
    item = decode(content)
    _parse_rfc3339(item.value)
    return item


def _epoch_datetime(content: Header, decode: Decode) -> Item:
    mt = content.major_type
    if mt in (MT_UNSIGNED, MT_NEGATIVE):
        return decode(content)
    if mt == MT_SIMPLE and AI_FLOAT16 <= content.additional_info <= AI_FLOAT64:
        return decode(content)
    raise InvalidTagContent(
        "content must be an integer or a float, got major type {} "
        "additional information {}".format(mt, content.additional_info))


def _bignum(content: Header, decode: Decode, negative: bool) -> Item:
    if content.major_type != MT_BYTES:
        raise InvalidTagContent(
            "content must be a byte string, got major type {}".format(
                content.major_type))
    raw = decode(content)
    n = int.from_bytes(raw.value, "big")
    if negative:
        n = -n
    return Item(MT_BYTES, raw.additional_info, raw.argument, Kind.BIGNUM, n)


_HANDLERS: Dict[int, Callable[[Header, Decode], Item]] = {
    TAG_DATETIME_STRING: _datetime_string,
    TAG_EPOCH_DATETIME: _epoch_datetime,
    TAG_UNSIGNED_BIGNUM: lambda content, decode: _bignum(content, decode, False),
    TAG_NEGATIVE_BIGNUM: lambda content, decode: _bignum(content, decode, True),
}

SUPPORTED_TAGS = frozenset(_HANDLERS)


def read_tag(src: ByteSource, header: Header, argument: bytes,
             decode: Decode) -> Item:
    tag_number = unsigned_value(argument)
    b = src.read_byte()
    if b is None:
        raise PrematureEnd("tag {} has no content".format(tag_number),
                           offset=src.offset, tag=tag_number)
    content_header = decompose(b)

    handler = _HANDLERS.get(tag_number)
    if handler is None:
        decode(content_header)
        raise UnsupportedTag("unsupported tag number {}".format(tag_number),
                             offset=src.offset, tag=tag_number)

    try:
        content = handler(content_header, decode)
    except CborError as e:
        if e.tag is not None:
            raise
        raise e.for_tag(tag_number) from e
    return Item(MT_TAG, header.additional_info, argument, Kind.TAG, content)


def to_datetime(item: Item) -> datetime.datetime:
    """Convert a tag 0 or tag 1 Item to an aware `datetime`.

    Epoch times come back in UTC; date-time strings keep their offset.
    """
    if item.kind is not Kind.TAG or item.tag not in (TAG_DATETIME_STRING,
                                                     TAG_EPOCH_DATETIME):
        raise InvalidTagContent("not a date/time tag: {!r}".format(item))
    content = item.value
    if item.tag == TAG_DATETIME_STRING:
        return _parse_rfc3339(content.value)
    seconds = content.value
    if isinstance(seconds, float) and not math.isfinite(seconds):
        raise InvalidTagContent("epoch time is not finite: {}".format(seconds),
                                tag=TAG_EPOCH_DATETIME)
    try:
        return datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise InvalidTagContent("epoch time {} out of range: {}".format(seconds, e),
                                tag=TAG_EPOCH_DATETIME)
