"""Item decoder: reads one initial byte and dispatches on its major type.

    0  unsigned integer        → _numeric
    1  negative integer        → _numeric
    2  byte string             → _strings
    3  text string             → _strings
    4  array                   → _containers
    5  map                     → _containers
    6  tag                     → _tags
    7  float / simple / break  → _numeric

Arrays, maps and tags recurse through a `decode` callable bound one
nesting level deeper; every recursion checks the depth limit first.
"""

from __future__ import annotations

from typing import Optional

from ._constants import (
    MAX_DEPTH,
    MT_ARRAY,
    MT_BYTES,
    MT_MAP,
    MT_NEGATIVE,
    MT_SIMPLE,
    MT_TAG,
    MT_TEXT,
    MT_UNSIGNED,
)
from ._containers import read_array, read_map
from ._errors import DepthLimitExceeded, InvalidMajorType, PrematureEnd
from ._header import Header, decompose, read_argument
from ._item import Item
from ._numeric import decode_integer, decode_simple
from ._source import ByteSource
from ._strings import read_byte_string, read_text_string
from ._tags import read_tag


def read_header(src: ByteSource) -> Header:
    b = src.read_byte()
    if b is None:
        raise PrematureEnd("expected a data item, input ended", offset=src.offset)
    return decompose(b)


def decode_item(src: ByteSource, header: Optional[Header] = None, *,
                max_depth: int = MAX_DEPTH, depth: int = 0) -> Item:
    """Decode one complete data item from `src`.

    If `header` is given its initial byte has already been consumed (tag
    content is inspected before it is decoded).  `depth` counts enclosing
    arrays, maps and tags; the root item is depth 0.

    A `max_depth` larger than the interpreter can recurse still fails with
    DepthLimitExceeded once the recursion limit is reached.
    """
    try:
        return _decode(src, header, max_depth, depth)
    except RecursionError:
        raise DepthLimitExceeded(
            "nesting depth exceeds the interpreter recursion limit "
            "(max_depth={})".format(max_depth),
            offset=src.offset) from None


def _decode(src: ByteSource, header: Optional[Header], max_depth: int,
            depth: int) -> Item:
    if depth > max_depth:
        raise DepthLimitExceeded(
            "nesting depth exceeds max_depth={}".format(max_depth),
            offset=src.offset)
    if header is None:
        header = read_header(src)

    argument = read_argument(header, src)
    mt = header.major_type

    if mt == MT_UNSIGNED or mt == MT_NEGATIVE:
        return decode_integer(header, argument)
    if mt == MT_BYTES:
        return read_byte_string(src, header, argument)
    if mt == MT_TEXT:
        return read_text_string(src, header, argument)
    if mt == MT_SIMPLE:
        return decode_simple(header, argument, src.offset)

    def nested(content: Optional[Header] = None) -> Item:
        return _decode(src, content, max_depth, depth + 1)

    if mt == MT_ARRAY:
        return read_array(src, header, argument, nested)
    if mt == MT_MAP:
        return read_map(src, header, argument, nested)
    if mt == MT_TAG:
        return read_tag(src, header, argument, nested)

    # Unreachable: decompose() yields a 3-bit major type.
    raise InvalidMajorType("invalid major type {}".format(mt), offset=src.offset)
