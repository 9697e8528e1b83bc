"""Array and map assembly (major types 4 and 5).

Elements are decoded by the `decode` callable handed in by the item
decoder; it reads one complete item one nesting level down.  A break code
reaching `decode` is an error there, so only the indefinite-length loops
below look for it, and only in element (or key) position.
"""

from __future__ import annotations

import types
from typing import Callable, Dict, List

from ._constants import BREAK, MT_ARRAY, MT_MAP
from ._errors import PrematureEnd
from ._header import Header
from ._item import Item, Kind
from ._numeric import unsigned_value
from ._source import ByteSource

Decode = Callable[..., Item]


def _at_break(src: ByteSource, what: str) -> bool:
    """Consume and report a break code; raise on end of input."""
    b = src.peek_byte()
    if b is None:
        raise PrematureEnd("indefinite-length {} is missing its break code".format(what),
                           offset=src.offset)
    if b == BREAK:
        src.read_byte()
        return True
    return False


def _ensure_more(src: ByteSource, what: str, declared: int, got: int) -> None:
    if src.at_end():
        raise PrematureEnd("{} declares {} entries, input ended after {}".format(
            what, declared, got), offset=src.offset)


def read_array(src: ByteSource, header: Header, argument: bytes,
               decode: Decode) -> Item:
    items: List[Item] = []
    if header.indefinite:
        while not _at_break(src, "array"):
            items.append(decode())
    else:
        count = unsigned_value(argument)
        for i in range(count):
            _ensure_more(src, "array", count, i)
            items.append(decode())
    return Item(MT_ARRAY, header.additional_info, argument, Kind.ARRAY, tuple(items))


def read_map(src: ByteSource, header: Header, argument: bytes,
             decode: Decode) -> Item:
    # Equal keys (structural Item equality): last write wins.
    pairs: Dict[Item, Item] = {}
    if header.indefinite:
        while not _at_break(src, "map"):
            key = decode()
            pairs[key] = decode()
    else:
        count = unsigned_value(argument)
        for i in range(count):
            _ensure_more(src, "map", count, i)
            key = decode()
            pairs[key] = decode()
    return Item(MT_MAP, header.additional_info, argument, Kind.MAP,
                types.MappingProxyType(pairs))
