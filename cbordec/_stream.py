"""Top-level driver: decode successive items until the source runs dry."""

from __future__ import annotations

import logging
from typing import Iterator, List, Union

from ._constants import MAX_DEPTH
from ._core import decode_item
from ._errors import CborError, TrailingData
from ._item import Item
from ._source import ByteSource, Readable

log = logging.getLogger(__name__)

Source = Union[Readable, ByteSource]


def _as_source(source: Source) -> ByteSource:
    if isinstance(source, ByteSource):
        return source
    return ByteSource(source)


def decode_one(source: Source, *, max_depth: int = MAX_DEPTH) -> Item:
    """Decode the next top-level item.

    Given a ByteSource, the source is left positioned after the item so
    repeated calls walk a stream.  Bytes after the item are not examined.
    """
    return decode_item(_as_source(source), max_depth=max_depth)


def iter_decode(source: Source, *, max_depth: int = MAX_DEPTH) -> Iterator[Item]:
    """Yield top-level items in stream order until end of input.

    Errors propagate from the item that failed.
    """
    src = _as_source(source)
    while src.peek_byte() is not None:
        yield decode_item(src, max_depth=max_depth)


def decode_all(source: Source, *, max_depth: int = MAX_DEPTH,
               strict: bool = False) -> List[Item]:
    """Decode every top-level item in the source.

    When an item fails to decode, the items before it are returned and
    the failure is logged; the partial item is never returned.  With
    strict=True the error propagates instead.
    """
    items: List[Item] = []
    try:
        for item in iter_decode(source, max_depth=max_depth):
            items.append(item)
    except CborError as e:
        if strict:
            raise
        log.warning("stopped after %d item(s): [%s] %s", len(items), e.code, e)
        return items
    log.debug("decoded %d item(s)", len(items))
    return items


def loads(data: Readable, *, max_depth: int = MAX_DEPTH) -> Item:
    """Decode `data` as exactly one item; trailing bytes are an error."""
    src = ByteSource(data)
    item = decode_item(src, max_depth=max_depth)
    if not src.at_end():
        raise TrailingData("trailing bytes after the top-level item",
                           offset=src.offset)
    return item
