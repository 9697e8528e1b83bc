"""Sequential byte source with one byte of pushback.

The decoder never needs more than one byte of lookahead: once an initial
byte is read, its major type and additional information determine the
rest of the item.  Indefinite-length containers peek at the next initial
byte to spot the break code, which is the only use of pushback.
"""

from __future__ import annotations

import io
from typing import BinaryIO, List, Optional, Union

from ._constants import READ_CHUNK_SIZE
from ._errors import PrematureEnd

Readable = Union[bytes, bytearray, memoryview, BinaryIO]


class ByteSource:
    """Wraps bytes or a binary file object for the decoder.

    `offset` counts bytes consumed so far (a peeked byte is not consumed).
    """

    __slots__ = ("_stream", "_pushback", "offset")

    def __init__(self, source: Readable) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(bytes(source))
        elif not hasattr(source, "read"):
            raise TypeError(
                "expected bytes or a binary file object, got {}".format(
                    type(source).__name__))
        self._stream = source
        self._pushback: Optional[int] = None
        self.offset = 0

    def read_byte(self) -> Optional[int]:
        """Consume one byte.  Returns None at end of input."""
        if self._pushback is not None:
            b = self._pushback
            self._pushback = None
            self.offset += 1
            return b
        data = self._stream.read(1)
        if not data:
            return None
        self.offset += 1
        return data[0]

    def unread_byte(self, b: int) -> None:
        if self._pushback is not None:
            raise RuntimeError("only one byte of pushback is supported")
        self._pushback = b
        self.offset -= 1

    def peek_byte(self) -> Optional[int]:
        b = self.read_byte()
        if b is not None:
            self.unread_byte(b)
        return b

    def at_end(self) -> bool:
        return self.peek_byte() is None

    def read_exact(self, n: int, what: str = "data") -> bytes:
        """Read exactly n bytes or raise PrematureEnd.

        Reads in slices of READ_CHUNK_SIZE so a length prefix claiming
        gigabytes on a short input fails without allocating them.
        """
        start = self.offset
        parts: List[bytes] = []
        remaining = n
        if remaining > 0 and self._pushback is not None:
            parts.append(bytes([self.read_byte()]))
            remaining -= 1
        while remaining > 0:
            data = self._stream.read(min(remaining, READ_CHUNK_SIZE))
            if not data:
                raise PrematureEnd(
                    "{} declares {} bytes, only {} available".format(
                        what, n, n - remaining),
                    offset=start)
            parts.append(bytes(data))
            remaining -= len(data)
            self.offset += len(data)
        return b"".join(parts)
