"""The decoded data model: `Item`, its `Kind`, and `SimpleValue`.

An Item records the header it came from (major type, additional
information, raw argument bytes) together with the decoded value.  The
value's Python shape is fixed by `kind`:

    UNSIGNED, NEGATIVE, BIGNUM  int
    BYTES                       bytes
    TEXT                        str
    ARRAY                       tuple of Item
    MAP                         read-only mapping Item -> Item
    TAG                         the content Item
    BOOL                        bool
    NULL                        None
    UNDEFINED                   SimpleValue.UNDEFINED
    SIMPLE                      int (the simple value number)
    FLOAT32, FLOAT64            float

Items are immutable and compare structurally, so any Item (arrays and
maps included) can be a map key.
"""

from __future__ import annotations

import enum
import struct
from typing import Any, List, Optional, Tuple

from ._constants import AI_INDEFINITE, INDEFINITE_MAJOR_TYPES, MT_TAG


class Kind(enum.Enum):
    UNSIGNED = "unsigned"
    NEGATIVE = "negative"
    BYTES = "bytes"
    TEXT = "text"
    ARRAY = "array"
    MAP = "map"
    TAG = "tag"
    BOOL = "bool"
    NULL = "null"
    UNDEFINED = "undefined"
    SIMPLE = "simple"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    BIGNUM = "bignum"


class SimpleValue(enum.IntEnum):
    """The four simple values with fixed meaning (RFC 8949 §3.3)."""

    FALSE = 20
    TRUE = 21
    NULL = 22
    UNDEFINED = 23


# One byte per kind in the canonical form; keeps the form injective when
# two kinds share a major type (BYTES vs BIGNUM tag content).
_KIND_CODES = {kind: idx for idx, kind in enumerate(Kind)}

# Kinds whose value is fully determined by major type + argument bytes.
_ARGUMENT_ONLY = frozenset((
    Kind.UNSIGNED, Kind.NEGATIVE, Kind.BOOL, Kind.NULL, Kind.UNDEFINED,
    Kind.SIMPLE, Kind.FLOAT32, Kind.FLOAT64,
))


def _u64be(n: int) -> bytes:
    return struct.pack(">Q", n)


class Item:
    """One decoded CBOR data item."""

    __slots__ = ("major_type", "additional_info", "argument", "kind", "value",
                 "_canon")

    def __init__(self, major_type: int, additional_info: int, argument: bytes,
                 kind: Kind, value: Any) -> None:
        set_ = object.__setattr__
        set_(self, "major_type", major_type)
        set_(self, "additional_info", additional_info)
        set_(self, "argument", bytes(argument))
        set_(self, "kind", kind)
        set_(self, "value", value)
        set_(self, "_canon", None)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Item is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("Item is immutable")

    # ── Header views ──────────────────────────────────────────

    @property
    def initial_byte(self) -> int:
        return (self.major_type << 5) | self.additional_info

    @property
    def indefinite(self) -> bool:
        return (self.additional_info == AI_INDEFINITE
                and self.major_type in INDEFINITE_MAJOR_TYPES)

    @property
    def tag(self) -> Optional[int]:
        """Tag number for TAG items, else None."""
        if self.major_type != MT_TAG:
            return None
        return int.from_bytes(self.argument, "big")

    # ── Structural equality ───────────────────────────────────

    def canonical_bytes(self) -> bytes:
        """Recursive byte form used for equality and hashing.

        Layout: major type, argument length, argument, kind code, then a
        kind-specific payload.  Map entries are ordered by unsigned-octet
        comparison of the key's canonical bytes, so two maps holding the
        same entries produce the same form whatever their wire order.
        """
        canon = self._canon
        if canon is None:
            canon = b"".join(self._canon_parts())
            object.__setattr__(self, "_canon", canon)
        return canon

    def _canon_parts(self) -> List[bytes]:
        parts = [bytes([self.major_type, len(self.argument)]), self.argument,
                 bytes([_KIND_CODES[self.kind]])]
        kind = self.kind
        if kind in _ARGUMENT_ONLY:
            return parts
        if kind is Kind.BYTES:
            parts += [_u64be(len(self.value)), self.value]
        elif kind is Kind.TEXT:
            raw = self.value.encode("utf-8")
            parts += [_u64be(len(raw)), raw]
        elif kind is Kind.BIGNUM:
            n = self.value
            mag = abs(n)
            raw = mag.to_bytes((mag.bit_length() + 7) // 8, "big")
            parts += [b"\x01" if n < 0 else b"\x00", _u64be(len(raw)), raw]
        elif kind is Kind.ARRAY:
            parts.append(_u64be(len(self.value)))
            parts += [child.canonical_bytes() for child in self.value]
        elif kind is Kind.MAP:
            entries: List[Tuple[bytes, bytes]] = sorted(
                (k.canonical_bytes(), v.canonical_bytes())
                for k, v in self.value.items())
            parts.append(_u64be(len(entries)))
            for kb, vb in entries:
                parts += [kb, vb]
        elif kind is Kind.TAG:
            parts.append(self.value.canonical_bytes())
        return parts

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Item):
            return NotImplemented
        return self.canonical_bytes() == other.canonical_bytes()

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self) -> int:
        return hash(self.canonical_bytes())

    def __repr__(self) -> str:
        from ._diagnostic import diagnostic
        return "Item({}, {})".format(self.kind.value, diagnostic(self))
