"""Diagnostic notation (RFC 8949 §8) for decoded Items.

Indefinite-length items carry the `_ ` marker.  Their chunk boundaries are
gone by the time an Item exists, so an indefinite string prints as one
chunk.  Bignum tags (2, 3) print as the plain integer, the way Appendix A
of the RFC lists them.
"""

from __future__ import annotations

import json
import math

from ._constants import TAG_NEGATIVE_BIGNUM, TAG_UNSIGNED_BIGNUM
from ._item import Item, Kind


def _float(v: float) -> str:
    if math.isnan(v):
        return "NaN"
    if math.isinf(v):
        return "-Infinity" if v < 0 else "Infinity"
    text = repr(v)
    # Python writes 1e+300; diagnostic notation wants 1.0e+300.
    mantissa, sep, exponent = text.partition("e")
    if sep:
        if "." not in mantissa:
            mantissa += ".0"
        sign = exponent[0] if exponent[0] in "+-" else "+"
        return "{}e{}{}".format(mantissa, sign, exponent.lstrip("+-").lstrip("0") or "0")
    return text


def diagnostic(item: Item) -> str:
    kind = item.kind
    ind = "_ " if item.indefinite else ""

    if kind in (Kind.UNSIGNED, Kind.NEGATIVE, Kind.BIGNUM):
        return str(item.value)
    if kind is Kind.BYTES:
        text = "h'{}'".format(item.value.hex())
        return "(_ {})".format(text) if ind else text
    if kind is Kind.TEXT:
        text = json.dumps(item.value, ensure_ascii=False)
        return "(_ {})".format(text) if ind else text
    if kind is Kind.ARRAY:
        return "[{}{}]".format(ind, ", ".join(diagnostic(v) for v in item.value))
    if kind is Kind.MAP:
        return "{{{}{}}}".format(ind, ", ".join(
            "{}: {}".format(diagnostic(k), diagnostic(v))
            for k, v in item.value.items()))
    if kind is Kind.TAG:
        if item.tag in (TAG_UNSIGNED_BIGNUM, TAG_NEGATIVE_BIGNUM):
            return diagnostic(item.value)
        return "{}({})".format(item.tag, diagnostic(item.value))
    if kind is Kind.BOOL:
        return "true" if item.value else "false"
    if kind is Kind.NULL:
        return "null"
    if kind is Kind.UNDEFINED:
        return "undefined"
    if kind is Kind.SIMPLE:
        return "simple({})".format(item.value)
    return _float(item.value)
