"""JSON projection of decoded Items.

Mapping:
    unsigned / negative / bignum  → JSON number
    text                          → JSON string
    bytes                         → {"$bytes": "<lowercase hex>"}
    array                         → JSON array
    map, distinct text keys       → JSON object
    map, any other keys           → {"$map": [[key, value], ...]}
    tag 0 / tag 1                 → {"$tag": n, "value": ...}
    tag 2 / tag 3                 → JSON number (the bignum)
    true / false / null           → JSON literals
    undefined                     → {"$undefined": true}
    simple(n)                     → {"$simple": n}
    float                         → JSON number; NaN and the infinities
                                    become the strings "NaN", "Infinity",
                                    "-Infinity" since JSON has no literal
                                    for them

The projection is lossy: a text-keyed map whose only key is "$bytes"
looks like a byte string afterwards.  Work on Items when that matters.
"""

from __future__ import annotations

import json
import math
from typing import Any, Dict

from ._constants import TAG_NEGATIVE_BIGNUM, TAG_UNSIGNED_BIGNUM
from ._item import Item, Kind


def _json_float(value: float) -> Any:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "-Infinity" if value < 0 else "Infinity"
    return value


def item_to_json_value(item: Item) -> Any:
    """Convert an Item tree to plain JSON-compatible Python values."""
    kind = item.kind
    if kind in (Kind.UNSIGNED, Kind.NEGATIVE, Kind.BIGNUM, Kind.TEXT, Kind.BOOL,
                Kind.NULL):
        return item.value
    if kind is Kind.BYTES:
        return {"$bytes": item.value.hex()}
    if kind is Kind.ARRAY:
        return [item_to_json_value(v) for v in item.value]
    if kind is Kind.MAP:
        text_keys = [k.value for k in item.value if k.kind is Kind.TEXT]
        # Distinct Items can share a text value (definite vs indefinite).
        if len(text_keys) == len(item.value) and len(set(text_keys)) == len(text_keys):
            obj: Dict[str, Any] = {}
            for k, v in item.value.items():
                obj[k.value] = item_to_json_value(v)
            return obj
        return {"$map": [[item_to_json_value(k), item_to_json_value(v)]
                         for k, v in item.value.items()]}
    if kind is Kind.TAG:
        if item.tag in (TAG_UNSIGNED_BIGNUM, TAG_NEGATIVE_BIGNUM):
            return item.value.value
        return {"$tag": item.tag, "value": item_to_json_value(item.value)}
    if kind is Kind.UNDEFINED:
        return {"$undefined": True}
    if kind is Kind.SIMPLE:
        return {"$simple": item.value}
    return _json_float(item.value)


def item_to_json(item: Item, **kwargs: Any) -> str:
    """Serialize an Item to JSON text.  kwargs go to json.dumps."""
    kwargs.setdefault("ensure_ascii", False)
    return json.dumps(item_to_json_value(item), **kwargs)
