"""Numeric reconstruction: integers, IEEE 754 floats and simple values.

Major types 0 and 1 carry their value in the argument.  Major type 7
reuses the argument slot for floats (ai 25, 26, 27 hold binary16,
binary32 and binary64 bit patterns) and for simple values.
"""

from __future__ import annotations

import struct

from ._constants import (
    AI_FALSE,
    AI_FLOAT16,
    AI_FLOAT32,
    AI_FLOAT64,
    AI_INDEFINITE,
    AI_NULL,
    AI_SIMPLE_EXTENDED,
    AI_TRUE,
    AI_UNDEFINED,
    MT_NEGATIVE,
    MT_SIMPLE,
    MT_UNSIGNED,
    SIMPLE_EXTENDED_MIN,
)
from ._errors import MalformedArgument
from ._header import Header
from ._item import Item, Kind, SimpleValue


def unsigned_value(argument: bytes) -> int:
    """Big-endian reassembly of the argument bytes."""
    return int.from_bytes(argument, "big")


def negative_value(argument: bytes) -> int:
    # -1 - n, exact down to -2**64; Python ints do not wrap.
    return -1 - unsigned_value(argument)


def decode_integer(header: Header, argument: bytes) -> Item:
    if header.major_type == MT_UNSIGNED:
        return Item(MT_UNSIGNED, header.additional_info, argument,
                    Kind.UNSIGNED, unsigned_value(argument))
    return Item(MT_NEGATIVE, header.additional_info, argument,
                Kind.NEGATIVE, negative_value(argument))


# ── binary16 → binary32 ───────────────────────────────────────
# Layout of a half:  s eeeee mmmmmmmmmm
#
# Subnormal halves are rebuilt with the denormal-magic trick: putting the
# 10-bit significand under a float32 exponent of 126 gives 0.5 + m * 2**-24;
# subtracting 0.5 leaves m * 2**-24 exactly.

_FP16_SIGN_MASK = 0x8000
_FP16_EXPONENT_SHIFT = 10
_FP16_EXPONENT_MASK = 0x1F
_FP16_SIGNIFICAND_MASK = 0x3FF
_FP16_EXPONENT_BIAS = 15
_FP32_EXPONENT_SHIFT = 23
_FP32_EXPONENT_BIAS = 127
_FP32_QNAN_MASK = 0x400000
_FP32_DENORMAL_MAGIC = 126 << 23


def _f32_from_bits(bits: int) -> float:
    return struct.unpack(">f", struct.pack(">I", bits))[0]


_FP32_DENORMAL_FLOAT = _f32_from_bits(_FP32_DENORMAL_MAGIC)


def half_to_float(data: bytes) -> float:
    """Decode two big-endian bytes of IEEE 754 binary16.

    The half is widened to binary32 bit-for-bit; signalling NaNs come out
    quieted.
    """
    bits = (data[0] << 8) | data[1]
    s = bits & _FP16_SIGN_MASK
    e = (bits >> _FP16_EXPONENT_SHIFT) & _FP16_EXPONENT_MASK
    m = bits & _FP16_SIGNIFICAND_MASK

    out_e = 0
    out_m = 0
    if e == 0:
        if m != 0:
            o = _f32_from_bits(_FP32_DENORMAL_MAGIC + m) - _FP32_DENORMAL_FLOAT
            return -o if s else o
    else:
        out_m = m << 13
        if e == 0x1F:
            out_e = 0xFF
            if out_m != 0:
                out_m |= _FP32_QNAN_MASK
        else:
            out_e = e - _FP16_EXPONENT_BIAS + _FP32_EXPONENT_BIAS
    return _f32_from_bits((s << 16) | (out_e << _FP32_EXPONENT_SHIFT) | out_m)


def float_value(ai: int, argument: bytes) -> float:
    if ai == AI_FLOAT16:
        return half_to_float(argument)
    if ai == AI_FLOAT32:
        return struct.unpack(">f", argument)[0]
    if ai == AI_FLOAT64:
        return struct.unpack(">d", argument)[0]
    raise MalformedArgument("additional information {} is not a float".format(ai))


def decode_simple(header: Header, argument: bytes, offset: int = 0) -> Item:
    """Build the Item for a major type 7 header (float or simple value)."""
    ai = header.additional_info

    if ai in (AI_FLOAT16, AI_FLOAT32):
        return Item(MT_SIMPLE, ai, argument, Kind.FLOAT32, float_value(ai, argument))
    if ai == AI_FLOAT64:
        return Item(MT_SIMPLE, ai, argument, Kind.FLOAT64, float_value(ai, argument))

    if ai == AI_FALSE:
        return Item(MT_SIMPLE, ai, argument, Kind.BOOL, False)
    if ai == AI_TRUE:
        return Item(MT_SIMPLE, ai, argument, Kind.BOOL, True)
    if ai == AI_NULL:
        return Item(MT_SIMPLE, ai, argument, Kind.NULL, None)
    if ai == AI_UNDEFINED:
        return Item(MT_SIMPLE, ai, argument, Kind.UNDEFINED, SimpleValue.UNDEFINED)

    if ai == AI_SIMPLE_EXTENDED:
        n = argument[0]
        if n < SIMPLE_EXTENDED_MIN:
            raise MalformedArgument(
                "simple value {} must use the one-byte form".format(n),
                offset=offset)
        return Item(MT_SIMPLE, ai, argument, Kind.SIMPLE, n)

    if ai == AI_INDEFINITE:
        raise MalformedArgument("unexpected break code", offset=offset)

    # 0..19: unassigned simple values.
    return Item(MT_SIMPLE, ai, argument, Kind.SIMPLE, ai)
