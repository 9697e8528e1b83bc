#!/usr/bin/env python3
# tools/fuzz_runner.py
#
# Decoder robustness fuzzing.
#
# Generates three fuzz categories:
#   A) random VALID value trees -> encode (definite + indefinite) -> decode,
#      both forms must decode to the input value
#   B) valid encodings with one mutation (flip, truncate, insert, splice)
#   C) raw random bytes
#
# B and C may decode or fail, but the only failure allowed is a CborError.
# Anything else prints a minimal repro payload and exits non-zero.

import os, sys, random, traceback
from typing import Any, Dict

ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, ROOT)
sys.path.insert(0, os.path.join(ROOT, "tests"))

from _encoder import encode  # noqa: E402
from cbordec import CborError, Item, Kind, decode_all, loads  # noqa: E402

SEED = int(os.environ.get("CBORDEC_SEED", "4242"))
ROUNDS = int(os.environ.get("CBORDEC_FUZZ_ROUNDS", "5000"))

random.seed(SEED)

def plain(item: Item) -> Any:
    if item.kind is Kind.ARRAY:
        return [plain(v) for v in item.value]
    if item.kind is Kind.MAP:
        return {plain(k): plain(v) for k, v in item.value.items()}
    return item.value

def failure(label: str, data: bytes, ctx: Dict[str, Any]) -> None:
    print("FAILURE:", label)
    print("INPUT:", data.hex())
    print("CTX:", ctx)
    raise SystemExit(1)

# --- generators ---

def rand_text(nmax: int) -> str:
    n = random.randint(0, nmax)
    # Mostly ASCII with some multi-byte characters.
    return "".join(chr(random.choice((random.randint(0x20, 0x7E),
                                      random.randint(0xA0, 0x2FFF),
                                      random.randint(0x10000, 0x1F6FF))))
                   for _ in range(n))

def rand_int() -> int:
    width = random.choice((5, 8, 16, 32, 64))
    n = random.getrandbits(width)
    return n if random.random() < 0.5 else -1 - n

def rand_tree() -> Any:
    def gen(depth: int):
        if depth > 5 or random.random() < 0.35:
            r = random.random()
            if r < 0.30:
                return rand_int()
            if r < 0.55:
                return rand_text(18)
            if r < 0.75:
                return bytes(random.getrandbits(8) for _ in range(random.randint(0, 24)))
            return random.choice((None, True, False))
        if random.random() < 0.5:
            d = {}
            for _ in range(random.randint(0, 5)):
                key = rand_text(10) if random.random() < 0.7 else rand_int()
                d[key] = gen(depth + 1)
            return d
        return [gen(depth + 1) for _ in range(random.randint(0, 5))]
    return gen(0)

def mutate(data: bytes) -> bytes:
    buf = bytearray(data)
    op = random.choice(("flip", "truncate", "insert", "splice"))
    if op == "flip" and buf:
        i = random.randrange(len(buf))
        buf[i] ^= 1 << random.randrange(8)
    elif op == "truncate" and buf:
        del buf[random.randrange(len(buf)):]
    elif op == "insert":
        i = random.randint(0, len(buf))
        buf[i:i] = bytes([random.choice((0x1C, 0x1F, 0x5F, 0x7F, 0x9F, 0xBF, 0xFF,
                                         random.getrandbits(8)))])
    else:
        i = random.randint(0, len(buf))
        buf[i:i] = encode(rand_tree())
    return bytes(buf)

def decode_or_cbor_error(label: str, data: bytes, round_: int) -> None:
    try:
        decode_all(data, strict=True)
    except CborError:
        pass
    except Exception:
        failure(label, data, {"round": round_, "traceback": traceback.format_exc()})

def main() -> int:
    for i in range(ROUNDS):
        r = random.random()

        # A) valid trees must decode back to themselves in both forms
        if r < 0.40:
            tree = rand_tree()
            for indefinite in (False, True):
                data = encode(tree, indefinite=indefinite)
                try:
                    got = plain(loads(data))
                except CborError as e:
                    failure("A valid input rejected", data,
                            {"round": i, "indefinite": indefinite, "err": e.code})
                if got != tree:
                    failure("A value mismatch", data,
                            {"round": i, "indefinite": indefinite})
            continue

        # B) single mutation of a valid encoding
        if r < 0.80:
            data = mutate(encode(rand_tree(), indefinite=random.random() < 0.5))
            decode_or_cbor_error("B mutated", data, i)
            continue

        # C) raw random bytes
        data = bytes(random.getrandbits(8) for _ in range(random.randint(0, 64)))
        decode_or_cbor_error("C random", data, i)

    print(f"OK: fuzz rounds={ROUNDS} seed={SEED} (no failures)")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
