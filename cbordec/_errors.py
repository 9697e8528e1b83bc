"""Decoder error codes and exception classes.

Every failure raised by the decoder is a `CborError`.  The `.code`
attribute is one of the ERR_* strings below and is what the conformance
vectors compare against; the subclasses exist so callers can catch one
kind of failure without inspecting codes.
"""

from __future__ import annotations

from typing import Optional

# ── Error codes ───────────────────────────────────────────────
# Grep-friendly; the conformance vectors use these exact strings.

ERR_MALFORMED_ARGUMENT: str = "ERR_MALFORMED_ARGUMENT"    # ai 28-30, misplaced ai 31/break
ERR_PREMATURE_END: str = "ERR_PREMATURE_END"              # input ran out mid-item
ERR_INVALID_ENCODING: str = "ERR_INVALID_ENCODING"        # text string is not UTF-8
ERR_INVALID_MAJOR_TYPE: str = "ERR_INVALID_MAJOR_TYPE"    # decomposer defect
ERR_INVALID_TAG_CONTENT: str = "ERR_INVALID_TAG_CONTENT"  # wrong content for tag
ERR_UNSUPPORTED_TAG: str = "ERR_UNSUPPORTED_TAG"          # no interpretation for tag
ERR_LIMIT_DEPTH: str = "ERR_LIMIT_DEPTH"                  # exceeds max_depth
ERR_TRAILING_DATA: str = "ERR_TRAILING_DATA"              # bytes after a loads() item


class CborError(Exception):
    """Base exception for CBOR decoding errors.

    `offset` is the number of source bytes consumed when the error was
    detected, when known.  `tag` is set when the failure happened while
    interpreting the content of a tag.
    """

    code: str = ""

    def __init__(self, msg: str = "", *, offset: Optional[int] = None,
                 tag: Optional[int] = None) -> None:
        super().__init__(msg or self.code)
        self.msg = msg or self.code
        self.offset = offset
        self.tag = tag

    def __str__(self) -> str:
        if self.offset is None:
            return self.msg
        return "{} (at byte offset {})".format(self.msg, self.offset)

    def for_tag(self, tag: int) -> "CborError":
        """Return a copy of this error attributed to tag number `tag`."""
        return type(self)("tag {}: {}".format(tag, self.msg),
                          offset=self.offset, tag=tag)


class MalformedArgument(CborError):
    code = ERR_MALFORMED_ARGUMENT


class PrematureEnd(CborError):
    code = ERR_PREMATURE_END


class InvalidEncoding(CborError):
    code = ERR_INVALID_ENCODING


class InvalidMajorType(CborError):
    code = ERR_INVALID_MAJOR_TYPE


class InvalidTagContent(CborError):
    code = ERR_INVALID_TAG_CONTENT


class UnsupportedTag(CborError):
    code = ERR_UNSUPPORTED_TAG


class DepthLimitExceeded(CborError):
    code = ERR_LIMIT_DEPTH


class TrailingData(CborError):
    code = ERR_TRAILING_DATA
