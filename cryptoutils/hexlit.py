"""Conversion of hexadecimal string literals, with comments, into bytes.

Hex digits in either case are used, the whitespace characters space, tab,
carriage return and newline are ignored, and line (``//``) and block
(``/* */``) comments are skipped.
"""

from __future__ import annotations

from cryptoutils.comments import CommentError, exclude_comments

_WHITESPACE = frozenset(b" \r\n\t")
_HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


class HexLiteralError(ValueError):
    """Raised when a hex literal is malformed."""


def _digits(literal: str) -> list[int]:
    if not isinstance(literal, str):
        raise HexLiteralError(f"expected string literal, got `{literal!r}`")
    digits = []
    try:
        for byte in exclude_comments(literal.encode("utf-8")):
            if byte in _WHITESPACE:
                continue
            if byte in _HEX_DIGITS:
                digits.append(int(chr(byte), 16))
            elif byte < 128:
                raise HexLiteralError(
                    f"encountered invalid character: `{chr(byte)}`"
                )
            else:
                raise HexLiteralError("encountered invalid non-ASCII character")
    except CommentError as exc:
        raise HexLiteralError(str(exc)) from exc
    if len(digits) % 2:
        raise HexLiteralError("expected even number of hex characters")
    return digits


def hex_bytes(*args: str) -> bytes:
    """Decode the given hex literals and return their bytes concatenated.

    Each literal must hold an even number of hex digits.
    """
    out = bytearray()
    for literal in args:
        digits = iter(_digits(literal))
        out.extend((high << 4) | low for high, low in zip(digits, digits))
    return bytes(out)