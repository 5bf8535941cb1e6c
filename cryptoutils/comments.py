"""Removal of line (``//``) and block (``/* */``) comments from byte streams.

Comments are removed by a small state machine in a single pass, using
constant space.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Iterator

_SLASH = ord("/")
_STAR = ord("*")
_NEWLINE = ord("\n")


class CommentError(ValueError):
    """Raised when the input holds a malformed comment."""


class _State(enum.Enum):
    NORMAL = enum.auto()
    POTENTIAL_COMMENT = enum.auto()
    LINE_COMMENT = enum.auto()
    BLOCK_COMMENT = enum.auto()
    POTENTIAL_BLOCK_END = enum.auto()


def exclude_comments(data: Iterable[int]) -> Iterator[int]:
    """Yield the bytes of ``data`` with comments left out.

    A line comment ends at a newline, which is kept.  Raises
    :class:`CommentError` for an isolated ``/`` or an unterminated
    block comment.
    """
    state = _State.NORMAL
    for byte in data:
        if state is _State.NORMAL:
            if byte == _SLASH:
                state = _State.POTENTIAL_COMMENT
            else:
                yield byte
        elif state is _State.POTENTIAL_COMMENT:
            if byte == _SLASH:
                state = _State.LINE_COMMENT
            elif byte == _STAR:
                state = _State.BLOCK_COMMENT
            else:
                raise CommentError("encountered isolated `/`")
        elif state is _State.LINE_COMMENT:
            if byte == _NEWLINE:
                state = _State.NORMAL
                yield byte
        elif state is _State.BLOCK_COMMENT:
            if byte == _STAR:
                state = _State.POTENTIAL_BLOCK_END
        else:
            state = _State.NORMAL if byte == _SLASH else _State.BLOCK_COMMENT

    if state in (_State.BLOCK_COMMENT, _State.POTENTIAL_BLOCK_END):
        raise CommentError("block comment not terminated with */")
    if state is _State.POTENTIAL_COMMENT:
        raise CommentError("encountered isolated `/`")


def strip_comments(text: str) -> str:
    """Return ``text`` with its comments removed."""
    return bytes(exclude_comments(text.encode("utf-8"))).decode("utf-8")