import pytest

from cryptoutils.comments import CommentError, exclude_comments, strip_comments


def test_empty():
    assert strip_comments("") == ""


def test_single_char():
    assert strip_comments("0") == "0"


def test_two_chars():
    assert strip_comments("ab") == "ab"


def test_comment():
    assert strip_comments("ab//cd") == "ab"


def test_comments_are_ended_by_new_line():
    assert strip_comments("ab//comment\nde") == "ab\nde"


def test_new_lines_without_comments():
    assert strip_comments("ab\nde") == "ab\nde"


def test_error_on_single_slash():
    with pytest.raises(CommentError, match="isolated"):
        strip_comments("ab/cd")


def test_error_on_trailing_slash():
    with pytest.raises(CommentError, match="isolated"):
        strip_comments("ab/")


def test_line_comments_on_multiple_lines():
    text = (
        "\n"
        "line 1 //comment 1\n"
        "line 2 // comment 2 // comment 3\n"
        "line 3\n"
        "line 4 // comment 4"
    )
    expected = "\nline 1 \nline 2 \nline 3\nline 4 "
    assert strip_comments(text) == expected


def test_block_comment():
    assert strip_comments("ab/*comment*/12") == "ab12"


def test_empty_block_comment():
    assert strip_comments("ab/**/12") == "ab12"


def test_block_comment_with_asterisk_and_slash_inside():
    assert strip_comments("ab/*false * asterisk and / */12") == "ab12"


def test_block_comment_within_line_comment():
    assert strip_comments("ab// /*comment*/12") == "ab"


def test_block_comment_not_terminated():
    with pytest.raises(CommentError, match=r"block comment not terminated with \*/"):
        strip_comments("ab /*comment")


def test_block_comment_not_completely_terminated():
    with pytest.raises(CommentError, match=r"block comment not terminated with \*/"):
        strip_comments("ab /*comment*")


def test_block_and_line_comments_on_multiple_lines():
    text = (
        "\n"
        "line 1 /* comment 1 */\n"
        "line /* comment 2 */2 // line comment 1\n"
        "line 3 /* some comments\n"
        "over multiple lines\n"
        "*/\n"
        "line 4 /* more multiline comments\n"
        "* with leading\n"
        "* asterisks\n"
        "*/end// line comment 2"
    )
    expected = "\nline 1 \nline 2 \nline 3 \nline 4 end"
    assert strip_comments(text) == expected


def test_exclude_comments_yields_ints():
    assert list(exclude_comments(b"ab//cd")) == list(b"ab")


def test_exclude_comments_is_lazy_until_error():
    it = exclude_comments(b"ab/x")
    assert next(it) == ord("a")
    assert next(it) == ord("b")
    with pytest.raises(CommentError):
        next(it)