import pytest

from kdlparse.chars import (
    is_digit,
    is_hex_digit,
    is_identifier_illegal,
    is_newline,
    is_non_initial,
    is_octal_digit,
    is_whitespace,
)


@pytest.mark.parametrize("codepoint", [0x09, 0x20, 0xA0, 0x1680, 0x2000, 0x2005, 0x200A, 0x202F, 0x205F, 0x3000])
def test_whitespace_set(codepoint):
    assert is_whitespace(chr(codepoint))
    assert not is_newline(chr(codepoint))


@pytest.mark.parametrize("codepoint", [0x0D, 0x0A, 0x85, 0x0C, 0x2028, 0x2029])
def test_newline_set(codepoint):
    assert is_newline(chr(codepoint))
    assert not is_whitespace(chr(codepoint))


def test_digit_classes():
    assert all(is_digit(c) for c in "0123456789")
    assert not is_digit("a")
    assert all(is_hex_digit(c) for c in "09afAF")
    assert not is_hex_digit("g")
    assert is_octal_digit("7")
    assert not is_octal_digit("8")


@pytest.mark.parametrize("char", list('\\/(){}<>;[]=,"') + [" ", "\n", "\t", "\x00", "\x1f"])
def test_identifier_illegal(char):
    assert is_identifier_illegal(char)
    assert is_non_initial(char)


@pytest.mark.parametrize("char", ["a", "Z", "-", "+", "_", ".", "#", "!", "~", "\x7f", "é", "😀"])
def test_identifier_legal(char):
    assert not is_identifier_illegal(char)


def test_digits_are_legal_but_not_initial():
    assert not is_identifier_illegal("5")
    assert is_non_initial("5")
    assert not is_non_initial("-")
