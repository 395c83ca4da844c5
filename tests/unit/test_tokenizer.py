"""Unit tests for the options string tokenizer."""

import pytest

from lsm_options.core.status import StatusCode
from lsm_options.core.tokenizer import tokenize, trim


def test_trim_blank_input():
    """Test that trim handles empty and all-whitespace strings."""
    assert trim("") == ""
    assert trim("   ") == ""
    assert trim("\t\n ") == ""
    assert trim("  a b  ") == "a b"
    assert trim("\v\fx\r") == "x"


def test_trim_only_strips_c_whitespace():
    """Test non-breaking spaces and separator controls are kept."""
    assert trim("\u00a0x\u00a0") == "\u00a0x\u00a0"
    assert trim(" \x1cx\x1c ") == "\x1cx\x1c"
    assert trim("\u00a0") == "\u00a0"


def test_tokenize_keeps_unicode_spaces_in_values():
    """Test only C whitespace is skipped around keys and values."""
    result = tokenize("a=\u00a01; b ={x=1}\u00a0;c=2")

    assert not result.ok
    assert result.status.message == "Unexpected chars after nested options"
    assert tokenize("\u00a0a=1").value == {"\u00a0a": "1"}


def test_tokenize_simple_pairs():
    """Test flat key=value pairs with surrounding whitespace."""
    result = tokenize("  write_buffer_size = 1024 ; max_write_buffer_number=2 ")

    assert result.ok
    assert result.value == {"write_buffer_size": "1024", "max_write_buffer_number": "2"}


def test_tokenize_nested_block():
    """Test that a nested block is returned verbatim without its braces."""
    result = tokenize("a=1;b={x=1;y=2};c=3")

    assert result.ok
    assert result.value == {"a": "1", "b": "x=1;y=2", "c": "3"}


def test_tokenize_deeply_nested_block():
    """Test that inner braces are balanced and kept."""
    result = tokenize("outer={a={b={c=1}};d=2} ; last=x")

    assert result.ok
    assert result.value == {"outer": "a={b={c=1}};d=2", "last": "x"}


def test_tokenize_nested_block_is_trimmed():
    """Test whitespace inside the braces is trimmed."""
    result = tokenize("t={  block_size=4k;  }  ;")

    assert result.ok
    assert result.value == {"t": "block_size=4k;"}


def test_tokenize_trailing_semicolon():
    """Test a trailing ';' is allowed."""
    result = tokenize("a=1;b=2;")

    assert result.ok
    assert result.value == {"a": "1", "b": "2"}


@pytest.mark.parametrize("raw", ["", "   ", "\n\t"])
def test_tokenize_blank_input(raw):
    """Test blank input yields an empty map."""
    result = tokenize(raw)

    assert result.ok
    assert result.value == {}


def test_tokenize_empty_value_at_end():
    """Test a key with nothing after '=' gets an empty value."""
    result = tokenize("a=1;b=   ")

    assert result.ok
    assert result.value == {"a": "1", "b": ""}


def test_tokenize_empty_value_in_middle():
    """Test an empty value followed by ';'."""
    result = tokenize("a=;b=2")

    assert result.ok
    assert result.value == {"a": "", "b": "2"}


def test_tokenize_duplicate_key_last_wins():
    """Test that a repeated key overwrites the earlier value."""
    result = tokenize("a=1;b=2;a=3")

    assert result.ok
    assert result.value == {"a": "3", "b": "2"}


def test_tokenize_value_may_contain_equals():
    """Test only the first '=' separates key from value."""
    result = tokenize("path=a=b;x=1")

    assert result.ok
    assert result.value == {"path": "a=b", "x": "1"}


def test_tokenize_missing_equals():
    """Test that a key without '=' is rejected."""
    result = tokenize("a=1;b")

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert "'=' expected" in result.status.message


def test_tokenize_empty_key():
    """Test that an empty key is rejected."""
    result = tokenize("a=1; =2")

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert result.status.message == "Empty key found"


@pytest.mark.parametrize("raw", ["a={x=1", "a={x={y=1}", "a=1;b={{}"])
def test_tokenize_unbalanced_braces(raw):
    """Test that unbalanced braces are rejected."""
    result = tokenize(raw)

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert "Mismatched curly braces" in result.status.message


def test_tokenize_garbage_after_nested_block():
    """Test that only whitespace and ';' may follow a nested block."""
    result = tokenize("a={x=1} junk;b=2")

    assert not result.ok
    assert result.status.code is StatusCode.INVALID_ARGUMENT
    assert "Unexpected chars after nested options" in result.status.message


def test_tokenize_nested_block_at_end_without_semicolon():
    """Test a nested block may end the string."""
    result = tokenize("a=1;b={x=1}   ")

    assert result.ok
    assert result.value == {"a": "1", "b": "x=1"}


def test_tokenize_nested_value_round_trip():
    """Test that a nested value tokenizes the same as the original text."""
    outer = tokenize("t={block_size=8k;checksum=kxxHash}")
    inner = tokenize("block_size=8k;checksum=kxxHash")

    assert outer.ok and inner.ok
    assert tokenize(outer.value["t"]).value == inner.value
