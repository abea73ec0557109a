from __future__ import annotations

import pytest
from toon_tabular import (
    Delimiter,
    ToonDecodeError,
    decode_tabular,
    parse_scalar,
    serialize,
    split_row,
    tokenize_row,
)


def test_split_simple_row():
    assert split_row("1, Alice, admin", Delimiter.COMMA) == ["1", " Alice", " admin"]


def test_quoted_delimiter_is_not_a_split():
    assert split_row('"a,b",c', ",") == ['"a,b"', "c"]


def test_escaped_quote_inside_quotes():
    assert split_row('"say \\"hi, there\\"",x', ",") == ['"say \\"hi, there\\""', "x"]


def test_trailing_delimiter_yields_empty_field():
    assert split_row("a,b,", ",") == ["a", "b", ""]
    assert split_row("", ",") == [""]


def test_unterminated_quote_degrades_to_one_token():
    assert split_row('"abc,def', ",") == ['"abc,def']


def test_tab_and_pipe():
    assert split_row("a\tb|c", Delimiter.TAB) == ["a", "b|c"]
    assert split_row("a|b\tc", Delimiter.PIPE) == ["a", "b\tc"]


def test_token_offsets():
    tokens = tokenize_row("ab,  c", ",")
    assert [(t.text, t.start, t.end) for t in tokens] == [("ab", 0, 2), ("  c", 3, 6)]


def test_parse_scalar():
    assert parse_scalar(" null ") is None
    assert parse_scalar("true") is True
    assert parse_scalar("false") is False
    assert parse_scalar("-12") == -12
    assert parse_scalar("3.5") == 3.5
    assert parse_scalar('"42"') == "42"
    assert parse_scalar('"a\\nb"') == "a\nb"
    assert parse_scalar("Alice") == "Alice"


def test_flat_tabular_round_trip():
    rows = [
        {"id": 1, "name": "Alice, Jr.", "note": "a|b", "ok": True, "score": 9.5, "x": None},
        {"id": 2, "name": "Bob", "note": "", "ok": False, "score": -3.25, "x": "null"},
        {"id": 3, "name": " padded ", "note": 'quote "q"', "ok": True, "score": 0, "x": "7up"},
    ]
    assert decode_tabular(serialize(rows)) == rows


def test_round_trip_normalizes_field_order():
    rows = [{"b": "x", "a": 1}, {"a": 2, "b": "y"}]
    decoded = decode_tabular(serialize({"items": rows}))
    assert decoded == rows
    assert list(decoded[0].keys()) == ["a", "b"]


def test_decode_tabular_rejects_bad_header():
    with pytest.raises(ToonDecodeError):
        decode_tabular("items[2]:\n  - 1\n  - 2")


def test_decode_tabular_checks_counts():
    with pytest.raises(ToonDecodeError):
        decode_tabular("items[3]{a,b}:\n  1, 2\n  3, 4")
    with pytest.raises(ToonDecodeError):
        decode_tabular("items[1]{a,b}:\n  1, 2, 3")


def test_large_float_round_trip():
    rows = [{"a": 1e300, "b": 1}, {"a": -2.5e20, "b": 2}]
    text = serialize(rows)
    assert text == "[2]{a,b}:\n  1e+300, 1\n  -2.5e+20, 2"
    decoded = decode_tabular(text)
    assert decoded == rows
    assert all(isinstance(row["a"], float) for row in decoded)
