"""Tests for :mod:`query_codec.parser`."""

from __future__ import annotations

import pytest

from query_codec import parser
from query_codec.encoding import RFC1738, RFC3986, RFC3987
from query_codec.errors import MalformedInput, TypeMismatch, UnknownEncoding


class Stringable:
    def __str__(self) -> str:
        return "a=1&a=2"


@pytest.mark.parametrize(
    "query, separator, expected, rule",
    [
        ("foo", "", [("f", None), ("o", None), ("o", None)], RFC3986),
        (Stringable(), "&", [("a", "1"), ("a", "2")], RFC3986),
        ("to+to=foo%2bbar", "&", [("to to", "foo+bar")], RFC1738),
        (None, "&", [], RFC3986),
        ("", "&", [("", None)], RFC3986),
        (False, "&", [("0", None)], RFC1738),
        (True, "&", [("1", None)], RFC3986),
        ("a=1&a=2", "&", [("a", "1"), ("a", "2")], RFC3986),
        ("a&b", "&", [("a", None), ("b", None)], RFC3986),
        ("a=&b=", "&", [("a", ""), ("b", "")], RFC3986),
        ("a[]=1&a[]=2", "&", [("a[]", "1"), ("a[]", "2")], RFC3986),
        ("a.b=3", "&", [("a.b", "3")], RFC3986),
        ("a%20b=c%20d", "&", [("a b", "c d")], RFC3986),
        ("a=&b", "&", [("a", ""), ("b", None)], RFC3986),
        ("a=b=", "&", [("a", "b=")], RFC3986),
        ("a", "&", [("a", None)], RFC3986),
        ("0", "&", [("0", None)], RFC3986),
        ("0=", "&", [("0", "")], RFC3986),
        ("a=0", "&", [("a", "0")], RFC3986),
        ("a=0;b=0&c=4", ";", [("a", "0"), ("b", "0&c=4")], RFC3986),
        ("42", "&", [("42", None)], RFC3986),
        ("42=l33t", "&", [("42", "l33t")], RFC3986),
        ("42=l3+3t", "&", [("42", "l3 3t")], RFC1738),
        ("42=l3+3t", "&", [("42", "l3+3t")], RFC3986),
        (42, "&", [("42", None)], RFC3986),
        (1.5, "&", [("1.5", None)], RFC3986),
        ("first=%41&second=%a", "&", [("first", "A"), ("second", "%a")], RFC3986),
        ("a%00b=c", "&", [("a\x00b", "c")], RFC3986),
        ("&&", "&", [("", None), ("", None), ("", None)], RFC3986),
        ("a=1&amp;b=2", "&amp;", [("a", "1"), ("b", "2")], RFC3986),
    ],
)
def test_parse(query: object, separator: str, expected: list[parser.Pair], rule: int) -> None:
    assert parser.parse(query, separator, rule) == expected


def test_parse_rejects_unknown_encoding() -> None:
    with pytest.raises(UnknownEncoding):
        parser.parse("foo=bar", "&", 42)
    with pytest.raises(UnknownEncoding):
        parser.parse("foo=bar", "&", RFC3987)


def test_encoding_is_checked_before_the_query() -> None:
    with pytest.raises(UnknownEncoding):
        parser.parse(["foo=bar"], "&", 42)


@pytest.mark.parametrize("query", ["foo=bar\0", "foo=\x1fbar", "foo\x7f", "a=b\n"])
def test_parse_rejects_control_characters(query: str) -> None:
    with pytest.raises(MalformedInput):
        parser.parse(query)


@pytest.mark.parametrize(
    "query", [["foo=bar"], {"foo": "bar"}, b"foo=bar", object(), float("nan"), float("inf")]
)
def test_parse_rejects_unsupported_types(query: object) -> None:
    with pytest.raises(TypeMismatch):
        parser.parse(query, "&", RFC1738)


def test_type_mismatch_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        parser.parse(object())


def test_query_parser_is_reusable() -> None:
    query_parser = parser.QueryParser(";", RFC1738)
    assert query_parser.parse("a=b+c;d") == [("a", "b c"), ("d", None)]
    assert query_parser.parse("e") == [("e", None)]
