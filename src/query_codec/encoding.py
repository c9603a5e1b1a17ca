"""Percent-encoding engine shared by the query parser and builder.

Four rules are supported:

``RFC3986``
    Escapes everything outside the unreserved set and the sub-delimiters
    allowed in a query component.
``RFC1738``
    Form encoding. Same as ``RFC3986`` but ``+`` is reserved for spaces.
``RFC3987``
    IRI encoding. Only control characters, ``#`` and the separator are
    escaped; other text passes through untouched.
``RAW``
    No escaping and no unescaping at all.
"""

from __future__ import annotations

import enum
import html
import re
import string
from collections.abc import Iterable
from functools import lru_cache
from urllib.parse import quote, unquote_to_bytes

from .errors import UnknownEncoding

__all__ = [
    "EncodingRule",
    "RAW",
    "RFC1738",
    "RFC3986",
    "RFC3987",
    "UNRESERVED",
    "SUB_DELIMS",
    "coerce_rule",
    "decode",
    "decode_percent",
    "encode",
    "encode_key",
]


class EncodingRule(enum.IntEnum):
    """Percent-encoding conventions understood by the codec."""

    RAW = 0
    RFC1738 = 1
    RFC3986 = 2
    RFC3987 = 3


RAW = EncodingRule.RAW
RFC1738 = EncodingRule.RFC1738
RFC3986 = EncodingRule.RFC3986
RFC3987 = EncodingRule.RFC3987

UNRESERVED = frozenset(string.ascii_letters + string.digits + "-._~")
SUB_DELIMS = frozenset("!$'()*+,;=:@?/&%")
CONTROL_CHARS = frozenset([chr(code) for code in range(0x20)] + ["\x7f"])

_IRI_UNSAFE = CONTROL_CHARS | {"#"}
_TRIPLET_RUN = re.compile(r"(?:%[0-9A-Fa-f]{2})+")


def coerce_rule(value: object, allowed: Iterable[EncodingRule] = tuple(EncodingRule)) -> EncodingRule:
    """Return the :class:`EncodingRule` matching ``value``.

    Raises :class:`UnknownEncoding` when ``value`` is not a rule, or is a rule
    outside ``allowed``.
    """

    if isinstance(value, bool):
        raise UnknownEncoding(f"Unknown encoding: {value!r}")
    try:
        rule = EncodingRule(value)
    except (TypeError, ValueError) as exc:
        raise UnknownEncoding(f"Unknown encoding: {value!r}") from exc
    if rule not in allowed:
        raise UnknownEncoding(f"Unsupported encoding for this operation: {rule.name}")
    return rule


def decode_percent(value: str) -> str:
    """Replace every well-formed ``%XX`` triplet with the character it denotes.

    Consecutive triplets are decoded together as UTF-8. Bytes that do not
    form valid UTF-8 stay percent-encoded with uppercase hex digits, and
    malformed sequences such as ``%a`` or ``%zz`` are left untouched.
    """

    if "%" not in value:
        return value
    return _TRIPLET_RUN.sub(_decode_run, value)


def _decode_run(match: re.Match[str]) -> str:
    raw = unquote_to_bytes(match.group(0))
    chunks: list[str] = []
    while raw:
        try:
            chunks.append(raw.decode("utf-8"))
            break
        except UnicodeDecodeError as exc:
            chunks.append(raw[: exc.start].decode("utf-8"))
            chunks.append("".join(f"%{byte:02X}" for byte in raw[exc.start : exc.end]))
            raw = raw[exc.end :]
    return "".join(chunks)


def decode(value: str, rule: EncodingRule | int = RFC3986) -> str:
    """Decode ``value`` according to ``rule``."""

    rule = coerce_rule(rule)
    if rule is RAW:
        return value
    if rule is RFC1738:
        value = value.replace("+", " ")
    return decode_percent(value)


def encode(value: str, rule: EncodingRule | int = RFC3986, separator: str = "&") -> str:
    """Percent-encode a pair value so it can not be confused with ``separator``."""

    return _encode(value, coerce_rule(rule), separator, key=False)


def encode_key(value: str, rule: EncodingRule | int = RFC3986, separator: str = "&") -> str:
    """Percent-encode a pair key.

    Identical to :func:`encode` except that ``=`` is escaped as well, so the
    key never leaks into the value once parsed back.
    """

    return _encode(value, coerce_rule(rule), separator, key=True)


def _encode(value: str, rule: EncodingRule, separator: str, *, key: bool) -> str:
    if rule is RAW:
        return value
    if rule is RFC3987:
        return _iri_pattern(separator, key).sub(_quote_match, value)

    encoded = _query_pattern(separator, key).sub(_escape_match, value)
    if rule is RFC1738:
        encoded = encoded.replace("+", "%2B").replace("~", "%7E")
        if "+" not in separator:
            encoded = encoded.replace("%20", "+")
    return encoded


def _excluded_chars(separator: str, key: bool) -> set[str]:
    excluded = set(separator) | set(html.unescape(separator))
    if key:
        excluded.add("=")
    return excluded


@lru_cache(maxsize=128)
def _query_pattern(separator: str, key: bool) -> re.Pattern[str]:
    safe = UNRESERVED | (SUB_DELIMS - _excluded_chars(separator, key))
    unsafe_run = "[^" + "".join(re.escape(char) for char in sorted(safe)) + "]+"
    if "%" in safe:
        # Existing triplets are matched first so they can be kept verbatim.
        return re.compile(rf"(%[0-9A-Fa-f]{{2}})|{unsafe_run}")
    return re.compile(unsafe_run)


@lru_cache(maxsize=128)
def _iri_pattern(separator: str, key: bool) -> re.Pattern[str]:
    unsafe = _IRI_UNSAFE | _excluded_chars(separator, key)
    return re.compile("[" + "".join(re.escape(char) for char in sorted(unsafe)) + "]")


def _escape_match(match: re.Match[str]) -> str:
    token = match.group(0)
    if match.re.groups and match.group(1) is not None:
        if chr(int(token[1:], 16)) in UNRESERVED:
            return token
    return quote(token, safe="")


def _quote_match(match: re.Match[str]) -> str:
    return quote(match.group(0), safe="")
