"""Split a raw query string into ordered key/value pairs."""

from __future__ import annotations

import logging
import re
from typing import Optional

from .encoding import RFC1738, RFC3986, EncodingRule, coerce_rule, decode_percent
from .errors import MalformedInput, TypeMismatch
from .scalars import is_scalar, scalar_to_string

__all__ = [
    "PARSER_ENCODINGS",
    "Pair",
    "QueryParser",
    "parse",
]

Pair = tuple[str, Optional[str]]

PARSER_ENCODINGS = (RFC1738, RFC3986)

INVALID_CHARS_PATTERN = re.compile(r"[\x00-\x1f\x7f]")

logger = logging.getLogger(__name__)


class QueryParser:
    """Parse query strings using a fixed separator and encoding rule."""

    def __init__(self, separator: str = "&", encoding: EncodingRule | int = RFC3986) -> None:
        self.encoding = coerce_rule(encoding, PARSER_ENCODINGS)
        self.separator = separator

    def parse(self, query: object) -> list[Pair]:
        """Return the pairs found in ``query`` in order of appearance.

        ``None`` yields no pairs while the empty string yields a single
        ``("", None)`` pair; callers can therefore tell "no query" apart from
        "empty query".
        """

        if query is None:
            return []
        text = _coerce_query(query)
        if text == "":
            return [("", None)]
        if INVALID_CHARS_PATTERN.search(text):
            logger.debug("Rejected query with control characters")
            raise MalformedInput(f"Invalid query string: {text!r}")
        if self.encoding is RFC1738:
            text = text.replace("+", " ")

        pairs = [_parse_pair(token) for token in _split(text, self.separator)]
        logger.debug("Parsed query", extra={"pairs": len(pairs), "encoding": self.encoding.name})
        return pairs


def parse(query: object, separator: str = "&", encoding: EncodingRule | int = RFC3986) -> list[Pair]:
    """Parse ``query`` into a list of ``(key, value)`` pairs."""

    return QueryParser(separator, encoding).parse(query)


def _coerce_query(query: object) -> str:
    if is_scalar(query):
        return scalar_to_string(query)
    if isinstance(query, (bytes, bytearray, float)) or type(query).__str__ is object.__str__:
        logger.debug("Rejected query of unsupported type", extra={"type": type(query).__name__})
        raise TypeMismatch(
            f"The query must be a scalar, a stringable object or None, {type(query).__name__!r} given"
        )
    return str(query)


def _split(text: str, separator: str) -> list[str]:
    if separator == "":
        return list(text)
    return text.split(separator)


def _parse_pair(token: str) -> Pair:
    key, sep, value = token.partition("=")
    if not sep:
        return decode_percent(key), None
    return decode_percent(key), decode_percent(value)
