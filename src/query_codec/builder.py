"""Serialize ordered key/value pairs into a query string."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
import logging
from typing import Any

from .encoding import RFC3986, EncodingRule, coerce_rule, encode, encode_key
from .errors import InvalidPair, TypeMismatch
from .scalars import is_scalar, scalar_to_string

__all__ = [
    "QueryBuilder",
    "build",
]

logger = logging.getLogger(__name__)


class QueryBuilder:
    """Build query strings using a fixed separator and encoding rule.

    Unlike :func:`urllib.parse.urlencode` the builder never rewrites keys,
    keeps duplicated keys in order and renders a ``None`` value as a bare
    key without ``=``.
    """

    def __init__(self, separator: str = "&", encoding: EncodingRule | int = RFC3986) -> None:
        self.encoding = coerce_rule(encoding)
        self.separator = separator

    def build(self, pairs: Iterable[Any]) -> str | None:
        """Return the query string for ``pairs`` or ``None`` when there are none."""

        if isinstance(pairs, (str, bytes)) or not isinstance(pairs, Iterable):
            raise TypeMismatch(f"The pairs must be an iterable of pairs, {type(pairs).__name__!r} given")

        parts = [self._build_pair(pair) for pair in pairs]
        if not parts:
            return None
        logger.debug("Built query", extra={"pairs": len(parts), "encoding": self.encoding.name})
        return self.separator.join(parts)

    def _build_pair(self, pair: object) -> str:
        key, value = _unpack(pair)
        if not is_scalar(key):
            raise InvalidPair(f"A pair key must be a scalar value, {type(key).__name__!r} given")
        if value is not None and not is_scalar(value):
            raise InvalidPair(
                f"A pair value must be a scalar value or None, {type(value).__name__!r} given"
            )

        try:
            encoded = encode_key(scalar_to_string(key), self.encoding, self.separator)
            if value is None:
                return encoded
            return encoded + "=" + encode(scalar_to_string(value), self.encoding, self.separator)
        except UnicodeEncodeError as exc:
            raise InvalidPair(f"A pair contains characters that can not be encoded: {pair!r}") from exc


def build(pairs: Iterable[Any], separator: str = "&", encoding: EncodingRule | int = RFC3986) -> str | None:
    """Build a query string from an iterable of ``(key, value)`` pairs."""

    return QueryBuilder(separator, encoding).build(pairs)


def _unpack(pair: object) -> tuple[Any, Any]:
    if isinstance(pair, (str, bytes, bytearray, Mapping)) or not isinstance(pair, Sequence):
        raise InvalidPair(f"A pair must be a sequence of two elements, {type(pair).__name__!r} given")
    if len(pair) != 2:
        raise InvalidPair(f"A pair must contain exactly two elements, {len(pair)} given")
    return pair[0], pair[1]
