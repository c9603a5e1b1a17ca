"""Public entry points of the query string codec."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

import structlog

from .builder import QueryBuilder
from .config import CodecConfig, load_settings
from .encoding import RFC3986, EncodingRule, coerce_rule
from .extractor import NestedValue, extract
from .logging_ import configure_logging
from .parser import Pair, QueryParser

__all__ = [
    "QueryCodec",
    "query_build",
    "query_extract",
    "query_parse",
]


def query_parse(query: object, separator: str = "&", encoding: EncodingRule | int = RFC3986) -> list[Pair]:
    """Parse a query string into a list of ``(key, value)`` pairs.

    Parameters
    ----------
    query:
        The query string. ``None`` yields an empty list, booleans are read as
        ``"1"``/``"0"`` and numbers or objects defining ``__str__`` are
        converted to text first.
    separator:
        The string delimiting pairs.
    encoding:
        Either :data:`RFC3986` or :data:`RFC1738`.
    """

    return QueryParser(separator, encoding).parse(query)


def query_build(pairs: Iterable[Any], separator: str = "&", encoding: EncodingRule | int = RFC3986) -> str | None:
    """Build a query string from ``(key, value)`` pairs.

    Returns ``None`` when ``pairs`` is empty so that "no query" can be told
    apart from the empty query string.
    """

    return QueryBuilder(separator, encoding).build(pairs)


def query_extract(
    query: object, separator: str = "&", encoding: EncodingRule | int = RFC3986
) -> dict[str, NestedValue]:
    """Parse the query string like PHP ``parse_str`` without mangling names."""

    return extract(query, separator, encoding)


class QueryCodec:
    """Parse, build and extract query strings with preconfigured defaults."""

    def __init__(self, config: Optional[CodecConfig] = None) -> None:
        self._config = config or CodecConfig()
        coerce_rule(self._config.encoding)

    @classmethod
    def from_settings(cls) -> "QueryCodec":
        """Create a codec from environment settings and set up logging."""

        settings = load_settings()
        configure_logging(settings.logging)
        structlog.get_logger(__name__).debug(
            "codec_configured",
            separator=settings.separator,
            encoding=settings.encoding.name,
        )
        return cls(settings.codec)

    @property
    def config(self) -> CodecConfig:
        return self._config

    def parse(
        self,
        query: object,
        separator: Optional[str] = None,
        encoding: EncodingRule | int | None = None,
    ) -> list[Pair]:
        return query_parse(query, *self._options(separator, encoding))

    def build(
        self,
        pairs: Iterable[Any],
        separator: Optional[str] = None,
        encoding: EncodingRule | int | None = None,
    ) -> str | None:
        return query_build(pairs, *self._options(separator, encoding))

    def extract(
        self,
        query: object,
        separator: Optional[str] = None,
        encoding: EncodingRule | int | None = None,
    ) -> dict[str, NestedValue]:
        return query_extract(query, *self._options(separator, encoding))

    def _options(self, separator: Optional[str], encoding: EncodingRule | int | None) -> tuple[str, EncodingRule | int]:
        return (
            self._config.separator if separator is None else separator,
            self._config.encoding if encoding is None else encoding,
        )
