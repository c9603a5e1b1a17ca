"""Parse, build and extract URI query strings."""

from __future__ import annotations

from .api import QueryCodec, query_build, query_extract, query_parse
from .encoding import RAW, RFC1738, RFC3986, RFC3987, EncodingRule
from .errors import InvalidPair, MalformedInput, QueryStringError, TypeMismatch, UnknownEncoding

__version__ = "1.0.0"

__all__ = [
    "EncodingRule",
    "InvalidPair",
    "MalformedInput",
    "QueryCodec",
    "QueryStringError",
    "RAW",
    "RFC1738",
    "RFC3986",
    "RFC3987",
    "TypeMismatch",
    "UnknownEncoding",
    "query_build",
    "query_extract",
    "query_parse",
]
