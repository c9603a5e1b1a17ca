from __future__ import annotations

# Shared error types for the query string codec.


class QueryStringError(Exception):
    """Base exception for known query string errors."""


class UnknownEncoding(QueryStringError, ValueError):
    """Raised when an encoding rule is not supported by the called operation."""


class MalformedInput(QueryStringError, ValueError):
    """Raised when a raw query string contains forbidden characters."""


class TypeMismatch(QueryStringError, TypeError):
    """Raised when the input cannot be converted into a query string."""


class InvalidPair(QueryStringError, ValueError):
    """Raised when a pair handed to the builder is malformed."""


__all__ = [
    "InvalidPair",
    "MalformedInput",
    "QueryStringError",
    "TypeMismatch",
    "UnknownEncoding",
]
