"""Fold query pairs into nested values the way PHP ``parse_str`` does.

The differences with ``parse_str`` are deliberate:

* names are never mangled, ``.`` and spaces are kept as is;
* a ``[`` without a closing ``]`` is kept verbatim in the name;
* no whitespace trimming is done on names.

Like ``parse_str``, pairs with an empty name are skipped, later values
overwrite earlier ones and a mismatched bracket suffix is dropped.
"""

from __future__ import annotations

import logging
from typing import Any, Union

from .encoding import RFC3986, EncodingRule
from .parser import QueryParser

__all__ = [
    "NestedValue",
    "extract",
    "fold_pair",
]

NestedValue = Union[str, list["NestedValue"], dict[str, "NestedValue"]]

logger = logging.getLogger(__name__)


def extract(query: object, separator: str = "&", encoding: EncodingRule | int = RFC3986) -> dict[str, NestedValue]:
    """Return the variables stored in ``query`` as a nested mapping."""

    data: dict[str, Any] = {}
    for name, value in QueryParser(separator, encoding).parse(query):
        fold_pair(data, name, "" if value is None else value)
    logger.debug("Extracted query", extra={"variables": len(data)})
    return _finalize(data)


def fold_pair(data: dict[str, Any], name: str, value: str) -> None:
    """Store ``value`` under the bracket path ``name`` inside ``data``."""

    if name == "":
        return

    *parents, last = _split_path(name)
    for key in parents:
        child = data.get(key)
        if not isinstance(child, _Container):
            child = _Container(child) if isinstance(child, dict) else _Container()
            data[key] = child
        data = child

    if last is None:
        data.append(value)
    else:
        data[last] = value


class _Container(dict):
    """Mapping that tracks its next free position like a PHP array."""

    __slots__ = ("next_index",)

    def __init__(self, items: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.next_index = 0
        for key, value in (items or {}).items():
            self[key] = value

    def __setitem__(self, key: str, value: Any) -> None:
        super().__setitem__(key, value)
        if _is_position(key) and int(key) >= self.next_index:
            self.next_index = int(key) + 1

    def append(self, value: Any) -> None:
        self[str(self.next_index)] = value


def _split_path(name: str) -> list[str | None]:
    """Return the container keys of ``name`` followed by its final key.

    A final key of ``None`` stands for an empty ``[]`` index, an append.
    """

    path: list[str | None] = []
    # The name left to resolve is ``prefix + name[start:]``.
    prefix, start = "", 0
    while True:
        left = name.find("[", start)
        right = name.find("]", left) if left != -1 else -1
        if right == -1:
            path.append(prefix + name[start:])
            return path

        path.append(prefix + name[start:left])
        index = name[left + 1 : right]
        if index == "":
            path.append(None)
            return path

        start = right + 1
        if not name.startswith("[", start) or name.find("]", start + 1) == -1:
            path.append(index)
            return path
        if "[" in index:
            name, prefix, start = index + name[start:], "", 0
        else:
            prefix = index


def _is_position(key: str) -> bool:
    # Longer digit runs overflow a PHP integer and stay plain keys.
    return (
        len(key) < 19
        and key.isdecimal()
        and key.isascii()
        and (key == "0" or not key.startswith("0"))
    )


def _is_packed(container: dict[str, Any]) -> bool:
    return all(key == str(position) for position, key in enumerate(container))


def _finalize(data: dict[str, Any]) -> dict[str, NestedValue]:
    """Turn folded containers into plain dicts, or lists when packed."""

    result: dict[str, Any] = {}
    pending: list[tuple[dict[str, Any], Any]] = [(data, result)]
    while pending:
        source, target = pending.pop()
        as_list = isinstance(target, list)
        for position, (key, value) in enumerate(source.items()):
            if isinstance(value, dict):
                shell = [None] * len(value) if _is_packed(value) else {}
                pending.append((value, shell))
                value = shell
            target[position if as_list else key] = value
    return result
