"""Key handling for attribute maps — map-likeness, blankness, stringification."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_MISSING = object()


def is_map_like(value: Any) -> bool:
    """Whether *value* can be read as a mapping.

    Accepts any :class:`~collections.abc.Mapping`, plus duck-typed objects
    exposing both ``keys()`` and ``__getitem__`` (the protocol ``dict()``
    itself accepts). Classes are never map-like, even ``dict`` itself.
    """
    if isinstance(value, type):
        return False
    if isinstance(value, Mapping):
        return True
    return callable(getattr(value, "keys", None)) and hasattr(value, "__getitem__")


def is_blank(value: Any) -> bool:
    """``None`` or an empty mapping.

    Only the first key is pulled, so ``keys()`` may return any iterable.
    """
    if value is None:
        return True
    return next(iter(value.keys()), _MISSING) is _MISSING


def stringify_keys(attributes: Any) -> dict[str, Any]:
    """Return a new dict with every key converted via ``str()``.

    Insertion order is preserved. When two keys stringify to the same text
    the later value wins, keeping the position of the first.

    Examples:
        >>> stringify_keys({1: "a", "b": 2})
        {'1': 'a', 'b': 2}
    """
    return {str(key): attributes[key] for key in attributes.keys()}
