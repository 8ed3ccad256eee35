"""Setter resolution — the naming/lookup rule from attribute name to mutator.

For an attribute name ``k`` a setter exists when, in priority order:

1. the type defines a callable ``set_k`` method (prefix configurable);
2. the first definition of ``k`` in the MRO is a data descriptor with a
   usable ``__set__`` (a ``property`` without ``fset`` is read-only);
3. ``k`` is a field of a non-frozen pydantic model;
4. ``k`` is a field of a non-frozen dataclass;
5. ``k`` is an annotated, non-``ClassVar`` attribute somewhere in the MRO;
6. ``k`` is already present in the instance ``__dict__``.

Fields of frozen pydantic models and frozen dataclasses never resolve
unless rule 1 applies. Rules 1-5 depend only on the type and are cached
per type, but only for names the type declares: unknown names are
re-resolved on every call so untrusted input cannot grow the cache.
Rule 6 is checked per instance, can be disabled, and never applies to
frozen dataclasses or frozen pydantic models.

INVARIANT: names starting with ``_`` never resolve.
"""

from __future__ import annotations

import dataclasses
import inspect
import typing
import weakref
from collections.abc import Callable
from enum import StrEnum
from functools import partial
from typing import Any

from pydantic import BaseModel

DEFAULT_SETTER_PREFIX = "set_"


class SetterKind(StrEnum):
    """How a name resolves at the type level."""

    METHOD = "method"
    ATTRIBUTE = "attribute"
    BLOCKED = "blocked"
    UNDECLARED = "undeclared"


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is typing.ClassVar or typing.get_origin(annotation) is typing.ClassVar


def _annotated_names(cls: type) -> set[str]:
    names: set[str] = set()
    for klass in cls.__mro__:
        if klass is object:
            continue
        try:
            annotations = inspect.get_annotations(klass)
        except NameError:
            # Unresolvable forward reference on an un-postponed annotation.
            continue
        names.update(name for name, ann in annotations.items() if not _is_classvar(ann))
    return names


def _is_frozen_type(cls: type) -> bool:
    if issubclass(cls, BaseModel):
        return bool(cls.model_config.get("frozen"))
    if dataclasses.is_dataclass(cls):
        return cls.__dataclass_params__.frozen  # type: ignore[attr-defined]
    return False


def _mro_lookup(cls: type, name: str) -> tuple[bool, Any]:
    for klass in cls.__mro__:
        if name in klass.__dict__:
            return True, klass.__dict__[name]
    return False, None


class PropertySetters:
    """Registry answering "does *target* have a setter for *name*?".

    Existence (:meth:`has_setter`) is a separate query from lookup
    (:meth:`setter_for`) so that callers can tell a missing setter apart
    from an ``AttributeError`` raised inside a legitimate one.

    Usage::

        setters = PropertySetters()
        if setters.has_setter(cat, "name"):
            setters.setter_for(cat, "name")("Gorby")
    """

    def __init__(
        self,
        *,
        prefix: str = DEFAULT_SETTER_PREFIX,
        allow_instance_attributes: bool = True,
    ) -> None:
        self.prefix = prefix
        self.allow_instance_attributes = allow_instance_attributes
        self._cache: weakref.WeakKeyDictionary[type, dict[str, SetterKind]] = (
            weakref.WeakKeyDictionary()
        )
        self._annotations: weakref.WeakKeyDictionary[type, frozenset[str]] = (
            weakref.WeakKeyDictionary()
        )

    def kind_for_type(self, cls: type, name: str) -> SetterKind:
        """Resolve *name* against *cls* only (rules 1-5).

        Only names the type declares are cached. ``UNDECLARED`` results and
        names rejected by the ``_`` rule are recomputed on each call.
        """
        per_type = self._cache.setdefault(cls, {})
        kind = per_type.get(name)
        if kind is None:
            kind = self._resolve(cls, name)
            if kind is not SetterKind.UNDECLARED and name and not name.startswith("_"):
                per_type[name] = kind
        return kind

    def _annotated(self, cls: type) -> frozenset[str]:
        names = self._annotations.get(cls)
        if names is None:
            names = frozenset(_annotated_names(cls))
            self._annotations[cls] = names
        return names

    def _resolve(self, cls: type, name: str) -> SetterKind:
        if not name or name.startswith("_"):
            return SetterKind.BLOCKED

        if self.prefix and callable(getattr(cls, f"{self.prefix}{name}", None)):
            return SetterKind.METHOD

        # Frozen models are checked before descriptors: slotted frozen
        # dataclasses still expose member descriptors with __set__.
        model_field = False
        if issubclass(cls, BaseModel):
            field = cls.model_fields.get(name)
            if field is not None:
                if cls.model_config.get("frozen") or field.frozen:
                    return SetterKind.BLOCKED
                model_field = True
        elif dataclasses.is_dataclass(cls):
            if name in {f.name for f in dataclasses.fields(cls)}:
                if cls.__dataclass_params__.frozen:  # type: ignore[attr-defined]
                    return SetterKind.BLOCKED
                model_field = True

        found, attr = _mro_lookup(cls, name)
        if found:
            if isinstance(attr, property):
                return SetterKind.ATTRIBUTE if attr.fset is not None else SetterKind.BLOCKED
            if hasattr(type(attr), "__set__"):
                return SetterKind.ATTRIBUTE
            if not model_field and (callable(attr) or hasattr(type(attr), "__get__")):
                # Methods and other non-data descriptors are not assignable state.
                return SetterKind.BLOCKED

        if model_field or name in self._annotated(cls):
            return SetterKind.ATTRIBUTE

        return SetterKind.UNDECLARED

    def has_setter(self, target: Any, name: str) -> bool:
        """Whether a setter for *name* resolves on *target*."""
        kind = self.kind_for_type(type(target), name)
        if kind is SetterKind.UNDECLARED:
            return self._has_instance_attribute(target, name)
        return kind is not SetterKind.BLOCKED

    def setter_for(self, target: Any, name: str) -> Callable[[Any], Any] | None:
        """Return a one-argument callable that sets *name* on *target*, or None."""
        kind = self.kind_for_type(type(target), name)
        if kind is SetterKind.METHOD:
            return getattr(target, f"{self.prefix}{name}")
        if kind is SetterKind.ATTRIBUTE:
            return partial(setattr, target, name)
        if kind is SetterKind.UNDECLARED and self._has_instance_attribute(target, name):
            return partial(setattr, target, name)
        return None

    def _has_instance_attribute(self, target: Any, name: str) -> bool:
        if not self.allow_instance_attributes or _is_frozen_type(type(target)):
            return False
        return name in getattr(target, "__dict__", {})

    def clear_cache(self) -> None:
        """Forget cached type resolutions (e.g. after patching a class)."""
        self._cache.clear()
        self._annotations.clear()


DEFAULT_SETTERS = PropertySetters()
