"""Attribute assignment — set many attributes from one mapping.

``assign()`` is a single linear pass:

1. reject non map-like input (:class:`InvalidInputError`);
2. return early on ``None`` or an empty mapping;
3. stringify keys, preserving order;
4. run the sanitizer (:class:`ForbiddenAttributesError` propagates);
5. resolve and invoke one setter per key, in order.

INVARIANT: sanitization completes before the first setter runs.
There is no rollback: when key *n* fails, keys before it stay applied.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, ClassVar

from massassign.domain.errors import InvalidInputError, UnknownAttributeError
from massassign.domain.keys import is_blank, is_map_like, stringify_keys
from massassign.domain.parameters import Parameters
from massassign.domain.setters import DEFAULT_SETTERS, PropertySetters
from massassign.protection import ForbiddenAttributesProtection, Sanitizer, is_permitted

logger = logging.getLogger(__name__)

_DEFAULT_SANITIZER = ForbiddenAttributesProtection()


def normalize_attributes(new_attributes: Any) -> Mapping[str, Any]:
    """Stringify keys, keeping any ``permitted`` flag visible to the sanitizer."""
    if isinstance(new_attributes, Parameters):
        return new_attributes
    flag = is_permitted(new_attributes)
    if flag is not None:
        return Parameters(new_attributes, permitted=flag)
    return stringify_keys(new_attributes)


def prepare_attributes(new_attributes: Any) -> Mapping[str, Any] | None:
    """Validate and normalize input; None means there is nothing to assign."""
    if new_attributes is not None and not is_map_like(new_attributes):
        raise InvalidInputError(
            "When assigning attributes, you must pass a mapping as an argument, "
            f"{type(new_attributes).__name__} passed."
        )
    if is_blank(new_attributes):
        return None
    return normalize_attributes(new_attributes)


def assign_attribute(
    target: Any,
    key: str,
    value: Any,
    *,
    setters: PropertySetters = DEFAULT_SETTERS,
) -> None:
    """Set a single attribute through its setter.

    Raises:
        UnknownAttributeError: If no setter resolves for *key*, or the
            setter disappeared while being invoked.
        AttributeError: Raised inside a legitimate setter; propagated as is.
    """
    setter = setters.setter_for(target, key)
    if setter is None:
        raise UnknownAttributeError(target, key)
    try:
        setter(value)
    except AttributeError as exc:
        if setters.has_setter(target, key):
            raise
        raise UnknownAttributeError(target, key) from exc


def assign(
    new_attributes: Any,
    target: Any,
    sanitizer: Sanitizer | None = None,
    *,
    setters: PropertySetters | None = None,
) -> None:
    """Assign every key of *new_attributes* onto *target*.

    Args:
        new_attributes: Map-like object of attribute name to value.
            ``None`` and empty mappings are a no-op.
        target: Object to mutate.
        sanitizer: Mass-assignment sanitizer. Defaults to
            :class:`ForbiddenAttributesProtection`.
        setters: Setter registry. Defaults to the shared registry.

    Raises:
        InvalidInputError: *new_attributes* is not map-like.
        ForbiddenAttributesError: The sanitizer rejected the mapping.
        UnknownAttributeError: A key has no setter on *target*.

    Examples:
        >>> from dataclasses import dataclass
        >>> @dataclass
        ... class Cat:
        ...     name: str = ""
        ...     status: str = ""
        >>> cat = Cat()
        >>> assign({"name": "Gorby", "status": "yawning"}, cat)
        >>> cat
        Cat(name='Gorby', status='yawning')
    """
    attributes = prepare_attributes(new_attributes)
    if attributes is None:
        return

    if sanitizer is None:
        sanitizer = _DEFAULT_SANITIZER
    sanitized = sanitizer.sanitize_for_mass_assignment(attributes)
    registry = DEFAULT_SETTERS if setters is None else setters

    logger.debug("Assigning %d attribute(s) to %s", len(sanitized), type(target).__name__)
    for key, value in sanitized.items():
        assign_attribute(target, key, value, setters=registry)


class AttributeAssignment(ForbiddenAttributesProtection):
    """Mixin adding ``assign_attributes`` to a model class.

    The model is its own sanitizer unless ``attribute_sanitizer`` is set.

    Usage::

        class Cat(AttributeAssignment):
            def __init__(self) -> None:
                self.name = None
                self.status = None

        cat = Cat()
        cat.assign_attributes({"name": "Gorby", "status": "yawning"})
    """

    attribute_sanitizer: ClassVar[Sanitizer | None] = None
    attribute_setters: ClassVar[PropertySetters | None] = None

    def assign_attributes(self, new_attributes: Any) -> None:
        """Set all attributes from *new_attributes*; see :func:`assign`."""
        attributes = prepare_attributes(new_attributes)
        if attributes is None:
            return
        sanitizer = self if self.attribute_sanitizer is None else self.attribute_sanitizer
        sanitized = sanitizer.sanitize_for_mass_assignment(attributes)
        logger.debug("Assigning %d attribute(s) to %s", len(sanitized), type(self).__name__)
        self._assign_attributes(sanitized)

    def _assign_attributes(self, attributes: Mapping[str, Any]) -> None:
        for key, value in attributes.items():
            self._assign_attribute(key, value)

    def _assign_attribute(self, key: str, value: Any) -> None:
        assign_attribute(self, key, value, setters=self.attribute_setters or DEFAULT_SETTERS)
