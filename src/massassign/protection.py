"""Mass-assignment protection — the sanitizer capability.

The assigner never decides what may be mass-assigned. It hands the
normalized mapping to a :class:`Sanitizer` and applies whatever comes back.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from massassign.domain.errors import ForbiddenAttributesError


@runtime_checkable
class Sanitizer(Protocol):
    """Filters or rejects an attribute map before any setter runs."""

    def sanitize_for_mass_assignment(self, attributes: Mapping[str, Any]) -> Mapping[str, Any]:
        """Return the mapping to apply, or raise ForbiddenAttributesError."""
        ...


def is_permitted(attributes: Any) -> bool | None:
    """Read the ``permitted`` flag of *attributes*.

    Returns None when the mapping carries no flag at all. The flag may be
    a plain attribute or a zero-argument method.
    """
    flag = getattr(attributes, "permitted", None)
    if flag is None:
        return None
    if callable(flag):
        flag = flag()
    return bool(flag)


class ForbiddenAttributesProtection:
    """Default sanitizer: reject mappings explicitly flagged not permitted.

    Plain dicts carry no flag and pass through unchanged. Also usable as a
    mixin, which is how :class:`~massassign.assignment.AttributeAssignment`
    makes every model its own sanitizer.
    """

    def sanitize_for_mass_assignment(self, attributes: Mapping[str, Any]) -> Mapping[str, Any]:
        if is_permitted(attributes) is False:
            raise ForbiddenAttributesError(
                "Attributes flagged as not permitted cannot be mass-assigned."
            )
        return attributes


class PermitAll:
    """Sanitizer that trusts every mapping, flag or not."""

    def sanitize_for_mass_assignment(self, attributes: Mapping[str, Any]) -> Mapping[str, Any]:
        return attributes
