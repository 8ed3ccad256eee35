"""Error hierarchy for mass assignment.

Every error raised by massassign derives from :class:`AttributeAssignmentError`.
The assignment kinds also subclass the closest builtin so that callers
catching ``TypeError`` / ``AttributeError`` / ``KeyError`` keep working.
"""

from __future__ import annotations

from typing import Any


class AttributeAssignmentError(Exception):
    """Base class for all mass-assignment failures."""


class InvalidInputError(AttributeAssignmentError, TypeError):
    """Raised when the attributes argument is not map-like."""


class ForbiddenAttributesError(AttributeAssignmentError):
    """Raised when a mapping flagged as not permitted is mass-assigned."""


class UnknownAttributeError(AttributeAssignmentError, AttributeError):
    """Raised when no setter resolves for an attribute name.

    Attributes:
        record: The object that was being assigned to.
        attribute: The offending attribute name.
    """

    def __init__(self, record: Any, attribute: str) -> None:
        self._record = record
        self._attribute = attribute
        super().__init__(f"unknown attribute '{attribute}' for {type(record).__name__}.")

    @property
    def record(self) -> Any:
        return self._record

    @property
    def attribute(self) -> str:
        return self._attribute


class UnpermittedParametersError(AttributeAssignmentError):
    """Raised by ``Parameters.permit`` when configured to reject unlisted keys."""

    def __init__(self, params: list[str]) -> None:
        self.params = params
        super().__init__(f"found unpermitted parameters: {', '.join(params)}")


class ParameterMissingError(AttributeAssignmentError, KeyError):
    """Raised by ``Parameters.require`` when a key is absent or blank."""

    def __init__(self, param: str) -> None:
        self.param = param
        super().__init__(f"param is missing or the value is empty: {param}")

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])
