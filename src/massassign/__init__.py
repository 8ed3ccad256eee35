"""massassign — mass attribute assignment with forbidden-attribute protection.

Public API::

    from massassign import assign, AttributeAssignment, Parameters

    assign({"name": "Gorby"}, cat)
    assign(Parameters(body).permit("name"), cat)
"""

from __future__ import annotations

from massassign.assignment import AttributeAssignment, assign
from massassign.domain.errors import (
    AttributeAssignmentError,
    ForbiddenAttributesError,
    InvalidInputError,
    ParameterMissingError,
    UnknownAttributeError,
    UnpermittedParametersError,
)
from massassign.domain.parameters import Parameters, UnpermittedAction
from massassign.domain.setters import PropertySetters
from massassign.protection import ForbiddenAttributesProtection, PermitAll, Sanitizer

__all__ = [
    "AttributeAssignment",
    "AttributeAssignmentError",
    "ForbiddenAttributesError",
    "ForbiddenAttributesProtection",
    "InvalidInputError",
    "ParameterMissingError",
    "Parameters",
    "PermitAll",
    "PropertySetters",
    "Sanitizer",
    "UnknownAttributeError",
    "UnpermittedAction",
    "UnpermittedParametersError",
    "assign",
]
