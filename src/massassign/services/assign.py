"""AssignmentService — mass assignment that reports instead of raising.

Callers that need to decide between a validation error (unknown attribute),
an authorization error (forbidden attributes), and a programming error
(invalid input) get a :class:`ServiceResult` with a distinct error code
for each. Keys applied before a failure are always reported, since
assignment is never rolled back.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from structlog.contextvars import bound_contextvars

from massassign.assignment import assign_attribute, prepare_attributes
from massassign.config.settings import MassAssignSettings
from massassign.domain.errors import (
    ForbiddenAttributesError,
    InvalidInputError,
    UnknownAttributeError,
    UnpermittedParametersError,
)
from massassign.domain.parameters import Parameters
from massassign.protection import ForbiddenAttributesProtection, Sanitizer
from massassign.services.result import ErrorCode, ServiceResult

logger = logging.getLogger(__name__)

OP = "assign_attributes"


class AssignmentService:
    """Configured entry point for assignment and permitted parameters.

    Usage::

        service = AssignmentService(settings=MassAssignSettings.load())
        params = service.parameters(request_body).permit("name", "status")
        result = service.assign(cat, params)
        if not result.ok:
            ...
    """

    def __init__(
        self,
        sanitizer: Sanitizer | None = None,
        settings: MassAssignSettings | None = None,
    ) -> None:
        self._settings = settings if settings is not None else MassAssignSettings.load()
        self._sanitizer = sanitizer or ForbiddenAttributesProtection()
        self._setters = self._settings.build_setters()

    @property
    def settings(self) -> MassAssignSettings:
        return self._settings

    def parameters(self, data: Mapping[Any, Any] | None = None) -> Parameters:
        """Wrap *data* as unpermitted Parameters using the configured policy."""
        return Parameters(data, unpermitted_action=self._settings.parameters.unpermitted_action)

    def permit(self, data: Mapping[Any, Any] | None, *keys: str) -> ServiceResult:
        """Filter *data* down to *keys*, reporting a rejection as a result."""
        try:
            permitted = self.parameters(data).permit(*keys)
        except UnpermittedParametersError as exc:
            logger.info("Rejected unpermitted parameters: %s", exc.params)
            return ServiceResult.failure(
                "permit_parameters",
                ErrorCode.UNPERMITTED_PARAMETERS,
                str(exc),
                detail={"params": exc.params},
            )
        return ServiceResult.success("permit_parameters", params=permitted.to_dict())

    def assign(self, target: Any, attributes: Any) -> ServiceResult:
        """Assign *attributes* onto *target*.

        Returns:
            ``ok=True`` with ``data["assigned"]`` listing the applied keys,
            or ``ok=False`` with an :class:`ErrorCode`. Exceptions other
            than the three assignment kinds propagate.
        """
        target_name = type(target).__name__
        assigned: list[str] = []
        with bound_contextvars(op=OP, target=target_name):
            try:
                prepared = prepare_attributes(attributes)
                if prepared is not None:
                    sanitized = self._sanitizer.sanitize_for_mass_assignment(prepared)
                    for key, value in sanitized.items():
                        assign_attribute(target, key, value, setters=self._setters)
                        assigned.append(key)
            except InvalidInputError as exc:
                logger.info("Invalid assignment input: %s", exc)
                return self._failure(ErrorCode.INVALID_INPUT, exc, target_name, assigned)
            except ForbiddenAttributesError as exc:
                logger.info("Forbidden attributes for %s", target_name)
                return self._failure(ErrorCode.FORBIDDEN_ATTRIBUTES, exc, target_name, assigned)
            except UnknownAttributeError as exc:
                if exc.record is not target:
                    # Raised by a nested assignment inside a legitimate setter.
                    raise
                logger.info("Unknown attribute %r for %s", exc.attribute, target_name)
                return self._failure(
                    ErrorCode.UNKNOWN_ATTRIBUTE,
                    exc,
                    target_name,
                    assigned,
                    attribute=exc.attribute,
                )

        logger.debug("Assigned %d attribute(s) to %s", len(assigned), target_name)
        return ServiceResult.success(OP, assigned=assigned, target=target_name)

    @staticmethod
    def _failure(
        code: ErrorCode,
        exc: Exception,
        target_name: str,
        assigned: list[str],
        **detail: Any,
    ) -> ServiceResult:
        return ServiceResult.failure(
            OP,
            code,
            str(exc),
            detail={**detail, "assigned": list(assigned)},
            data={"assigned": list(assigned), "target": target_name},
        )

