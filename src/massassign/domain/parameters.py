"""Parameters — an ordered mapping tagged permitted or not.

An upstream authorization step produces permitted parameters by calling
:meth:`Parameters.permit` with the keys it allows. The default sanitizer
(:class:`massassign.protection.ForbiddenAttributesProtection`) refuses to
mass-assign a ``Parameters`` whose ``permitted`` flag is False.

INVARIANT: Parameters are immutable. ``permit()`` and friends return copies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from enum import StrEnum
from typing import Any

from massassign.domain.errors import ParameterMissingError, UnpermittedParametersError
from massassign.domain.keys import stringify_keys

logger = logging.getLogger(__name__)


class UnpermittedAction(StrEnum):
    """What ``permit()`` does with keys that were not listed."""

    IGNORE = "ignore"
    LOG = "log"
    RAISE = "raise"


class Parameters(Mapping[str, Any]):
    """Read-only, string-keyed mapping with a ``permitted`` flag.

    Examples:
        >>> params = Parameters({"name": "Gorby", "admin": True})
        >>> params.permitted
        False
        >>> dict(params.permit("name"))
        {'name': 'Gorby'}
    """

    def __init__(
        self,
        data: Mapping[Any, Any] | None = None,
        *,
        permitted: bool = False,
        unpermitted_action: UnpermittedAction | str = UnpermittedAction.IGNORE,
    ) -> None:
        self._data: dict[str, Any] = stringify_keys(data) if data else {}
        self._permitted = permitted
        self._unpermitted_action = UnpermittedAction(unpermitted_action)

    @property
    def permitted(self) -> bool:
        return self._permitted

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"<Parameters {self._data!r} permitted: {self._permitted}>"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Parameters):
            return self._data == other._data and self._permitted == other._permitted
        if isinstance(other, Mapping):
            return self._data == dict(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def _copy(self, data: Mapping[str, Any], *, permitted: bool) -> Parameters:
        return Parameters(data, permitted=permitted, unpermitted_action=self._unpermitted_action)

    def permit(self, *keys: str) -> Parameters:
        """Return permitted parameters holding only *keys* (in source order).

        Keys not listed are dropped, logged, or rejected according to the
        ``unpermitted_action`` this instance was built with.
        """
        allowed = {str(k) for k in keys}
        kept = {k: v for k, v in self._data.items() if k in allowed}
        dropped = sorted(k for k in self._data if k not in allowed)
        if dropped:
            self._handle_unpermitted(dropped)
        return self._copy(kept, permitted=True)

    def permit_all(self) -> Parameters:
        """Return a permitted copy with every key."""
        return self._copy(self._data, permitted=True)

    def require(self, key: str) -> Any:
        """Return the value under *key*.

        Raises:
            ParameterMissingError: If *key* is absent, None, or an empty
                string / collection.
        """
        value = self._data.get(key)
        if value is None or (hasattr(value, "__len__") and len(value) == 0):
            raise ParameterMissingError(key)
        if isinstance(value, Mapping) and not isinstance(value, Parameters):
            return self._copy(value, permitted=False)
        return value

    def to_dict(self) -> dict[str, Any]:
        """Plain dict copy, flag discarded."""
        return dict(self._data)

    def _handle_unpermitted(self, dropped: list[str]) -> None:
        if self._unpermitted_action is UnpermittedAction.RAISE:
            raise UnpermittedParametersError(dropped)
        if self._unpermitted_action is UnpermittedAction.LOG:
            logger.warning("Unpermitted parameters: %s", ", ".join(dropped))

