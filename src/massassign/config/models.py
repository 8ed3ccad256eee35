"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, massassign.toml only contains
overrides. An empty file is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel

from massassign.domain.parameters import UnpermittedAction
from massassign.domain.setters import DEFAULT_SETTER_PREFIX


class SettersConfig(BaseModel):
    """[setters] section."""

    model_config = {"frozen": True}

    prefix: str = DEFAULT_SETTER_PREFIX
    allow_instance_attributes: bool = True


class ParametersConfig(BaseModel):
    """[parameters] section."""

    model_config = {"frozen": True}

    unpermitted_action: UnpermittedAction = UnpermittedAction.IGNORE
