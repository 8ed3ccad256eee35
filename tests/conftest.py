"""Shared pytest fixtures for massassign tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import pytest

from massassign.domain.setters import DEFAULT_SETTERS


@pytest.fixture(autouse=True)
def _isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep settings discovery away from the developer's environment.

    Changes CWD to a temp directory and clears ``MASSASSIGN_*`` env vars so
    no stray ``massassign.toml`` or variable leaks into a test.
    """
    for name in list(os.environ):
        if name.startswith("MASSASSIGN_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _fresh_setter_cache() -> Generator[None]:
    """Test classes are defined per test; drop their cached resolutions."""
    yield
    DEFAULT_SETTERS.clear_cache()


class Recorder:
    """Target with explicit setters that records every call in order."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, object]] = []
        self.name: object = None
        self.status: object = "sleeping"

    def set_name(self, value: object) -> None:
        self.calls.append(("name", value))
        self.name = value

    def set_status(self, value: object) -> None:
        self.calls.append(("status", value))
        self.status = value


@pytest.fixture
def recorder() -> Recorder:
    """Target exposing ``name`` and ``status`` setters only."""
    return Recorder()
