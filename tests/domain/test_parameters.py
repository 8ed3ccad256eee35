"""Tests for Parameters — the permitted-flag mapping."""

import logging

import pytest

from massassign.domain.errors import ParameterMissingError, UnpermittedParametersError
from massassign.domain.parameters import Parameters, UnpermittedAction


class TestConstruction:
    def test_unpermitted_by_default(self) -> None:
        assert Parameters({"name": "Gorby"}).permitted is False

    def test_keys_stringified(self) -> None:
        params = Parameters({1: "one", "two": 2})
        assert list(params) == ["1", "two"]

    def test_empty(self) -> None:
        params = Parameters()
        assert len(params) == 0
        assert params.to_dict() == {}

    def test_read_only(self) -> None:
        params = Parameters({"name": "Gorby"})
        with pytest.raises(TypeError):
            params["name"] = "Other"  # type: ignore[index]

    def test_equality(self) -> None:
        assert Parameters({"a": 1}) == {"a": 1}
        assert Parameters({"a": 1}) != Parameters({"a": 1}, permitted=True)

    def test_invalid_action_rejected(self) -> None:
        with pytest.raises(ValueError):
            Parameters({}, unpermitted_action="explode")


class TestPermit:
    def test_keeps_listed_keys_in_source_order(self) -> None:
        params = Parameters({"status": "yawning", "admin": True, "name": "Gorby"})
        permitted = params.permit("name", "status")
        assert permitted.permitted is True
        assert list(permitted.items()) == [("status", "yawning"), ("name", "Gorby")]

    def test_source_untouched(self) -> None:
        params = Parameters({"name": "Gorby", "admin": True})
        params.permit("name")
        assert params.permitted is False
        assert "admin" in params

    def test_listed_but_absent_key_ignored(self) -> None:
        permitted = Parameters({"name": "Gorby"}).permit("name", "age")
        assert permitted.to_dict() == {"name": "Gorby"}

    def test_permit_all(self) -> None:
        permitted = Parameters({"name": "Gorby", "admin": True}).permit_all()
        assert permitted.permitted is True
        assert len(permitted) == 2

    def test_raise_action(self) -> None:
        params = Parameters({"name": "Gorby", "id": 1, "admin": True}, unpermitted_action="raise")
        with pytest.raises(UnpermittedParametersError) as exc_info:
            params.permit("name")
        assert exc_info.value.params == ["admin", "id"]

    def test_log_action(self, caplog: pytest.LogCaptureFixture) -> None:
        params = Parameters({"name": "Gorby", "admin": True}, unpermitted_action=UnpermittedAction.LOG)
        with caplog.at_level(logging.WARNING, logger="massassign"):
            permitted = params.permit("name")
        assert permitted.to_dict() == {"name": "Gorby"}
        assert "Unpermitted parameters: admin" in caplog.text

    def test_action_carried_to_copies(self) -> None:
        params = Parameters({"cat": {"name": "Gorby"}}, unpermitted_action="raise")
        nested = params.require("cat")
        with pytest.raises(UnpermittedParametersError):
            nested.permit("age")


class TestRequire:
    def test_returns_value(self) -> None:
        assert Parameters({"name": "Gorby"}).require("name") == "Gorby"

    def test_nested_mapping_wrapped_unpermitted(self) -> None:
        nested = Parameters({"cat": {"name": "Gorby"}}).require("cat")
        assert isinstance(nested, Parameters)
        assert nested.permitted is False

    @pytest.mark.parametrize("data", [{}, {"cat": None}, {"cat": ""}, {"cat": {}}])
    def test_missing_or_blank(self, data: dict[str, object]) -> None:
        with pytest.raises(ParameterMissingError) as exc_info:
            Parameters(data).require("cat")
        assert exc_info.value.param == "cat"

    def test_false_and_zero_are_present(self) -> None:
        params = Parameters({"admin": False, "age": 0})
        assert params.require("admin") is False
        assert params.require("age") == 0
