"""Tests for map-likeness, blankness, and key stringification."""

from collections import OrderedDict
from collections.abc import Iterator
from types import MappingProxyType
from typing import Any

import pytest

from massassign.domain.keys import is_blank, is_map_like, stringify_keys


class DuckMap:
    """Not a Mapping subclass, but speaks the keys()/__getitem__ protocol."""

    def __init__(self, data: dict[Any, Any]) -> None:
        self._data = data

    def keys(self) -> list[Any]:
        return list(self._data)

    def __getitem__(self, key: Any) -> Any:
        return self._data[key]


class GeneratorRow:
    """A row whose keys() is a generator, as some database cursors return."""

    def __init__(self, **data: Any) -> None:
        self._data = data

    def keys(self) -> Iterator[str]:
        yield from self._data

    def __getitem__(self, key: str) -> Any:
        return self._data[key]


class TestIsMapLike:
    @pytest.mark.parametrize(
        "value",
        [{}, {"a": 1}, OrderedDict(a=1), MappingProxyType({"a": 1}), DuckMap({"a": 1})],
    )
    def test_accepts_mappings(self, value: Any) -> None:
        assert is_map_like(value)

    @pytest.mark.parametrize("value", [dict, OrderedDict, DuckMap, MappingProxyType])
    def test_rejects_classes(self, value: Any) -> None:
        assert not is_map_like(value)

    def test_accepts_generator_keys(self) -> None:
        assert is_map_like(GeneratorRow(name="Gorby"))

    @pytest.mark.parametrize("value", ["name=Gorby", ["name", "Gorby"], 42, ("a", 1), object()])
    def test_rejects_non_mappings(self, value: Any) -> None:
        assert not is_map_like(value)


class TestIsBlank:
    def test_none_is_blank(self) -> None:
        assert is_blank(None)

    def test_empty_mapping_is_blank(self) -> None:
        assert is_blank({})
        assert is_blank(DuckMap({}))

    def test_non_empty_is_not_blank(self) -> None:
        assert not is_blank({"name": None})

    def test_generator_keys(self) -> None:
        assert is_blank(GeneratorRow())
        assert not is_blank(GeneratorRow(name="Gorby"))


class TestStringifyKeys:
    def test_coerces_non_text_keys(self) -> None:
        assert stringify_keys({1: "a", 2.5: "b", None: "c"}) == {"1": "a", "2.5": "b", "None": "c"}

    def test_preserves_order(self) -> None:
        result = stringify_keys({"z": 1, "a": 2, "m": 3})
        assert list(result) == ["z", "a", "m"]

    def test_collision_keeps_first_position_last_value(self) -> None:
        result = stringify_keys({1: "int", "b": "b", "1": "str"})
        assert list(result.items()) == [("1", "str"), ("b", "b")]

    def test_returns_new_dict(self) -> None:
        source = {"a": 1}
        result = stringify_keys(source)
        assert result == source
        assert result is not source

    def test_duck_map(self) -> None:
        assert stringify_keys(DuckMap({1: "x"})) == {"1": "x"}

    def test_generator_keys(self) -> None:
        assert stringify_keys(GeneratorRow(name="Gorby", status="yawning")) == {
            "name": "Gorby",
            "status": "yawning",
        }
