"""Tests for descriptor parsing and selection seeding."""

import pytest

from coreopts.descriptor import (
    CoreOption,
    Variable,
    iter_variables,
    parse_descriptor,
    parse_variable,
)
from coreopts.errors import DescriptorError
from coreopts.store import ConfigStore


def _store(**values: str) -> ConfigStore:
    store = ConfigStore.anonymous()
    for key, value in values.items():
        store.set_string(key, value)
    return store


# ---------------------------------------------------------------------------
# parse_descriptor()
# ---------------------------------------------------------------------------


class TestParseDescriptor:
    def test_description_and_values(self):
        parsed = parse_descriptor("gfx_api", "Graphics API; gl|vulkan|d3d11")
        assert parsed.description == "Graphics API"
        assert parsed.values == ("gl", "vulkan", "d3d11")

    def test_single_value(self):
        parsed = parse_descriptor("k", "Only; one")
        assert parsed.values == ("one",)

    def test_description_kept_verbatim(self):
        parsed = parse_descriptor("k", "  Padded  ; a|b")
        assert parsed.description == "  Padded  "

    def test_first_separator_wins(self):
        parsed = parse_descriptor("k", "Desc; a; b|c")
        assert parsed.description == "Desc"
        assert parsed.values == ("a; b", "c")

    def test_empty_and_duplicate_values_preserved(self):
        parsed = parse_descriptor("k", "Desc; a||a")
        assert parsed.values == ("a", "", "a")

    def test_empty_description(self):
        parsed = parse_descriptor("k", "; x|y")
        assert parsed.description == ""
        assert parsed.values == ("x", "y")

    def test_missing_separator(self):
        with pytest.raises(DescriptorError) as exc_info:
            parse_descriptor("k", "Graphics API: gl|vulkan")
        assert exc_info.value.key == "k"
        assert exc_info.value.descriptor == "Graphics API: gl|vulkan"

    def test_semicolon_without_space_is_not_a_separator(self):
        with pytest.raises(DescriptorError):
            parse_descriptor("k", "Desc;gl|vulkan")

    def test_no_values(self):
        with pytest.raises(DescriptorError, match="no values"):
            parse_descriptor("k", "Desc; ")

    def test_error_context(self):
        with pytest.raises(DescriptorError) as exc_info:
            parse_descriptor("k", "bad")
        data = exc_info.value.to_dict()
        assert data["type"] == "DescriptorError"
        assert data["context"] == {"key": "k", "descriptor": "bad"}


# ---------------------------------------------------------------------------
# parse_variable()
# ---------------------------------------------------------------------------


class TestParseVariable:
    def test_defaults_to_first_value(self):
        option = parse_variable("gfx_api", "gfx_api; gl|vulkan|d3d11", _store())
        assert option.index == 0
        assert option.value == "gl"

    def test_seeded_from_store(self):
        option = parse_variable("gfx_api", "gfx_api; gl|vulkan|d3d11", _store(gfx_api="d3d11"))
        assert option.index == 2
        assert option.value == "d3d11"

    def test_unknown_stored_value_falls_back(self):
        option = parse_variable("gfx_api", "gfx_api; gl|vulkan|d3d11", _store(gfx_api="metal"))
        assert option.index == 0

    def test_match_is_case_sensitive(self):
        option = parse_variable("gfx_api", "gfx_api; gl|vulkan", _store(gfx_api="Vulkan"))
        assert option.index == 0

    def test_first_duplicate_matches(self):
        option = parse_variable("k", "Desc; a|b|a", _store(k="a"))
        assert option.index == 0

    def test_other_keys_ignored(self):
        option = parse_variable("k", "Desc; a|b", _store(other="b"))
        assert option.index == 0

    def test_malformed_raises(self):
        with pytest.raises(DescriptorError):
            parse_variable("k", "no separator", _store())


# ---------------------------------------------------------------------------
# CoreOption
# ---------------------------------------------------------------------------


class TestCoreOption:
    def _option(self) -> CoreOption:
        return CoreOption(key="k", description="Desc", values=("a", "b", "c"))

    def test_select_wraps(self):
        option = self._option()
        option.select(4)
        assert option.index == 1

    def test_select_negative_wraps(self):
        option = self._option()
        option.select(-1)
        assert option.index == 2

    def test_step_back_from_zero(self):
        option = self._option()
        option.step(-1)
        assert option.value == "c"

    def test_find(self):
        option = self._option()
        assert option.find("c") == 2
        assert option.find("z") is None


# ---------------------------------------------------------------------------
# iter_variables()
# ---------------------------------------------------------------------------


class TestIterVariables:
    def test_all_pairs(self):
        pairs = [("a", "A; 1"), ("b", "B; 2")]
        assert list(iter_variables(pairs)) == [Variable("a", "A; 1"), Variable("b", "B; 2")]

    def test_stops_at_none_key(self):
        pairs = [("a", "A; 1"), (None, None), ("b", "B; 2")]
        assert [v.key for v in iter_variables(pairs)] == ["a"]

    def test_stops_at_none_value(self):
        pairs = [("a", "A; 1"), ("b", None), ("c", "C; 3")]
        assert [v.key for v in iter_variables(pairs)] == ["a"]

    def test_empty(self):
        assert list(iter_variables([])) == []
