"""Tests for addon config parsing into SelectionOptions / CurationSettings."""

from __future__ import annotations

import pytest

from autostream.domain.entities.stremio import SelectionOptions
from autostream.infrastructure.stremio.options import (
    configured_debrid_names,
    has_debrid_configured,
    parse_addon_config,
    parse_bool,
    parse_curation_settings,
    parse_number,
    parse_rule,
    parse_selection_options,
)


class TestParseBool:
    @pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", " On ", True])
    def test_truthy(self, value: object) -> None:
        assert parse_bool(value, False) is True

    @pytest.mark.parametrize("value", ["0", "false", "no", "off", "", "maybe", False])
    def test_falsy(self, value: object) -> None:
        assert parse_bool(value, True) is False

    def test_absent_uses_default(self) -> None:
        assert parse_bool(None, True) is True
        assert parse_bool(None, False) is False


class TestParseNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("1.5", 1.5),
            ("2", 2.0),
            (" 300 ", 300.0),
            ("1.5x", 1.5),
            (".5", 0.5),
            ("1e2", 100.0),
            (3, 3.0),
            (2.25, 2.25),
        ],
    )
    def test_valid(self, value: object, expected: float) -> None:
        assert parse_number(value, 9.0) == expected

    @pytest.mark.parametrize(
        "value",
        [None, "", "abc", "x1.5", float("nan"), float("inf"), True, 10**400, "9" * 400],
    )
    def test_invalid_uses_default(self, value: object) -> None:
        assert parse_number(value, 9.0) == 9.0


class TestParseRule:
    def test_known_rules(self) -> None:
        assert parse_rule("ratio_or_delta", "ratio_and_delta") == "ratio_or_delta"
        assert parse_rule("RATIO_AND_DELTA", "ratio_or_delta") == "ratio_and_delta"

    def test_unknown_uses_default(self) -> None:
        assert parse_rule("fastest", "ratio_and_delta") == "ratio_and_delta"
        assert parse_rule(None, "ratio_or_delta") == "ratio_or_delta"


class TestDebrid:
    def test_not_configured(self) -> None:
        assert has_debrid_configured({}) is False
        assert has_debrid_configured({"realdebrid": ""}) is False

    def test_configured(self) -> None:
        assert has_debrid_configured({"realdebrid": "KEY"}) is True

    def test_names_in_declaration_order(self) -> None:
        config = {"premiumize": "k2", "realdebrid": "k1", "torbox": "k3"}
        assert configured_debrid_names(config) == ["RD", "PM", "TB"]


class TestParseAddonConfig:
    def test_empty(self) -> None:
        assert parse_addon_config("") == {}
        assert parse_addon_config(None) == {}

    def test_pipe_separated(self) -> None:
        assert parse_addon_config("ratio=1.5|Delta=300|realdebrid=abc") == {
            "ratio": "1.5",
            "delta": "300",
            "realdebrid": "abc",
        }

    def test_url_encoded(self) -> None:
        assert parse_addon_config("sort%3Dautostream%7Cbeautify%3D1") == {
            "sort": "autostream",
            "beautify": "1",
        }

    def test_segments_without_value_ignored(self) -> None:
        assert parse_addon_config("lite|=x|ratio=2") == {"ratio": "2"}


class TestParseSelectionOptions:
    def test_empty_config_uses_defaults(self) -> None:
        opts = parse_selection_options({})
        assert opts == SelectionOptions(tighten_when_debrid=False)

    def test_explicit_values(self) -> None:
        opts = parse_selection_options(
            {
                "preferlower": "0",
                "ratio": "1.8",
                "delta": "150",
                "rule": "ratio_or_delta",
                "top2": "false",
                "tighten": "1",
            }
        )
        assert opts.prefer_lower_if_much_faster is False
        assert opts.ratio_need == 1.8
        assert opts.delta_need == 150.0
        assert opts.rule == "ratio_or_delta"
        assert opts.two_outputs is False
        assert opts.tighten_when_debrid is True

    def test_setting_ratio_does_not_touch_prefer_lower(self) -> None:
        opts = parse_selection_options(
            {"ratio": "2"}, defaults=SelectionOptions(prefer_lower_if_much_faster=False)
        )
        assert opts.prefer_lower_if_much_faster is False

    @pytest.mark.parametrize("key", ["top2", "two", "twooutputs"])
    def test_two_outputs_aliases(self, key: str) -> None:
        assert parse_selection_options({key: "no"}).two_outputs is False

    def test_top2_takes_precedence(self) -> None:
        opts = parse_selection_options({"top2": "1", "two": "0"})
        assert opts.two_outputs is True

    def test_invalid_numbers_fall_back(self) -> None:
        defaults = SelectionOptions(ratio_need=1.1, delta_need=50.0)
        opts = parse_selection_options(
            {"ratio": "fast", "delta": "NaN"}, defaults=defaults
        )
        assert opts.ratio_need == 1.1
        assert opts.delta_need == 50.0

    def test_out_of_range_integers_fall_back(self) -> None:
        opts = parse_selection_options({"ratio": 10**400, "delta": -(10**400)})
        assert opts.ratio_need == 1.35
        assert opts.delta_need == 200.0

    def test_tighten_follows_debrid(self) -> None:
        assert parse_selection_options({"realdebrid": "KEY"}).tighten_when_debrid
        assert not parse_selection_options({}).tighten_when_debrid

    def test_explicit_tighten_overrides_debrid(self) -> None:
        opts = parse_selection_options({"realdebrid": "KEY", "tighten": "off"})
        assert opts.tighten_when_debrid is False

    def test_factor_from_defaults(self) -> None:
        opts = parse_selection_options({}, defaults=SelectionOptions(tighten_ratio_factor=1.5))
        assert opts.tighten_ratio_factor == 1.5


class TestParseCurationSettings:
    def test_defaults(self) -> None:
        settings = parse_curation_settings({})
        assert settings.sort == "autostream"
        assert settings.autostream_enabled is True
        assert settings.beautify is False

    def test_other_sort(self) -> None:
        settings = parse_curation_settings({"sort": "Quality"})
        assert settings.sort == "quality"
        assert settings.autostream_enabled is False

    def test_beautify(self) -> None:
        assert parse_curation_settings({"beautify": "yes"}).beautify is True

    def test_non_string_values(self) -> None:
        settings = parse_curation_settings(
            {"beautify": True, "ratio": 2, "top2": False}
        )
        assert settings.beautify is True
        assert settings.selection.ratio_need == 2.0
        assert settings.selection.two_outputs is False
