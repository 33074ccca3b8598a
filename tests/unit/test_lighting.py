"""
Unit tests for lighting preset loading and lookup.
"""

import json

import pytest

from menus.errors import InvalidDefinitionError, UnknownLightingPreset
from utils.lighting import (
    LightingDefinition,
    LightingPresetLoader,
    LightingValue,
    get_lighting_definition,
    parse_lighting_value,
)


class TestParseLightingValue:
    """Tests for converting JSON lighting values."""

    @pytest.mark.unit
    @pytest.mark.parametrize("raw,expected", [
        (0x80, LightingValue.QMK_RGBLIGHT_BRIGHTNESS),
        ("QMK_RGBLIGHT_COLOR", LightingValue.QMK_RGBLIGHT_COLOR),
        ("QMK_BACKLIGHT_BRIGHTNESS", LightingValue.BACKLIGHT_BRIGHTNESS),
        (9, LightingValue.QMK_BACKLIGHT_BRIGHTNESS),
    ])
    def test_valid_values(self, raw, expected):
        assert parse_lighting_value(raw) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("raw", [0x99, "NOT_A_VALUE", True, None, 1.5])
    def test_invalid_values(self, raw):
        with pytest.raises(InvalidDefinitionError):
            parse_lighting_value(raw)


class TestLightingPresets:
    """Tests for the bundled presets and get_lighting_definition."""

    @pytest.mark.unit
    def test_bundled_presets_loaded(self):
        names = LightingPresetLoader().get_preset_names()
        for name in ("none", "qmk_backlight", "qmk_rgblight",
                     "qmk_backlight_rgblight", "wt_rgb_backlight", "wt_mono_backlight"):
            assert name in names

    @pytest.mark.unit
    def test_none_has_no_values(self):
        assert get_lighting_definition("none").supported_lighting_values == ()

    @pytest.mark.unit
    def test_rgblight_values(self):
        definition = get_lighting_definition("qmk_rgblight")
        assert LightingValue.QMK_RGBLIGHT_EFFECT in definition.supported_lighting_values
        assert definition.underglow_effects[0] == ("All Off", 0)

    @pytest.mark.unit
    def test_unknown_preset(self):
        with pytest.raises(UnknownLightingPreset):
            get_lighting_definition("disco_ball")

    @pytest.mark.unit
    def test_extends_overrides_values(self):
        """Test that a lighting object overrides fields of its preset."""
        definition = get_lighting_definition({
            "extends": "none",
            "supportedLightingValues": [0x80, 0x81],
        })
        assert definition.supported_lighting_values == (
            LightingValue.QMK_RGBLIGHT_BRIGHTNESS, LightingValue.QMK_RGBLIGHT_EFFECT,
        )

    @pytest.mark.unit
    def test_extends_keeps_preset_fields(self):
        definition = get_lighting_definition({"extends": "qmk_backlight", "effects": []})
        assert definition.effects == ()
        assert definition.supported_lighting_values == (
            LightingValue.QMK_BACKLIGHT_BRIGHTNESS, LightingValue.QMK_BACKLIGHT_EFFECT,
        )

    @pytest.mark.unit
    def test_extends_unknown_preset(self):
        with pytest.raises(UnknownLightingPreset):
            get_lighting_definition({"extends": "disco_ball"})

    @pytest.mark.unit
    @pytest.mark.parametrize("lighting", [{}, {"extends": 3}, 42, ["none"]])
    def test_malformed_specs(self, lighting):
        with pytest.raises(InvalidDefinitionError):
            get_lighting_definition(lighting)


class TestLightingDefinition:
    """Tests for LightingDefinition parsing."""

    @pytest.mark.unit
    def test_from_dict_defaults(self):
        assert LightingDefinition.from_dict("x", {}) == LightingDefinition("x")

    @pytest.mark.unit
    @pytest.mark.parametrize("effects", ["Solid", [["Solid"]], [["Solid", 0, 1]]])
    def test_bad_effects(self, effects):
        with pytest.raises(InvalidDefinitionError):
            LightingDefinition.from_dict("x", {"effects": effects})

    @pytest.mark.unit
    def test_loader_skips_broken_files(self, tmp_path):
        """Test that a broken preset file is logged and skipped."""
        (tmp_path / "good.json").write_text(json.dumps({"supportedLightingValues": [9]}))
        (tmp_path / "bad.json").write_text("{not json")
        (tmp_path / "notes.txt").write_text("ignored")

        loader = object.__new__(LightingPresetLoader)
        loader._presets = {}
        loader._load_presets(str(tmp_path))

        assert loader.get_preset_names() == ["good"]
        assert get_lighting_definition("good", loader).supported_lighting_values == (
            LightingValue.BACKLIGHT_BRIGHTNESS,
        )
