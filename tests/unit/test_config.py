"""
Unit tests for display configuration helpers in utils/config.py.
"""

import json

import pytest

from utils.config import (
    REFERENCE_HEIGHT,
    REFERENCE_WIDTH,
    load_display_config,
    validate_display_dimensions,
)


class TestValidateDisplayDimensions:
    """Tests for display size validation."""

    @pytest.mark.unit
    @pytest.mark.parametrize("width,height", [
        (320, 240),
        (1280, 900),
        (1920.0, 1080.0),
        (7680, 4320),
    ])
    def test_valid(self, width, height):
        assert validate_display_dimensions(width, height) == (int(width), int(height))

    @pytest.mark.unit
    @pytest.mark.parametrize("width,height", [
        (319, 240),
        (320, 239),
        (8000, 1080),
        ("1280", 900),
        (1280, None),
        (True, 900),
    ])
    def test_invalid(self, width, height):
        with pytest.raises(ValueError):
            validate_display_dimensions(width, height)


class TestLoadDisplayConfig:
    """Tests for reading display_config.json."""

    @pytest.mark.unit
    def test_missing_file_uses_reference(self, tmp_path):
        path = tmp_path / "missing.json"
        assert load_display_config(str(path)) == (REFERENCE_WIDTH, REFERENCE_HEIGHT)

    @pytest.mark.unit
    def test_reads_file(self, tmp_path):
        path = tmp_path / "display.json"
        path.write_text(json.dumps({"width": 800, "height": 480}))
        assert load_display_config(str(path)) == (800, 480)

    @pytest.mark.unit
    @pytest.mark.parametrize("content", [
        "{broken",
        json.dumps({"width": 10, "height": 10}),
        json.dumps([800, 480]),
    ])
    def test_bad_file_uses_reference(self, tmp_path, content):
        path = tmp_path / "display.json"
        path.write_text(content)
        assert load_display_config(str(path)) == (REFERENCE_WIDTH, REFERENCE_HEIGHT)
