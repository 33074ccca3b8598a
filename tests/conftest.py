"""
Shared pytest fixtures for keyconf tests.
"""

import os
import sys
import json
import tempfile
from types import SimpleNamespace

import pytest

# Add project root to path for imports
PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, PROJECT_ROOT)


@pytest.fixture
def temp_settings_file():
    """Create a temporary settings file for testing SettingsManager."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        f.write('{}')
        temp_path = f.name
    yield temp_path
    # Cleanup
    for path in (temp_path, temp_path + '.tmp'):
        if os.path.exists(path):
            os.remove(path)


@pytest.fixture
def temp_settings_with_data():
    """Create a temporary settings file with pre-populated data."""
    test_data = {
        "features": {
            "macros_supported": False
        },
        "configure": {
            "last_menu": "via/keymap"
        }
    }
    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        json.dump(test_data, f)
        temp_path = f.name
    yield temp_path
    if os.path.exists(temp_path):
        os.remove(temp_path)


@pytest.fixture
def v2_definition():
    """A V2 keyboard definition with layout options and RGB underglow."""
    return {
        "name": "Example 65%",
        "vendorProductId": 0x594D0001,
        "lighting": "qmk_rgblight",
        "matrix": {"rows": 5, "cols": 15},
        "layouts": {
            "labels": ["Split Backspace"],
            "optionKeys": {"0": {"0": "Off", "1": "On"}},
            "keymap": [],
        },
    }


@pytest.fixture
def v3_definition():
    """A V3 keyboard definition with a menu manifest."""
    return {
        "name": "Example TKL",
        "vendorProductId": 0x594D0002,
        "matrix": {"rows": 6, "cols": 17},
        "layouts": {"keymap": []},
        "menus": [
            "via/keymap",
            "via/layouts",
            {"label": "Lighting", "content": [{"label": "Backlight", "content": []}]},
            "via/macros",
            "via/save_load",
        ],
    }


@pytest.fixture
def lighting_lookup():
    """Lighting lookup stub: "none" has no values, anything else has one."""
    def lookup(lighting):
        values = () if lighting == "none" else (0x80,)
        return SimpleNamespace(supported_lighting_values=values)
    return lookup
