"""
Lighting definition lookup for V2 keyboard definitions.
Loads JSON lighting presets and resolves a definition's lighting spec
(preset name or {"extends": preset, ...} override) to its supported values.
"""

import json
import logging
import os
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Optional, Tuple, Union

from menus.errors import InvalidDefinitionError, UnknownLightingPreset
from utils.config import LIGHTING_PRESETS_DIR

logger = logging.getLogger('keyconf.lighting')


class LightingValue(IntEnum):
    """VIA lighting value ids (lighting get/set command arguments)."""

    BACKLIGHT_USE_SPLIT_BACKSPACE = 0x01
    BACKLIGHT_USE_SPLIT_LEFT_SHIFT = 0x02
    BACKLIGHT_USE_SPLIT_RIGHT_SHIFT = 0x03
    BACKLIGHT_USE_7U_SPACEBAR = 0x04
    BACKLIGHT_USE_ISO_ENTER = 0x05
    BACKLIGHT_DISABLE_HHKB_BLOCKER_LEDS = 0x06
    BACKLIGHT_DISABLE_WHEN_USB_SUSPENDED = 0x07
    BACKLIGHT_DISABLE_AFTER_TIMEOUT = 0x08
    BACKLIGHT_BRIGHTNESS = 0x09
    BACKLIGHT_EFFECT = 0x0A
    BACKLIGHT_EFFECT_SPEED = 0x0B
    BACKLIGHT_COLOR_1 = 0x0C
    BACKLIGHT_COLOR_2 = 0x0D
    BACKLIGHT_CAPS_LOCK_INDICATOR_COLOR = 0x0E
    BACKLIGHT_CAPS_LOCK_INDICATOR_ROW_COL = 0x0F
    BACKLIGHT_LAYER_1_INDICATOR_COLOR = 0x10
    BACKLIGHT_LAYER_1_INDICATOR_ROW_COL = 0x11
    BACKLIGHT_LAYER_2_INDICATOR_COLOR = 0x12
    BACKLIGHT_LAYER_2_INDICATOR_ROW_COL = 0x13
    BACKLIGHT_LAYER_3_INDICATOR_COLOR = 0x14
    BACKLIGHT_LAYER_3_INDICATOR_ROW_COL = 0x15
    BACKLIGHT_CUSTOM_COLOR = 0x17

    # QMK backlight shares ids with the WT backlight brightness/effect
    QMK_BACKLIGHT_BRIGHTNESS = 0x09
    QMK_BACKLIGHT_EFFECT = 0x0A

    QMK_RGBLIGHT_BRIGHTNESS = 0x80
    QMK_RGBLIGHT_EFFECT = 0x81
    QMK_RGBLIGHT_EFFECT_SPEED = 0x82
    QMK_RGBLIGHT_COLOR = 0x83


def parse_lighting_value(value: Union[int, str]) -> LightingValue:
    """
    Convert a lighting value from JSON (id or member name) to LightingValue.

    Raises:
        InvalidDefinitionError: If the value is not a known lighting value
    """
    try:
        if isinstance(value, str):
            return LightingValue[value]
        if isinstance(value, int) and not isinstance(value, bool):
            return LightingValue(value)
    except (KeyError, ValueError):
        pass
    raise InvalidDefinitionError(f"Unknown lighting value: {value!r}")


@dataclass(frozen=True)
class LightingDefinition:
    """
    Immutable lighting capabilities of a keyboard.

    Effects are (label, number of colours) pairs.
    """
    name: str
    supported_lighting_values: Tuple[LightingValue, ...] = ()
    effects: Tuple[Tuple[str, int], ...] = ()
    underglow_effects: Tuple[Tuple[str, int], ...] = ()

    @classmethod
    def from_dict(cls, name: str, data: Dict) -> 'LightingDefinition':
        """Create a LightingDefinition from a preset dictionary (parsed JSON)."""
        return cls(
            name=name,
            supported_lighting_values=tuple(
                parse_lighting_value(v) for v in data.get('supportedLightingValues', [])
            ),
            effects=_parse_effects(data.get('effects', [])),
            underglow_effects=_parse_effects(data.get('underglowEffects', [])),
        )

    def extend(self, overrides: Dict) -> 'LightingDefinition':
        """Return a copy with fields replaced by those present in overrides."""
        base = {
            'supportedLightingValues': [int(v) for v in self.supported_lighting_values],
            'effects': [list(e) for e in self.effects],
            'underglowEffects': [list(e) for e in self.underglow_effects],
        }
        for key in base:
            if key in overrides:
                base[key] = overrides[key]
        return LightingDefinition.from_dict(self.name, base)


def _parse_effects(effects) -> Tuple[Tuple[str, int], ...]:
    if not isinstance(effects, list):
        raise InvalidDefinitionError("Lighting effects must be a list")
    parsed = []
    for effect in effects:
        if not isinstance(effect, (list, tuple)) or len(effect) != 2:
            raise InvalidDefinitionError(f"Invalid lighting effect: {effect!r}")
        try:
            parsed.append((str(effect[0]), int(effect[1])))
        except (TypeError, ValueError):
            raise InvalidDefinitionError(f"Invalid lighting effect: {effect!r}") from None
    return tuple(parsed)


class LightingPresetLoader:
    """
    Singleton class for loading and caching lighting presets.

    Presets are loaded from JSON files in the assets/lighting directory;
    the file name (without .json) is the preset name.
    """

    _instance: Optional['LightingPresetLoader'] = None
    _presets: Dict[str, LightingDefinition]

    def __new__(cls) -> 'LightingPresetLoader':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._presets = {}
            cls._instance._load_presets(LIGHTING_PRESETS_DIR)
        return cls._instance

    def _load_presets(self, directory: str) -> None:
        """Load all preset files from a directory."""
        if not os.path.isdir(directory):
            logger.warning("Lighting presets directory not found: %s", directory)
            return

        for filename in sorted(os.listdir(directory)):
            if not filename.endswith('.json'):
                continue
            preset_name = filename[:-5]
            filepath = os.path.join(directory, filename)
            try:
                with open(filepath, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._presets[preset_name] = LightingDefinition.from_dict(preset_name, data)
                logger.debug("Loaded lighting preset: %s", preset_name)
            except (json.JSONDecodeError, InvalidDefinitionError, ValueError, OSError) as e:
                logger.error("Failed to load lighting preset %s: %s", filename, e)

        logger.info("Loaded %d lighting presets", len(self._presets))

    def get_preset(self, name: str) -> LightingDefinition:
        """
        Get a preset by name.

        Raises:
            UnknownLightingPreset: If no preset with that name was loaded
        """
        try:
            return self._presets[name]
        except KeyError:
            raise UnknownLightingPreset(name) from None

    def get_preset_names(self) -> List[str]:
        """Get the names of all loaded presets, sorted."""
        return sorted(self._presets)


def get_lighting_definition(lighting, loader: Optional[LightingPresetLoader] = None) -> LightingDefinition:
    """
    Resolve a definition's lighting spec to a LightingDefinition.

    Args:
        lighting: Preset name, or a dict with "extends" naming a preset plus
            any of supportedLightingValues/effects/underglowEffects to override
        loader: Preset source (default: the shared LightingPresetLoader)

    Raises:
        UnknownLightingPreset: If the preset name is not known
        InvalidDefinitionError: If the lighting value has the wrong shape
    """
    loader = loader or LightingPresetLoader()
    if isinstance(lighting, str):
        return loader.get_preset(lighting)
    if isinstance(lighting, dict):
        extends = lighting.get('extends')
        if not isinstance(extends, str):
            raise InvalidDefinitionError("Lighting object must name a preset in 'extends'")
        return loader.get_preset(extends).extend(lighting)
    raise InvalidDefinitionError(
        f"Lighting must be a preset name or object, got {type(lighting).__name__}"
    )
