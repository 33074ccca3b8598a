"""
Keyboard definition (capability descriptor) model and classification.

A connected keyboard advertises a JSON definition. Two schemas matter for
menus: V2 (fixed capability fields: lighting, customFeatures) and V3 (an
explicit "menus" manifest). parse_definition() turns the JSON into one of
the dataclasses below; classify() decides which schema applies.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Mapping, Optional, Tuple, Union

from menus.custom import CustomMenuSpec
from menus.errors import InvalidDefinitionError

logger = logging.getLogger('keyconf.menus.definition')


class DefinitionVersion(Enum):
    """Schema a definition follows, as far as menus are concerned."""
    V2 = 2
    V3 = 3


class CustomFeature(Enum):
    """Custom feature tags a V2 definition can declare."""
    ROTARY_ENCODER = "RotaryEncoder"


@dataclass(frozen=True)
class Layouts:
    """Layout section of a definition. Only option keys affect menus."""
    # Parsed JSON, so equality only; left out of the hash
    option_keys: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @property
    def has_options(self) -> bool:
        return len(self.option_keys) != 0

    @classmethod
    def from_dict(cls, data: Optional[Dict]) -> 'Layouts':
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise InvalidDefinitionError("'layouts' must be an object")
        option_keys = data.get('optionKeys') or {}
        if not isinstance(option_keys, dict):
            raise InvalidDefinitionError("'layouts.optionKeys' must be an object")
        return cls(option_keys=MappingProxyType(dict(option_keys)))


@dataclass(frozen=True)
class DefinitionV2:
    """Legacy definition; menus follow from fixed capability fields."""
    name: str = ""
    vendor_product_id: Optional[int] = None
    layouts: Layouts = field(default_factory=Layouts)
    lighting: Any = field(default=None, hash=False)
    custom_features: Optional[FrozenSet[CustomFeature]] = None


@dataclass(frozen=True)
class DefinitionV3:
    """Manifest-based definition; menus are listed explicitly in order."""
    name: str = ""
    vendor_product_id: Optional[int] = None
    layouts: Layouts = field(default_factory=Layouts)
    # Each entry is a built-in menu reference string or a CustomMenuSpec
    menus: Tuple[Union[str, CustomMenuSpec], ...] = ()


Definition = Union[DefinitionV2, DefinitionV3]


def classify(definition) -> Optional[DefinitionVersion]:
    """
    Decide which schema a definition follows.

    Accepts parsed definitions or raw JSON dictionaries. An explicit
    "version" field wins; otherwise "menus" means V3 and "lighting" means
    V2. Anything else (including None) classifies as None.
    """
    if isinstance(definition, DefinitionV3):
        return DefinitionVersion.V3
    if isinstance(definition, DefinitionV2):
        return DefinitionVersion.V2
    if not isinstance(definition, dict):
        return None

    if 'version' in definition:
        try:
            return DefinitionVersion(definition['version'])
        except ValueError:
            logger.debug("Unsupported definition version: %r", definition['version'])
            return None

    if 'menus' in definition:
        return DefinitionVersion.V3
    if 'lighting' in definition:
        return DefinitionVersion.V2
    return None


def _parse_custom_features(raw) -> Optional[FrozenSet[CustomFeature]]:
    if raw is None:
        return None
    if not isinstance(raw, list):
        raise InvalidDefinitionError("'customFeatures' must be a list")
    features = set()
    for tag in raw:
        try:
            features.add(CustomFeature(tag))
        except ValueError:
            # Newer firmware may declare features this client has no pane for
            logger.debug("Ignoring unknown custom feature: %r", tag)
    return frozenset(features)


def _parse_menus(raw) -> Tuple[Union[str, CustomMenuSpec], ...]:
    if not isinstance(raw, list):
        raise InvalidDefinitionError("'menus' must be a list")
    menus = []
    for entry in raw:
        if isinstance(entry, str):
            menus.append(entry)
        else:
            menus.append(CustomMenuSpec.from_dict(entry))
    return tuple(menus)


def parse_definition(data: Optional[Dict]) -> Optional[Definition]:
    """
    Build a definition dataclass from a keyboard's JSON definition.

    Args:
        data: Parsed JSON (or an already built definition), or None when
            no keyboard is selected

    Returns:
        DefinitionV2, DefinitionV3, or None if the schema is not recognised

    Raises:
        InvalidDefinitionError: If a field the menus depend on is malformed
    """
    if isinstance(data, (DefinitionV2, DefinitionV3)):
        return data

    version = classify(data)
    if version is None:
        return None

    name = data.get('name', "")
    vendor_product_id = data.get('vendorProductId')
    layouts = Layouts.from_dict(data.get('layouts'))

    if version is DefinitionVersion.V2:
        return DefinitionV2(
            name=name,
            vendor_product_id=vendor_product_id,
            layouts=layouts,
            lighting=data.get('lighting'),
            custom_features=_parse_custom_features(data.get('customFeatures')),
        )
    return DefinitionV3(
        name=name,
        vendor_product_id=vendor_product_id,
        layouts=layouts,
        menus=_parse_menus(data.get('menus', [])),
    )
