"""
Resolvers that turn a keyboard definition plus feature flags into the
ordered list of configure menus.

V2 definitions get a fixed, additive set of rules. V3 definitions list
their menus explicitly; the manifest is expanded in order and then
filtered, so surviving menus keep the order the manifest author chose.
"""

import logging
from typing import Callable, Optional

from menus.builtin import BuiltInMenu, BuiltInMenuRegistry
from menus.custom import CustomMenuFactory, CustomMenuSpec
from menus.definition import CustomFeature, DefinitionV2, DefinitionV3
from menus.errors import MenuResolutionError, UnrecognizedMenuReference
from menus.resolution import FeatureFlags, MenuResolution, dedupe
from utils.lighting import get_lighting_definition

logger = logging.getLogger('keyconf.menus.resolvers')

# Custom V2 feature tag -> pane it unlocks
CUSTOM_FEATURE_MENUS = (
    (CustomFeature.ROTARY_ENCODER, BuiltInMenu.ROTARY_ENCODER),
)


class V2Resolver:
    """Derives menus from a V2 definition's capability fields."""

    def __init__(self, registry: BuiltInMenuRegistry,
                 lighting_lookup: Optional[Callable] = None):
        """
        Initialise the resolver.

        Args:
            registry: Built-in menu descriptors
            lighting_lookup: Maps a lighting spec to an object with
                supported_lighting_values (default: get_lighting_definition)
        """
        self.registry = registry
        self.lighting_lookup = lighting_lookup or get_lighting_definition

    def resolve(self, definition: DefinitionV2, flags: FeatureFlags) -> MenuResolution:
        menus = [BuiltInMenu.KEYMAP]

        if definition.layouts.has_options:
            menus.append(BuiltInMenu.LAYOUTS)

        if flags.macros_supported:
            menus.append(BuiltInMenu.MACROS)

        if definition.lighting is not None and self._has_lighting(definition):
            menus.append(BuiltInMenu.LIGHTING)

        if definition.custom_features is not None:
            for feature, menu in CUSTOM_FEATURE_MENUS:
                if feature in definition.custom_features:
                    menus.append(menu)

        # Save + Load is always last
        menus.append(BuiltInMenu.SAVE_LOAD)

        logger.debug("V2 menus for %s: %s", definition.name, [m.value for m in menus])
        return MenuResolution(menus=dedupe(self.registry[m] for m in menus))

    def _has_lighting(self, definition: DefinitionV2) -> bool:
        """Check whether the lighting spec supports any lighting values."""
        try:
            lighting = self.lighting_lookup(definition.lighting)
        except MenuResolutionError as e:
            logger.warning("Skipping lighting menu for %s: %s", definition.name, e)
            return False
        return len(lighting.supported_lighting_values) != 0


class V3Resolver:
    """Expands and filters a V3 definition's menu manifest."""

    def __init__(self, registry: BuiltInMenuRegistry, custom_factory: CustomMenuFactory):
        self.registry = registry
        self.custom_factory = custom_factory

    def expand(self, definition: DefinitionV3) -> MenuResolution:
        """
        Expand the manifest into descriptors without applying any filters.

        Built-in strings go through the registry (the wildcard becomes its
        three menus in place); custom menu specs are minted from their
        manifest position. An unknown string fails the whole expansion.
        """
        expanded = []
        for index, entry in enumerate(definition.menus):
            if isinstance(entry, CustomMenuSpec):
                expanded.append(self.custom_factory.make_one(entry, index))
            elif isinstance(entry, str) and self.registry.is_recognized(entry):
                expanded.extend(self.registry.lookup(entry))
            else:
                error = UnrecognizedMenuReference(entry, index)
                logger.warning("%s (definition %s)", error, definition.name)
                return MenuResolution.failed(error)
        return MenuResolution(menus=tuple(expanded))

    def resolve(self, definition: DefinitionV3, flags: FeatureFlags) -> MenuResolution:
        expansion = self.expand(definition)
        if not expansion.ok:
            return expansion

        removed = set()
        # Layouts only make sense when the keyboard has layout options
        if not definition.layouts.has_options:
            removed.add(BuiltInMenu.LAYOUTS.value)
        if not flags.macros_supported:
            removed.add(BuiltInMenu.MACROS.value)

        menus = [m for m in expansion.menus if m.identifier not in removed]
        logger.debug(
            "V3 menus for %s: %s (removed %s)",
            definition.name, [m.identifier for m in menus], sorted(removed),
        )
        return MenuResolution(menus=dedupe(menus))
