"""
Menu resolution façade used by the configure screen.
"""

import logging
from typing import Callable, Optional, Tuple

from menus.builtin import BuiltInMenuRegistry, MenuDescriptor
from menus.custom import CustomMenuFactory, CustomMenuSpec
from menus.definition import DefinitionVersion, classify, parse_definition
from menus.errors import MenuResolutionError
from menus.resolution import FeatureFlags, MenuResolution
from menus.resolvers import V2Resolver, V3Resolver

logger = logging.getLogger('keyconf.menus')


class MenuResolutionService:
    """
    Resolves the ordered configure menus for the selected keyboard.

    Holds only immutable collaborators, so resolve() is a pure function of
    its arguments and safe to call from anywhere.
    """

    def __init__(
        self,
        registry: Optional[BuiltInMenuRegistry] = None,
        custom_factory: Optional[CustomMenuFactory] = None,
        lighting_lookup: Optional[Callable] = None,
    ):
        self.registry = registry or BuiltInMenuRegistry()
        self.custom_factory = custom_factory or CustomMenuFactory()
        self._v2 = V2Resolver(self.registry, lighting_lookup)
        self._v3 = V3Resolver(self.registry, self.custom_factory)

    def resolve(self, definition, flags: Optional[FeatureFlags] = None) -> MenuResolution:
        """
        Resolve menus for a definition.

        Args:
            definition: Parsed DefinitionV2/DefinitionV3, raw JSON dict, or
                None when no keyboard is selected
            flags: Feature flags (default: FeatureFlags())

        Returns:
            MenuResolution; empty and ok when there is no usable definition
        """
        flags = flags or FeatureFlags()
        version = classify(definition)
        if version is None:
            return MenuResolution()

        if isinstance(definition, dict):
            try:
                definition = parse_definition(definition)
            except MenuResolutionError as e:
                logger.warning("Invalid keyboard definition: %s", e)
                return MenuResolution.failed(e)

        if version is DefinitionVersion.V2:
            return self._v2.resolve(definition, flags)
        return self._v3.resolve(definition, flags)

    def custom_menu_pool(self, specs) -> Tuple[MenuDescriptor, ...]:
        """
        Descriptors for custom menus available regardless of the selected
        keyboard's manifest.
        """
        return self.custom_factory.make_many(
            spec if isinstance(spec, CustomMenuSpec) else CustomMenuSpec.from_dict(spec)
            for spec in specs
        )


def resolve_menus(definition, flags: Optional[FeatureFlags] = None,
                  service: Optional[MenuResolutionService] = None) -> MenuResolution:
    """Resolve menus with the default service."""
    return (service or MenuResolutionService()).resolve(definition, flags)
