"""
Inputs and outputs of menu resolution: runtime feature flags and the
result value returned by the resolvers.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from menus.builtin import MenuDescriptor
from menus.errors import MenuResolutionError
from utils.config import DEFAULT_MACROS_SUPPORTED

logger = logging.getLogger('keyconf.menus.resolution')


@dataclass(frozen=True)
class FeatureFlags:
    """Runtime switches that gate menus independently of the keyboard."""
    macros_supported: bool = DEFAULT_MACROS_SUPPORTED

    @classmethod
    def from_settings(cls, settings) -> 'FeatureFlags':
        """
        Read flags from a SettingsManager ("features.*" keys).

        Only JSON booleans are accepted; anything else falls back to the
        default with a warning.
        """
        macros_supported = settings.get('features.macros_supported', DEFAULT_MACROS_SUPPORTED)
        if not isinstance(macros_supported, bool):
            logger.warning(
                "Ignoring non-boolean features.macros_supported setting: %r",
                macros_supported,
            )
            macros_supported = DEFAULT_MACROS_SUPPORTED
        return cls(macros_supported=macros_supported)


@dataclass(frozen=True)
class MenuResolution:
    """
    Outcome of resolving menus for one definition.

    Either menus is populated and error is None, or error is set and menus
    is empty.
    """
    menus: Tuple[MenuDescriptor, ...] = ()
    error: Optional[MenuResolutionError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def identifiers(self) -> Tuple[str, ...]:
        return tuple(menu.identifier for menu in self.menus)

    @classmethod
    def failed(cls, error: MenuResolutionError) -> 'MenuResolution':
        return cls(menus=(), error=error)

    def unwrap(self) -> Tuple[MenuDescriptor, ...]:
        """
        Get the menus, raising the error if resolution failed.

        Raises:
            MenuResolutionError: If the resolution failed
        """
        if self.error is not None:
            raise self.error
        return self.menus


def dedupe(menus) -> Tuple[MenuDescriptor, ...]:
    """Drop descriptors whose identifier already appeared, keeping order."""
    seen = set()
    unique = []
    for menu in menus:
        if menu.identifier in seen:
            continue
        seen.add(menu.identifier)
        unique.append(menu)
    return tuple(unique)
