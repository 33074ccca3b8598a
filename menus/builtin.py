"""
Built-in configure menus and the registry that maps them to descriptors.

Built-in menus form a closed set (BuiltInMenu). Manifest strings are only
turned into BuiltInMenu members at the edge, in BuiltInMenuRegistry.lookup();
everything downstream works with the enum.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class BuiltInMenu(Enum):
    """Canonical menus defined by the client rather than the device."""

    KEYMAP = "via/keymap"
    LAYOUTS = "via/layouts"
    MACROS = "via/macros"
    SAVE_LOAD = "via/save_load"
    LIGHTING = "via/lighting"
    ROTARY_ENCODER = "via/rotary_encoder"


# Manifest alias for the default built-in set
WILDCARD_MENU = "via/*"
WILDCARD_EXPANSION = (BuiltInMenu.KEYMAP, BuiltInMenu.MACROS, BuiltInMenu.SAVE_LOAD)

# Built-ins a V3 manifest may reference by name. Lighting and the rotary
# encoder pane only come from V2 capability rules.
MANIFEST_MENUS = (
    BuiltInMenu.KEYMAP,
    BuiltInMenu.LAYOUTS,
    BuiltInMenu.MACROS,
    BuiltInMenu.SAVE_LOAD,
)
_MANIFEST_VALUES = frozenset(menu.value for menu in MANIFEST_MENUS)

BUILTIN_TITLES = {
    BuiltInMenu.KEYMAP: "Keymap",
    BuiltInMenu.LAYOUTS: "Layouts",
    BuiltInMenu.MACROS: "Macros",
    BuiltInMenu.SAVE_LOAD: "Save + Load",
    BuiltInMenu.LIGHTING: "Lighting",
    BuiltInMenu.ROTARY_ENCODER: "Rotary Encoder",
}

BUILTIN_ICONS = {
    BuiltInMenu.KEYMAP: "keyboard",
    BuiltInMenu.LAYOUTS: "layouts",
    BuiltInMenu.MACROS: "macros",
    BuiltInMenu.SAVE_LOAD: "save",
    BuiltInMenu.LIGHTING: "lightbulb",
    BuiltInMenu.ROTARY_ENCODER: "encoder",
}


@dataclass(frozen=True)
class MenuDescriptor:
    """
    Display-ready handle for one configure pane.

    icon and pane are passed through to the presentation layer untouched,
    so only identifier and title are hashed.
    """

    identifier: str
    title: str
    icon: Any = field(hash=False)
    pane: Any = field(hash=False)


class BuiltInMenuRegistry:
    """
    Immutable table of built-in menu descriptors.

    Built once and handed to the resolvers, so resolution depends only on
    its arguments.
    """

    def __init__(self, panes: Optional[Mapping[BuiltInMenu, Any]] = None,
                 icons: Optional[Mapping[BuiltInMenu, Any]] = None):
        """
        Initialise the registry.

        Args:
            panes: Pane handle per built-in. Missing entries use the enum
                member itself as the handle.
            icons: Icon handle per built-in, defaulting to BUILTIN_ICONS names.
        """
        panes = panes or {}
        icons = icons or {}
        entries: Dict[BuiltInMenu, MenuDescriptor] = {}
        for menu in BuiltInMenu:
            entries[menu] = MenuDescriptor(
                identifier=menu.value,
                title=BUILTIN_TITLES[menu],
                icon=icons.get(menu, BUILTIN_ICONS[menu]),
                pane=panes.get(menu, menu),
            )
        self._entries = MappingProxyType(entries)

    def __getitem__(self, menu: BuiltInMenu) -> MenuDescriptor:
        return self._entries[menu]

    def __contains__(self, reference) -> bool:
        return reference == WILDCARD_MENU or reference in _MANIFEST_VALUES

    def is_recognized(self, reference: str) -> bool:
        """Check whether a manifest string names a built-in menu."""
        return reference in self

    def lookup(self, reference: str) -> Tuple[MenuDescriptor, ...]:
        """
        Expand a manifest string into built-in descriptors.

        Args:
            reference: A built-in identifier such as "via/keymap", or the
                wildcard "via/*"

        Returns:
            Tuple of descriptors, in order (three for the wildcard, else one)

        Raises:
            KeyError: If the string is not a manifest-addressable built-in
        """
        if reference == WILDCARD_MENU:
            return tuple(self._entries[menu] for menu in WILDCARD_EXPANSION)
        if reference not in _MANIFEST_VALUES:
            raise KeyError(reference)
        return (self._entries[BuiltInMenu(reference)],)
