"""
Custom menus declared by the device definition.
Builds MenuDescriptors for menus whose shape comes from the device JSON.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, Optional, Tuple

from menus.builtin import MenuDescriptor
from menus.errors import InvalidDefinitionError
from utils.config import CUSTOM_MENU_ID_PREFIX, CUSTOM_MENU_ICONS, CUSTOM_MENU_DEFAULT_ICON


@dataclass(frozen=True)
class CustomMenuSpec:
    """
    One device-declared menu.

    Only the label is interpreted here; content is kept as parsed for the
    pane that renders it.
    """
    label: str
    content: Tuple[Any, ...] = field(default=(), hash=False)

    @classmethod
    def from_dict(cls, data: Dict) -> 'CustomMenuSpec':
        """Create a CustomMenuSpec from a manifest object (parsed JSON)."""
        if not isinstance(data, dict):
            raise InvalidDefinitionError(
                f"Custom menu must be an object, got {type(data).__name__}"
            )
        label = data.get('label')
        if not isinstance(label, str) or not label:
            raise InvalidDefinitionError("Custom menu is missing a label")
        content = data.get('content', [])
        if not isinstance(content, list):
            raise InvalidDefinitionError(
                f"Custom menu {label!r} content must be a list"
            )
        return cls(label=label, content=tuple(content))


def icon_for_label(label: str) -> str:
    """Pick an icon name from keywords in a custom menu label."""
    lowered = label.lower()
    for keyword, icon in CUSTOM_MENU_ICONS:
        if keyword in lowered:
            return icon
    return CUSTOM_MENU_DEFAULT_ICON


class CustomMenuFactory:
    """Mints descriptors for custom menus, keyed by manifest position."""

    def __init__(self, pane_factory: Optional[Callable[[CustomMenuSpec], Any]] = None,
                 id_prefix: str = CUSTOM_MENU_ID_PREFIX):
        """
        Initialise the factory.

        Args:
            pane_factory: Builds the pane handle for a spec. Defaults to
                using the CustomMenuSpec itself as the handle.
            id_prefix: Prefix for generated identifiers
        """
        self._pane_factory = pane_factory
        self._id_prefix = id_prefix

    def make_one(self, spec: CustomMenuSpec, index: int) -> MenuDescriptor:
        """
        Build the descriptor for the custom menu at a manifest position.

        The identifier depends only on index, so identical specs at
        different positions stay distinct.
        """
        pane = self._pane_factory(spec) if self._pane_factory else spec
        return MenuDescriptor(
            identifier=f"{self._id_prefix}{index}",
            title=spec.label,
            icon=icon_for_label(spec.label),
            pane=pane,
        )

    def make_many(self, specs: Iterable[CustomMenuSpec]) -> Tuple[MenuDescriptor, ...]:
        """Build descriptors for specs positionally."""
        return tuple(self.make_one(spec, index) for index, spec in enumerate(specs))
