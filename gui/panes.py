"""
Configure panes shown to the right of the menu column.

The menu core treats panes as opaque handles; this module supplies the
handles the application registers (BUILTIN_PANES, make_custom_pane) and
draws a heading for whichever pane is selected. Pane contents (key
pickers, macro editors, colour wheels) are drawn by their own widgets.
"""

import logging
from dataclasses import dataclass

import pygame

from menus.builtin import BuiltInMenu
from menus.custom import CustomMenuSpec
from utils.config import WHITE, GREY

logger = logging.getLogger('keyconf.panes')


class Pane:
    """Base class for a configure pane."""

    heading = ""
    hint = ""

    def render(self, surface: pygame.Surface, rect: pygame.Rect, font, hint_font):
        """Draw the pane heading and hint into rect."""
        heading = font.render(self.heading, True, WHITE)
        surface.blit(heading, (rect.x, rect.y))
        if self.hint:
            hint = hint_font.render(self.hint, True, GREY)
            surface.blit(hint, (rect.x, rect.y + heading.get_height() + 8))


class KeymapPane(Pane):
    heading = "Keymap"
    hint = "Select a key on the keyboard, then pick a keycode"


class LayoutsPane(Pane):
    heading = "Layouts"
    hint = "Choose between the physical layout options"


class MacrosPane(Pane):
    heading = "Macros"
    hint = "Record and edit macros"


class LightingPane(Pane):
    heading = "Lighting"
    hint = "Brightness, effects and colours"


class SaveLoadPane(Pane):
    heading = "Save + Load"
    hint = "Save the current keymap to a file or load one"


class RotaryEncoderPane(Pane):
    heading = "Rotary Encoder"
    hint = "Configure encoder modes and OLED"


BUILTIN_PANES = {
    BuiltInMenu.KEYMAP: KeymapPane(),
    BuiltInMenu.LAYOUTS: LayoutsPane(),
    BuiltInMenu.MACROS: MacrosPane(),
    BuiltInMenu.LIGHTING: LightingPane(),
    BuiltInMenu.SAVE_LOAD: SaveLoadPane(),
    BuiltInMenu.ROTARY_ENCODER: RotaryEncoderPane(),
}


@dataclass(frozen=True, eq=True)
class CustomMenuPane(Pane):
    """Pane for a device-declared menu; equal specs give equal panes."""
    spec: CustomMenuSpec

    @property
    def heading(self):
        return self.spec.label

    @property
    def hint(self):
        count = len(self.spec.content)
        return f"{count} setting group{'s' if count != 1 else ''}"


def make_custom_pane(spec: CustomMenuSpec) -> CustomMenuPane:
    """Pane factory for CustomMenuFactory."""
    return CustomMenuPane(spec)
