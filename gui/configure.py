"""
Configure screen for keyconf.

Shows a loader until a keyboard definition is selected and fully loaded,
then the menu column (one row per resolved menu) with the selected pane.
Menus are re-resolved only when the definition or feature flags change.
"""

import logging
import time
from typing import Callable, Optional, Tuple

import pygame

from menus.builtin import MenuDescriptor
from menus.resolution import FeatureFlags, MenuResolution
from menus.service import MenuResolutionService
from gui.icon_handler import IconHandler
from utils.config import (
    AUTHORIZE_BUTTON_DELAY,
    AUTHORIZE_TEXT,
    BACKGROUND_COLOUR,
    DISPLAY_HEIGHT,
    DISPLAY_WIDTH,
    FONT_PATH,
    FONT_SIZE_LARGE,
    FONT_SIZE_MEDIUM,
    FONT_SIZE_SMALL,
    KEYMAP_TITLE,
    LAST_MENU_SETTING,
    LOADING_TEXT,
    MENU_COLUMN_POSITION,
    MENU_COLUMN_WIDTH,
    MENU_HIGHLIGHT_COLOUR,
    MENU_ICON_SIZE,
    MENU_ITEM_SELECTED_COLOUR,
    MENU_ROW_HEIGHT,
    RED,
    SEARCHING_TEXT,
    WHITE,
)

logger = logging.getLogger('keyconf.configure')

_UNSET = object()


class ConfigureScreen:
    """
    State of the configure screen.

    Call update() whenever the selected definition, feature flags or device
    state change; the rest of the screen reads from the cached resolution.
    """

    def __init__(self, service: Optional[MenuResolutionService] = None,
                 clock: Callable[[], float] = time.monotonic, settings=None):
        """
        Initialise the screen.

        Args:
            service: Menu resolution service
            clock: Monotonic time source for the authorize button delay
            settings: SettingsManager that remembers the last selected menu,
                or None to not persist the selection
        """
        self.service = service or MenuResolutionService()
        self._clock = clock
        self.settings = settings

        self.definition = None
        self.flags = FeatureFlags()
        self.load_progress = 0.0
        self.connected_devices: Tuple = ()
        self.supported_ids: Tuple = ()
        self.running_in_app = False

        self._resolved_for = (_UNSET, _UNSET)
        self._resolution = MenuResolution()
        self._waiting_since = clock()
        self.selected_index = 0

        # Font initialisation (lazy)
        self._font_title = None
        self._font_item = None
        self._font_hint = None
        self._icons = None

    def update(self, definition, flags: Optional[FeatureFlags] = None,
               load_progress: float = 1.0, connected_devices=(),
               supported_ids=(), running_in_app: bool = False):
        """
        Feed new inputs into the screen.

        Args:
            definition: Selected keyboard definition (parsed or raw JSON), or None
            flags: Feature flags (default: FeatureFlags())
            load_progress: Keymap load progress, 0.0 to 1.0
            connected_devices: Devices currently connected
            supported_ids: Vendor/product ids this client has definitions for
            running_in_app: True inside the desktop app (devices are
                authorised automatically, so no authorize button)
        """
        flags = flags or FeatureFlags()
        if definition != self.definition:
            self._waiting_since = self._clock()
        self.definition = definition
        self.flags = flags
        self.load_progress = load_progress
        self.connected_devices = tuple(connected_devices)
        self.supported_ids = tuple(supported_ids)
        self.running_in_app = running_in_app
        self._refresh()

    def _refresh(self):
        key = (self.definition, self.flags)
        if key == self._resolved_for:
            return
        self._resolution = self.service.resolve(self.definition, self.flags)
        self._resolved_for = key
        if not self._resolution.ok:
            logger.error("Could not build configure menus: %s", self._resolution.error)
        else:
            logger.debug("Configure menus: %s", self._resolution.identifiers)
        self._restore_selection()

    def _restore_selection(self):
        """Select the remembered menu if the new rows contain it."""
        if self.settings is None:
            return
        last_menu = self.settings.get(LAST_MENU_SETTING)
        for idx, menu in enumerate(self.rows):
            if menu.identifier == last_menu:
                self.selected_index = idx
                return

    def _remember_selection(self):
        menu = self.selected_menu
        if self.settings is not None and menu is not None:
            self.settings.set(LAST_MENU_SETTING, menu.identifier)

    @property
    def rows(self) -> Tuple[MenuDescriptor, ...]:
        return self._resolution.menus

    @property
    def error(self):
        return self._resolution.error

    @property
    def show_loader(self) -> bool:
        return self.definition is None or self.load_progress != 1

    @property
    def show_authorize_button(self) -> bool:
        """Offer device authorisation while nothing usable is connected."""
        if not self.show_loader:
            return False
        timed_out = (
            self.definition is None
            and self._clock() - self._waiting_since >= AUTHORIZE_BUTTON_DELAY
        )
        no_connected_devices = len(self.connected_devices) == 0
        no_supported_ids = len(self.supported_ids) == 0
        return (timed_out or no_connected_devices) and not no_supported_ids and not self.running_in_app

    @property
    def loader_text(self) -> str:
        if self.show_authorize_button:
            return AUTHORIZE_TEXT
        return SEARCHING_TEXT if self.definition is None else LOADING_TEXT

    def select(self, index: int):
        """Select a row, clamped to the available rows."""
        if not self.rows:
            self.selected_index = 0
            return
        self.selected_index = max(0, min(index, len(self.rows) - 1))
        self._remember_selection()

    def navigate(self, delta: int):
        """Move the selection, wrapping at either end."""
        if not self.rows:
            return
        self.selected_index = (self.selected_index + delta) % len(self.rows)
        self._remember_selection()

    @property
    def selected_menu(self) -> Optional[MenuDescriptor]:
        if 0 <= self.selected_index < len(self.rows):
            return self.rows[self.selected_index]
        return None

    @property
    def selected_pane(self):
        menu = self.selected_menu
        return menu.pane if menu else None

    @property
    def keyboard_selectable(self) -> bool:
        """Keys on the keyboard can be picked only in the keymap pane."""
        menu = self.selected_menu
        return menu is not None and menu.title == KEYMAP_TITLE

    def _init_fonts(self):
        """Initialise fonts (must be called after pygame.init)."""
        if self._font_title is None:
            pygame.font.init()
            self._font_title = pygame.font.Font(FONT_PATH, FONT_SIZE_LARGE)
            self._font_item = pygame.font.Font(FONT_PATH, FONT_SIZE_MEDIUM)
            self._font_hint = pygame.font.Font(FONT_PATH, FONT_SIZE_SMALL)
            self._icons = IconHandler()

    def render(self, surface: pygame.Surface):
        """
        Render the configure screen.

        Args:
            surface: Pygame surface to render on
        """
        self._init_fonts()
        surface.fill(BACKGROUND_COLOUR)

        if self.show_loader:
            self._render_loader(surface)
        elif not self._resolution.ok:
            self._render_centred(surface, str(self.error), self._font_item, RED)
        else:
            self._render_menu_column(surface)
            self._render_selected_pane(surface)

    def _render_centred(self, surface, text, font, colour):
        text_surface = font.render(text, True, colour)
        x = (surface.get_width() - text_surface.get_width()) // 2
        y = (surface.get_height() - text_surface.get_height()) // 2
        surface.blit(text_surface, (x, y))

    def _render_loader(self, surface):
        colour = MENU_ITEM_SELECTED_COLOUR if self.show_authorize_button else WHITE
        self._render_centred(surface, self.loader_text, self._font_title, colour)
        if self.definition is not None:
            progress = f"{int(self.load_progress * 100)}%"
            text_surface = self._font_hint.render(progress, True, WHITE)
            surface.blit(
                text_surface,
                ((surface.get_width() - text_surface.get_width()) // 2,
                 surface.get_height() // 2 + FONT_SIZE_LARGE),
            )

    def _render_menu_column(self, surface):
        x, y = MENU_COLUMN_POSITION
        icon_w, icon_h = MENU_ICON_SIZE
        for idx, menu in enumerate(self.rows):
            row_y = y + idx * MENU_ROW_HEIGHT
            selected = idx == self.selected_index
            if selected:
                pygame.draw.rect(
                    surface,
                    MENU_HIGHLIGHT_COLOUR,
                    pygame.Rect(x, row_y, MENU_COLUMN_WIDTH, MENU_ROW_HEIGHT - 4),
                    border_radius=5,
                )
            colour = MENU_ITEM_SELECTED_COLOUR if selected else WHITE
            icon_pos = (x + 10, row_y + (MENU_ROW_HEIGHT - 4 - icon_h) // 2)
            self._icons.render_icon(surface, menu.icon, icon_pos, colour)

            title = self._font_item.render(menu.title, True, colour)
            surface.blit(
                title,
                (x + 20 + icon_w, row_y + (MENU_ROW_HEIGHT - 4 - title.get_height()) // 2),
            )

    def _render_selected_pane(self, surface):
        pane = self.selected_pane
        if pane is None or not hasattr(pane, 'render'):
            return
        x, y = MENU_COLUMN_POSITION
        rect = pygame.Rect(
            x + MENU_COLUMN_WIDTH + 20, y,
            surface.get_width() - MENU_COLUMN_WIDTH - x - 40,
            surface.get_height() - 2 * y,
        )
        pane.render(surface, rect, self._font_item, self._font_hint)


def create_window(windowed: bool = True) -> pygame.Surface:
    """Open the application window."""
    pygame.init()
    flags = 0 if windowed else pygame.FULLSCREEN
    surface = pygame.display.set_mode((DISPLAY_WIDTH, DISPLAY_HEIGHT), flags)
    pygame.display.set_caption("keyconf")
    return surface
