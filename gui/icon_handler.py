"""
Handles loading and rendering of menu icons.

Icons are looked up by name (a menu descriptor's icon handle) as
<MENU_ICON_DIR>/<name>.png. Missing icons fall back to a drawn badge with
the first letter of the name.
"""

import logging
import os

import pygame

from utils.config import MENU_ICON_DIR, MENU_ICON_SIZE, GREY, BLACK

logger = logging.getLogger('keyconf.icons')


class IconHandler:
    def __init__(self, icon_dir=MENU_ICON_DIR, size=MENU_ICON_SIZE):
        """
        Initialise the icon handler.

        Args:
            icon_dir: Directory holding <name>.png icon files
            size: (width, height) icons are scaled to
        """
        self.icon_dir = icon_dir
        self.size = size
        self.icons = {}
        self._font = None

    def get_icon(self, name):
        """
        Get the icon surface for a name, loading it on first use.

        Returns:
            pygame.Surface, or None if there is no icon file
        """
        if name in self.icons:
            return self.icons[name]

        path = os.path.join(self.icon_dir, f"{name}.png")
        image = None
        if os.path.exists(path):
            try:
                image = pygame.image.load(path)
                if pygame.display.get_surface() is not None:
                    image = image.convert_alpha()
                image = pygame.transform.scale(image, self.size)
                logger.debug("Loaded icon: %s from %s", name, path)
            except pygame.error as e:
                logger.warning("Error loading icon %s from %s: %s", name, path, e)
                image = None
        else:
            logger.debug("Icon file not found at %s", path)

        self.icons[name] = image
        return image

    def render_icon(self, surface, name, position, colour=GREY):
        """
        Render an icon, or its fallback badge, at a position.

        Returns:
            bool: True if an icon file was drawn, False if the badge was used
        """
        image = self.get_icon(name)
        if image is not None:
            surface.blit(image, position)
            return True

        self._render_badge(surface, str(name), position, colour)
        return False

    def _render_badge(self, surface, name, position, colour):
        if self._font is None:
            pygame.font.init()
            self._font = pygame.font.Font(None, self.size[1])
        w, h = self.size
        centre = (position[0] + w // 2, position[1] + h // 2)
        pygame.draw.circle(surface, colour, centre, min(w, h) // 2)
        letter = self._font.render(name[:1].upper(), True, BLACK)
        surface.blit(
            letter,
            (centre[0] - letter.get_width() // 2, centre[1] - letter.get_height() // 2),
        )
