"""
Configuration settings for keyconf.
Contains constants for display, menus, lighting presets and feature defaults.
"""

import json
import logging
import os

logger = logging.getLogger('keyconf.config')

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# Display settings
# Reference resolution for scaling (default 1280x900)
REFERENCE_WIDTH = 1280
REFERENCE_HEIGHT = 900

# Optional display override file
CONFIG_FILE = os.path.join(_PROJECT_ROOT, "display_config.json")

FPS_TARGET = 30


def validate_display_dimensions(width, height):
    """
    Validate display dimensions for sanity.

    Args:
        width: Display width in pixels
        height: Display height in pixels

    Returns:
        tuple: (validated_width, validated_height)

    Raises:
        ValueError: If dimensions are invalid
    """
    if not isinstance(width, (int, float)) or isinstance(width, bool):
        raise ValueError(f"Display width must be numeric, got {type(width).__name__}")
    if not isinstance(height, (int, float)) or isinstance(height, bool):
        raise ValueError(f"Display height must be numeric, got {type(height).__name__}")

    width = int(width)
    height = int(height)

    # Min: QVGA (320x240), Max: 8K (7680x4320)
    if not (320 <= width <= 7680):
        raise ValueError(f"Display width {width} out of valid range (320-7680)")
    if not (240 <= height <= 4320):
        raise ValueError(f"Display height {height} out of valid range (240-4320)")

    return width, height


def load_display_config(path=CONFIG_FILE):
    """
    Load the display size from a JSON file.

    Missing or invalid files fall back to the reference resolution.

    Returns:
        tuple: (width, height)
    """
    try:
        if not os.path.exists(path):
            return REFERENCE_WIDTH, REFERENCE_HEIGHT
        with open(path, "r", encoding="utf-8") as f:
            display_config = json.load(f)
        width, height = validate_display_dimensions(
            display_config.get("width", REFERENCE_WIDTH),
            display_config.get("height", REFERENCE_HEIGHT),
        )
        logger.info("Loaded display config: %dx%d", width, height)
        return width, height
    except ValueError as e:
        # Includes JSONDecodeError
        logger.warning("Invalid display config: %s. Using reference values.", e)
    except (OSError, AttributeError) as e:
        logger.warning("Error loading display config: %s. Using reference values.", e)
    return REFERENCE_WIDTH, REFERENCE_HEIGHT


DISPLAY_WIDTH, DISPLAY_HEIGHT = load_display_config()

# Scaling factors based on reference resolution
SCALE_X = DISPLAY_WIDTH / REFERENCE_WIDTH
SCALE_Y = DISPLAY_HEIGHT / REFERENCE_HEIGHT


def scale_position(pos):
    """Scale a position tuple (x, y) according to the current display resolution."""
    return (int(pos[0] * SCALE_X), int(pos[1] * SCALE_Y))


def scale_size(size):
    """Scale a size tuple (width, height) according to the current display resolution."""
    return (int(size[0] * SCALE_X), int(size[1] * SCALE_Y))


# Font settings (None = pygame default font)
FONT_PATH = None
FONT_SIZE_LARGE = int(48 * min(SCALE_X, SCALE_Y))
FONT_SIZE_MEDIUM = int(24 * min(SCALE_X, SCALE_Y))
FONT_SIZE_SMALL = int(18 * min(SCALE_X, SCALE_Y))


# Colors (RGB)
GREY = (128, 128, 128)
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
RED = (255, 80, 80)
BACKGROUND_COLOUR = (30, 30, 36)
MENU_ITEM_SELECTED_COLOUR = (230, 170, 90)
MENU_HIGHLIGHT_COLOUR = (60, 55, 50)


# Menu column layout
MENU_COLUMN_POSITION = scale_position((10, 15))
MENU_COLUMN_WIDTH = int(260 * SCALE_X)
MENU_ROW_HEIGHT = int(44 * SCALE_Y)
MENU_ICON_SIZE = scale_size((28, 28))
MENU_ICON_DIR = os.path.join(_PROJECT_ROOT, "assets", "icons")


# Custom menus
# Identifier of a custom menu is this prefix plus its manifest position
CUSTOM_MENU_ID_PREFIX = "custom/"
# (label keyword, icon name), first match wins
CUSTOM_MENU_ICONS = (
    ("light", "lightbulb"),
    ("rgb", "lightbulb"),
    ("audio", "speaker"),
    ("sound", "speaker"),
    ("encoder", "encoder"),
)
CUSTOM_MENU_DEFAULT_ICON = "microchip"


# Lighting presets (one JSON file per preset name)
LIGHTING_PRESETS_DIR = os.path.join(_PROJECT_ROOT, "assets", "lighting")


# Feature flags
DEFAULT_MACROS_SUPPORTED = True


# Configure screen
# Seconds without a definition before offering the authorize button
AUTHORIZE_BUTTON_DELAY = 3.0
SEARCHING_TEXT = "Searching for devices..."
LOADING_TEXT = "Loading..."
AUTHORIZE_TEXT = "Authorize device +"
# Title of the pane that makes keys on the keyboard selectable
KEYMAP_TITLE = "Keymap"
# Settings key holding the identifier of the last selected menu
LAST_MENU_SETTING = "configure.last_menu"
