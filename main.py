#!/usr/bin/env python3
"""
keyconf - configure menus for programmable keyboards

Loads a keyboard definition (VIA-style JSON), resolves the configure menus
it supports and prints them, or shows them in a pygame window.
"""

import argparse
import json
import logging
import sys

import pygame

from gui.configure import ConfigureScreen, create_window
from gui.panes import BUILTIN_PANES, make_custom_pane
from menus.builtin import BuiltInMenuRegistry
from menus.custom import CustomMenuFactory
from menus.errors import MenuResolutionError
from menus.resolution import FeatureFlags
from menus.service import MenuResolutionService
from utils.config import FPS_TARGET
from utils.settings import get_settings

logger = logging.getLogger('keyconf')


def build_service() -> MenuResolutionService:
    """Create the resolution service wired to the application's panes."""
    return MenuResolutionService(
        registry=BuiltInMenuRegistry(panes=BUILTIN_PANES),
        custom_factory=CustomMenuFactory(pane_factory=make_custom_pane),
    )


def load_definition(path):
    """Read a keyboard definition JSON file."""
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def resolve_flags(args, settings) -> FeatureFlags:
    """Feature flags from settings, with command line overrides."""
    flags = FeatureFlags.from_settings(settings)
    if args.macros is not None:
        flags = FeatureFlags(macros_supported=args.macros)
    return flags


class KeyConf:
    """Interactive configure screen."""

    def __init__(self, definition, flags: FeatureFlags, settings, windowed: bool = True):
        self.surface = create_window(windowed)
        self.screen = ConfigureScreen(build_service(), settings=settings)
        self.screen.update(definition, flags, connected_devices=[definition])
        self.running = True

    def handle_event(self, event):
        if event.type == pygame.QUIT:
            self.running = False
        elif event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_ESCAPE, pygame.K_q):
                self.running = False
            elif event.key == pygame.K_UP:
                self.screen.navigate(-1)
            elif event.key == pygame.K_DOWN:
                self.screen.navigate(1)

    def run(self):
        clock = pygame.time.Clock()
        try:
            while self.running:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.screen.render(self.surface)
                pygame.display.flip()
                clock.tick(FPS_TARGET)
        finally:
            pygame.quit()


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="keyconf - configure menus for programmable keyboards"
    )
    parser.add_argument("definition", help="Keyboard definition JSON file")
    macros = parser.add_mutually_exclusive_group()
    macros.add_argument(
        "--macros", dest="macros", action="store_true", default=None,
        help="Force the macros menu on",
    )
    macros.add_argument(
        "--no-macros", dest="macros", action="store_false",
        help="Force the macros menu off",
    )
    parser.add_argument(
        "--display", action="store_true",
        help="Show the configure screen in a window instead of printing",
    )
    parser.add_argument(
        "--fullscreen", action="store_true",
        help="Run the configure screen fullscreen (with --display)",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        definition = load_definition(args.definition)
    except (OSError, json.JSONDecodeError) as e:
        print(f"Could not read definition: {e}", file=sys.stderr)
        return 1

    settings = get_settings()
    flags = resolve_flags(args, settings)
    logger.debug("Feature flags: %s", flags)

    if args.display:
        KeyConf(definition, flags, settings, windowed=not args.fullscreen).run()
        return 0

    resolution = build_service().resolve(definition, flags)
    try:
        menus = resolution.unwrap()
    except MenuResolutionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not menus:
        print("No configure menus (definition not recognised)", file=sys.stderr)
    for menu in menus:
        print(f"{menu.identifier}\t{menu.title}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
