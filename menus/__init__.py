"""
Configure menu resolution for keyconf.

Turns a keyboard definition and runtime feature flags into the ordered list
of configure menus. Entry point: menus.service.MenuResolutionService.
"""
