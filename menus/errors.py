"""
Errors raised while resolving the configure menus for a device definition.
"""


class MenuResolutionError(ValueError):
    """Base class for menu resolution failures."""


class UnrecognizedMenuReference(MenuResolutionError):
    """A V3 manifest entry names a menu this client does not know."""

    def __init__(self, reference: str, index: int):
        self.reference = reference
        self.index = index
        super().__init__(
            f"Unrecognized menu reference {reference!r} at menus[{index}]"
        )


class InvalidDefinitionError(MenuResolutionError):
    """A descriptor field has the wrong shape."""


class UnknownLightingPreset(MenuResolutionError):
    """A lighting spec names (or extends) a preset that does not exist."""

    def __init__(self, name):
        self.name = name
        super().__init__(f"Unknown lighting preset: {name!r}")
