"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class ModeratorAuthError(InterfaceError):
    """Moderator key missing or wrong."""

    def __init__(self, missing: bool):
        self.missing = missing
        super().__init__(
            "Moderator key required" if missing else "Invalid moderator key"
        )
