"""Exceptions raised by veisku."""


class VeiskuError(Exception):
    """Base class for errors reported to the user."""


class DocumentRootError(VeiskuError):
    """The document directory is missing or cannot be read."""


class UnknownFilterError(VeiskuError):
    """A preset filter name is not defined in the configuration."""

    def __init__(self, name: str):
        super().__init__(f"Unknown filter preset: '{name}'")
        self.name = name


class LaunchError(VeiskuError):
    """An external command could not be started."""

    def __init__(self, argv: list[str], reason: str):
        command = argv[0] if argv else "<empty>"
        super().__init__(f"Could not execute '{command}': {reason}")
        self.argv = argv


class DocumentReadError(VeiskuError):
    """A document file cannot be read."""

    def __init__(self, path, reason: str):
        super().__init__(f"Failed to read {path}: {reason}")
        self.path = path
