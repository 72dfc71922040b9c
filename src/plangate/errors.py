"""Fatal error types shared by every command."""


class PlangateError(Exception):
    """Base class for conditions that stop a command."""


class ConfigurationError(PlangateError, ValueError):
    """A required option is missing or blank."""


class ProfileNotFoundError(PlangateError, FileNotFoundError):
    """No planning behavior profile could be located."""

    def __init__(self, message: str = "planning behavior profile not found") -> None:
        super().__init__(message)
