"""
Core error classes for the prhook application.
"""


class PrHookError(Exception):
    """Base class for errors raised by prhook itself."""

    pass


class ConfigurationError(PrHookError):
    """Raised when the process configuration is invalid."""

    pass


class UnknownFilterError(PrHookError):
    """Raised when a configured eligibility filter name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(f"Unknown eligibility filter '{name}'. Available: {', '.join(available)}")


class SettingsLoadError(PrHookError):
    """Raised when a repository settings file cannot be read or parsed."""

    pass
