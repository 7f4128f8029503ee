"""Errors raised while wiring the application together."""


class UtilError(Exception):
    """Base error for settings and container setup."""


class ConfigurationError(UtilError):
    """Settings are unusable for the selected environment."""


class DependencyInjectionError(UtilError):
    """No provider implementation matches the requested component."""
