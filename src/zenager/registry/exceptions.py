"""Custom exceptions for the Repository Registry."""


class RegistryError(Exception):
    """Base exception for Repository Registry errors."""


class ConfigurationError(RegistryError):
    """A source URL or descriptor is invalid and was not added."""


class SourceNotFoundError(RegistryError):
    """Source with given ID is not configured."""


class SourceExistsError(RegistryError):
    """Source with given ID is already configured."""
