"""Custom exceptions for Armora."""


class ArmoraError(Exception):
    """Base exception for all Armora errors."""

    pass


class ConfigurationError(ArmoraError):
    """Error in configuration or settings."""

    pass
