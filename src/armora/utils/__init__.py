"""Shared utilities for Armora."""

from armora.utils.exceptions import ArmoraError, ConfigurationError

__all__ = ["ArmoraError", "ConfigurationError"]
