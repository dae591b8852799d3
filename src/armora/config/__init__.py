"""Configuration module for Armora."""

from armora.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
