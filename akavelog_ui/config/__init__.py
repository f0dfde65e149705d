"""Configuration module for the dashboard client."""

from .settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
