"""Application configuration."""

from .settings import EmbeddingProviderOption, EnvironmentOption, Settings, get_settings, settings

__all__ = [
    "EmbeddingProviderOption",
    "EnvironmentOption",
    "Settings",
    "get_settings",
    "settings",
]
