"""Configuration helpers for the Tech Trendy generator."""
from __future__ import annotations

from .settings import (
    AppConfig,
    SourcesConfig,
    SpeechProviderConfig,
    StorageConfig,
    TextProviderConfig,
    default_config,
    load_config,
    resolve_config_path,
    save_config,
)

__all__ = [
    "AppConfig",
    "SourcesConfig",
    "SpeechProviderConfig",
    "StorageConfig",
    "TextProviderConfig",
    "default_config",
    "load_config",
    "resolve_config_path",
    "save_config",
]
