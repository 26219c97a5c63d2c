"""Database integration components."""
from __future__ import annotations

from .models import Base, Record
from .storage import DEFAULT_HISTORY_LIMIT, HISTORY_KEY, EpisodeHistory, Storage, create_storage

__all__ = [
    "Base",
    "DEFAULT_HISTORY_LIMIT",
    "EpisodeHistory",
    "HISTORY_KEY",
    "Record",
    "Storage",
    "create_storage",
]
