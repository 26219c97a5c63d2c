"""Persistence helpers built on SQLAlchemy."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, List, Optional
import json
import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..core.types import Episode
from .models import Base, Record

LOGGER = logging.getLogger(__name__)

HISTORY_KEY = "generated_podcasts"
DEFAULT_HISTORY_LIMIT = 20


class Storage:
    """Key-value record store on top of SQLAlchemy."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, expire_on_commit=False)

    @contextmanager
    def session(self) -> Iterator[Session]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ensure_schema(self) -> None:
        Base.metadata.create_all(self._engine)

    def get(self, key: str) -> Optional[str]:
        with self.session() as session:
            record = session.get(Record, key)
            return record.value if record is not None else None

    def put(self, key: str, value: str) -> None:
        with self.session() as session:
            record = session.get(Record, key)
            if record is None:
                session.add(Record(key=key, value=value))
            else:
                record.value = value

    def get_json(self, key: str, default: Any = None) -> Any:
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except ValueError:
            LOGGER.warning("Stored record %s is not valid JSON, ignoring it", key)
            return default

    def put_json(self, key: str, value: Any) -> None:
        self.put(key, json.dumps(value, ensure_ascii=False))

    def dispose(self) -> None:
        """Dispose the underlying SQLAlchemy engine."""

        self._engine.dispose()


class EpisodeHistory:
    """Most-recent-first list of generated episodes, capped in length."""

    def __init__(self, storage: Storage, *, limit: int = DEFAULT_HISTORY_LIMIT, key: str = HISTORY_KEY) -> None:
        if limit < 1:
            raise ValueError("History limit must be positive")
        self._storage = storage
        self._limit = limit
        self._key = key

    def list_episodes(self) -> List[Episode]:
        raw = self._storage.get_json(self._key, default=[])
        if not isinstance(raw, list):
            LOGGER.warning("Episode history has an unexpected shape, treating it as empty")
            return []
        episodes: List[Episode] = []
        for item in raw:
            try:
                episodes.append(Episode.from_dict(item))
            except (KeyError, TypeError, ValueError) as exc:
                LOGGER.warning("Skipping unreadable history entry: %s", exc)
        return episodes

    def append(self, episode: Episode) -> List[Episode]:
        """Insert ``episode`` at the front and truncate to the limit."""

        raw = self._storage.get_json(self._key, default=[])
        if not isinstance(raw, list):
            raw = []
        raw.insert(0, episode.to_dict())
        del raw[self._limit:]
        self._storage.put_json(self._key, raw)
        return self.list_episodes()


def create_storage(database_url: str, *, echo: bool = False) -> Storage:
    engine = create_engine(database_url, echo=echo, future=True)
    storage = Storage(engine)
    storage.ensure_schema()
    return storage


__all__ = [
    "DEFAULT_HISTORY_LIMIT",
    "EpisodeHistory",
    "HISTORY_KEY",
    "Storage",
    "create_storage",
]
