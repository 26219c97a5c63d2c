from __future__ import annotations

from datetime import datetime, timedelta, timezone

from techtrendy.core import Episode, EpisodeStatus, Role, RoleAssignment
from techtrendy.database import HISTORY_KEY, EpisodeHistory, create_storage
from techtrendy.sources import REPRESENTATIVE_TOPICS
from techtrendy.synthesis import fallback_script


def _episode(index: int) -> Episode:
    script = fallback_script()
    return Episode(
        id=f"episode-{index}",
        title=f"Tech Trendy #{index}",
        script=script,
        topics=[RoleAssignment(role=Role.PETR, topics=(REPRESENTATIVE_TOPICS[0],))],
        audio_url=f"https://example.com/podcast-{index}.mp3",
        duration=script.metadata.total_duration,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(days=index),
        status=EpisodeStatus.COMPLETED,
    )


def test_history_is_most_recent_first_and_capped(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'history.db').as_posix()}")
    history = EpisodeHistory(storage, limit=20)

    for index in range(25):
        history.append(_episode(index))

    episodes = history.list_episodes()
    assert len(episodes) == 20
    assert [episode.id for episode in episodes] == [f"episode-{index}" for index in range(24, 4, -1)]


def test_episode_round_trips_through_storage(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'roundtrip.db').as_posix()}")
    history = EpisodeHistory(storage)
    original = _episode(3)

    history.append(original)
    # a fresh history object reads what was persisted
    restored = EpisodeHistory(storage).list_episodes()[0]

    assert restored.id == original.id
    assert restored.script == original.script
    assert restored.topics == original.topics
    assert restored.created_at == original.created_at
    assert restored.status is EpisodeStatus.COMPLETED


def test_corrupt_history_is_treated_as_empty(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'corrupt.db').as_posix()}")
    storage.put(HISTORY_KEY, "{not json")
    history = EpisodeHistory(storage)

    assert history.list_episodes() == []

    history.append(_episode(1))
    assert [episode.id for episode in history.list_episodes()] == ["episode-1"]


def test_storage_put_overwrites_existing_value(tmp_path):
    storage = create_storage(f"sqlite:///{(tmp_path / 'kv.db').as_posix()}")

    storage.put("key", "one")
    storage.put("key", "two")

    assert storage.get("key") == "two"
    assert storage.get("missing") is None
