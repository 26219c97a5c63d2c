"""Command line interface for the Tech Trendy generator."""
from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import Optional

from .config import load_config
from .core.errors import GenerationError
from .database import EpisodeHistory, create_storage
from .runtime import create_generator

LOGGER = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Tech Trendy weekly podcast generator")
    parser.add_argument("command", choices=["generate", "history"], help="Which action to execute")
    parser.add_argument("--config", type=Path, help="Path to an explicit configuration file")
    parser.add_argument("--limit", type=int, default=20, help="Number of episodes listed by 'history'")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser


def _log_progress(label: str, percent: int) -> None:
    LOGGER.info("[%3d%%] %s", percent, label)


async def _generate(config) -> int:
    resources = create_generator(config)
    try:
        episode = await resources.generator.generate_weekly_podcast(progress_callback=_log_progress)
    except GenerationError as exc:
        LOGGER.error("%s", exc)
        return 1
    finally:
        resources.close()
    LOGGER.info("Generated %s (%s s) -> %s", episode.title, episode.duration, episode.audio_url)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    config = load_config(args.config)

    if args.command == "generate":
        return asyncio.run(_generate(config))
    if args.command == "history":
        storage = create_storage(config.storage.database_url, echo=config.storage.echo_sql)
        try:
            history = EpisodeHistory(storage, limit=config.storage.history_limit)
            for episode in history.list_episodes()[: args.limit]:
                print(
                    f"{episode.created_at:%Y-%m-%d %H:%M}  {episode.duration:>5}s  "
                    f"{episode.status.value:<10} {episode.title}"
                )
        finally:
            storage.dispose()
        return 0
    parser.error(f"Unknown command {args.command}")
    return 2


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
