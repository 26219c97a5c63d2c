"""Pipeline orchestration components."""
from __future__ import annotations

from .generator import CHECKPOINTS, PodcastGenerator, ProgressCallback, RunStage, episode_title

__all__ = ["CHECKPOINTS", "PodcastGenerator", "ProgressCallback", "RunStage", "episode_title"]
