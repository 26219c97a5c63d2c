"""Transcript parsing."""
from __future__ import annotations

from .script import WORDS_PER_SECOND, estimate_duration, parse_script

__all__ = ["WORDS_PER_SECOND", "estimate_duration", "parse_script"]
