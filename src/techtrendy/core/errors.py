"""Fatal error conditions surfaced by the generation pipeline."""
from __future__ import annotations


class GenerationError(RuntimeError):
    """Base class for conditions that abort a generation run."""


class MissingConfiguration(GenerationError):
    """Raised when a run is requested before any configuration was supplied."""

    def __init__(self, message: str = "API configuration has not been set") -> None:
        super().__init__(message)


class MissingCredential(GenerationError):
    """Raised when a provider credential required by a stage is empty."""

    def __init__(self, provider: str) -> None:
        super().__init__(f"API key for the {provider} provider is not set")
        self.provider = provider


class AlreadyRunning(GenerationError):
    """Raised when a second run is requested while one is in progress."""

    def __init__(self) -> None:
        super().__init__("A generation run is already in progress")


class InsufficientTopics(GenerationError):
    """Raised when the topic source returned fewer candidates than required."""

    def __init__(self, required: int, available: int) -> None:
        super().__init__(f"At least {required} topics are required, got {available}")
        self.required = required
        self.available = available


class GenerationCancelled(GenerationError):
    """Raised when a run was stopped between two stages."""

    def __init__(self, stage: str) -> None:
        super().__init__(f"Generation stopped before {stage}")
        self.stage = stage


__all__ = [
    "AlreadyRunning",
    "GenerationCancelled",
    "GenerationError",
    "InsufficientTopics",
    "MissingConfiguration",
    "MissingCredential",
]
