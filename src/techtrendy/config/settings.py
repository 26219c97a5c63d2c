"""Application configuration helpers for the Tech Trendy generator."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, fields
from pathlib import Path
import types
from typing import Any, Dict, List, Optional, Type, TypeVar, Union, get_args, get_origin, get_type_hints


_DEFAULT_CONFIG_LOCATIONS = (
    Path("techtrendy.json"),
    Path.home() / ".config" / "techtrendy" / "config.json",
)


@dataclass(slots=True)
class TextProviderConfig:
    """Configuration for the Gemini text-generation endpoint."""

    api_key: Optional[str] = None
    base_url: str = "https://generativelanguage.googleapis.com"
    model: str = "gemini-2.5-flash"
    timeout: float = 60.0
    max_output_tokens: int = 2000
    temperature: float = 0.8


@dataclass(slots=True)
class SpeechProviderConfig:
    """Configuration for the ElevenLabs speech-synthesis endpoint."""

    api_key: Optional[str] = None
    base_url: str = "https://api.elevenlabs.io"
    model: str = "eleven_multilingual_v2"
    timeout: float = 60.0
    output_dir: str = "episodes"


@dataclass(slots=True)
class SourcesConfig:
    """Topic feeds and their optional credentials."""

    enabled: str = "static"
    timeout: float = 15.0
    news_api_key: Optional[str] = None

    def enabled_sources(self) -> List[str]:
        return [name.strip().lower() for name in self.enabled.split(",") if name.strip()]


@dataclass(slots=True)
class StorageConfig:
    """Configuration for the local SQLite record store."""

    database_url: str = "sqlite:///techtrendy.db"
    echo_sql: bool = False
    history_limit: int = 20


@dataclass(slots=True)
class AppConfig:
    """High level application configuration."""

    text: TextProviderConfig
    speech: SpeechProviderConfig
    sources: SourcesConfig
    storage: StorageConfig

    def missing_credentials(self) -> List[str]:
        """Return the providers whose mandatory API key is empty."""

        missing: List[str] = []
        if not (self.text.api_key or "").strip():
            missing.append("text")
        if not (self.speech.api_key or "").strip():
            missing.append("speech")
        return missing


def default_config() -> AppConfig:
    return AppConfig(
        text=TextProviderConfig(),
        speech=SpeechProviderConfig(),
        sources=SourcesConfig(),
        storage=StorageConfig(),
    )


def _load_from_env(prefix: str) -> Dict[str, Any]:
    """Load configuration entries for ``prefix`` from the environment."""

    data: Dict[str, Any] = {}
    for key, value in os.environ.items():
        if key.startswith(prefix):
            normalized_key = key.removeprefix(prefix)
            data[normalized_key.lower()] = value
    return data


def _merge_dict(target: Dict[str, Any], updates: Dict[str, Any]) -> Dict[str, Any]:
    merged = target.copy()
    merged.update({k: v for k, v in updates.items() if v is not None})
    return merged


def _load_config_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf8") as fh:
        return json.load(fh)


T = TypeVar("T")


def _coerce_value(value: Any, annotation: Any) -> Any:
    """Best-effort conversion of ``value`` to match ``annotation``."""

    if value is None:
        return None

    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = [arg for arg in get_args(annotation) if arg is not type(None)]  # noqa: E721 - allow Optional
        if not args:
            return None
        last_error: Exception | None = None
        for candidate in args:
            try:
                return _coerce_value(value, candidate)
            except (TypeError, ValueError) as exc:
                last_error = exc
        raise ValueError(f"Cannot convert {value!r} to {annotation}") from last_error

    target_type = origin or annotation

    if target_type in {Any, object}:
        return value

    if target_type is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized in {"true", "1", "yes", "y", "on"}:
                return True
            if normalized in {"false", "0", "no", "n", "off"}:
                return False
        if isinstance(value, (int, float)):
            return bool(value)
        raise ValueError(f"Cannot convert {value!r} to bool")

    if target_type is int:
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, (float, str)):
            return int(float(value))
        raise ValueError(f"Cannot convert {value!r} to int")

    if target_type is float:
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            return float(value)
        raise ValueError(f"Cannot convert {value!r} to float")

    if target_type is str:
        if isinstance(value, str):
            return value
        if isinstance(value, (list, tuple)):
            return ",".join(str(item) for item in value)
        return str(value)

    return value


def _dataclass_from_dict(cls: Type[T], data: Dict[str, Any]) -> T:
    """Create dataclass ``cls`` while coercing ``data`` to the proper types."""

    kwargs: Dict[str, Any] = {}
    type_hints = get_type_hints(cls)
    for field in fields(cls):
        if field.name not in data:
            continue
        try:
            annotation = type_hints.get(field.name, field.type)
            kwargs[field.name] = _coerce_value(data[field.name], annotation)
        except (TypeError, ValueError) as exc:
            raise ValueError(
                f"Invalid value for {cls.__name__}.{field.name}: {data[field.name]!r}"
            ) from exc
    return cls(**kwargs)


def resolve_config_path(explicit_path: Optional[Path] = None) -> Path:
    """Return the effective configuration file path.

    If ``explicit_path`` is provided it is returned verbatim. Otherwise the
    first existing default location wins; without any existing file the
    XDG-style location (``~/.config/techtrendy/config.json``) is returned.
    """

    if explicit_path:
        return explicit_path

    for candidate in _DEFAULT_CONFIG_LOCATIONS:
        if candidate.exists():
            return candidate

    return _DEFAULT_CONFIG_LOCATIONS[-1]


def load_config(explicit_path: Optional[Path] = None) -> AppConfig:
    """Create the application configuration.

    Defaults, an optional JSON file and ``TECHTRENDY_*`` environment variables
    are merged into one :class:`AppConfig`. Environment variable names use the
    format ``TECHTRENDY_SECTION_FIELD`` (e.g. ``TECHTRENDY_TEXT_API_KEY``).
    """

    base = {name: asdict(section) for name, section in _sections(default_config()).items()}

    file_data: Dict[str, Any] = {}
    if explicit_path:
        file_data = _load_config_file(explicit_path)
    else:
        for candidate in _DEFAULT_CONFIG_LOCATIONS:
            file_data = _load_config_file(candidate)
            if file_data:
                break

    def section(name: str) -> Dict[str, Any]:
        merged = _merge_dict(base[name], file_data.get(name) or {})
        return _merge_dict(merged, _load_from_env(f"TECHTRENDY_{name.upper()}_"))

    return AppConfig(
        text=_dataclass_from_dict(TextProviderConfig, section("text")),
        speech=_dataclass_from_dict(SpeechProviderConfig, section("speech")),
        sources=_dataclass_from_dict(SourcesConfig, section("sources")),
        storage=_dataclass_from_dict(StorageConfig, section("storage")),
    )


def save_config(config: AppConfig, path: Optional[Path] = None) -> Path:
    """Persist ``config`` as JSON and return the target path."""

    target = resolve_config_path(path)
    target.parent.mkdir(parents=True, exist_ok=True)

    data = {name: asdict(section) for name, section in _sections(config).items()}
    with target.open("w", encoding="utf8") as fh:
        json.dump(data, fh, ensure_ascii=False, indent=2, sort_keys=True)
        fh.write("\n")
    return target


def _sections(config: AppConfig) -> Dict[str, Any]:
    return {
        "text": config.text,
        "speech": config.speech,
        "sources": config.sources,
        "storage": config.storage,
    }


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
