import json

import pytest

import techtrendy.config.settings as config_settings
from techtrendy.config import (
    AppConfig,
    SourcesConfig,
    SpeechProviderConfig,
    StorageConfig,
    TextProviderConfig,
    load_config,
    resolve_config_path,
    save_config,
)


@pytest.fixture(autouse=True)
def isolated_config_locations(tmp_path, monkeypatch):
    monkeypatch.setattr(
        config_settings,
        "_DEFAULT_CONFIG_LOCATIONS",
        (tmp_path / "techtrendy.json", tmp_path / "config.json"),
    )


def test_environment_values_are_coerced(monkeypatch):
    monkeypatch.setenv("TECHTRENDY_TEXT_MAX_OUTPUT_TOKENS", "1500")
    monkeypatch.setenv("TECHTRENDY_TEXT_TEMPERATURE", "0.3")
    monkeypatch.setenv("TECHTRENDY_SPEECH_TIMEOUT", "12.5")
    monkeypatch.setenv("TECHTRENDY_STORAGE_ECHO_SQL", "true")
    monkeypatch.setenv("TECHTRENDY_STORAGE_HISTORY_LIMIT", "5")
    monkeypatch.setenv("TECHTRENDY_TEXT_API_KEY", "text-key")

    config = load_config()

    assert config.text.max_output_tokens == 1500 and isinstance(config.text.max_output_tokens, int)
    assert config.text.temperature == pytest.approx(0.3)
    assert config.speech.timeout == pytest.approx(12.5)
    assert config.storage.echo_sql is True
    assert config.storage.history_limit == 5
    assert config.text.api_key == "text-key"


def test_invalid_boolean_environment_value_raises(monkeypatch):
    monkeypatch.setenv("TECHTRENDY_STORAGE_ECHO_SQL", "definitely")

    with pytest.raises(ValueError):
        load_config()


def test_file_values_are_overridden_by_environment(tmp_path, monkeypatch):
    path = tmp_path / "explicit.json"
    path.write_text(
        json.dumps({"text": {"api_key": "from-file", "model": "gemini-test"}, "sources": {"enabled": ["static", "hackernews"]}}),
        encoding="utf8",
    )
    monkeypatch.setenv("TECHTRENDY_TEXT_API_KEY", "from-env")

    config = load_config(path)

    assert config.text.api_key == "from-env"
    assert config.text.model == "gemini-test"
    assert config.sources.enabled_sources() == ["static", "hackernews"]


def test_missing_credentials_lists_empty_providers():
    config = AppConfig(
        text=TextProviderConfig(api_key="abc"),
        speech=SpeechProviderConfig(api_key="   "),
        sources=SourcesConfig(),
        storage=StorageConfig(),
    )

    assert config.missing_credentials() == ["speech"]


def test_resolve_config_path_prefers_existing_file(tmp_path):
    first = tmp_path / "techtrendy.json"
    second = tmp_path / "config.json"

    assert resolve_config_path(None) == second

    first.write_text("{}", encoding="utf8")
    assert resolve_config_path(None) == first
    explicit = tmp_path / "other.json"
    assert resolve_config_path(explicit) == explicit


def test_save_config_writes_json(tmp_path):
    target = tmp_path / "settings" / "techtrendy.json"

    config = AppConfig(
        text=TextProviderConfig(api_key="ABC123", model="gemini-demo"),
        speech=SpeechProviderConfig(api_key="sk_demo", output_dir="out"),
        sources=SourcesConfig(enabled="static,newsapi", news_api_key="news"),
        storage=StorageConfig(database_url="sqlite:///demo.db", echo_sql=True),
    )

    saved_path = save_config(config, target)
    assert saved_path == target
    data = json.loads(target.read_text(encoding="utf8"))
    assert data["text"]["api_key"] == "ABC123"
    assert data["text"]["model"] == "gemini-demo"
    assert data["speech"]["output_dir"] == "out"
    assert data["sources"]["news_api_key"] == "news"
    assert data["storage"]["echo_sql"] is True

    reloaded = load_config(target)
    assert reloaded.sources.enabled_sources() == ["static", "newsapi"]
