from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from well_log_analyzer.config import AnalystSettings, resolve_api_key


def test_defaults() -> None:
    s = AnalystSettings()
    assert s.base_url == "https://openrouter.ai/api/v1"
    assert s.model == "openai/gpt-3.5-turbo"
    assert (s.interpret_temperature, s.anomaly_temperature) == (0.7, 0.2)
    assert s.sample_size == 10
    assert s.strict_parameters is False


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ValidationError):
        AnalystSettings(sample_size=-1)
    with pytest.raises(ValidationError):
        AnalystSettings(anomaly_temperature=3.0)


def test_from_env_with_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WELL_LOG_LLM_MODEL", "openai/gpt-4o-mini")
    monkeypatch.setenv("WELL_LOG_LLM_BASE_URL", "https://example.invalid/v1")

    s = AnalystSettings.from_env()
    assert s.model == "openai/gpt-4o-mini"
    assert s.base_url == "https://example.invalid/v1"

    s = AnalystSettings.from_env(model="custom/model", base_url=None)
    assert s.model == "custom/model"
    assert s.base_url == "https://example.invalid/v1"


def test_api_key_priority(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    key_file = tmp_path / "api_key.txt"
    key_file.write_text("sk-file\nignored\n", encoding="utf-8")
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

    assert resolve_api_key("sk-arg", key_file=key_file) == "sk-arg"
    assert resolve_api_key(None, key_file=key_file) == "sk-env"

    monkeypatch.delenv("OPENAI_API_KEY")
    assert resolve_api_key(None, key_file=key_file) == "sk-file"
    assert resolve_api_key("  ", key_file=key_file) == "sk-file"
    assert resolve_api_key(None, key_file=tmp_path / "missing.txt") is None


def test_blank_key_file_means_no_key(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    key_file = tmp_path / "api_key.txt"
    key_file.write_text("\n", encoding="utf-8")
    assert resolve_api_key(key_file=key_file) is None
