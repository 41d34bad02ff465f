from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "openai/gpt-3.5-turbo"
DEFAULT_KEY_FILE = Path("api_key.txt")


class AnalystSettings(BaseModel):
    """
    Settings for the optional LLM analysis path.

    base_url: chat-completions service root (OpenRouter by default)
    model: provider/model identifier
    referer / app_title: descriptive headers identifying the calling application
    interpret_temperature: sampling temperature for the narrative interpretation
    anomaly_temperature: sampling temperature for anomaly detection (low = deterministic)
    sample_size: raw records included in the anomaly prompt
    strict_parameters: drop parsed anomalies whose parameter is not gamma_ray,
        neutron_density or resistivity
    timeout: seconds; enforced by the transport, not by the analyst
    """
    base_url: str = DEFAULT_BASE_URL
    model: str = DEFAULT_MODEL
    referer: str = "https://well-log-analyzer.local"
    app_title: str = "Well Log Analyzer"
    interpret_temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    anomaly_temperature: float = Field(default=0.2, ge=0.0, le=2.0)
    sample_size: int = Field(default=10, ge=0)
    strict_parameters: bool = False
    timeout: float = Field(default=60.0, gt=0.0)

    @classmethod
    def from_env(cls, **overrides: object) -> "AnalystSettings":
        """
        Build settings with model/base URL taken from the environment when set:

          WELL_LOG_LLM_MODEL
          WELL_LOG_LLM_BASE_URL

        Explicit keyword overrides win over the environment; None values are ignored.
        """
        values: dict[str, object] = {}
        model = os.getenv("WELL_LOG_LLM_MODEL")
        if model:
            values["model"] = model
        base_url = os.getenv("WELL_LOG_LLM_BASE_URL")
        if base_url:
            values["base_url"] = base_url
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


def _read_key_file(path: Path) -> Optional[str]:
    if not path.exists() or not path.is_file():
        return None
    lines = path.read_text(encoding="utf-8").splitlines()
    if not lines:
        return None
    return lines[0].strip() or None


def resolve_api_key(explicit: Optional[str] = None, *, key_file: Path = DEFAULT_KEY_FILE) -> Optional[str]:
    """
    Find the API key.

    Priority order:
    1. explicit value (e.g. a CLI argument)
    2. os.environ["OPENAI_API_KEY"]
    3. first line of key_file (api_key.txt in the working directory)

    Returns None when no key is configured.
    """
    if explicit and explicit.strip():
        return explicit.strip()
    env_key = os.environ.get("OPENAI_API_KEY")
    if env_key and env_key.strip():
        return env_key.strip()
    return _read_key_file(key_file)
