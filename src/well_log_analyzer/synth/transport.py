from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional, Protocol

import openai
from openai import OpenAI

from ..config import AnalystSettings

logger = logging.getLogger(__name__)


class TransportError(RuntimeError):
    """The request never produced a usable reply (network, timeout, ...)."""


class ResponseFormatError(TransportError):
    """The service answered, but the reply has no usable first candidate."""


@dataclass(frozen=True)
class ChatReply:
    """Either the first candidate's text or the service's own error message."""

    text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class ChatTransport(Protocol):
    def complete(self, *, system: str, prompt: str, temperature: float) -> ChatReply:  # pragma: no cover - interface
        ...


def _error_message(error: Any) -> str:
    if isinstance(error, dict):
        msg = error.get("message")
        return str(msg) if msg else str(error)
    msg = getattr(error, "message", None)
    return str(msg) if msg else str(error)


def _status_error_message(exc: openai.APIStatusError) -> str:
    # The SDK unwraps {"error": {...}} bodies, so `body` is the error object itself.
    body = exc.body
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return exc.message


class OpenRouterTransport:
    """
    Chat-completions transport over the OpenAI SDK, pointed at OpenRouter.

    Sends a bearer credential plus the HTTP-Referer / X-Title headers that
    OpenRouter uses to identify the calling application. One request per call;
    the SDK's own retries are disabled.
    """

    def __init__(self, api_key: str, settings: Optional[AnalystSettings] = None, *, client: Any = None) -> None:
        self._settings = settings or AnalystSettings()
        self._client = client or OpenAI(
            api_key=api_key,
            base_url=self._settings.base_url,
            default_headers={
                "HTTP-Referer": self._settings.referer,
                "X-Title": self._settings.app_title,
            },
            timeout=self._settings.timeout,
            max_retries=0,
        )

    def complete(self, *, system: str, prompt: str, temperature: float) -> ChatReply:
        logger.debug(
            "POST %s/chat/completions model=%s temperature=%s prompt_chars=%d",
            self._settings.base_url,
            self._settings.model,
            temperature,
            len(prompt),
        )
        try:
            resp = self._client.chat.completions.create(
                model=self._settings.model,
                messages=[
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                temperature=temperature,
            )
        except openai.APIStatusError as exc:
            return ChatReply(error=_status_error_message(exc))
        except openai.APIConnectionError as exc:
            raise TransportError(str(exc)) from exc

        # OpenRouter can report failures inside a 200 body.
        error = getattr(resp, "error", None)
        if error:
            return ChatReply(error=_error_message(error))

        choices = getattr(resp, "choices", None) or []
        if not choices:
            raise ResponseFormatError("reply contained no choices")
        content = choices[0].message.content
        if not isinstance(content, str):
            raise ResponseFormatError("first choice has no text content")
        return ChatReply(text=content)
