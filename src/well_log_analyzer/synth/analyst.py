from __future__ import annotations

import logging
from typing import Optional

from ..anomalies import parse_anomaly_response
from ..config import AnalystSettings
from ..models import Anomaly, RecordStore
from .prompts import (
    ANOMALY_SYSTEM_PROMPT,
    INTERPRETATION_SYSTEM_PROMPT,
    build_anomaly_prompt,
    build_interpretation_prompt,
)
from .transport import ChatTransport, OpenRouterTransport, ResponseFormatError, TransportError

logger = logging.getLogger(__name__)


class WellLogAnalyst:
    """
    Optional LLM augmentation on top of the statistics engine.

    The credential is injected; where it came from (argument, environment,
    key file) is the caller's business. Neither public method raises: a failed
    request degrades to an error string (interpret) or an empty list
    (detect_anomalies), so statistics can always be reported.
    """

    def __init__(
        self,
        api_key: str,
        *,
        settings: Optional[AnalystSettings] = None,
        transport: Optional[ChatTransport] = None,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ValueError("api_key must be a non-empty string")
        self._settings = settings or AnalystSettings()
        self._transport = transport or OpenRouterTransport(api_key, self._settings)

    @property
    def settings(self) -> AnalystSettings:
        return self._settings

    def interpret(self, store: RecordStore) -> str:
        """Free-text geological interpretation, or a user-facing error string."""
        prompt = build_interpretation_prompt(store)
        try:
            reply = self._transport.complete(
                system=INTERPRETATION_SYSTEM_PROMPT,
                prompt=prompt,
                temperature=self._settings.interpret_temperature,
            )
        except ResponseFormatError as exc:
            logger.warning("Interpretation reply was malformed: %s", exc)
            return f"Error parsing response: {exc}"
        except TransportError as exc:
            logger.warning("Interpretation request failed: %s", exc)
            return f"Error contacting analysis service: {exc}"
        except Exception as exc:
            logger.exception("Unexpected failure during interpretation request")
            return f"Error contacting analysis service: {exc}"

        if reply.error is not None:
            logger.warning("Analysis service returned an error: %s", reply.error)
            return f"API Error: {reply.error}"
        return reply.text or ""

    def detect_anomalies(self, store: RecordStore) -> list[Anomaly]:
        """
        Ask the model for ANOMALY lines and parse them.

        Any failure yields []. At this boundary "no anomalies" and "detection
        failed" look the same; the log tells them apart.
        """
        prompt = build_anomaly_prompt(store, sample_size=self._settings.sample_size)
        try:
            reply = self._transport.complete(
                system=ANOMALY_SYSTEM_PROMPT,
                prompt=prompt,
                temperature=self._settings.anomaly_temperature,
            )
        except TransportError as exc:
            logger.warning("Anomaly detection request failed: %s", exc)
            return []
        except Exception:
            logger.exception("Unexpected failure during anomaly detection request")
            return []

        if reply.error is not None:
            logger.warning("Analysis service returned an error: %s", reply.error)
            return []

        anomalies = parse_anomaly_response(reply.text or "", strict_parameters=self._settings.strict_parameters)
        logger.debug("Parsed %d anomalies from model reply", len(anomalies))
        return anomalies
