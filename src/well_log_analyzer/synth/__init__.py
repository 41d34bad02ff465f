"""LLM synthesis layer.

Prompts are built only from the statistics engine (plus a small sample of
records for anomaly detection); replies are parsed back into structured
anomalies or returned as text.
"""

from .analyst import WellLogAnalyst
from .prompts import build_anomaly_prompt, build_interpretation_prompt
from .transport import ChatReply, ChatTransport, OpenRouterTransport, ResponseFormatError, TransportError

__all__ = [
    "WellLogAnalyst",
    "build_anomaly_prompt",
    "build_interpretation_prompt",
    "ChatReply",
    "ChatTransport",
    "OpenRouterTransport",
    "ResponseFormatError",
    "TransportError",
]
