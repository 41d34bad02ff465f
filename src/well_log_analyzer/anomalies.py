from __future__ import annotations

import logging
import math
from typing import Optional

from .models import Anomaly, RecordStore
from .parameters import ANOMALY_PARAMETERS
from .stats import StatisticsEngine

logger = logging.getLogger(__name__)

ANOMALY_PREFIX = "ANOMALY|"
ANOMALY_LINE_FORMAT = "ANOMALY|depth|parameter|value|description"

_ALLOWED_NAMES = frozenset(p.value for p in ANOMALY_PARAMETERS)


class MalformedAnomalyLine(ValueError):
    """A single ANOMALY line could not be parsed. Never escapes the parser."""


def _parse_number(raw: str, field: str) -> float:
    try:
        value = float(raw.strip())
    except ValueError:
        raise MalformedAnomalyLine(f"{field} is not a number: {raw!r}") from None
    if not math.isfinite(value):
        raise MalformedAnomalyLine(f"{field} is not finite: {raw!r}")
    return value


def _anomaly_from_fields(
    *,
    depth: str,
    parameter: str,
    value: str,
    description: str,
    strict_parameters: bool = False,
) -> Anomaly:
    if strict_parameters and parameter.strip() not in _ALLOWED_NAMES:
        raise MalformedAnomalyLine(f"parameter not allowed: {parameter!r}")
    return Anomaly(
        depth=_parse_number(depth, "depth"),
        parameter=parameter.strip() if strict_parameters else parameter,
        value=_parse_number(value, "value"),
        description=description,
    )


def parse_anomaly_line(line: str, *, strict_parameters: bool = False) -> Optional[Anomaly]:
    """
    Parse one `ANOMALY|depth|parameter|value|description` line.

    Returns None for lines without the prefix. Raises MalformedAnomalyLine when
    the prefix is present but the fields are unusable. Everything after the
    third delimiter is the description, `|` included.
    """
    if not line.startswith(ANOMALY_PREFIX):
        return None

    fields = line[len(ANOMALY_PREFIX):].split("|", 3)
    if len(fields) < 3:
        raise MalformedAnomalyLine(f"expected depth|parameter|value|description, got {len(fields)} field(s)")
    depth, parameter, value = fields[:3]
    description = fields[3] if len(fields) == 4 else ""

    return _anomaly_from_fields(
        depth=depth,
        parameter=parameter,
        value=value,
        description=description,
        strict_parameters=strict_parameters,
    )


def parse_anomaly_response(text: str, *, strict_parameters: bool = False) -> list[Anomaly]:
    """
    Extract anomalies from free-form model output.

    Lines without the ANOMALY| prefix are conversational filler and are ignored.
    Malformed ANOMALY lines are dropped one at a time (logged); the rest of the
    reply is still parsed. An empty list means no anomalies were reported.

    By default `parameter` is passed through exactly as the model wrote it.
    With strict_parameters=True, lines naming anything other than gamma_ray,
    neutron_density or resistivity are dropped.
    """
    anomalies: list[Anomaly] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        try:
            anomaly = parse_anomaly_line(line, strict_parameters=strict_parameters)
        except MalformedAnomalyLine as exc:
            logger.warning("Skipping malformed anomaly line %d (%s): %r", line_no, exc, line)
            continue
        if anomaly is not None:
            anomalies.append(anomaly)
    return anomalies


def detect_outliers(store: RecordStore, *, z_threshold: float = 3.0) -> list[Anomaly]:
    """
    Deterministic z-score anomalies, used when no language model is available.

    Flags |x - mean| / std > z_threshold for gamma_ray, neutron_density and
    resistivity. Parameters with zero spread are skipped. Output is in record
    order, then parameter order.
    """
    if z_threshold <= 0:
        raise ValueError("z_threshold must be positive")

    engine = StatisticsEngine(store)
    baselines = []
    for parameter in ANOMALY_PARAMETERS:
        std = engine.standard_deviation(parameter)
        if std > 0:
            baselines.append((parameter, engine.average(parameter), std))

    out: list[Anomaly] = []
    for record in store:
        for parameter, mean, std in baselines:
            value = parameter.read(record)
            z = (value - mean) / std
            if abs(z) <= z_threshold:
                continue
            direction = "high" if z > 0 else "low"
            out.append(
                Anomaly(
                    depth=record.depth,
                    parameter=parameter.value,
                    value=value,
                    description=(
                        f"Unusually {direction} {parameter.label.lower()} "
                        f"(z-score {z:+.2f}, log mean {mean:g} {parameter.unit})"
                    ),
                )
            )
    return out
