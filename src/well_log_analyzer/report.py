from __future__ import annotations

from typing import Sequence

from .models import Anomaly, RecordStore
from .stats import StatisticsEngine


def render_statistics(store: RecordStore) -> str:
    """Plain-text statistics block, one section per parameter."""
    if not len(store):
        return "No records available.\n"

    engine = StatisticsEngine(store)
    lines: list[str] = ["=== Basic Statistics ===", "", f"Total Records: {len(store)}"]
    for s in engine.summary():
        lines.extend(
            [
                "",
                f"{s.parameter.label} ({s.parameter.unit}):",
                f"  Min: {s.minimum:g}",
                f"  Max: {s.maximum:g}",
                f"  Avg: {s.average:.2f}",
                f"  StdDev: {s.std_dev:.2f}",
            ]
        )
    return "\n".join(lines) + "\n"


def render_anomalies(anomalies: Sequence[Anomaly], *, title: str = "Detected Anomalies") -> str:
    if not anomalies:
        return ""
    lines = [f"=== {title} ===", ""]
    for a in anomalies:
        lines.append(f"Depth {a.depth:g}m: {a.description} ({a.parameter} = {a.value:g})")
    return "\n".join(lines) + "\n"
