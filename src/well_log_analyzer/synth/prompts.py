from __future__ import annotations

from ..anomalies import ANOMALY_LINE_FORMAT
from ..models import LogRecord, RecordStore
from ..parameters import ANOMALY_PARAMETERS, Parameter
from ..stats import StatisticsEngine

DEFAULT_SAMPLE_SIZE = 10

INTERPRETATION_SYSTEM_PROMPT = "You are a petroleum engineering assistant specialized in well log analysis."
ANOMALY_SYSTEM_PROMPT = (
    "You are a petroleum engineering expert specializing in well log anomaly detection. "
    "Respond only with anomalies in the specified format."
)

_INTERPRETATION_REQUESTS = (
    "1. An interpretation of the geological formations based on these logs",
    "2. Any potential drilling risks or areas of concern",
    "3. Recommendations for further analysis or logging",
)


def _num(x: float) -> str:
    """Six significant digits, trailing zeros dropped."""
    return f"{x:g}"


def _statistics_lines(engine: StatisticsEngine, *, bullet: str = "") -> list[str]:
    lines = [
        f"{bullet}Depth range: {_num(engine.min(Parameter.DEPTH))} to {_num(engine.max(Parameter.DEPTH))} "
        f"{Parameter.DEPTH.unit}"
    ]
    for p in ANOMALY_PARAMETERS:
        lines.append(
            f"{bullet}{p.label}: avg {_num(engine.average(p))} {p.unit} "
            f"(range: {_num(engine.min(p))} - {_num(engine.max(p))})"
        )
    return lines


def _sample_line(record: LogRecord) -> str:
    return (
        f"- Depth: {_num(record.depth)}, GR: {_num(record.gamma_ray)}, "
        f"ND: {_num(record.neutron_density)}, Res: {_num(record.resistivity)}, "
        f"Lith: {record.lithology}"
    )


def build_interpretation_prompt(store: RecordStore) -> str:
    """Summary statistics plus the three standing requests. Never includes raw records."""
    engine = StatisticsEngine(store)
    lines = ["Please analyze this well log data:", ""]
    lines.extend(_statistics_lines(engine))
    lines.extend(["", "Please provide:"])
    lines.extend(_INTERPRETATION_REQUESTS)
    return "\n".join(lines) + "\n"


def build_anomaly_prompt(store: RecordStore, *, sample_size: int = DEFAULT_SAMPLE_SIZE) -> str:
    """
    Statistics, the first `sample_size` records verbatim, and the output contract.

    The model is told to emit one ANOMALY line per finding and to restrict the
    parameter field to gamma_ray, neutron_density or resistivity. Nothing on
    the remote side enforces this; the parser tolerates violations.
    """
    engine = StatisticsEngine(store)
    allowed = ", ".join(p.value for p in ANOMALY_PARAMETERS[:-1]) + f", or {ANOMALY_PARAMETERS[-1].value}"

    lines = [
        "Analyze this well log data for anomalies. For each anomaly, return it in this exact format:",
        ANOMALY_LINE_FORMAT,
        "",
        "Well log statistics:",
    ]
    lines.extend(_statistics_lines(engine, bullet="- "))
    lines.extend(["", f"Sample records (first {sample_size} or fewer):"])
    lines.extend(_sample_line(r) for r in store.head(sample_size))
    lines.extend(
        [
            "",
            "Identify any anomalies in the dataset based on your expertise in well log analysis.",
            f"For each anomaly found, output exactly one line in this format: {ANOMALY_LINE_FORMAT}",
            f"Only use {allowed} for the parameter field.",
        ]
    )
    return "\n".join(lines)
