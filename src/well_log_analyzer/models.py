from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator


@dataclass(frozen=True)
class LogRecord:
    """
    One measurement at a depth.

    depth: meters
    gamma_ray: API units
    neutron_density: g/cc
    resistivity: ohm·m
    lithology: free-text rock type label (never a statistical parameter)
    """
    depth: float
    gamma_ray: float
    neutron_density: float
    resistivity: float
    lithology: str = ""


@dataclass(frozen=True)
class Anomaly:
    """
    A flagged measurement.

    `parameter` is kept as the raw string that produced it; the response parser
    only checks it against the allowed names when strict parsing is enabled.
    """
    depth: float
    parameter: str
    value: float
    description: str = ""


class RecordStore:
    """
    Ordered, read-only sequence of LogRecord.

    Order is file order. Depth is not assumed to be monotonic.
    """

    __slots__ = ("_records",)

    def __init__(self, records: Iterable[LogRecord] = ()) -> None:
        self._records: tuple[LogRecord, ...] = tuple(records)

    def records(self) -> tuple[LogRecord, ...]:
        return self._records

    def head(self, n: int) -> tuple[LogRecord, ...]:
        return self._records[: max(n, 0)]

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[LogRecord]:
        return iter(self._records)

    def __repr__(self) -> str:
        return f"RecordStore(records={len(self._records)})"
