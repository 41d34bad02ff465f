from __future__ import annotations

import math
from dataclasses import dataclass

from .models import RecordStore
from .parameters import Parameter, ParameterLike


def _mean(values: list[float]) -> float:
    try:
        mean = math.fsum(values) / len(values)
    except OverflowError:
        scale = max(abs(v) for v in values)
        mean = math.fsum(v / scale for v in values) / len(values) * scale
    # Rounding can push the quotient one ulp outside the observed range.
    return min(max(mean, min(values)), max(values))


def _population_std(values: list[float], mean: float) -> float:
    # Work in units of the largest magnitude so neither the deviations nor
    # their squares overflow or flush to zero.
    scale = max(abs(v) for v in values)
    if scale == 0.0:
        return 0.0
    deviations = [v / scale - mean / scale for v in values]
    peak = max(abs(d) for d in deviations)
    if peak == 0.0:
        return 0.0
    spread = math.sqrt(math.fsum((d / peak) * (d / peak) for d in deviations) / len(values))
    return scale * (peak * spread)


@dataclass(frozen=True)
class ParameterStats:
    parameter: Parameter
    minimum: float
    maximum: float
    average: float
    std_dev: float


class StatisticsEngine:
    """
    Descriptive statistics over one parameter of a RecordStore.

    Every accessor returns 0.0 on an empty store. Results are recomputed on
    each call; well logs are thousands of rows, not millions.
    """

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    @property
    def store(self) -> RecordStore:
        return self._store

    def _values(self, param: ParameterLike) -> list[float]:
        parameter = Parameter.parse(param)
        return [parameter.read(r) for r in self._store.records()]

    def min(self, param: ParameterLike) -> float:
        values = self._values(param)
        if not values:
            return 0.0
        best = values[0]
        for v in values[1:]:
            if v < best:
                best = v
        return best

    def max(self, param: ParameterLike) -> float:
        values = self._values(param)
        if not values:
            return 0.0
        best = values[0]
        for v in values[1:]:
            if v > best:
                best = v
        return best

    def average(self, param: ParameterLike) -> float:
        values = self._values(param)
        if not values:
            return 0.0
        return _mean(values)

    def standard_deviation(self, param: ParameterLike) -> float:
        """Population standard deviation (divides by N, not N-1)."""
        values = self._values(param)
        if not values:
            return 0.0
        return _population_std(values, _mean(values))

    def describe(self, param: ParameterLike) -> ParameterStats:
        parameter = Parameter.parse(param)
        return ParameterStats(
            parameter=parameter,
            minimum=self.min(parameter),
            maximum=self.max(parameter),
            average=self.average(parameter),
            std_dev=self.standard_deviation(parameter),
        )

    def summary(self) -> list[ParameterStats]:
        return [self.describe(p) for p in Parameter]
