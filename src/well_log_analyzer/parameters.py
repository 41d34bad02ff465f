from __future__ import annotations

from enum import Enum
from typing import Callable, Union

from .models import LogRecord


class InvalidParameterError(ValueError):
    """Raised when a statistics accessor is given an unknown parameter name."""


class Parameter(str, Enum):
    """
    The closed set of numeric well-log parameters.

    `lithology` is categorical and deliberately absent.
    """
    DEPTH = "depth"
    GAMMA_RAY = "gamma_ray"
    NEUTRON_DENSITY = "neutron_density"
    RESISTIVITY = "resistivity"

    @classmethod
    def parse(cls, name: Union["Parameter", str]) -> "Parameter":
        try:
            return cls(name)
        except ValueError:
            valid = ", ".join(p.value for p in cls)
            raise InvalidParameterError(f"Invalid parameter name: {name!r} (expected one of: {valid})") from None

    def read(self, record: LogRecord) -> float:
        return _ACCESSORS[self](record)

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def unit(self) -> str:
        return _UNITS[self]


ParameterLike = Union[Parameter, str]

_ACCESSORS: dict[Parameter, Callable[[LogRecord], float]] = {
    Parameter.DEPTH: lambda r: r.depth,
    Parameter.GAMMA_RAY: lambda r: r.gamma_ray,
    Parameter.NEUTRON_DENSITY: lambda r: r.neutron_density,
    Parameter.RESISTIVITY: lambda r: r.resistivity,
}

_LABELS: dict[Parameter, str] = {
    Parameter.DEPTH: "Depth",
    Parameter.GAMMA_RAY: "Gamma Ray",
    Parameter.NEUTRON_DENSITY: "Neutron Density",
    Parameter.RESISTIVITY: "Resistivity",
}

_UNITS: dict[Parameter, str] = {
    Parameter.DEPTH: "m",
    Parameter.GAMMA_RAY: "API",
    Parameter.NEUTRON_DENSITY: "g/cc",
    Parameter.RESISTIVITY: "ohm·m",
}

# Parameters a model may report in an ANOMALY line.
ANOMALY_PARAMETERS: tuple[Parameter, ...] = (
    Parameter.GAMMA_RAY,
    Parameter.NEUTRON_DENSITY,
    Parameter.RESISTIVITY,
)
