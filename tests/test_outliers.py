from __future__ import annotations

from pathlib import Path

import pytest

from well_log_analyzer.anomalies import detect_outliers
from well_log_analyzer.ingest import load_records_csv
from well_log_analyzer.models import LogRecord, RecordStore

FIXTURE = Path(__file__).parent / "fixtures" / "sample_well_log.csv"


def test_fixture_has_no_outliers_at_three_sigma() -> None:
    assert detect_outliers(load_records_csv(FIXTURE)) == []


def test_resistivity_spike_is_flagged_at_lower_threshold() -> None:
    outliers = detect_outliers(load_records_csv(FIXTURE), z_threshold=2.5)

    assert len(outliers) == 1
    (a,) = outliers
    assert (a.depth, a.parameter, a.value) == (1080.0, "resistivity", 210.0)
    assert a.description.startswith("Unusually high resistivity")


def test_depth_is_never_an_outlier_parameter() -> None:
    records = [LogRecord(depth=float(d), gamma_ray=50.0, neutron_density=2.4, resistivity=10.0) for d in range(20)]
    records.append(LogRecord(depth=100000.0, gamma_ray=50.0, neutron_density=2.4, resistivity=10.0))
    assert detect_outliers(RecordStore(records), z_threshold=1.0) == []


def test_low_values_are_reported_as_low() -> None:
    records = [LogRecord(depth=float(i), gamma_ray=100.0, neutron_density=2.4, resistivity=10.0) for i in range(20)]
    records.append(LogRecord(depth=20.0, gamma_ray=0.0, neutron_density=2.4, resistivity=10.0))
    (a,) = detect_outliers(RecordStore(records))

    assert a.parameter == "gamma_ray"
    assert "low" in a.description


def test_empty_store_and_bad_threshold() -> None:
    assert detect_outliers(RecordStore()) == []
    with pytest.raises(ValueError):
        detect_outliers(RecordStore(), z_threshold=0)
