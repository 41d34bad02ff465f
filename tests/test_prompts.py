from __future__ import annotations

from well_log_analyzer.models import LogRecord, RecordStore
from well_log_analyzer.synth.prompts import build_anomaly_prompt, build_interpretation_prompt


def _small_store() -> RecordStore:
    return RecordStore(
        [
            LogRecord(depth=10.0, gamma_ray=50.0, neutron_density=2.3, resistivity=10.0, lithology="Sandstone"),
            LogRecord(depth=20.0, gamma_ray=150.0, neutron_density=2.5, resistivity=20.0, lithology="Shale"),
            LogRecord(depth=30.0, gamma_ray=100.0, neutron_density=2.4, resistivity=30.0, lithology="Limestone"),
        ]
    )


def _long_store(n: int) -> RecordStore:
    return RecordStore(
        LogRecord(depth=1000.0 + i, gamma_ray=40.0 + i, neutron_density=2.4, resistivity=5.0, lithology=f"L{i}")
        for i in range(n)
    )


def test_interpretation_prompt_golden() -> None:
    expected = (
        "Please analyze this well log data:\n"
        "\n"
        "Depth range: 10 to 30 m\n"
        "Gamma Ray: avg 100 API (range: 50 - 150)\n"
        "Neutron Density: avg 2.4 g/cc (range: 2.3 - 2.5)\n"
        "Resistivity: avg 20 ohm·m (range: 10 - 30)\n"
        "\n"
        "Please provide:\n"
        "1. An interpretation of the geological formations based on these logs\n"
        "2. Any potential drilling risks or areas of concern\n"
        "3. Recommendations for further analysis or logging\n"
    )
    assert build_interpretation_prompt(_small_store()) == expected


def test_interpretation_prompt_has_no_raw_records() -> None:
    prompt = build_interpretation_prompt(_small_store())
    assert "Sandstone" not in prompt
    assert "ANOMALY|" not in prompt


def test_prompts_are_deterministic() -> None:
    a, b = _long_store(25), _long_store(25)
    assert build_interpretation_prompt(a) == build_interpretation_prompt(b)
    assert build_anomaly_prompt(a) == build_anomaly_prompt(b)


def test_anomaly_prompt_contains_statistics_and_contract() -> None:
    prompt = build_anomaly_prompt(_small_store())

    assert prompt.startswith(
        "Analyze this well log data for anomalies. For each anomaly, return it in this exact format:\n"
        "ANOMALY|depth|parameter|value|description\n"
    )
    assert "Well log statistics:\n- Depth range: 10 to 30 m\n- Gamma Ray: avg 100 API (range: 50 - 150)\n" in prompt
    assert "- Depth: 20, GR: 150, ND: 2.5, Res: 20, Lith: Shale\n" in prompt
    assert "output exactly one line in this format: ANOMALY|depth|parameter|value|description" in prompt
    assert prompt.endswith("Only use gamma_ray, neutron_density, or resistivity for the parameter field.")


def test_anomaly_prompt_samples_at_most_ten_records() -> None:
    prompt = build_anomaly_prompt(_long_store(25))

    assert "Sample records (first 10 or fewer):" in prompt
    assert prompt.count("- Depth: ") == 10
    assert "Lith: L9\n" in prompt
    assert "Lith: L10\n" not in prompt


def test_anomaly_prompt_sample_size_is_configurable() -> None:
    prompt = build_anomaly_prompt(_long_store(25), sample_size=3)
    assert prompt.count("- Depth: ") == 3


def test_empty_store_renders_zero_sentinels() -> None:
    prompt = build_interpretation_prompt(RecordStore())
    assert "Depth range: 0 to 0 m" in prompt
    assert "Gamma Ray: avg 0 API (range: 0 - 0)" in prompt
